"""
AWR 文本报告解析模块

提供报告类型识别、逐区段解析、派生指标计算和CSV输出
"""

from .classifier import ReportClassifier
from .emitter import CSV_HEADER, RecordEmitter, format_report_info
from .layout import ColumnLayout
from .models import AwrFormat, ColumnLayoutError, ReportKind, ReportRecord
from .parser import AwrTextParser
from .postprocess import ReportPostProcessor

__all__ = [
    "AwrFormat",
    "AwrTextParser",
    "ColumnLayout",
    "ColumnLayoutError",
    "CSV_HEADER",
    "RecordEmitter",
    "ReportClassifier",
    "ReportKind",
    "ReportPostProcessor",
    "ReportRecord",
    "format_report_info",
]

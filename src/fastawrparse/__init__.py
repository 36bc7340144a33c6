"""
fastawrparse - Oracle AWR 文本报告解析工具

从 AWR 文本报告中提取性能指标，每个报告输出一行CSV
"""

from .api import RunSummary, parse_awr_report, parse_awr_reports
from .common.config import Config

__version__ = Config.VERSION

__all__ = [
    "RunSummary",
    "parse_awr_report",
    "parse_awr_reports",
    "__version__",
]

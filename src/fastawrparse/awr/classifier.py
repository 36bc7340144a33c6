"""
报告类型识别 - 只读取文件开头几行
"""
from itertools import islice
from pathlib import Path

from loguru import logger

from ..common.config import Config
from .models import ReportKind


class ReportClassifier:
    """根据文件开头的标识判断是否为AWR文本报告"""

    @staticmethod
    def classify(file_path: Path) -> ReportKind:
        """
        判定文件类型

        Args:
            file_path: 文件路径

        Returns:
            ReportKind: HTML / FOREIGN(STATSPACK) / TEXT_REPORT / UNRECOGNIZED

        Raises:
            OSError: 文件无法读取
        """
        with open(file_path, 'r', encoding='utf-8', errors='ignore') as f:
            head = list(islice(f, Config.CLASSIFIER_PEEK_LINES))
        return ReportClassifier.classify_lines(head)

    @staticmethod
    def classify_lines(head) -> ReportKind:
        """对已读取的开头若干行做判定，检查顺序为 HTML、STATSPACK、AWR"""
        lines = list(head)[:Config.CLASSIFIER_PEEK_LINES]
        if any(Config.HTML_MARKER in line.lower() for line in lines):
            return ReportKind.HTML
        if any(Config.FOREIGN_MARKER in line for line in lines):
            return ReportKind.FOREIGN
        if any(Config.AWR_MARKER in line for line in lines):
            return ReportKind.TEXT_REPORT
        logger.trace(f"文件开头未找到报告标识: {lines!r}")
        return ReportKind.UNRECOGNIZED

"""
表格列定位 - 根据表头下方的虚线行计算各列的字符范围
"""
from dataclasses import dataclass
from typing import Optional, Tuple

from ..common.config import Config
from ..common.utils import clean_number, slice_columns
from .models import ColumnLayoutError


@dataclass(frozen=True)
class ColumnLayout:
    """
    固定宽度表格的列范围

    columns 中每一项为 (start, end)，从1开始计数且包含两端，
    与虚线行中每段 "-----" 的位置一一对应。
    """
    columns: Tuple[Tuple[int, int], ...]

    @classmethod
    def from_header(cls, separator: str) -> "ColumnLayout":
        """
        解析表头虚线行

        Args:
            separator: 由若干段短横线组成的行，例如
                "------------------------------ ------------ ---------- ------- ------ ----------"

        Returns:
            ColumnLayout: 各列的字符范围

        Raises:
            ColumnLayoutError: 段数不在 6-7 之间，或包含短横线以外的内容

        Examples:
            >>> ColumnLayout.from_header("--- -- - -- --- ----").columns[:3]
            ((1, 3), (5, 6), (8, 8))
        """
        runs = separator.split()
        if not Config.MIN_LAYOUT_COLUMNS <= len(runs) <= Config.MAX_LAYOUT_COLUMNS:
            raise ColumnLayoutError(
                f"表头列数异常: {len(runs)} (允许 {Config.MIN_LAYOUT_COLUMNS}-{Config.MAX_LAYOUT_COLUMNS})"
            )
        if any(set(run) != {"-"} for run in runs):
            raise ColumnLayoutError(f"表头分隔线包含非短横线内容: {separator.strip()!r}")

        columns = []
        position = 1
        for run in runs:
            columns.append((position, position + len(run) - 1))
            position += len(run) + 1
        return cls(tuple(columns))

    def __len__(self) -> int:
        return len(self.columns)

    def slice(self, line: str, column: int) -> Optional[str]:
        """
        取第 column 列（从1开始）的文本，去除首尾空白

        列不存在或内容为空时返回 None。
        """
        if column < 1 or column > len(self.columns):
            return None
        start, end = self.columns[column - 1]
        return slice_columns(line, start, end) or None

    def number(self, line: str, column: int) -> Optional[str]:
        """取第 column 列的数值文本，并去掉千位分隔符"""
        return clean_number(self.slice(line, column))

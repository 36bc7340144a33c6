"""
AWR文本报告解析器

逐行扫描报告，按当前所处区段(Section)分派给对应的处理方法。
每个处理方法要么停留在当前区段（返回 None），要么返回一个 Transition
描述下一个区段、取值方式以及需要跳过的行数/区段数。
"""
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Dict, Iterable, List, Optional, Tuple

from loguru import logger

from ..common.config import Config
from ..common.utils import (
    average_active_sessions,
    average_latency_ms,
    add_values,
    bytes_to_gib,
    bytes_to_mib,
    clean_number,
    is_zero,
    pct_of_db_time,
    slice_columns,
    to_decimal,
)
from .layout import ColumnLayout
from .models import (
    AwrFormat,
    ColumnLayoutError,
    Delimit,
    ReportRecord,
    Section,
    TopEvent,
    WaitClass,
    WaitEvent,
)

# 出现以下前台等待事件说明使用了 Exadata 存储
EXADATA_EVENT_PREFIXES = (
    "cell multiblock physical r",
    "cell single block physical",
    "cell smart table scan",
    "cell smart index scan",
    "cell list of blocks physi",
)

# 出现以下后台等待事件说明配置了 Data Guard
DATA_GUARD_EVENT_PREFIXES = (
    "LNS wait on",
    "Redo Transport",
)

# Instance Activity Stats: 统计项名称 -> (ReportRecord 字段, 是否为字节数)
ACTIVITY_STATISTICS: Dict[str, Tuple[str, bool]] = {
    "physical read total IO requests": ("read_iops", False),
    "physical read total bytes": ("read_mibps", True),
    "physical write total IO requests": ("all_write_iops", False),
    "physical write total bytes": ("all_write_mibps", True),
    "redo writes": ("redo_write_iops", False),
}

# OS Statistics: 统计项 -> ReportRecord 字段
OS_STATISTICS: Dict[str, str] = {
    "BUSY_TIME": "os_busy_time",
    "IDLE_TIME": "os_idle_time",
    "IOWAIT_TIME": "os_iowait_time",
    "SYS_TIME": "os_sys_time",
    "USER_TIME": "os_user_time",
    "OS_CPU_WAIT_TIME": "os_cpu_wait_time",
    "RSRC_MGR_CPU_WAIT_TIME": "os_rsrc_mgr_wait_time",
    "NUM_CPUS": "num_cpus",
}

# 需要先定位表头虚线行的区段
TABULAR_SECTIONS = (
    Section.TOP5_FOREGROUND,
    Section.FOREGROUND_WAIT_CLASS,
    Section.FOREGROUND_WAIT_EVENTS,
    Section.BACKGROUND_WAIT_EVENTS,
)


@dataclass
class Transition:
    """区段切换"""
    section: Section
    delimit: Delimit = Delimit.LINE
    line_skip: int = 0
    section_skip: int = 0


@dataclass(frozen=True)
class SectionOpener:
    """
    区段标题

    section 为 None 表示跳过整个区段（如 SQL ordered by）；
    format_10_only 的标题在非10g报告中被忽略，skip_otherwise 时改为跳过该区段。
    """
    prefix: str
    section: Optional[Section]
    delimit: Delimit = Delimit.LINE
    line_skip: int = 0
    line_skip_10: Optional[int] = None
    format_10_only: bool = False
    skip_otherwise: bool = False


SECTION_OPENERS: Tuple[SectionOpener, ...] = (
    SectionOpener("Top 5 Timed Events  ", Section.TOP5_FOREGROUND, line_skip=2),
    SectionOpener("Top 5 Timed Foreground Events", Section.TOP5_FOREGROUND, line_skip=4),
    SectionOpener("Top 10 Foreground Events by Total Wait T", Section.TOP5_FOREGROUND, line_skip=3),
    SectionOpener("Cache Sizes", Section.CACHE_SIZES, Delimit.WORD, line_skip=1),
    SectionOpener("Time Model Statistics  ", Section.TIME_MODEL_STATISTICS, Delimit.WORD, line_skip=6,
                  format_10_only=True, skip_otherwise=True),
    SectionOpener("Operating System Statistics  ", Section.OPERATING_SYSTEM_STATS, Delimit.WORD,
                  line_skip=5, line_skip_10=2),
    SectionOpener("Wait Class  ", Section.FOREGROUND_WAIT_CLASS, line_skip=7, format_10_only=True),
    SectionOpener("Foreground Wait Class  ", Section.FOREGROUND_WAIT_CLASS, line_skip=7),
    SectionOpener("Wait Events  ", Section.FOREGROUND_WAIT_EVENTS, line_skip=3),
    SectionOpener("Foreground Wait Events  ", Section.FOREGROUND_WAIT_EVENTS, line_skip=3),
    SectionOpener("Background Wait Events  ", Section.BACKGROUND_WAIT_EVENTS, line_skip=3),
    SectionOpener("Instance Activity Stats  ", Section.INSTANCE_ACTIVITY_STATS, line_skip=3, line_skip_10=2),
    SectionOpener("SQL ordered by", None),
    SectionOpener("Other Instance Activity Stats  ", Section.INSTANCE_ACTIVITY_STATS, line_skip=3),
    SectionOpener("Instance Activity Stats - Thread Activit", Section.THREAD_ACTIVITY, Delimit.WORD, line_skip=3),
)


@dataclass
class ParserState:
    """单个文件的扫描状态"""
    section: Section = Section.PROFILE
    delimit: Delimit = Delimit.WORD
    line_number: int = 0
    line_skip: int = 0
    section_skip: int = 0
    bailout: int = 0
    layout: Optional[ColumnLayout] = None
    top_event_rank: int = 0
    # Profile 中下一行为数据行: "system" / "host"
    pending: Optional[str] = None
    found_system: bool = False
    found_host: bool = False
    word_terminator: str = Config.WORD_TERMINATOR
    line_terminator: str = Config.LINE_TERMINATOR


def _word(words: List[str], index: int) -> Optional[str]:
    """按位置取单词，去除回车与千位分隔符"""
    if index < 0 or index >= len(words):
        return None
    return clean_number(words[index])


def _text(words: List[str], index: int) -> Optional[str]:
    """按位置取单词（保留逗号）"""
    if index < 0 or index >= len(words):
        return None
    return words[index].replace("\r", "") or None


class AwrTextParser:
    """
    AWR文本报告解析器

    每个文件创建一个实例，解析结果保存在 record 中。
    """

    def __init__(self, filename: str):
        self.record = ReportRecord(filename=filename)
        self.state = ParserState()
        self._handlers: Dict[Section, Callable[[str, List[str]], Optional[Transition]]] = {
            Section.SEARCHING_FOR_NEXT_SECTION: self._handle_searching,
            Section.PROFILE: self._handle_profile,
            Section.INSTANCE_EFFICIENCY: self._handle_instance_efficiency,
            Section.TOP5_FOREGROUND: self._handle_top5,
            Section.CACHE_SIZES: self._handle_cache_sizes,
            Section.TIME_MODEL_STATISTICS: self._handle_time_model,
            Section.OPERATING_SYSTEM_STATS: self._handle_os_stats,
            Section.FOREGROUND_WAIT_CLASS: self._handle_wait_class,
            Section.FOREGROUND_WAIT_EVENTS: self._handle_foreground_events,
            Section.BACKGROUND_WAIT_EVENTS: self._handle_background_events,
            Section.INSTANCE_ACTIVITY_STATS: self._handle_instance_activity,
            Section.THREAD_ACTIVITY: self._handle_thread_activity,
        }

    @classmethod
    def parse_file(cls, file_path: Path) -> ReportRecord:
        """
        解析一个AWR文本报告文件

        Args:
            file_path: 报告文件路径

        Returns:
            ReportRecord: 未经后处理的解析结果

        Raises:
            OSError: 文件无法读取
        """
        file_path = Path(file_path)
        parser = cls(file_path.name)
        with open(file_path, 'r', encoding='utf-8', errors='ignore') as f:
            return parser.parse_lines(f)

    def parse_lines(self, lines: Iterable[str]) -> ReportRecord:
        """逐行扫描，遇到文件结尾或提前结束标记时停止"""
        for raw_line in lines:
            if not self.feed(raw_line):
                logger.debug(f"{self.record.filename}: 第 {self.state.line_number} 行结束扫描")
                break
        return self.record

    @property
    def awr_format(self) -> AwrFormat:
        return self.record.awr_format

    def feed(self, raw_line: str) -> bool:
        """
        处理一行

        Returns:
            bool: False 表示扫描已结束
        """
        state = self.state
        state.line_number += 1
        line = raw_line.rstrip("\r\n").replace("\r", "").replace("\f", "")
        words = line.split()

        if not words:
            return True

        # SQL*Plus 未关闭 heading 时重复输出的列标题及其下划线
        if len(words) <= 2 and words[0].startswith("OUTPUT"):
            logger.trace("第 {} 行为 SQL*Plus 列标题，忽略该行及下一行", state.line_number)
            state.line_skip += 1
            return True

        if state.line_skip > 0:
            state.line_skip -= 1
            return True

        if self._is_terminator(line, words):
            if state.section_skip > 0:
                state.section_skip -= 1
                logger.trace("第 {} 行为区段结束标记，剩余跳过区段数 {}", state.line_number, state.section_skip)
            elif state.section is not Section.SEARCHING_FOR_NEXT_SECTION:
                logger.debug(f"第 {state.line_number} 行: {state.section.value} 区段结束")
                self._apply(Transition(Section.SEARCHING_FOR_NEXT_SECTION))
            return True

        if state.section_skip > 0:
            return True

        logger.trace("第 {} 行 [{}] {}", state.line_number, state.section.value, line)
        transition = self._handlers[state.section](line, words)
        if transition is not None:
            self._apply(transition)
        return state.section is not Section.END_OF_REPORT

    def _is_terminator(self, line: str, words: List[str]) -> bool:
        if self.state.delimit is Delimit.WORD:
            return words[0] == self.state.word_terminator
        return line[:Config.LINE_TERMINATOR_WIDTH] == self.state.line_terminator

    def _apply(self, transition: Transition) -> None:
        state = self.state
        if transition.section is not state.section:
            logger.trace("状态切换: {} -> {}", state.section.value, transition.section.value)
        if transition.section in TABULAR_SECTIONS and transition.section is not state.section:
            state.bailout = 0
            state.layout = None
            state.top_event_rank = 0
        state.section = transition.section
        state.delimit = transition.delimit
        state.line_skip = transition.line_skip
        state.section_skip += transition.section_skip

    def _abandon(self, label: str, reason: str) -> Transition:
        """放弃当前区段，跳过固定行数后重新查找区段标题"""
        logger.debug(f"{self.record.filename}: 无法确定 {label} 区段的列宽，放弃该区段 ({reason})")
        skip = Config.BAILOUT_SKIP_LINES_12 if self.awr_format is AwrFormat.FORMAT_12 else Config.BAILOUT_SKIP_LINES
        return Transition(Section.SEARCHING_FOR_NEXT_SECTION, line_skip=skip)

    def _seek_header(self, line: str, label: str) -> Optional[Transition]:
        """在限定行数内查找表头虚线行并计算列范围"""
        state = self.state
        if line.startswith("------"):
            try:
                state.layout = ColumnLayout.from_header(line)
            except ColumnLayoutError as e:
                return self._abandon(label, str(e))
            logger.trace("{} 列范围: {}", label, state.layout.columns)
            return None
        state.bailout += 1
        if state.bailout >= Config.BAILOUT_LIMIT:
            return self._abandon(label, f"{Config.BAILOUT_LIMIT} 行内未找到表头")
        return None

    # ------------------------------------------------------------------
    # 查找下一个区段
    # ------------------------------------------------------------------

    def _handle_searching(self, line: str, words: List[str]) -> Optional[Transition]:
        head = line[:Config.OPENER_PREFIX_WIDTH]
        for opener in SECTION_OPENERS:
            if not head.startswith(opener.prefix):
                continue
            if opener.section is None:
                logger.trace("第 {} 行: 跳过区段 {}", self.state.line_number, line.strip())
                self.state.section_skip += 1
                return None
            if opener.format_10_only and self.awr_format is not AwrFormat.FORMAT_10:
                logger.debug(f"忽略 {opener.prefix.strip()} 区段: 报告格式为 {self.awr_format.value}")
                if opener.skip_otherwise:
                    self.state.section_skip = 1
                return None
            logger.debug(f"第 {self.state.line_number} 行: 找到 {opener.prefix.strip()} 区段")
            line_skip = opener.line_skip
            if opener.line_skip_10 is not None and self.awr_format is AwrFormat.FORMAT_10:
                line_skip = opener.line_skip_10
            return Transition(opener.section, opener.delimit, line_skip=line_skip)
        return None

    # ------------------------------------------------------------------
    # Profile
    # ------------------------------------------------------------------

    def _handle_profile(self, line: str, words: List[str]) -> Optional[Transition]:
        state = self.state
        record = self.record

        if state.pending == "system":
            state.pending = None
            state.found_system = True
            self._read_system_details(words)
            return None
        if state.pending == "host":
            state.pending = None
            state.found_host = True
            record.hostname = slice_columns(line, *Config.HOST_NAME_COLUMNS) or None
            record.host_os = slice_columns(line, *Config.HOST_OS_COLUMNS) or None
            record.host_memory_gb = clean_number(slice_columns(line, *Config.HOST_MEMORY_COLUMNS))
            logger.trace("主机信息: {} / {} / {}", record.hostname, record.host_os, record.host_memory_gb)
            return Transition(Section.PROFILE, Delimit.WORD)

        key = " ".join(words[:2])

        if key == "DB Name":
            if state.found_system:
                return None
            # 11g 起多了 "Startup Time" 列
            if _text(words, 7) == "Startup":
                record.awr_format = AwrFormat.FORMAT_11
            else:
                record.awr_format = AwrFormat.FORMAT_10
            logger.debug(f"{record.filename}: AWR格式 {record.awr_format.value}")
            state.pending = "system"
            return Transition(Section.PROFILE, Delimit.WORD, line_skip=1)
        if key == "Host Name":
            if state.found_host:
                return None
            state.pending = "host"
            return Transition(Section.PROFILE, Delimit.LINE, line_skip=1)
        if key == "Begin Snap:":
            record.begin_snap = _text(words, 2)
            record.begin_time = self._timestamp(words)
        elif key == "End Snap:":
            record.end_snap = _text(words, 2)
            record.end_time = self._timestamp(words)
        elif key.startswith("Elapsed:"):
            record.elapsed_mins = _word(words, 1)
            if is_zero(record.elapsed_mins):
                logger.debug("Elapsed Time 为0")
        elif key == "DB Time:":
            record.db_time_mins = _word(words, 2)
            self._compute_average_active_sessions()
        elif key == "Buffer Cache:":
            record.db_block_size = _text(words, len(words) - 1)
        elif key == "Redo size:":
            record.redo_write_mibps = bytes_to_mib(_word(words, 2))
        elif key == "Redo size":
            # 12c 的标签为 "Redo size (bytes):"
            record.redo_write_mibps = bytes_to_mib(_word(words, 3))
            self._switch_to_format_12()
        elif key == "Logical reads:":
            record.logical_reads = _word(words, 2)
        elif key == "Logical read":
            record.logical_reads = _word(words, 3)
        elif key == "Block changes:":
            record.block_changes = _word(words, 2)
        elif key == "User calls:":
            record.user_calls = _word(words, 2)
        elif key.startswith("Parses:"):
            record.parses = _word(words, 1)
        elif key.startswith("Parses"):
            record.parses = _word(words, 2)
        elif key == "Hard parses:":
            record.hard_parses = _word(words, 2)
        elif key == "Hard parses":
            record.hard_parses = _word(words, 3)
        elif key.startswith("Logons:"):
            record.logons = _word(words, 1)
        elif key.startswith("Executes:"):
            record.executes = _word(words, 1)
        elif key.startswith("Executes"):
            record.executes = _word(words, 2)
        elif key.startswith("Transactions:"):
            record.transactions = _word(words, 1)
        elif key == "Buffer Hit":
            self._read_efficiency(words)
        elif key == "Instance Efficiency":
            logger.debug(f"第 {state.line_number} 行: Profile 区段结束")
            return Transition(Section.INSTANCE_EFFICIENCY, Delimit.WORD, line_skip=1)
        return None

    def _read_system_details(self, words: List[str]) -> None:
        record = self.record
        record.db_name = _text(words, 0)
        record.instance_name = _text(words, 2)
        record.instance_number = _text(words, 3)
        if record.awr_format is AwrFormat.FORMAT_10:
            record.db_version = _text(words, 4)
            cluster = _text(words, 5)
            record.cluster = cluster[:1] if cluster else None
            # 10g 报告的主机名位于数据库信息行末尾
            hostname = _text(words, 6)
            if hostname:
                record.hostname = hostname
                record.host_os = "Unknown"
            else:
                logger.debug("数据库信息行末尾未找到主机名")
        else:
            record.db_version = _text(words, 6)
            cluster = _text(words, 7)
            record.cluster = cluster[:1] if cluster else None
        logger.trace(
            "数据库信息: {} / {} / {} / {} / {}",
            record.db_name, record.instance_name, record.instance_number, record.db_version, record.cluster,
        )

    @staticmethod
    def _timestamp(words: List[str]) -> Optional[str]:
        date_part = _text(words, 3)
        time_part = _text(words, 4)
        if date_part is None:
            return None
        return f"{date_part} {time_part}" if time_part else date_part

    def _compute_average_active_sessions(self) -> None:
        record = self.record
        if record.elapsed_mins is None:
            logger.info(f"{record.filename}: 找到 DB Time 但缺少 Elapsed Time，无法计算平均活动会话数")
        elif is_zero(record.elapsed_mins):
            logger.info(f"{record.filename}: Elapsed Time 为0，无法计算平均活动会话数")
        else:
            record.average_active_sessions = average_active_sessions(record.db_time_mins, record.elapsed_mins)

    def _switch_to_format_12(self) -> None:
        self.record.awr_format = AwrFormat.FORMAT_12
        self.state.word_terminator = Config.WORD_TERMINATOR_12
        self.state.line_terminator = Config.LINE_TERMINATOR_12
        logger.debug(f"{self.record.filename}: AWR格式修正为 {self.record.awr_format.value}")

    def _read_efficiency(self, words: List[str]) -> None:
        # Buffer Hit   %:   99.91    In-memory Sort %:  100.00
        self.record.buffer_hit_ratio = _word(words, 3)
        self.record.inmemory_sort_ratio = _word(words, 7)

    # ------------------------------------------------------------------
    # Instance Efficiency / Cache Sizes / Time Model / OS Stats
    # ------------------------------------------------------------------

    def _handle_instance_efficiency(self, line: str, words: List[str]) -> Optional[Transition]:
        if " ".join(words[:2]) == "Buffer Hit":
            self._read_efficiency(words)
            return Transition(Section.SEARCHING_FOR_NEXT_SECTION)
        return None

    def _handle_cache_sizes(self, line: str, words: List[str]) -> Optional[Transition]:
        key = " ".join(words[:2])
        if key == "Buffer Cache:":
            self.record.db_block_size = _text(words, len(words) - 1)
        elif key.startswith("Shared Pool"):
            return Transition(Section.SEARCHING_FOR_NEXT_SECTION)
        return None

    def _handle_time_model(self, line: str, words: List[str]) -> Optional[Transition]:
        if " ".join(words[:2]) == "DB CPU":
            self.record.db_cpu_time = _word(words, 2)
            self.record.db_cpu_pct_dbtime = _word(words, 3)
        return None

    def _handle_os_stats(self, line: str, words: List[str]) -> Optional[Transition]:
        name = words[0]
        if name in OS_STATISTICS:
            setattr(self.record, OS_STATISTICS[name], _word(words, 1))
        elif name == "PHYSICAL_MEMORY_BYTES" and self.awr_format is AwrFormat.FORMAT_10:
            # 10g 报告头部没有内存信息
            self.record.host_memory_gb = bytes_to_gib(_word(words, 1))
        return None

    # ------------------------------------------------------------------
    # Top 5 Timed Events
    # ------------------------------------------------------------------

    def _handle_top5(self, line: str, words: List[str]) -> Optional[Transition]:
        state = self.state
        layout = state.layout
        if layout is None:
            return self._seek_header(line, "Top 5 Timed Events")

        state.top_event_rank += 1
        if state.top_event_rank > Config.TOP_EVENT_LIMIT:
            logger.debug(f"第 {state.line_number} 行: Top 5 区段结束")
            return Transition(Section.SEARCHING_FOR_NEXT_SECTION)

        event = TopEvent(rank=state.top_event_rank)
        event.name = layout.slice(line, 1)
        if line.startswith("DB CPU") or line.startswith("CPU time"):
            # 10g 的 "CPU time" 统一命名为 "DB CPU"
            event.name = "DB CPU"
            event.time = layout.number(line, 3)
            event.pct_dbtime = layout.number(line, 5)
        else:
            event.waits = layout.number(line, 2)
            event.time = layout.number(line, 3)
            event.average = layout.number(line, 4)
            event.pct_dbtime = layout.number(line, 5)
            event.wait_class = layout.slice(line, 6)
            if is_zero(event.waits):
                logger.debug(f"Top 5 等待事件 {event.name} 的等待次数为0")
            else:
                computed = average_latency_ms(event.time, event.waits)
                if computed is not None:
                    event.average = computed
        self.record.top_events[event.rank] = event
        return None

    # ------------------------------------------------------------------
    # Foreground Wait Class
    # ------------------------------------------------------------------

    def _handle_wait_class(self, line: str, words: List[str]) -> Optional[Transition]:
        state = self.state
        record = self.record
        layout = state.layout
        if layout is None:
            return self._seek_header(line, "Foreground Wait Class")
        if line.startswith("Wait Class"):
            return None

        wait_time = layout.number(line, 4)
        if line.startswith("DB CPU"):
            record.db_cpu_time = wait_time
            record.db_cpu_pct_dbtime = layout.number(line, 6)
            logger.debug("Foreground Wait Class: 读取 DB CPU")
            return None

        wait_class = WaitClass.match(line[:20])
        if self.awr_format is AwrFormat.FORMAT_10 and to_decimal(wait_time) is not None:
            record.total_wait_time = add_values(record.total_wait_time or "0", wait_time)
        if wait_class is None:
            logger.debug(f"忽略等待类: {line[:20].strip()}")
            return None

        stats = record.wait_classes[wait_class]
        stats.waits = layout.number(line, 2)
        stats.time = wait_time
        # 等待次数为0时平均等待时间记为0，等待次数缺失时保持为空
        stats.average = "0" if is_zero(stats.waits) else average_latency_ms(stats.time, stats.waits)
        if self.awr_format is not AwrFormat.FORMAT_10:
            stats.pct_dbtime = layout.number(line, 6)
        logger.debug(f"Foreground Wait Class: {wait_class.report_name}")
        return None

    # ------------------------------------------------------------------
    # Foreground / Background Wait Events
    # ------------------------------------------------------------------

    def _handle_foreground_events(self, line: str, words: List[str]) -> Optional[Transition]:
        layout = self.state.layout
        if layout is None:
            return self._seek_header(line, "Foreground Wait Events")

        if line.startswith(EXADATA_EVENT_PREFIXES):
            if self.record.exadata_flag == "N":
                logger.debug(f"{self.record.filename}: 发现 Exadata 等待事件")
            self.record.exadata_flag = "Y"
            return None

        event = WaitEvent.lookup(self._event_name(layout, line), foreground=True)
        if event is None:
            return None
        stats = self._read_event(layout, line, event)
        if self.awr_format is AwrFormat.FORMAT_10:
            stats.pct_dbtime = pct_of_db_time(stats.time, self.record.db_time_mins)
        return None

    def _handle_background_events(self, line: str, words: List[str]) -> Optional[Transition]:
        layout = self.state.layout
        if layout is None:
            return self._seek_header(line, "Background Wait Events")

        if line.startswith(DATA_GUARD_EVENT_PREFIXES):
            if self.record.data_guard_flag == "N":
                logger.debug(f"{self.record.filename}: 发现 Data Guard 等待事件")
            self.record.data_guard_flag = "Y"
            return None

        event = WaitEvent.lookup(self._event_name(layout, line), foreground=False)
        if event is not None:
            self._read_event(layout, line, event)
        return None

    @staticmethod
    def _event_name(layout: ColumnLayout, line: str) -> str:
        name = layout.slice(line, 1) or ""
        return name[:Config.EVENT_NAME_WIDTH].strip()

    def _read_event(self, layout: ColumnLayout, line: str, event: WaitEvent):
        stats = self.record.wait_events[event]
        stats.waits = layout.number(line, 2)
        stats.time = layout.number(line, 4)
        stats.average = average_latency_ms(stats.time, stats.waits)
        # 10g 报告没有 %DB time 列
        stats.pct_dbtime = None if self.awr_format is AwrFormat.FORMAT_10 else layout.number(line, 7)
        logger.debug(f"等待事件 {event.event_name}: waits={stats.waits} time={stats.time}")
        return stats

    # ------------------------------------------------------------------
    # Instance Activity Stats / Thread Activity
    # ------------------------------------------------------------------

    def _handle_instance_activity(self, line: str, words: List[str]) -> Optional[Transition]:
        head = line[:Config.ACTIVITY_NAME_WIDTH]
        if head == Config.ACTIVITY_FOOTER:
            logger.debug(f"第 {self.state.line_number} 行: Instance Activity Stats 区段结束，停止扫描")
            return Transition(Section.END_OF_REPORT)

        target = ACTIVITY_STATISTICS.get(head.strip())
        if target is None:
            return None
        attribute, is_bytes = target
        value = clean_number(slice_columns(line, *Config.ACTIVITY_VALUE_COLUMNS))
        if is_bytes:
            converted = bytes_to_mib(value)
            if converted is None:
                logger.debug(f"无法换算 {head.strip()}: {value!r}")
            value = converted
        setattr(self.record, attribute, value)
        return None

    def _handle_thread_activity(self, line: str, words: List[str]) -> Optional[Transition]:
        if " ".join(words[:2]) == "log switches":
            self.record.log_switches_total = _word(words, 3)
            self.record.log_switches_per_hour = _word(words, 4)
            logger.debug(f"第 {self.state.line_number} 行: 扫描完成")
            return Transition(Section.END_OF_REPORT)
        return None

"""
数据模型类 - AWR文本报告解析结果
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional


class ColumnLayoutError(ValueError):
    """表头分隔线的列数不在允许范围内"""


class ReportKind(Enum):
    """文件类型（由文件开头几行判定）"""
    HTML = "html"
    FOREIGN = "foreign"
    TEXT_REPORT = "text"
    UNRECOGNIZED = "unrecognized"


class AwrFormat(Enum):
    """AWR报告格式版本"""
    FORMAT_10 = "10"
    FORMAT_11 = "11"
    FORMAT_12 = "12"
    UNKNOWN = "Unknown"

    @property
    def known(self) -> bool:
        return self is not AwrFormat.UNKNOWN


class Delimit(Enum):
    """取值方式：按单词位置 / 按整行固定列"""
    WORD = "word"
    LINE = "line"


class Section(Enum):
    """解析器状态"""
    PROFILE = "Profile"
    INSTANCE_EFFICIENCY = "InstanceEfficiency"
    TOP5_FOREGROUND = "Top5Foreground"
    CACHE_SIZES = "CacheSizes"
    TIME_MODEL_STATISTICS = "TimeModelStatistics"
    OPERATING_SYSTEM_STATS = "OperatingSystemStats"
    FOREGROUND_WAIT_CLASS = "ForegroundWaitClass"
    FOREGROUND_WAIT_EVENTS = "ForegroundWaitEvents"
    BACKGROUND_WAIT_EVENTS = "BackgroundWaitEvents"
    INSTANCE_ACTIVITY_STATS = "InstanceActivityStats"
    THREAD_ACTIVITY = "ThreadActivity"
    SEARCHING_FOR_NEXT_SECTION = "SearchingForNextSection"
    END_OF_REPORT = "EndOfReport"


class WaitClass(Enum):
    """
    前台等待类

    每个成员: (代码, 报告中的名称, CSV列标题中的名称)
    """
    ADMINISTRATIVE = ("ADMIN", "Administrative", "Admin")
    APPLICATION = ("APPLN", "Application", "Application")
    CLUSTER = ("CLSTR", "Cluster", "Cluster")
    COMMIT = ("COMMT", "Commit", "Commit")
    CONCURRENCY = ("CNCUR", "Concurrency", "Concurrency")
    CONFIGURATION = ("CONFG", "Configuration", "Configuration")
    NETWORK = ("NETWK", "Network", "Network")
    OTHER = ("OTHER", "Other", "Other")
    SCHEDULER = ("SCHED", "Scheduler", "Scheduler")
    USER_IO = ("USRIO", "User I/O", "User I/O")
    SYSTEM_IO = ("SYSIO", "System I/O", "System I/O")

    def __init__(self, code: str, report_name: str, title: str):
        self.code = code
        self.report_name = report_name
        self.title = title

    @classmethod
    def match(cls, line: str) -> Optional["WaitClass"]:
        """按行首名称匹配等待类"""
        for wait_class in cls:
            if line.startswith(wait_class.report_name):
                return wait_class
        return None


class WaitEvent(Enum):
    """
    需要采集的等待事件

    每个成员: (代码, 事件名称, 是否为前台事件)
    """
    DB_FILE_SEQUENTIAL_READ = ("DFSR", "db file sequential read", True)
    DB_FILE_SCATTERED_READ = ("DFXR", "db file scattered read", True)
    DIRECT_PATH_READ = ("DPRD", "direct path read", True)
    DIRECT_PATH_WRITE = ("DPWR", "direct path write", True)
    DIRECT_PATH_READ_TEMP = ("DPRT", "direct path read temp", True)
    DIRECT_PATH_WRITE_TEMP = ("DPWT", "direct path write temp", True)
    LOG_FILE_SYNC = ("LFSY", "log file sync", True)
    DB_FILE_PARALLEL_WRITE = ("DFPW", "db file parallel write", False)
    LOG_FILE_PARALLEL_WRITE = ("LFPW", "log file parallel write", False)
    LOG_FILE_SEQUENTIAL_READ = ("LFSR", "log file sequential read", False)

    def __init__(self, code: str, event_name: str, foreground: bool):
        self.code = code
        self.event_name = event_name
        self.foreground = foreground

    @classmethod
    def lookup(cls, name: str, foreground: bool) -> Optional["WaitEvent"]:
        """按事件名称（已截断、去除空白）精确查找"""
        for event in cls:
            if event.foreground == foreground and event.event_name == name:
                return event
        return None


@dataclass
class WaitStats:
    """等待类 / 等待事件统计"""
    waits: Optional[str] = None
    time: Optional[str] = None
    average: Optional[str] = None
    pct_dbtime: Optional[str] = None


@dataclass
class TopEvent:
    """Top 5 等待事件"""
    rank: int
    name: Optional[str] = None
    wait_class: Optional[str] = None
    waits: Optional[str] = None
    time: Optional[str] = None
    average: Optional[str] = None
    pct_dbtime: Optional[str] = None


@dataclass
class ReportRecord:
    """单个AWR报告的解析结果，数值保留报告中的原始文本"""
    filename: str
    awr_format: AwrFormat = AwrFormat.UNKNOWN

    # 数据库信息
    db_name: Optional[str] = None
    instance_number: Optional[str] = None
    instance_name: Optional[str] = None
    db_version: Optional[str] = None
    cluster: Optional[str] = None

    # 主机信息
    hostname: Optional[str] = None
    host_os: Optional[str] = None
    num_cpus: Optional[str] = None
    host_memory_gb: Optional[str] = None
    db_block_size: Optional[str] = None

    # 快照区间
    begin_snap: Optional[str] = None
    begin_time: Optional[str] = None
    end_snap: Optional[str] = None
    end_time: Optional[str] = None
    elapsed_mins: Optional[str] = None
    db_time_mins: Optional[str] = None
    average_active_sessions: Optional[str] = None
    busy_flag: Optional[str] = None

    # Load Profile
    logical_reads: Optional[str] = None
    block_changes: Optional[str] = None
    user_calls: Optional[str] = None
    parses: Optional[str] = None
    hard_parses: Optional[str] = None
    logons: Optional[str] = None
    executes: Optional[str] = None
    transactions: Optional[str] = None
    buffer_hit_ratio: Optional[str] = None
    inmemory_sort_ratio: Optional[str] = None
    log_switches_total: Optional[str] = None
    log_switches_per_hour: Optional[str] = None

    # IO
    read_iops: Optional[str] = None
    all_write_iops: Optional[str] = None
    redo_write_iops: Optional[str] = None
    data_write_iops: Optional[str] = None
    total_iops: Optional[str] = None
    read_mibps: Optional[str] = None
    all_write_mibps: Optional[str] = None
    redo_write_mibps: Optional[str] = None
    data_write_mibps: Optional[str] = None
    total_mibps: Optional[str] = None

    # Time Model
    db_cpu_time: Optional[str] = None
    db_cpu_pct_dbtime: Optional[str] = None

    wait_classes: Dict[WaitClass, WaitStats] = field(
        default_factory=lambda: {wait_class: WaitStats() for wait_class in WaitClass}
    )
    wait_events: Dict[WaitEvent, WaitStats] = field(
        default_factory=lambda: {event: WaitStats() for event in WaitEvent}
    )
    # 按排名(1-5)存放
    top_events: Dict[int, TopEvent] = field(default_factory=dict)

    # OS Statistics（单位：1/100秒）
    os_busy_time: Optional[str] = None
    os_idle_time: Optional[str] = None
    os_iowait_time: Optional[str] = None
    os_sys_time: Optional[str] = None
    os_user_time: Optional[str] = None
    os_cpu_wait_time: Optional[str] = None
    os_rsrc_mgr_wait_time: Optional[str] = None

    data_guard_flag: str = "N"
    exadata_flag: str = "N"

    # 10g 前台等待类累计时间
    total_wait_time: Optional[str] = None
    # 导致该文件计为处理失败的错误
    errors: List[str] = field(default_factory=list)

    @property
    def failed(self) -> bool:
        return bool(self.errors)

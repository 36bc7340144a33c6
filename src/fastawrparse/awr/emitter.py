"""
CSV输出 - 列顺序固定，空值输出为空字符串
"""
import csv
from typing import Callable, List, Optional, TextIO, Tuple

from loguru import logger

from ..common.config import Config
from .models import ReportRecord, TopEvent, WaitClass, WaitEvent, WaitStats

# 列顺序变化时递增
CSV_LAYOUT_VERSION = 2

Column = Tuple[str, Callable[[ReportRecord], Optional[str]]]


def _attr(name: str) -> Callable[[ReportRecord], Optional[str]]:
    return lambda record: getattr(record, name)


def _wait_stats_columns(title: str, stats_of: Callable[[ReportRecord], WaitStats]) -> List[Column]:
    return [
        (f"{title} Waits", lambda record: stats_of(record).waits),
        (f"{title} Time (s)", lambda record: stats_of(record).time),
        (f"{title} Latency (ms)", lambda record: stats_of(record).average),
        (f"{title} %DBTime", lambda record: stats_of(record).pct_dbtime),
    ]


def _wait_class_columns(wait_class: WaitClass) -> List[Column]:
    return _wait_stats_columns(f"Wait Class {wait_class.title}", lambda record: record.wait_classes[wait_class])


def _wait_event_columns(event: WaitEvent) -> List[Column]:
    return _wait_stats_columns(event.event_name, lambda record: record.wait_events[event])


def _top_event_columns(rank: int) -> List[Column]:
    def top(record: ReportRecord) -> TopEvent:
        return record.top_events.get(rank) or TopEvent(rank=rank)

    title = f"Top5 Event{rank}"
    return [
        (f"{title} Name", lambda record: top(record).name),
        (f"{title} Class", lambda record: top(record).wait_class),
        (f"{title} Waits", lambda record: top(record).waits),
        (f"{title} Time (s)", lambda record: top(record).time),
        (f"{title} Average Time (ms)", lambda record: top(record).average),
        (f"{title} %DBTime", lambda record: top(record).pct_dbtime),
    ]


def _build_columns() -> List[Column]:
    columns: List[Column] = [
        ("Filename", _attr("filename")),
        ("Database Name", _attr("db_name")),
        ("Instance Number", _attr("instance_number")),
        ("Instance Name", _attr("instance_name")),
        ("Database Version", _attr("db_version")),
        ("Cluster", _attr("cluster")),
        ("Hostname", _attr("hostname")),
        ("Host OS", _attr("host_os")),
        ("Num CPUs", _attr("num_cpus")),
        ("Server Memory (GB)", _attr("host_memory_gb")),
        ("DB Block Size", _attr("db_block_size")),
        ("Begin Snap", _attr("begin_snap")),
        ("Begin Time", _attr("begin_time")),
        ("End Snap", _attr("end_snap")),
        ("End Time", _attr("end_time")),
        ("Elapsed Time (mins)", _attr("elapsed_mins")),
        ("DB Time (mins)", _attr("db_time_mins")),
        ("Average Active Sessions", _attr("average_active_sessions")),
        ("Busy Flag", _attr("busy_flag")),
        ("Logical Reads/sec", _attr("logical_reads")),
        ("Block Changes/sec", _attr("block_changes")),
        ("Read IOPS", _attr("read_iops")),
        # "Write" 列为数据文件写，不含 redo
        ("Write IOPS", _attr("data_write_iops")),
        ("Redo IOPS", _attr("redo_write_iops")),
        ("All Write IOPS", _attr("all_write_iops")),
        ("Total IOPS", _attr("total_iops")),
        ("Read Throughput (MiB/sec)", _attr("read_mibps")),
        ("Write Throughput (MiB/sec)", _attr("data_write_mibps")),
        ("Redo Throughput (MiB/sec)", _attr("redo_write_mibps")),
        ("All Write Throughput (MiB/sec)", _attr("all_write_mibps")),
        ("Total Throughput (MiB/sec)", _attr("total_mibps")),
        ("DB CPU Time (s)", _attr("db_cpu_time")),
        ("DB CPU %DBTime", _attr("db_cpu_pct_dbtime")),
    ]
    columns += _wait_class_columns(WaitClass.USER_IO)
    columns += [
        ("User Calls/sec", _attr("user_calls")),
        ("Parses/sec", _attr("parses")),
        ("Hard Parses/sec", _attr("hard_parses")),
        ("Logons/sec", _attr("logons")),
        ("Executes/sec", _attr("executes")),
        ("Transactions/sec", _attr("transactions")),
        ("Buffer Hit Ratio (%)", _attr("buffer_hit_ratio")),
        ("In-Memory Sort Ratio (%)", _attr("inmemory_sort_ratio")),
        ("Log Switches (Total)", _attr("log_switches_total")),
        ("Log Switches (Per Hour)", _attr("log_switches_per_hour")),
    ]
    for rank in range(1, Config.TOP_EVENT_LIMIT + 1):
        columns += _top_event_columns(rank)
    for event in WaitEvent:
        columns += _wait_event_columns(event)
    columns += [
        ("OS busy time", _attr("os_busy_time")),
        ("OS idle time", _attr("os_idle_time")),
        ("OS iowait time", _attr("os_iowait_time")),
        ("OS sys time", _attr("os_sys_time")),
        ("OS user time", _attr("os_user_time")),
        ("OS cpu wait time", _attr("os_cpu_wait_time")),
        ("OS resource mgr wait time", _attr("os_rsrc_mgr_wait_time")),
        ("Data Guard Flag", _attr("data_guard_flag")),
        ("Exadata Flag", _attr("exadata_flag")),
    ]
    for wait_class in WaitClass:
        if wait_class is not WaitClass.USER_IO:
            columns += _wait_class_columns(wait_class)
    return columns


CSV_COLUMNS: Tuple[Column, ...] = tuple(_build_columns())
CSV_HEADER: Tuple[str, ...] = tuple(title for title, _ in CSV_COLUMNS)


class RecordEmitter:
    """将 ReportRecord 写成CSV行"""

    def __init__(self, stream: TextIO):
        self.stream = stream
        self._writer = csv.writer(stream, lineterminator="\n")
        self.rows_written = 0

    def write_header(self) -> None:
        self._writer.writerow(CSV_HEADER)
        self.stream.flush()

    def write_record(self, record: ReportRecord) -> None:
        self._writer.writerow(record_to_row(record))
        self.stream.flush()
        self.rows_written += 1
        logger.trace("{}: 已输出CSV行", record.filename)


def record_to_row(record: ReportRecord) -> List[str]:
    """按 CSV_COLUMNS 的顺序取值，None 输出为空字符串"""
    row = []
    for _, getter in CSV_COLUMNS:
        value = getter(record)
        row.append("" if value is None else str(value))
    return row


def format_report_info(record: ReportRecord) -> str:
    """生成解析结果的可读列表（-p 选项输出到标准错误），第二行为AWR格式"""
    lines = []
    for index, (title, getter) in enumerate(CSV_COLUMNS):
        value = getter(record)
        lines.append(f"{title:>38} = {'' if value is None else value}")
        if index == 0:
            lines.append(f"{'AWR Format':>38} = {record.awr_format.value}")
    return "\n".join(lines)

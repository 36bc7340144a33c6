"""
对外接口 - 批量解析AWR文本报告并输出CSV
"""
import os
import sys
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Iterable, List, Optional, TextIO, Union

from loguru import logger

from .awr.classifier import ReportClassifier
from .awr.emitter import RecordEmitter, format_report_info
from .awr.models import ReportKind, ReportRecord
from .awr.parser import AwrTextParser
from .awr.postprocess import ReportPostProcessor
from .common.config import Config

PathLike = Union[str, Path]

REJECTION_MESSAGES = {
    ReportKind.HTML: "is in HTML format - ignoring...",
    ReportKind.FOREIGN: "is a STATSPACK file - ignoring...",
    ReportKind.UNRECOGNIZED: "is not an AWR file - ignoring...",
}


@dataclass
class RunSummary:
    """一次运行的统计"""
    files_found: int = 0
    files_processed: int = 0
    files_with_errors: int = 0
    failed_files: List[str] = field(default_factory=list)

    @property
    def exit_code(self) -> int:
        if self.files_processed == 0:
            return Config.EXIT_FAILURE
        if self.files_with_errors > 0:
            return Config.EXIT_PARTIAL
        return Config.EXIT_SUCCESS

    def mark_failed(self, path: PathLike) -> None:
        if str(path) not in self.failed_files:
            self.failed_files.append(str(path))
            self.files_with_errors += 1


def parse_awr_report(file_path: PathLike) -> ReportRecord:
    """
    解析单个AWR文本报告（不检查文件类型）

    Args:
        file_path: 报告文件路径

    Returns:
        ReportRecord: 已完成后处理的结果，record.errors 非空表示存在处理错误

    Raises:
        OSError: 文件无法读取
    """
    record = AwrTextParser.parse_file(Path(file_path))
    return ReportPostProcessor.finalize(record)


def parse_awr_reports(
    file_paths: Iterable[PathLike],
    output: Optional[TextIO] = None,
    header: bool = True,
    print_info: bool = False,
    info_stream: Optional[TextIO] = None,
) -> RunSummary:
    """
    依次解析多个文件并输出CSV

    Args:
        file_paths: 文件路径列表
        output: CSV输出流，默认为标准输出
        header: 是否先输出表头
        print_info: 是否将每个文件的解析结果输出到 info_stream
        info_stream: 解析结果输出流，默认为标准错误

    Returns:
        RunSummary: 运行统计，exit_code 属性为进程退出码
    """
    output = output if output is not None else sys.stdout
    info_stream = info_stream if info_stream is not None else sys.stderr
    emitter = RecordEmitter(output)
    summary = RunSummary()

    if header:
        logger.debug("输出CSV表头")
        emitter.write_header()
    else:
        logger.info("已通过 -n 选项关闭CSV表头")

    for file_path in file_paths:
        summary.files_found += 1
        path = Path(file_path)

        if not path.is_file() or not os.access(path, os.R_OK):
            logger.error(f"Cannot read file {file_path} - ignoring...")
            summary.mark_failed(file_path)
            continue

        logger.info(f"开始分析文件 {file_path} ({datetime.now():%Y-%m-%d %H:%M:%S})")
        try:
            kind = ReportClassifier.classify(path)
            if kind is not ReportKind.TEXT_REPORT:
                logger.error(f"{file_path} {REJECTION_MESSAGES[kind]}")
                summary.mark_failed(file_path)
                continue
            record = parse_awr_report(path)
        except OSError as e:
            logger.error(f"Cannot read file {file_path} - ignoring... ({e})")
            summary.mark_failed(file_path)
            continue
        except Exception as e:
            logger.opt(exception=e).debug(f"解析 {file_path} 时发生异常")
            logger.error(f"解析文件 {file_path} 失败: {e}")
            summary.mark_failed(file_path)
            continue

        if print_info:
            print(format_report_info(record), file=info_stream)
        emitter.write_record(record)
        summary.files_processed += 1
        if record.failed:
            summary.mark_failed(file_path)

    logger.info(f"Files found       : {summary.files_found}")
    logger.info(f"Files processed   : {summary.files_processed}")
    logger.info(f"Processing errors : {summary.files_with_errors}")
    return summary

"""
解析后处理 - 计算报告中没有直接给出的派生指标，并做一致性检查
"""
from loguru import logger

from ..common.utils import add_values, is_zero, pct_of_db_time, subtract_values, to_decimal
from .models import AwrFormat, ReportRecord, WaitClass


class ReportPostProcessor:
    """对单个 ReportRecord 做后处理"""

    @staticmethod
    def finalize(record: ReportRecord) -> ReportRecord:
        """
        计算派生指标并检查必需字段

        格式未知时不做任何计算，只记录错误。缺少数据库名称或核心IO指标时
        记录错误，该文件计为处理失败，但结果仍然输出。

        Args:
            record: 解析器输出的记录

        Returns:
            ReportRecord: 同一个记录对象
        """
        if not record.awr_format.known:
            ReportPostProcessor._fail(record, "无法识别AWR报告格式 (unknown format)")
            return record

        logger.debug(f"{record.filename}: 开始后处理")
        ReportPostProcessor._derive_busy_flag(record)
        ReportPostProcessor._derive_io_totals(record)
        if record.awr_format is AwrFormat.FORMAT_10:
            ReportPostProcessor._derive_wait_class_pct(record)
        ReportPostProcessor._check_consistency(record)
        return record

    @staticmethod
    def _derive_busy_flag(record: ReportRecord) -> None:
        sessions = to_decimal(record.average_active_sessions)
        cpus = to_decimal(record.num_cpus)
        if sessions is None or cpus is None:
            return
        record.busy_flag = "Y" if sessions > cpus else "N"

    @staticmethod
    def _derive_io_totals(record: ReportRecord) -> None:
        record.total_iops = add_values(record.read_iops, record.all_write_iops)
        record.data_write_iops = subtract_values(record.all_write_iops, record.redo_write_iops)
        record.total_mibps = add_values(record.read_mibps, record.all_write_mibps)
        record.data_write_mibps = subtract_values(record.all_write_mibps, record.redo_write_mibps)

        # 计算结果为0视为未采集到，报告中的原始读写值保持不变
        for attribute in ("data_write_iops", "total_iops", "data_write_mibps", "total_mibps"):
            if is_zero(getattr(record, attribute)):
                setattr(record, attribute, None)

    @staticmethod
    def _derive_wait_class_pct(record: ReportRecord) -> None:
        """10g 报告没有等待类的 %DB time 列，用 DB Time 计算"""
        logger.debug("计算等待类 %DBTime: 10g 报告中各等待类的合计可能超过100%")
        if record.total_wait_time is not None:
            logger.debug(f"前台等待类累计时间: {record.total_wait_time} 秒")
        if to_decimal(record.db_time_mins) is None or is_zero(record.db_time_mins):
            logger.debug(f"DB Time 未知 ({record.db_time_mins})，无法计算等待类 %DBTime")
            return
        for wait_class in WaitClass:
            stats = record.wait_classes[wait_class]
            if stats.time is None:
                logger.trace("等待类 {} 没有数据", wait_class.report_name)
                continue
            stats.pct_dbtime = pct_of_db_time(stats.time, record.db_time_mins)
            logger.debug(f"等待类 {wait_class.report_name} %DBTime = {stats.pct_dbtime}")

    @staticmethod
    def _check_consistency(record: ReportRecord) -> None:
        if record.db_name is None:
            logger.warning(f"{record.filename}: 未找到数据库系统信息")
        if record.awr_format is not AwrFormat.FORMAT_10:
            if record.hostname is None:
                logger.warning(f"{record.filename}: 未找到主机信息")
            if record.average_active_sessions is None:
                logger.warning(f"{record.filename}: 无法计算平均活动会话数")
            if record.busy_flag is None:
                logger.warning(f"{record.filename}: 无法确定 Busy 标志")

        required = (
            (record.db_name, "数据库名称"),
            (record.read_iops, "Read IOPS"),
            (record.all_write_iops, "Write IOPS"),
            (record.read_mibps, "Read Throughput"),
            (record.all_write_mibps, "Write Throughput"),
        )
        for value, label in required:
            if value is None:
                ReportPostProcessor._fail(record, f"无法确定 {label}")

    @staticmethod
    def _fail(record: ReportRecord, message: str) -> None:
        record.errors.append(message)
        logger.error(f"{record.filename}: {message}")

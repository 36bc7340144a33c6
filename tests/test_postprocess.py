from fastawrparse.awr.models import AwrFormat, ReportRecord, WaitClass
from fastawrparse.awr.parser import AwrTextParser
from fastawrparse.awr.postprocess import ReportPostProcessor

import awr_samples


def finalize(text: str):
    record = AwrTextParser("awrrpt.txt").parse_lines(text.splitlines())
    return ReportPostProcessor.finalize(record)


def minimal_record(**overrides) -> ReportRecord:
    values = dict(
        filename="awrrpt.txt",
        awr_format=AwrFormat.FORMAT_11,
        db_name="SALESDB",
        hostname="dbhost01",
        average_active_sessions="1.0",
        num_cpus="4",
        read_iops="100.0",
        all_write_iops="50.0",
        redo_write_iops="20.0",
        read_mibps="10.00",
        all_write_mibps="5.00",
        redo_write_mibps="1.00",
    )
    values.update(overrides)
    return ReportRecord(**values)


def test_busy_flag_set_when_sessions_exceed_cpus():
    record = finalize(awr_samples.format_11_report(num_cpus="1"))
    assert record.average_active_sessions == "2.0"
    assert record.busy_flag == "Y"
    assert not record.failed


def test_busy_flag_clear_when_cpus_suffice():
    record = finalize(awr_samples.format_11_report(num_cpus="2"))
    assert record.busy_flag == "N"


def test_io_totals():
    record = finalize(awr_samples.format_11_report())
    assert record.total_iops == "150.0"
    assert record.data_write_iops == "30.0"
    assert record.total_mibps == "15.00"
    assert record.data_write_mibps == "4.00"


def test_zero_derived_value_is_nulled():
    record = finalize(awr_samples.format_10_report())
    # 0.50 MiB/s 全部为 redo 写
    assert record.data_write_mibps is None
    assert record.data_write_iops == "15.0"
    assert record.total_mibps == "1.50"


def test_near_zero_read_throughput_is_kept():
    record = finalize(awr_samples.format_11_report(read_bytes="1,000.0"))
    assert record.read_mibps == "0.00"
    assert record.total_mibps == "5.00"
    assert not record.failed


def test_zero_read_iops_is_kept_but_zero_total_is_nulled():
    record = ReportPostProcessor.finalize(minimal_record(read_iops="0.0", all_write_iops="0.0", redo_write_iops="0.0"))
    assert record.read_iops == "0.0"
    assert record.all_write_iops == "0.0"
    assert record.total_iops is None
    assert record.data_write_iops is None
    assert not record.failed


def test_missing_operand_leaves_total_null():
    record = ReportPostProcessor.finalize(minimal_record(redo_write_iops=None))
    assert record.data_write_iops is None
    assert record.total_iops == "150.0"


def test_format_10_wait_class_pct_from_db_time():
    record = finalize(awr_samples.format_10_report())
    assert record.wait_classes[WaitClass.USER_IO].pct_dbtime == "100.0"
    assert record.wait_classes[WaitClass.SYSTEM_IO].pct_dbtime == "5.6"
    assert record.wait_classes[WaitClass.COMMIT].pct_dbtime is None
    assert record.busy_flag == "N"
    assert not record.failed


def test_unknown_format_is_an_error_without_derivation(log_records):
    record = ReportPostProcessor.finalize(minimal_record(awr_format=AwrFormat.UNKNOWN))
    assert record.failed
    assert "unknown format" in record.errors[0]
    assert record.busy_flag is None
    assert record.total_iops is None
    assert any(r["level"].name == "ERROR" for r in log_records)


def test_every_missing_required_field_is_reported(log_records):
    record = ReportPostProcessor.finalize(minimal_record(db_name=None, read_mibps=None))
    assert len(record.errors) == 2
    assert any("Read Throughput" in message for message in record.errors)
    errors = [r["message"] for r in log_records if r["level"].name == "ERROR"]
    assert len(errors) == 2


def test_missing_host_details_is_only_a_warning(log_records):
    record = ReportPostProcessor.finalize(minimal_record(hostname=None))
    assert not record.failed
    assert any(r["level"].name == "WARNING" and "主机信息" in r["message"] for r in log_records)


def test_format_10_does_not_warn_about_host(log_records):
    ReportPostProcessor.finalize(minimal_record(awr_format=AwrFormat.FORMAT_10, hostname=None, busy_flag=None,
                                                average_active_sessions=None))
    assert not any(r["level"].name == "WARNING" for r in log_records)

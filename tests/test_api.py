import csv
import io

from fastawrparse import RunSummary, parse_awr_reports
from fastawrparse.awr.emitter import CSV_HEADER


def read_rows(out: io.StringIO):
    return list(csv.reader(io.StringIO(out.getvalue())))


def test_all_formats_processed(awr10_file, awr11_file, awr12_file):
    out = io.StringIO()
    summary = parse_awr_reports([awr10_file, awr11_file, awr12_file], output=out)
    rows = read_rows(out)
    assert rows[0] == list(CSV_HEADER)
    assert [row[1] for row in rows[1:]] == ["ORCL10", "SALESDB", "CDB12"]
    assert summary.files_found == 3
    assert summary.files_processed == 3
    assert summary.files_with_errors == 0
    assert summary.exit_code == 0


def test_html_file_is_rejected(html_file, log_records):
    out = io.StringIO()
    summary = parse_awr_reports([html_file], output=out, header=False)
    assert out.getvalue() == ""
    assert summary.files_processed == 0
    assert summary.failed_files == [str(html_file)]
    assert summary.exit_code == 2
    assert any("is in HTML format - ignoring..." in r["message"] for r in log_records)


def test_mixed_run_is_partial(awr11_file, statspack_file, tmp_path, log_records):
    missing = tmp_path / "missing.txt"
    out = io.StringIO()
    summary = parse_awr_reports([awr11_file, statspack_file, missing], output=out)
    assert len(read_rows(out)) == 2
    assert summary.files_found == 3
    assert summary.files_processed == 1
    assert summary.files_with_errors == 2
    assert summary.exit_code == 1
    messages = [r["message"] for r in log_records]
    assert any("is a STATSPACK file - ignoring..." in m for m in messages)
    assert any(f"Cannot read file {missing} - ignoring..." in m for m in messages)
    assert "Files processed   : 1" in messages


def test_unrecognized_text_file(tmp_path):
    path = tmp_path / "notes.txt"
    path.write_text("hello\n", encoding="utf-8")
    summary = parse_awr_reports([path], output=io.StringIO())
    assert summary.exit_code == 2


def test_record_with_errors_is_still_emitted(tmp_path):
    path = tmp_path / "truncated.txt"
    path.write_text("WORKLOAD REPOSITORY report for\n\n", encoding="utf-8")
    out = io.StringIO()
    summary = parse_awr_reports([path], output=out, header=False)
    rows = read_rows(out)
    assert len(rows) == 1
    assert rows[0][0] == "truncated.txt"
    assert summary.files_processed == 1
    assert summary.files_with_errors == 1
    assert summary.exit_code == 1


def test_print_info_goes_to_info_stream(awr11_file):
    info = io.StringIO()
    parse_awr_reports([awr11_file], output=io.StringIO(), print_info=True, info_stream=info)
    assert "AWR Format = 11" in info.getvalue()


def test_run_summary_counts_each_file_once():
    summary = RunSummary(files_found=1, files_processed=1)
    summary.mark_failed("a.txt")
    summary.mark_failed("a.txt")
    assert summary.files_with_errors == 1
    assert summary.exit_code == 1

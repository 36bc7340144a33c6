import contextlib
import sys
from pathlib import Path

import pytest
from loguru import logger

ROOT = Path(__file__).resolve().parent.parent
TESTS = Path(__file__).resolve().parent

for p in (ROOT / "src", TESTS):
    if str(p) not in sys.path:
        sys.path.insert(0, str(p))

import awr_samples  # noqa: E402


@pytest.fixture(autouse=True)
def reset_logger():
    """每个测试结束后移除所有日志输出，避免 sink 指向已关闭的捕获流"""
    yield
    logger.remove()


@pytest.fixture
def log_records():
    """收集测试期间的 loguru 日志记录"""
    records = []
    handler_id = logger.add(lambda message: records.append(message.record), level="TRACE", format="{message}")
    yield records
    # cli.main 会调用 logger.remove()，此时 handler 已不存在
    with contextlib.suppress(ValueError):
        logger.remove(handler_id)


def _write(directory: Path, name: str, text: str) -> Path:
    path = directory / name
    path.write_text(text, encoding="utf-8")
    return path


@pytest.fixture
def awr11_file(tmp_path):
    return _write(tmp_path, "awrrpt_1_100_101.txt", awr_samples.format_11_report())


@pytest.fixture
def awr10_file(tmp_path):
    return _write(tmp_path, "awrrpt_1_10_11.txt", awr_samples.format_10_report())


@pytest.fixture
def awr12_file(tmp_path):
    return _write(tmp_path, "awrrpt_1_200_201.txt", awr_samples.format_12_report())


@pytest.fixture
def html_file(tmp_path):
    return _write(tmp_path, "awrrpt_1_100_101.html", awr_samples.html_report())


@pytest.fixture
def statspack_file(tmp_path):
    return _write(tmp_path, "sp_1_2.lst", awr_samples.statspack_report())

import re
import signal

import pytest

from catime.log import (
    ARCH_AMD64,
    ARCH_ARM64,
    LOG_FILE_NAME,
    SEPARATOR,
    Logger,
    LogLevel,
    architecture_name,
    describe_signal,
    log_file_path,
    windows_version_name,
)

RECORD = re.compile(r"^\[\d{4}-\d\d-\d\d \d\d:\d\d:\d\d\] \[(\w+)\] (.*)$")


def _lines(path):
    return path.read_text(encoding="utf-8").splitlines()


def test_log_file_path_beside_config_backslash():
    config = "C:\\Users\\me\\AppData\\Local\\Catime\\config.txt"
    assert log_file_path(config) == "C:\\Users\\me\\AppData\\Local\\Catime\\" + LOG_FILE_NAME


def test_log_file_path_beside_config_slash(tmp_path):
    result = log_file_path(tmp_path / "config.txt")
    assert result == str(tmp_path / LOG_FILE_NAME)


def test_log_file_path_without_directory():
    assert log_file_path("config.txt") == "Catime_Logs.log"


@pytest.mark.parametrize(
    "signum, text",
    [
        (signal.SIGINT, "用户中断"),
        (signal.SIGTERM, "终止信号"),
        (signal.SIGSEGV, "段错误/内存访问异常"),
        (signal.SIGFPE, "浮点数异常"),
    ],
)
def test_describe_signal(signum, text):
    assert describe_signal(signum) == text


def test_describe_unknown_signal():
    assert describe_signal(9999) == "未知信号"


@pytest.mark.parametrize(
    "args, name",
    [
        ((10, 0, 22000, True, True), "Windows 11"),
        ((10, 0, 19045, True, True), "Windows 10"),
        ((6, 3, 9600, True, False), "Windows 8.1"),
        ((6, 1, 7601, True, False), "Windows 7"),
        ((6, 0, 6000, True, False), "Windows Vista"),
        ((5, 2, 3790, True, True), "Windows XP Professional x64"),
        ((5, 2, 3790, False, True), "Windows Server 2003"),
        ((5, 1, 2600, True, False), "Windows XP"),
        ((4, 0, 1381, True, False), "未知版本"),
    ],
)
def test_windows_version_name(args, name):
    assert windows_version_name(*args) == name


def test_architecture_names():
    assert architecture_name(ARCH_AMD64) == "x64 (AMD64)"
    assert architecture_name(ARCH_ARM64) == "ARM64"
    assert architecture_name(-1) == "未知"


def test_open_writes_header(tmp_path):
    path = tmp_path / LOG_FILE_NAME
    logger = Logger(path)
    logger.open("9.9.9")
    assert logger.is_open
    logger.close()
    lines = _lines(path)
    assert all(RECORD.match(line) for line in lines)
    messages = [RECORD.match(line).group(2) for line in lines]
    assert messages[0] == SEPARATOR
    assert messages[1] == "Catime 版本: 9.9.9"
    assert "日志系统初始化完成，Catime 启动" in messages
    assert messages[-2:] == ["Catime 正常退出", SEPARATOR]


def test_write_uses_level_name(tmp_path):
    path = tmp_path / LOG_FILE_NAME
    with Logger(path) as logger:
        logger.open("1.0.0")
        logger.write(LogLevel.WARNING, "disk nearly full")
        logger.write(LogLevel.ERROR, "failed")
    records = [RECORD.match(line).groups() for line in _lines(path)]
    assert ("WARNING", "disk nearly full") in records
    assert ("ERROR", "failed") in records


def test_open_truncates_previous_log(tmp_path):
    path = tmp_path / LOG_FILE_NAME
    path.write_text("old content\n", encoding="utf-8")
    logger = Logger(path)
    logger.open("1.0.0")
    logger.close()
    assert "old content" not in path.read_text(encoding="utf-8")


def test_write_when_closed_is_ignored(tmp_path):
    path = tmp_path / LOG_FILE_NAME
    logger = Logger(path)
    logger.write(LogLevel.INFO, "nothing")
    assert not path.exists()
    logger.open("1.0.0")
    logger.close()
    before = path.read_text(encoding="utf-8")
    logger.write(LogLevel.INFO, "after close")
    assert path.read_text(encoding="utf-8") == before


def test_record_fatal_signal_closes_log(tmp_path):
    path = tmp_path / LOG_FILE_NAME
    logger = Logger(path)
    logger.open("1.0.0")
    logger.record_fatal_signal(signal.SIGTERM)
    assert not logger.is_open
    last = _lines(path)[-1]
    assert last == f"[FATAL] 发生致命信号: 终止信号 (信号编号: {int(signal.SIGTERM)})"
    logger.close()
    assert _lines(path)[-1] == last


def test_open_in_missing_directory_raises(tmp_path):
    logger = Logger(tmp_path / "missing" / LOG_FILE_NAME)
    with pytest.raises(OSError):
        logger.open("1.0.0")
    assert not logger.is_open
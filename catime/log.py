"""Application log file: timestamped records, system details and fatal signals."""

from __future__ import annotations

import os
import platform
import signal
import sys
import threading
from datetime import datetime
from enum import IntEnum
from pathlib import Path
from typing import IO

LOG_FILE_NAME = "Catime_Logs.log"
SEPARATOR = "=" * 50
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"

ARCH_INTEL = 0
ARCH_ARM = 5
ARCH_AMD64 = 9
ARCH_ARM64 = 12

_ARCH_NAMES = {
    ARCH_AMD64: "x64 (AMD64)",
    ARCH_INTEL: "x86 (Intel)",
    ARCH_ARM: "ARM",
    ARCH_ARM64: "ARM64",
}

_MACHINE_ARCH = {
    "amd64": ARCH_AMD64,
    "x86_64": ARCH_AMD64,
    "x86": ARCH_INTEL,
    "i386": ARCH_INTEL,
    "i686": ARCH_INTEL,
    "arm": ARCH_ARM,
    "armv7l": ARCH_ARM,
    "arm64": ARCH_ARM64,
    "aarch64": ARCH_ARM64,
}

_SIGNAL_NAMES = {
    signal.SIGFPE: "浮点数异常",
    signal.SIGILL: "非法指令",
    signal.SIGSEGV: "段错误/内存访问异常",
    signal.SIGTERM: "终止信号",
    signal.SIGABRT: "异常终止/中止",
    signal.SIGINT: "用户中断",
}

_GIB = 1024.0 * 1024 * 1024


class LogLevel(IntEnum):
    """Severity of a log record."""

    DEBUG = 0
    INFO = 1
    WARNING = 2
    ERROR = 3
    FATAL = 4


def log_file_path(config_path: str | os.PathLike[str]) -> str:
    """Log file placed beside the configuration file, or in the current directory."""
    text = os.fspath(config_path)
    cut = max(text.rfind("\\"), text.rfind("/"))
    if cut < 0:
        return LOG_FILE_NAME
    return text[: cut + 1] + LOG_FILE_NAME


def describe_signal(signum: int) -> str:
    """Human-readable description of a fatal signal."""
    return _SIGNAL_NAMES.get(signum, "未知信号")


def windows_version_name(
    major: int, minor: int, build: int, is_workstation: bool, is_amd64: bool
) -> str:
    """Marketing name of a Windows release from its version numbers."""
    if major == 10:
        return "Windows 11" if build >= 22000 else "Windows 10"
    if major == 6:
        return {
            3: "Windows 8.1",
            2: "Windows 8",
            1: "Windows 7",
            0: "Windows Vista",
        }.get(minor, "未知版本")
    if major == 5:
        if minor == 2:
            if is_workstation and is_amd64:
                return "Windows XP Professional x64"
            return "Windows Server 2003"
        return {1: "Windows XP", 0: "Windows 2000"}.get(minor, "未知版本")
    return "未知版本"


def architecture_name(arch: int) -> str:
    """Name of a processor architecture code."""
    return _ARCH_NAMES.get(arch, "未知")


def _machine_arch_code() -> int:
    return _MACHINE_ARCH.get(platform.machine().lower(), -1)


def _system_information() -> list[str]:
    lines: list[str] = []
    arch = _machine_arch_code()

    if sys.platform == "win32":
        info = sys.getwindowsversion()
        workstation = info.product_type == 1
        name = windows_version_name(
            info.major, info.minor, info.build, workstation, arch == ARCH_AMD64
        )
        lines.append(
            f"操作系统: {name} ({info.major}.{info.minor}) Build {info.build} "
            f"{'工作站' if workstation else '服务器'}"
        )
    else:
        lines.append(f"操作系统: {platform.system()} {platform.release()}")

    lines.append(f"CPU架构: {architecture_name(arch)}")

    try:
        page = os.sysconf("SC_PAGE_SIZE")
        total = os.sysconf("SC_PHYS_PAGES") * page
        available = os.sysconf("SC_AVPHYS_PAGES") * page
    except (AttributeError, ValueError, OSError):
        total = 0
        available = 0
    if total > 0:
        used = total - available
        lines.append(
            f"物理内存: {used / _GIB:.2f} GB / {total / _GIB:.2f} GB "
            f"(已用 {used * 100 // total}%)"
        )

    geteuid = getattr(os, "geteuid", None)
    if geteuid is not None:
        lines.append(f"管理员权限: {'是' if geteuid() == 0 else '否'}")
    return lines


class Logger:
    """Writes timestamped records to a log file, flushing after each one."""

    def __init__(self, path: str | os.PathLike[str]) -> None:
        self.path = Path(path)
        self._file: IO[str] | None = None
        self._lock = threading.Lock()

    @property
    def is_open(self) -> bool:
        return self._file is not None

    def open(self, version: str) -> None:
        """Truncate the log file and write the start-up header.

        Raises OSError if the file cannot be created.
        """
        self._file = open(self.path, "w", encoding="utf-8")
        self.write(LogLevel.INFO, SEPARATOR)
        self.write(LogLevel.INFO, f"Catime 版本: {version}")
        self.write(LogLevel.INFO, "-----------------系统信息-----------------")
        for line in _system_information():
            self.write(LogLevel.INFO, line)
        self.write(LogLevel.INFO, "-----------------应用信息-----------------")
        self.write(LogLevel.INFO, "日志系统初始化完成，Catime 启动")

    def write(self, level: LogLevel | int, message: str) -> None:
        """Append one record; does nothing while the log is closed."""
        level = LogLevel(level)
        with self._lock:
            if self._file is None:
                return
            stamp = datetime.now().strftime(TIMESTAMP_FORMAT)
            self._file.write(f"[{stamp}] [{level.name}] {message}\n")
            self._file.flush()

    def record_fatal_signal(self, signum: int) -> None:
        """Note a fatal signal and close the log without the normal footer."""
        with self._lock:
            if self._file is None:
                return
            self._file.write(
                f"[FATAL] 发生致命信号: {describe_signal(signum)} (信号编号: {signum})\n"
            )
            self._file.flush()
            self._file.close()
            self._file = None

    def close(self) -> None:
        """Write the exit footer and close the file."""
        if self._file is None:
            return
        self.write(LogLevel.INFO, "Catime 正常退出")
        self.write(LogLevel.INFO, SEPARATOR)
        with self._lock:
            if self._file is not None:
                self._file.close()
                self._file = None

    def __enter__(self) -> "Logger":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
# -*- coding: utf-8 -*-
"""
日志常量

- LogLevel: 日志级别（同时作为事件名）
- FileWriteStreamMode: 日志文件写入/轮转模式
- ANSI 控制码
"""

from enum import Enum


class LogLevel(str, Enum):
    """日志级别枚举

    成员值与事件名一致，例如 ``logger.on("INFO", ...)``。
    """
    FATAL = "FATAL"
    ERROR = "ERROR"
    WARN = "WARN"
    INFO = "INFO"
    DEBUG = "DEBUG"

    @classmethod
    def parse(cls, value) -> "LogLevel":
        """把字符串（大小写不敏感）或 LogLevel 转换为 LogLevel"""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).upper())
        except ValueError:
            raise ValueError(f"unknown log level: {value!r}") from None


class FileWriteStreamMode(str, Enum):
    """日志文件打开模式

    - APPEND: 直接追加，不轮转
    - TRUNCATE: 文件存在时用初始内容覆盖
    - RENAME: 文件存在时先轮转（默认压缩归档），再写入初始内容
    """
    APPEND = "APPEND"
    TRUNCATE = "TRUNCATE"
    RENAME = "RENAME"

    @classmethod
    def parse(cls, value) -> "FileWriteStreamMode":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).upper())
        except ValueError:
            raise ValueError(f"unknown write stream mode: {value!r}") from None


# 颜色代码
RESET = "\033[0m"
BOLD = "\033[1m"
DIM = "\033[2m"
FG_BLACK = "\033[30m"
FG_GREEN = "\033[32m"
FG_YELLOW = "\033[33m"
BG_RED = "\033[41m"
BG_YELLOW = "\033[43m"
BG_MAGENTA = "\033[45m"
BG_CYAN = "\033[46m"

# 级别徽章颜色（背景色 + 前景色）
LEVEL_COLORS = {
    LogLevel.FATAL: BG_RED + FG_BLACK,
    LogLevel.ERROR: BG_RED + FG_BLACK,
    LogLevel.WARN: BG_YELLOW + FG_BLACK,
    LogLevel.INFO: BG_CYAN + FG_BLACK,
    LogLevel.DEBUG: BG_MAGENTA + FG_BLACK,
}

# 日志文件默认编码
DEFAULT_ENCODING = "utf-8"

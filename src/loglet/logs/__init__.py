# -*- coding: utf-8 -*-
"""
loglet Logs - 日志门面

支持：
- 五个日志级别（FATAL、ERROR、WARN、INFO、DEBUG）
- 彩色控制台输出与纯文本文件输出
- 启动时轮转旧日志文件（覆盖、压缩归档或自定义回调）
- 按级别的事件监听，并沿父 Logger 链向上传播
"""

from .config import (
    AppConfig,
    ConfigLoader,
    DebugModeConfig,
    InspectConfig,
    LogConfig,
    WriteStreamConfig,
    install_logger,
    load_config,
)
from .constants import FileWriteStreamMode, LogLevel
from .errors import ConfigurationError, IncompatibleTargetError, LogletError
from .formatter import BaseFormatter, FormatRequest, Formatter
from .inspection import InspectOptions, inspect_value, is_debug_session, stringify, strip_ansi, supports_color
from .logger import ConsoleSink, DebugMode, LogEvent, Logger
from .rotate import (
    UseCustomHook,
    UseDefaultCompression,
    WriteStreamOptions,
    open_file_write_stream,
)
from .utils import (
    brotli_compress_log,
    format_date_file_name,
    get_file_creation_date,
    gzip_compress_log,
    log_date_header,
)

__all__ = [
    # 配置类
    "AppConfig",
    "ConfigLoader",
    "DebugModeConfig",
    "InspectConfig",
    "LogConfig",
    "WriteStreamConfig",
    "install_logger",
    "load_config",
    # 常量
    "FileWriteStreamMode",
    "LogLevel",
    # 异常
    "ConfigurationError",
    "IncompatibleTargetError",
    "LogletError",
    # 格式化器
    "BaseFormatter",
    "FormatRequest",
    "Formatter",
    # 值检视
    "InspectOptions",
    "inspect_value",
    "is_debug_session",
    "stringify",
    "strip_ansi",
    "supports_color",
    # Logger
    "ConsoleSink",
    "DebugMode",
    "LogEvent",
    "Logger",
    # 写入流与轮转
    "UseCustomHook",
    "UseDefaultCompression",
    "WriteStreamOptions",
    "open_file_write_stream",
    "brotli_compress_log",
    "format_date_file_name",
    "get_file_creation_date",
    "gzip_compress_log",
    "log_date_header",
]

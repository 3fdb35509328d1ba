"""
loglet is a small logging facade for python applications.
It renders every log call twice: once for the terminal, once for a log file.

Modules:
- loglet.logs: Logger, Formatter, log file rotation and configuration
- loglet.os: File system utilities
"""

from loglet.__version__ import __version__
from loglet.logs import (
    FileWriteStreamMode,
    Formatter,
    Logger,
    LogLevel,
    WriteStreamOptions,
)

# 默认 Logger 实例
logger = Logger()

__all__ = [
    "__version__",
    "FileWriteStreamMode",
    "Formatter",
    "Logger",
    "LogLevel",
    "WriteStreamOptions",
    "logger",
]

# -*- coding: utf-8 -*-
"""
日志格式化器

把一次日志调用（FormatRequest）渲染为两份文本：
- 控制台文本：彩色级别徽章 + 时间 + 可选标签徽章，跨行延续 ANSI 样式
- 文件文本：纯文本，清除全部 ANSI 控制序列

文件格式：
[HH:MM:SS] [label/LEVEL]: message

示例：
[23:00:00] [app/INFO]: Hello World
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, replace
from datetime import datetime
from typing import TYPE_CHECKING, Any, Callable, Optional, Tuple

from .constants import DIM, LEVEL_COLORS, RESET, LogLevel
from .inspection import ANSI_PATTERN, InspectOptions, stringify, strip_ansi, supports_color

if TYPE_CHECKING:
    from .logger import Logger


@dataclass(frozen=True)
class FormatRequest:
    """一次日志调用的格式化请求"""
    level: LogLevel
    messages: Tuple[Any, ...] = ()


class BaseFormatter(ABC):
    """格式化器抽象接口

    自定义格式化器只需实现 format_console_log 与 format_write_stream_log。
    """

    def __init__(self, logger: Optional["Logger"] = None):
        self.logger = logger

    def set_logger(self, logger: Optional["Logger"]) -> None:
        """绑定格式化器所属的 Logger（用于读取标签和检视选项）"""
        self.logger = logger

    @abstractmethod
    def format_console_log(self, request: FormatRequest) -> str:
        ...

    @abstractmethod
    def format_write_stream_log(self, request: FormatRequest) -> str:
        ...


class Formatter(BaseFormatter):
    """默认格式化器

    控制台输出格式：
    [ LEVEL ] HH:MM:SS [ label ] message

    文件输出格式：
    [HH:MM:SS] [label/LEVEL]: message
    """

    TIME_FORMAT = "%H:%M:%S"

    def __init__(
        self,
        logger: Optional["Logger"] = None,
        disabled: bool = False,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        """初始化格式化器

        Args:
            logger: 所属 Logger
            disabled: 为 True 时跳过前缀和样式延续，直接输出检视文本
            clock: 当前时间来源，默认 datetime.now
        """
        super().__init__(logger)
        self.disabled = disabled
        self._clock = clock or datetime.now

    @property
    def inspect_options(self) -> Optional[InspectOptions]:
        if self.logger is None:
            return None
        return self.logger.inspect_options

    @property
    def label(self) -> Optional[str]:
        if self.logger is None:
            return None
        return self.logger.label

    @property
    def colors(self) -> bool:
        options = self.inspect_options
        if options is not None and options.colors is not None:
            return options.colors
        return supports_color()

    def stringify(self, *values: Any) -> str:
        """按所属 Logger 的检视选项把消息列表拼接为字符串"""
        options = self.inspect_options
        if options is None:
            options = InspectOptions(colors=supports_color())
        elif options.colors is None:
            options = replace(options, colors=supports_color())
        return stringify(*values, options=options)

    def _get_time_text(self) -> str:
        return self._clock().strftime(self.TIME_FORMAT)

    def _console_prefix(self, level: LogLevel) -> str:
        time_text = self._get_time_text()
        label = self.label

        if not self.colors:
            prefix = f" {level.value} {time_text}"
            if label:
                prefix += f" [{label}]"
            return prefix + " "

        prefix = f"{LEVEL_COLORS[level]} {level.value} {RESET} {DIM}{time_text}{RESET}"
        if label:
            prefix += f" {DIM}[{label}]{RESET}"
        return prefix + " "

    def _write_stream_prefix(self, level: LogLevel) -> str:
        time_text = self._get_time_text()
        label = self.label
        scope = f"{label}/{level.value}" if label else level.value
        return f"[{time_text}] [{scope}]: "

    @staticmethod
    def prefix_lines(text: str, prefix: str) -> str:
        """给每一行添加前缀，并把上一行最后出现的 ANSI 序列延续到下一行开头

        只有在上一行找到新的 ANSI 序列时才更新延续值，
        否则沿用更早的值。
        """
        lines = text.split("\n")
        result = []
        last_escape = ""

        for index, line in enumerate(lines):
            if index > 0:
                escapes = ANSI_PATTERN.findall(lines[index - 1])
                if escapes:
                    last_escape = escapes[-1]
                line = last_escape + line
            result.append(prefix + line)

        return "\n".join(result)

    def format_console_log(self, request: FormatRequest) -> str:
        level = LogLevel.parse(request.level)
        text = self.stringify(*request.messages)
        if self.disabled:
            return text
        return self.prefix_lines(text, self._console_prefix(level))

    def format_write_stream_log(self, request: FormatRequest) -> str:
        level = LogLevel.parse(request.level)
        text = self.stringify(*request.messages)
        if self.disabled:
            return strip_ansi(text)
        return strip_ansi(self.prefix_lines(text, self._write_stream_prefix(level)))

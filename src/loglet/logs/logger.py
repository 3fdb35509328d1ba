# -*- coding: utf-8 -*-
"""
Logger

按级别输出日志：
- 控制台：FATAL/ERROR -> error，WARN -> warn，INFO -> info，DEBUG 仅在调试会话中输出
- 文件：写入已打开的日志文件写入流（纯文本，每条一行）
- 事件：每次调用触发与级别同名的事件，并沿 parent 链逐级向上传播

示例：
    logger = Logger(label="app")
    await logger.create_file_write_stream(
        WriteStreamOptions(path="./logs/latest.log", mode=FileWriteStreamMode.RENAME)
    )
    logger.on(LogLevel.ERROR, lambda event: alert(event.simple))
    logger.error("something failed", error)
    await logger.close_file_write_stream()
"""

import copy
import sys
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, TextIO, Tuple, Union

from .constants import LogLevel
from .errors import ConfigurationError
from .formatter import BaseFormatter, FormatRequest, Formatter
from .inspection import InspectOptions, is_debug_session
from .rotate import WriteStreamOptions, open_file_write_stream

Listener = Callable[["LogEvent"], Any]
LevelLike = Union[LogLevel, str]


@dataclass(frozen=True)
class LogEvent:
    """日志事件：格式化请求 + 控制台文本（pretty）+ 文件文本（simple）"""
    level: LogLevel
    messages: Tuple[Any, ...]
    pretty: str
    simple: str

    @property
    def request(self) -> FormatRequest:
        return FormatRequest(level=self.level, messages=self.messages)


@dataclass
class DebugMode:
    """DEBUG 级别输出策略

    Attributes:
        enabled: 是否处于调试状态；可为无参函数，每次 DEBUG 调用时重新求值；
            None 表示自动检测调试会话
        print_message: 调试状态下是否输出到控制台（None 视为 True）
        write_to_file: 调试状态下是否写入文件（None 视为 True）
    """
    enabled: Optional[Union[bool, Callable[[], bool]]] = None
    print_message: Optional[bool] = None
    write_to_file: Optional[bool] = None


class ConsoleSink:
    """控制台输出目标

    error/warn 写入 stderr，info/debug 写入 stdout。
    每次输出时读取 sys.stdout/sys.stderr，以便被重定向后仍然生效。
    """

    def __init__(self, stdout: Optional[TextIO] = None, stderr: Optional[TextIO] = None):
        self._stdout = stdout
        self._stderr = stderr

    @property
    def stdout(self) -> TextIO:
        return self._stdout if self._stdout is not None else sys.stdout

    @property
    def stderr(self) -> TextIO:
        return self._stderr if self._stderr is not None else sys.stderr

    def error(self, text: str) -> None:
        print(text, file=self.stderr)

    def warn(self, text: str) -> None:
        print(text, file=self.stderr)

    def info(self, text: str) -> None:
        print(text, file=self.stdout)

    def debug(self, text: str) -> None:
        print(text, file=self.stdout)


class Logger:
    """日志记录器

    Attributes:
        label: 标签，显示在级别之后
        debug_mode: DEBUG 级别输出策略
        inspect_options: 值检视选项
        parent: 父 Logger，仅用于事件传播
        formatter: 格式化器
        write_stream: 日志文件写入流，由本 Logger 负责关闭
        console: 控制台输出目标
    """

    def __init__(
        self,
        label: Optional[str] = None,
        debug_mode: Optional[DebugMode] = None,
        inspect_options: Optional[InspectOptions] = None,
        parent: Optional["Logger"] = None,
        formatter: Optional[BaseFormatter] = None,
        write_stream: Optional[TextIO] = None,
        console: Optional[ConsoleSink] = None,
    ):
        self.label = label
        self.debug_mode = debug_mode if debug_mode is not None else DebugMode()
        self.inspect_options = inspect_options
        self.parent = parent
        self.formatter = formatter if formatter is not None else Formatter()
        self.write_stream = write_stream
        self.console = console if console is not None else ConsoleSink()
        self._listeners: Dict[LogLevel, List[Listener]] = {level: [] for level in LogLevel}

        self.formatter.set_logger(self)

    def __repr__(self) -> str:
        return f"Logger(label={self.label!r}, parent={self.parent!r})"

    # ------------------------------------------------------------------
    # 状态
    # ------------------------------------------------------------------

    @property
    def is_debugging(self) -> bool:
        """当前是否处于调试状态（每次访问重新计算）"""
        enabled = self.debug_mode.enabled
        if callable(enabled):
            enabled = enabled()
        if enabled is None:
            return is_debug_session()
        return bool(enabled)

    @property
    def is_write_stream_closed(self) -> bool:
        return self.write_stream is None or self.write_stream.closed

    # ------------------------------------------------------------------
    # 级别方法
    # ------------------------------------------------------------------

    def fatal(self, *messages: Any) -> None:
        self.print(LogLevel.FATAL, *messages)

    def error(self, *messages: Any) -> None:
        self.print(LogLevel.ERROR, *messages)

    def warn(self, *messages: Any) -> None:
        self.print(LogLevel.WARN, *messages)

    def info(self, *messages: Any) -> None:
        self.print(LogLevel.INFO, *messages)

    def debug(self, *messages: Any) -> None:
        self.print(LogLevel.DEBUG, *messages)

    def log(self, *messages: Any) -> None:
        """info 的别名"""
        self.info(*messages)

    def print(self, level: LevelLike, *messages: Any) -> None:
        """格式化、触发事件并按级别路由到控制台与文件"""
        level = LogLevel.parse(level)
        request = FormatRequest(level=level, messages=messages)

        pretty = self.formatter.format_console_log(request)
        simple = self.formatter.format_write_stream_log(request)

        self.emit(level, LogEvent(level=level, messages=messages, pretty=pretty, simple=simple))

        write_to_file = True

        if level in (LogLevel.FATAL, LogLevel.ERROR):
            self.console.error(pretty)
        elif level == LogLevel.WARN:
            self.console.warn(pretty)
        elif level == LogLevel.INFO:
            self.console.info(pretty)
        elif level == LogLevel.DEBUG:
            if not self.is_debugging:
                return
            if self.debug_mode.print_message is not False:
                self.console.debug(pretty)
            write_to_file = self.debug_mode.write_to_file is not False

        if write_to_file and not self.is_write_stream_closed:
            self.write_stream.write(f"{simple}\n")

    # ------------------------------------------------------------------
    # 事件
    # ------------------------------------------------------------------

    def on(self, level: LevelLike, listener: Listener) -> "Logger":
        """注册事件监听器"""
        self._listeners[LogLevel.parse(level)].append(listener)
        return self

    def once(self, level: LevelLike, listener: Listener) -> "Logger":
        """注册只触发一次的事件监听器"""
        def _wrapper(event: LogEvent) -> Any:
            self.off(level, _wrapper)
            return listener(event)

        _wrapper.listener = listener
        return self.on(level, _wrapper)

    def off(self, level: LevelLike, listener: Listener) -> "Logger":
        """移除事件监听器（对 once 注册的监听器同样有效）"""
        listeners = self._listeners[LogLevel.parse(level)]
        for index, registered in enumerate(listeners):
            if registered is listener or getattr(registered, "listener", None) is listener:
                del listeners[index]
                break
        return self

    def listeners(self, level: LevelLike) -> List[Listener]:
        return list(self._listeners[LogLevel.parse(level)])

    def emit(self, level: LevelLike, event: LogEvent) -> bool:
        """依次调用本地监听器，再在 parent 上以相同事件递归触发

        Returns:
            bool: 本地是否有监听器被调用
        """
        level = LogLevel.parse(level)
        listeners = list(self._listeners[level])
        for listener in listeners:
            listener(event)

        if self.parent is not None:
            self.parent.emit(level, event)
        return bool(listeners)

    # ------------------------------------------------------------------
    # 文件写入流
    # ------------------------------------------------------------------

    async def create_file_write_stream(self, options: WriteStreamOptions) -> "Logger":
        """创建并持有日志文件写入流

        Raises:
            ConfigurationError: 写入流已打开
        """
        if not self.is_write_stream_closed:
            raise ConfigurationError("Write stream already created")

        self.write_stream = await self.open_file_write_stream(options)
        return self

    async def close_file_write_stream(self) -> "Logger":
        """关闭日志文件写入流，已关闭时不做任何事"""
        if not self.is_write_stream_closed:
            self.write_stream.close()
        return self

    @staticmethod
    async def open_file_write_stream(options: WriteStreamOptions) -> TextIO:
        """创建日志文件写入流（不绑定到任何 Logger）"""
        return await open_file_write_stream(options)

    # ------------------------------------------------------------------
    # 复制
    # ------------------------------------------------------------------

    def to_dict(self) -> Dict[str, Any]:
        """当前配置（构造参数形式）"""
        return {
            "label": self.label,
            "debug_mode": self.debug_mode,
            "inspect_options": self.inspect_options,
            "parent": self.parent,
            "formatter": self.formatter,
            "write_stream": self.write_stream,
            "console": self.console,
        }

    def clone(
        self,
        overrides: Optional[Dict[str, Any]] = None,
        inherit_parent: bool = True,
        **kwargs: Any,
    ) -> "Logger":
        """复制当前配置创建新的 Logger

        Args:
            overrides: 覆盖的配置项
            inherit_parent: True 时沿用当前 parent，否则以当前 Logger 作为 parent
                （格式化器会被浅拷贝，写入流与当前 Logger 共享）
            **kwargs: 同 overrides，优先级更高

        Returns:
            Logger: 新的 Logger
        """
        options = self.to_dict()
        options["parent"] = self.parent if inherit_parent else self
        options["formatter"] = copy.copy(self.formatter)
        options.update(overrides or {})
        options.update(kwargs)
        return Logger(**options)

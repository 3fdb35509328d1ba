# -*- coding: utf-8 -*-
"""
日志文件写入流与启动轮转

在打开日志文件写入流之前，根据模式处理已存在的旧文件：
- APPEND: 不轮转，直接追加
- TRUNCATE: 用初始内容覆盖旧文件
- RENAME: 轮转旧文件（默认 gzip 压缩归档，或自定义回调），再写入初始内容

初始内容默认为日期头行 ``[<ISO-8601>]``，之后轮转时据此推断文件创建时间。
"""

import inspect
import logging
import os
import stat
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Optional, TextIO, Union

from loglet.os.file import make_dir_all, stat_or_none, write_file

from .constants import DEFAULT_ENCODING, FileWriteStreamMode
from .errors import ConfigurationError, IncompatibleTargetError
from .utils import COMPRESSORS, run_blocking, log_date_header

logger = logging.getLogger(__name__)

RenameCallback = Callable[[str, os.stat_result], Any]
InitialData = Union[str, Callable[[str], Union[str, Awaitable[str]]]]


@dataclass(frozen=True)
class UseDefaultCompression:
    """默认轮转策略：压缩旧文件并重命名为带日期的归档

    Attributes:
        algorithm: 压缩算法（gzip 或 brotli）
    """
    algorithm: str = "gzip"

    def __post_init__(self):
        if self.algorithm not in COMPRESSORS:
            raise ConfigurationError(
                f"unknown compression algorithm: {self.algorithm!r}, "
                f"expected one of {sorted(COMPRESSORS)}"
            )


@dataclass(frozen=True)
class UseCustomHook:
    """自定义轮转策略：以 (绝对路径, stat) 调用回调，可返回 awaitable"""
    callback: RenameCallback


RenameStrategy = Union[UseDefaultCompression, UseCustomHook]


@dataclass
class WriteStreamOptions:
    """日志文件写入流配置

    Attributes:
        path: 日志文件路径
        mode: 打开/轮转模式
        rename_file: 轮转策略；传入可调用对象等价于 UseCustomHook，None 使用默认压缩
        initial_data: 新文件初始内容，字符串或 ``(path) -> str`` 函数（可为协程函数），
            None 表示使用日期头行
    """
    path: str
    mode: FileWriteStreamMode = FileWriteStreamMode.APPEND
    rename_file: Optional[Union[RenameStrategy, RenameCallback]] = None
    initial_data: Optional[InitialData] = None
    strategy: RenameStrategy = field(init=False, repr=False)

    def __post_init__(self):
        self.mode = FileWriteStreamMode.parse(self.mode)

        if self.rename_file is None:
            self.strategy = UseDefaultCompression()
        elif isinstance(self.rename_file, (UseDefaultCompression, UseCustomHook)):
            self.strategy = self.rename_file
        elif callable(self.rename_file):
            self.strategy = UseCustomHook(self.rename_file)
        else:
            raise ConfigurationError(
                f"rename_file must be a rename strategy or callable, got {type(self.rename_file).__name__}"
            )


async def _maybe_await(value):
    if inspect.isawaitable(value):
        return await value
    return value


async def _resolve_initial_data(initial_data: Optional[InitialData], file: str) -> str:
    if initial_data is None:
        return ""
    if callable(initial_data):
        initial_data = await _maybe_await(initial_data(file))
    return initial_data or ""


async def rotate_file(file: str, file_stat: os.stat_result, strategy: RenameStrategy) -> None:
    """按轮转策略处理已存在的日志文件"""
    if isinstance(strategy, UseCustomHook):
        await _maybe_await(strategy.callback(file, file_stat))
        return

    compress = COMPRESSORS[strategy.algorithm]
    await compress(file, file_stat)


def _open_stream(file: str, mode: FileWriteStreamMode) -> TextIO:
    flags = "a" if mode == FileWriteStreamMode.APPEND else "w"
    return open(file, flags, encoding=DEFAULT_ENCODING, buffering=1)


async def open_file_write_stream(options: WriteStreamOptions) -> TextIO:
    """创建日志文件写入流

    Args:
        options: 写入流配置

    Returns:
        TextIO: 已打开的文本文件对象（行缓冲）

    Raises:
        IncompatibleTargetError: 目标路径存在但不是普通文件
        OSError: 文件系统错误，原样抛出
    """
    initial_data = options.initial_data
    if initial_data is None:
        initial_data = log_date_header()

    file = os.path.abspath(options.path)
    file_stat = await run_blocking(stat_or_none, file)

    if file_stat is not None and not stat.S_ISREG(file_stat.st_mode):
        raise IncompatibleTargetError(file)

    content = await _resolve_initial_data(initial_data, file) + "\n"

    await run_blocking(make_dir_all, os.path.dirname(file))

    if options.mode == FileWriteStreamMode.TRUNCATE:
        if file_stat is not None:
            await run_blocking(write_file, file, content, DEFAULT_ENCODING)
    elif options.mode == FileWriteStreamMode.RENAME:
        if file_stat is not None:
            await rotate_file(file, file_stat, options.strategy)
            if await run_blocking(stat_or_none, file) is None:
                await run_blocking(write_file, file, content, DEFAULT_ENCODING)

    stream = await run_blocking(_open_stream, file, options.mode)

    size = (await run_blocking(os.stat, file)).st_size
    if initial_data and size == 0:
        stream.write(content)

    logger.debug(f"Opened log file write stream: {file} (mode={options.mode.value})")
    return stream

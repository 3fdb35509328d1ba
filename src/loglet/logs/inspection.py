# -*- coding: utf-8 -*-
"""
值检视（inspection）工具

把任意 Python 值转换为可读字符串，支持：
- 基于 pprint 的容器格式化（深度、宽度、紧凑模式）
- 按类型着色（数字/布尔黄色、None 加粗、字符串绿色）
- 异常对象输出完整堆栈
- 颜色支持检测、调试会话检测、ANSI 控制序列清除
"""

import bdb
import os
import pprint
import re
import sys
import traceback
from dataclasses import dataclass
from typing import Any, Optional

from .constants import BOLD, FG_GREEN, FG_YELLOW, RESET

# CSI（含 SGR）、OSC（以 BEL 或 ST 结束）以及单字符 ESC 序列
ANSI_PATTERN = re.compile(
    r"(?:\x1b\][^\x07\x1b]*(?:\x07|\x1b\\))"
    r"|(?:[\x1b\x9b][\[\]()#;?]*(?:\d{1,4}(?:[;:]\d{0,4})*)?[\dA-PR-TZcf-nq-uy=><~])"
)

_TOKEN_PATTERN = re.compile(
    r"(?P<string>'(?:[^'\\\n]|\\.)*'|\"(?:[^\"\\\n]|\\.)*\")"
    r"|(?P<keyword>\b(?:True|False)\b)"
    r"|(?P<none>\bNone\b)"
    r"|(?P<number>(?<![\w.])-?\d+(?:\.\d+)?(?:[eE][-+]?\d+)?j?\b)"
)

_TOKEN_COLORS = {
    "string": FG_GREEN,
    "keyword": FG_YELLOW,
    "none": BOLD,
    "number": FG_YELLOW,
}


@dataclass
class InspectOptions:
    """值检视选项

    Attributes:
        colors: 是否着色，None 表示按终端颜色支持自动判断
        depth: 容器最大展开深度，None 表示不限制
        width: 单行最大宽度
        compact: 是否使用紧凑格式
        sort_dicts: 是否对字典键排序
    """
    colors: Optional[bool] = None
    depth: Optional[int] = None
    width: int = 80
    compact: bool = False
    sort_dicts: bool = False


def supports_color(stream=None) -> bool:
    """检测当前环境是否支持彩色输出

    规则：
    - NO_COLOR 已设置，或 TERM=dumb：不支持
    - FORCE_COLOR 已设置且不为 "0"：支持
    - 否则取决于输出流是否为终端
    """
    env = os.environ
    if "NO_COLOR" in env or env.get("TERM") == "dumb":
        return False
    force = env.get("FORCE_COLOR")
    if force is not None:
        return force != "0"
    stream = stream if stream is not None else sys.stdout
    return hasattr(stream, "isatty") and stream.isatty()


def is_debug_session() -> bool:
    """检测进程是否处于调试会话中

    满足任一条件即认为在调试：
    - 已加载 pydevd / debugpy（IDE 调试器）
    - 当前 trace 函数属于 bdb.Bdb 实例（pdb 等）

    覆盖率统计、性能分析器安装的 trace 函数不算调试会话。
    """
    if "pydevd" in sys.modules or "debugpy" in sys.modules:
        return True
    trace = sys.gettrace()
    return isinstance(getattr(trace, "__self__", None), bdb.Bdb)


def strip_ansi(text: str) -> str:
    """清除文本中的全部 ANSI/VT 控制序列"""
    return ANSI_PATTERN.sub("", text)


def _colorize_tokens(text: str) -> str:
    def _replace(match):
        kind = match.lastgroup
        return f"{_TOKEN_COLORS[kind]}{match.group(0)}{RESET}"

    return _TOKEN_PATTERN.sub(_replace, text)


def format_exception(error: BaseException) -> str:
    """格式化异常：有 traceback 时输出完整堆栈，否则输出 ``Type: message``"""
    if error.__traceback__ is not None:
        lines = traceback.format_exception(type(error), error, error.__traceback__)
        return "".join(lines).rstrip("\n")
    message = str(error)
    name = type(error).__name__
    return f"{name}: {message}" if message else name


def inspect_value(value: Any, options: Optional[InspectOptions] = None) -> str:
    """把单个值转换为字符串

    顶层字符串原样输出；异常输出堆栈；其余值交给 pprint。
    检视过程中的异常（例如 __repr__ 抛错）不做捕获。

    Args:
        value: 任意值
        options: 检视选项

    Returns:
        str: 可读字符串
    """
    if isinstance(value, str):
        return value

    if options is None:
        options = InspectOptions()

    if isinstance(value, BaseException):
        return format_exception(value)

    text = pprint.pformat(
        value,
        depth=options.depth,
        width=options.width,
        compact=options.compact,
        sort_dicts=options.sort_dicts,
    )

    colors = options.colors if options.colors is not None else supports_color()
    if colors:
        text = _colorize_tokens(text)
    return text


def stringify(*values: Any, options: Optional[InspectOptions] = None) -> str:
    """把多个值逐个检视后以空格拼接"""
    return " ".join(inspect_value(value, options) for value in values)

#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
pytest 配置文件

提供测试夹具和配置
"""

import io
import sys
from datetime import datetime
from pathlib import Path

import pytest

# 将 src 目录添加到 Python 路径
ROOT_DIR = Path(__file__).parent.parent
SRC_DIR = ROOT_DIR / "src"
sys.path.insert(0, str(SRC_DIR))

from loglet.logs import ConsoleSink, DebugMode, Formatter, Logger  # noqa: E402

# 固定时钟：23:05:09
FIXED_NOW = datetime(2024, 3, 15, 23, 5, 9)


@pytest.fixture(scope="session")
def project_root() -> Path:
    """项目根目录"""
    return ROOT_DIR


@pytest.fixture(scope="function")
def temp_dir(tmp_path: Path) -> Path:
    """临时目录（每个测试函数独立）"""
    return tmp_path


@pytest.fixture
def no_color(monkeypatch):
    """关闭颜色输出"""
    monkeypatch.delenv("FORCE_COLOR", raising=False)
    monkeypatch.setenv("NO_COLOR", "1")


@pytest.fixture
def force_color(monkeypatch):
    """强制开启颜色输出"""
    monkeypatch.delenv("NO_COLOR", raising=False)
    monkeypatch.setenv("TERM", "xterm-256color")
    monkeypatch.setenv("FORCE_COLOR", "1")


@pytest.fixture
def stdout() -> io.StringIO:
    return io.StringIO()


@pytest.fixture
def stderr() -> io.StringIO:
    return io.StringIO()


@pytest.fixture
def console(stdout, stderr) -> ConsoleSink:
    """输出到内存的控制台"""
    return ConsoleSink(stdout=stdout, stderr=stderr)


@pytest.fixture
def make_logger(console):
    """创建使用固定时钟与内存控制台的 Logger，DEBUG 默认关闭"""

    def _make(**kwargs) -> Logger:
        kwargs.setdefault("formatter", Formatter(clock=lambda: FIXED_NOW))
        kwargs.setdefault("console", console)
        kwargs.setdefault("debug_mode", DebugMode(enabled=False))
        return Logger(**kwargs)

    return _make

# -*- coding: utf-8 -*-
"""
日志库异常定义

文件系统错误（OSError 及其子类）不做包装，直接抛给调用方。
"""


class LogletError(Exception):
    """loglet 异常基类"""

    pass


class ConfigurationError(LogletError):
    """配置错误，例如在写入流已打开时再次创建"""

    pass


class IncompatibleTargetError(LogletError):
    """轮转目标路径存在但不是普通文件"""

    def __init__(self, path: str, message: str = ""):
        self.path = path
        super().__init__(message or f"Write stream path is not a file: {path}")

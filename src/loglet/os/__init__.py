# Copyright 2024 The loglet Authors.
# Licensed under the MIT License.

"""
OS 相关工具模块

包含：
- 文件读写、目录创建、stat 辅助函数
"""

from loglet.os.file import (
    make_dir_all,
    read_bytes,
    read_file,
    rename_file,
    stat_or_none,
    write_bytes,
    write_file,
)

__all__ = [
    "make_dir_all",
    "read_bytes",
    "read_file",
    "rename_file",
    "stat_or_none",
    "write_bytes",
    "write_file",
]

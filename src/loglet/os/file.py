#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""File operation utilities."""

import os
from pathlib import Path
from typing import Optional, Union

PathLike = Union[str, Path]


def make_dir_all(name: PathLike) -> None:
    """Create directory and all parent directories.

    Args:
        name: Directory path to create.
    """
    os.makedirs(name, mode=0o755, exist_ok=True)


def stat_or_none(path: PathLike) -> Optional[os.stat_result]:
    """Stat a path, returning None if nothing exists there.

    Other errors (permission, I/O) propagate.
    """
    try:
        return os.stat(path)
    except FileNotFoundError:
        return None


def read_file(path: PathLike, encoding: str = "utf-8", errors: str = "strict") -> str:
    """Read entire file content as string.

    Args:
        path: Path to file.
        encoding: File encoding.
        errors: How undecodable bytes are handled, as for ``open``.

    Returns:
        File content as string.
    """
    with open(path, "r", encoding=encoding, errors=errors, newline="") as f:
        return f.read()


def read_bytes(path: PathLike) -> bytes:
    with open(path, "rb") as f:
        return f.read()


def write_file(
    path: PathLike,
    content: str,
    encoding: str = "utf-8",
) -> None:
    """Write string content to file, replacing what was there.

    Args:
        path: Path to file.
        content: Content to write.
        encoding: File encoding.
    """
    with open(path, "w", encoding=encoding, newline="") as f:
        f.write(content)


def write_bytes(path: PathLike, data: bytes) -> None:
    with open(path, "wb") as f:
        f.write(data)


def rename_file(src: PathLike, dst: PathLike) -> None:
    """Rename src to dst, replacing dst if it exists."""
    os.replace(src, dst)

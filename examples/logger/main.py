#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Logger 示例

演示：
- 启动时压缩归档旧日志文件（brotli）
- 标签、DEBUG 输出策略
- 子 Logger 的事件向上传播
"""

import asyncio

from loglet import logger
from loglet.logs import (
    DebugMode,
    FileWriteStreamMode,
    LogLevel,
    UseDefaultCompression,
    WriteStreamOptions,
)


async def main():
    await logger.create_file_write_stream(
        WriteStreamOptions(
            path="./logs/latest.log",
            mode=FileWriteStreamMode.RENAME,
            rename_file=UseDefaultCompression("brotli"),
        )
    )

    logger.label = "Example"
    logger.debug_mode = DebugMode(print_message=True)

    logger.on(LogLevel.ERROR, lambda event: print(f"observed: {event.simple}"))

    try:
        raise RuntimeError("Hello world!")
    except RuntimeError as e:
        logger.fatal(e)

    logger.error("Hello world!")
    logger.warn("Hello world!")
    logger.debug("Hello world!")
    logger.info("Hello world!", {"answer": 42, "ok": True, "nothing": None})

    child = logger.clone(label="Example/child", inherit_parent=False)
    child.error("Hello from child!")

    await logger.close_file_write_stream()


if __name__ == "__main__":
    asyncio.run(main())

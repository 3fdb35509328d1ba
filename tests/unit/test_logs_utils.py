# -*- coding: utf-8 -*-
"""日志文件工具（utils）模块的单元测试

运行测试命令:
    pytest tests/unit/test_logs_utils.py -v
"""

import gzip
import os
from datetime import datetime, timedelta, timezone

import pytest

from loglet.logs import (
    format_date_file_name,
    get_file_creation_date,
    gzip_compress_log,
    log_date_header,
)
from loglet.logs.utils import parse_date_header


class TestFormatDateFileName:
    """测试归档文件名"""

    def test_midnight(self):
        assert format_date_file_name(datetime(2024, 1, 1)) == "2024-01-01-0-0-0-0"

    def test_not_zero_padded(self):
        date = datetime(2024, 3, 5, 7, 8, 9, 123456)
        assert format_date_file_name(date) == "2024-03-05-7-8-9-123"

    def test_aware_datetime_uses_own_fields(self):
        date = datetime(2024, 12, 31, 23, 59, 59, 999000, tzinfo=timezone.utc)
        assert format_date_file_name(date) == "2024-12-31-23-59-59-999"


class TestLogDateHeader:
    """测试日期头行"""

    def test_utc(self):
        date = datetime(2024, 1, 1, tzinfo=timezone.utc)
        assert log_date_header(date) == "[2024-01-01T00:00:00.000Z]"

    def test_converted_to_utc(self):
        date = datetime(2024, 1, 1, 8, 30, 0, 250000, tzinfo=timezone(timedelta(hours=8)))
        assert log_date_header(date) == "[2024-01-01T00:30:00.250Z]"

    def test_round_trip(self):
        date = datetime(2023, 6, 7, 1, 2, 3, 456000, tzinfo=timezone.utc)
        assert parse_date_header(log_date_header(date)) == date

    def test_default_is_now(self):
        before = datetime.now(timezone.utc) - timedelta(seconds=1)
        parsed = parse_date_header(log_date_header())
        assert before <= parsed <= datetime.now(timezone.utc)


class TestParseDateHeader:
    """测试头行解析"""

    @pytest.mark.parametrize(
        "header",
        ["", "2024-01-01T00:00:00.000Z", "[not a date]", "[2024-01-01T00:00:00.000Z", "[]"],
    )
    def test_invalid(self, header):
        assert parse_date_header(header) is None

    def test_surrounding_whitespace(self):
        parsed = parse_date_header("  [2024-01-01T00:00:00.000Z]  \r")
        assert parsed == datetime(2024, 1, 1, tzinfo=timezone.utc)


class TestGetFileCreationDate:
    """测试创建时间推断"""

    @pytest.mark.asyncio
    async def test_from_header(self, temp_dir):
        path = temp_dir / "latest.log"
        path.write_text("[2024-01-01T00:00:00.000Z]\nbody\n", encoding="utf-8")

        created_at = await get_file_creation_date(str(path))
        assert created_at == datetime(2024, 1, 1, tzinfo=timezone.utc)

    @pytest.mark.asyncio
    async def test_from_given_lines(self, temp_dir):
        path = temp_dir / "latest.log"
        path.write_text("ignored\n", encoding="utf-8")

        created_at = await get_file_creation_date(
            str(path), stat=os.stat(path), lines=["[2020-05-06T07:08:09.010Z]"]
        )
        assert created_at == datetime(2020, 5, 6, 7, 8, 9, 10000, tzinfo=timezone.utc)

    @pytest.mark.asyncio
    async def test_invalid_utf8_body(self, temp_dir):
        path = temp_dir / "latest.log"
        path.write_bytes(b"[2024-01-01T00:00:00.000Z]\n\xff\xfe caf\xc3")

        created_at = await get_file_creation_date(str(path))
        assert created_at == datetime(2024, 1, 1, tzinfo=timezone.utc)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("content", ["no header\n", "[garbage]\n", ""])
    async def test_falls_back_to_filesystem(self, temp_dir, content):
        path = temp_dir / "latest.log"
        path.write_text(content, encoding="utf-8")
        stat = os.stat(path)

        created_at = await get_file_creation_date(str(path))

        expected = getattr(stat, "st_birthtime", None) or stat.st_ctime
        assert created_at == datetime.fromtimestamp(expected)


class TestCompressLog:
    """测试压缩归档"""

    @pytest.mark.asyncio
    async def test_gzip_returns_archive_path(self, temp_dir):
        path = temp_dir / "server.log"
        content = "[2024-02-03T04:05:06.007Z]\nline\n"
        path.write_text(content, encoding="utf-8")

        archive = await gzip_compress_log(str(path), os.stat(path))

        assert archive == str(temp_dir / "2024-02-03-4-5-6-7.log.gz")
        assert not path.exists()
        with gzip.open(archive, "rt", encoding="utf-8") as f:
            assert f.read() == content

    @pytest.mark.asyncio
    async def test_archive_keeps_raw_bytes(self, temp_dir):
        path = temp_dir / "server.log"
        raw = b"[2024-02-03T04:05:06.007Z]\r\nline caf\xc3"
        path.write_bytes(raw)

        archive = await gzip_compress_log(str(path))

        with gzip.open(archive, "rb") as f:
            assert f.read() == raw

    @pytest.mark.asyncio
    async def test_without_extension(self, temp_dir):
        path = temp_dir / "server"
        path.write_text("[2024-02-03T04:05:06.007Z]\n", encoding="utf-8")

        archive = await gzip_compress_log(str(path))

        assert os.path.basename(archive) == "2024-02-03-4-5-6-7.gz"

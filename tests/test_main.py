"""
Tests for command-line handling and startup enumeration.
"""

import asyncio
import logging
from pathlib import Path

import pytest

from tinyhttp.main import create_file_manager, main, parse_args


class TestMain:
    def test_directory_defaults_to_none(self):
        assert parse_args([]).directory is None

    def test_directory_option(self, tmp_path: Path):
        assert parse_args(["--directory", str(tmp_path)]).directory == str(tmp_path)

    def test_unknown_flag_is_rejected(self):
        with pytest.raises(SystemExit):
            parse_args(["--port", "80"])

    def test_no_directory_means_no_files(self, logger: logging.Logger):
        manager = create_file_manager(None, logger)

        assert manager.files == ()

    def test_directory_is_enumerated(self, serving_dir: Path, logger: logging.Logger):
        manager = create_file_manager(str(serving_dir), logger)

        assert [path.name for path in manager.files] == ["hello.txt"]
        assert manager.base_dir == serving_dir.resolve()

    def test_invalid_directory_exits_with_error(
        self, tmp_path: Path, caplog: pytest.LogCaptureFixture
    ):
        missing = tmp_path / "missing"

        with caplog.at_level(logging.ERROR), pytest.raises(SystemExit) as exc_info:
            asyncio.run(main(["--directory", str(missing)]))

        assert exc_info.value.code == 1
        assert "Base directory does not exist" in caplog.text

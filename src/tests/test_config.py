"""Unit tests for application configuration."""

from pathlib import Path
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from flatwiki.config import Settings


class TestSettings:
    def test_defaults(self):
        with patch.dict("os.environ", {}, clear=True):
            s = Settings(_env_file=None)
            assert s.data_dir == Path("data")
            assert s.create_data_dir is True
            assert s.debug is False
            assert s.app_title == "FlatWiki"
            assert s.host == "127.0.0.1"
            assert s.port == 8080
            assert s.log_level == "INFO"

    def test_from_env(self):
        env = {
            "FLATWIKI_DATA_DIR": "/tmp/wiki",
            "FLATWIKI_DEBUG": "true",
            "FLATWIKI_APP_TITLE": "MyWiki",
            "FLATWIKI_PORT": "9000",
            "FLATWIKI_CREATE_DATA_DIR": "false",
        }
        with patch.dict("os.environ", env, clear=True):
            s = Settings(_env_file=None)
            assert s.data_dir == Path("/tmp/wiki")
            assert s.debug is True
            assert s.app_title == "MyWiki"
            assert s.port == 9000
            assert s.create_data_dir is False

    def test_debug_false_values(self):
        with patch.dict("os.environ", {"FLATWIKI_DEBUG": "false"}, clear=True):
            s = Settings(_env_file=None)
            assert s.debug is False

    def test_settings_are_immutable(self):
        s = Settings(_env_file=None)
        with pytest.raises(ValidationError):
            s.data_dir = Path("elsewhere")

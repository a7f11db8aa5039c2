"""
Unit tests for Config.
"""

import pytest
import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent.parent / "src"))

from class_manager.utils.config import Config


ENV_VARS = [
    "CLASS_MANAGER_DATA_DIR",
    "CLASS_MANAGER_OUTPUT_DIR",
    "CLASS_MANAGER_RECENT_FEES",
    "LOG_LEVEL",
    "LOG_FILE",
]


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    """Run with no config variables set and no .env file in reach."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr("class_manager.utils.config.load_dotenv", lambda: False)
    return monkeypatch


class TestConfig:
    """Test cases for Config."""

    def test_defaults(self, clean_env):
        """Test default values."""
        config = Config()

        assert config.data_dir == Path("data")
        assert config.output_dir == Path("output")
        assert config.recent_fees == 5
        assert config.log_level == "INFO"
        assert config.log_file is None
        assert config.validate()

    def test_environment_overrides(self, clean_env, tmp_path):
        """Test values come from the environment."""
        clean_env.setenv("CLASS_MANAGER_DATA_DIR", str(tmp_path / "store"))
        clean_env.setenv("CLASS_MANAGER_RECENT_FEES", "8")
        clean_env.setenv("LOG_LEVEL", "debug")
        clean_env.setenv("LOG_FILE", "logs/app.log")

        config = Config()

        assert config.data_dir == tmp_path / "store"
        assert config.recent_fees == 8
        assert config.log_level == "DEBUG"
        assert config.log_file == "logs/app.log"

    def test_invalid_values_are_all_reported(self, clean_env):
        """Test validate() lists every problem."""
        clean_env.setenv("CLASS_MANAGER_RECENT_FEES", "many")
        clean_env.setenv("LOG_LEVEL", "LOUD")

        config = Config()

        with pytest.raises(ValueError) as exc_info:
            config.validate()

        message = str(exc_info.value)
        assert "CLASS_MANAGER_RECENT_FEES must be an integer" in message
        assert "LOG_LEVEL must be one of" in message

    def test_non_positive_recent_fees(self, clean_env):
        """Test zero recent fees is rejected."""
        clean_env.setenv("CLASS_MANAGER_RECENT_FEES", "0")

        with pytest.raises(ValueError, match="must be positive"):
            Config().validate()

    def test_data_dir_must_be_directory(self, clean_env, tmp_path):
        """Test a file in place of the data dir is rejected."""
        not_a_dir = tmp_path / "data.txt"
        not_a_dir.write_text("x", encoding="utf-8")
        clean_env.setenv("CLASS_MANAGER_DATA_DIR", str(not_a_dir))

        with pytest.raises(ValueError, match="not a directory"):
            Config().validate()

    def test_data_dir_check_can_be_skipped(self, clean_env, tmp_path):
        """Test the data dir check is skipped when storage comes from elsewhere."""
        not_a_dir = tmp_path / "data.txt"
        not_a_dir.write_text("x", encoding="utf-8")
        clean_env.setenv("CLASS_MANAGER_DATA_DIR", str(not_a_dir))

        assert Config().validate(check_data_dir=False) is True


if __name__ == "__main__":
    pytest.main([__file__, "-v"])

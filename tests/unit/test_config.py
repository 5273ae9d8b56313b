"""
Unit tests for configuration system.

Tests:
- Config loading and initialization
- Path configuration
- Config validation
- Logging setup
"""

import io

from loguru import logger

from pathforge.config import Config, PathConfig, config
from pathforge.utils.log_setup import configure_logging


class TestConfig:
    """Test suite for Config class."""

    def test_config_singleton(self):
        """Test that Config implements singleton pattern."""
        config1 = Config()
        config2 = Config()
        assert config1 is config2, "Config should be a singleton"
        assert config1 is config

    def test_config_initialization(self):
        """Test that config initializes with expected values."""
        assert config.assessment.min_questions == 5
        assert config.assessment.passing_score == 80.0
        assert config.assessment.max_attempts == 3
        assert config.adaptive.remediation_score == 0.6
        assert config.adaptive.hint_time_factor == 1.5
        assert config.adaptive.engagement_step == 0.1

    def test_paths_configured(self):
        """Test that all required paths are configured."""
        assert config.paths.store_file.name == "learning_store.json"
        assert config.paths.store_file.parent == config.paths.data_dir
        assert config.paths.profile_schema.exists()
        assert config.paths.path_schema.exists()

    def test_data_dir_from_environment(self, monkeypatch, tmp_path):
        monkeypatch.setenv("PATHFORGE_DATA_DIR", str(tmp_path / "store"))
        paths = PathConfig()
        assert paths.data_dir == tmp_path / "store"
        assert not paths.data_dir.exists()

        paths.prepare_filesystem()
        assert paths.data_dir.is_dir()

    def test_config_validation_with_valid_config(self):
        """Test that the shipped defaults pass validation."""
        assert config.validate() == []

    def test_config_validation_catches_errors(self):
        """Test that validation catches configuration errors."""
        original_score = config.adaptive.review_score
        original_questions = config.assessment.min_questions

        config.adaptive.review_score = 1.5
        config.assessment.min_questions = 0
        try:
            errors = config.validate()
        finally:
            config.adaptive.review_score = original_score
            config.assessment.min_questions = original_questions

        assert any("review_score" in e for e in errors)
        assert any("min_questions" in e for e in errors)


class TestLogging:
    def test_configure_logging_installs_single_sink(self):
        stream = io.StringIO()
        handler_id = configure_logging(level="WARNING", sink=stream)
        try:
            logger.info("hidden message")
            logger.warning("visible message")
        finally:
            logger.remove(handler_id)

        output = stream.getvalue()
        assert "visible message" in output
        assert "hidden message" not in output

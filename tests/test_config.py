"""
Unit tests for configuration module
"""
import os
from unittest.mock import patch

import pytest

from config import Config

class TestConfig:

    def test_config_initialization(self):
        """Test configuration initialization"""
        with patch.dict(os.environ, {}, clear=True):
            config = Config()

        # Test default values
        assert config.database.url == "sqlite:///./venue_planner.db"
        assert config.app.timeout_seconds == 30
        assert config.labor_defaults.attendees_per_tech == 50
        assert config.labor_defaults.minimum_techs == 1
        assert config.labor_defaults.audio_setup == 2.0
        assert config.labor_defaults.video_setup == 1.5
        assert config.labor_defaults.lighting_setup == 3.0
        assert config.labor_defaults.breakdown == 1.0
        assert config.assistant.max_function_calls == 5

    @patch.dict(os.environ, {
        'DATABASE_URL': 'sqlite:///:memory:',
        'DEFAULT_ATTENDEES_PER_TECH': '25',
        'DEFAULT_BREAKDOWN_HOURS': '0.5',
        'MAX_FUNCTION_CALLS': '3',
        'DEBUG': 'true'
    })
    def test_config_from_env(self):
        """Test configuration loading from environment variables"""
        config = Config()

        assert config.database.url == 'sqlite:///:memory:'
        assert config.labor_defaults.attendees_per_tech == 25
        assert config.labor_defaults.breakdown == 0.5
        assert config.assistant.max_function_calls == 3
        assert config.app.debug is True

    def test_config_validation_success(self):
        """Test successful configuration validation"""
        with patch.dict(os.environ, {}, clear=True):
            config = Config()
            assert config.validate() == True

    def test_invalid_attendees_per_tech(self):
        with patch.dict(os.environ, {'DEFAULT_ATTENDEES_PER_TECH': '0'}):
            config = Config()
            assert config.validate() == False

    def test_invalid_minimum_techs(self):
        with patch.dict(os.environ, {'DEFAULT_MINIMUM_TECHS': '0'}):
            config = Config()
            assert config.validate() == False

    def test_negative_setup_time(self):
        """Test negative default setup time"""
        with patch.dict(os.environ, {'DEFAULT_LIGHTING_SETUP_HOURS': '-1'}):
            config = Config()
            assert config.validate() == False

    def test_invalid_timeout(self):
        with patch.dict(os.environ, {'TIMEOUT_SECONDS': '0'}):
            config = Config()
            assert config.validate() == False

class TestRequireValidConfig:

    def test_invalid_defaults_refuse_to_start(self):
        from config import config
        from run import require_valid_config
        from utils.exceptions import ConfigurationException

        with patch.object(config.labor_defaults, 'attendees_per_tech', 0):
            with pytest.raises(ConfigurationException) as excinfo:
                require_valid_config()
        assert excinfo.value.error_code == "INVALID_CONFIG"

    def test_valid_config_passes(self):
        from run import require_valid_config
        require_valid_config()

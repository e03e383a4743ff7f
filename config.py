"""
Configuration management for Venue Planner
"""
import os
from typing import Optional
from dataclasses import dataclass
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

@dataclass
class DatabaseConfig:
    """Database configuration"""
    url: str = "sqlite:///./venue_planner.db"

@dataclass
class LoggingConfig:
    """Logging configuration"""
    level: str = "INFO"
    format: str = "json"
    log_file: Optional[str] = None

@dataclass
class AppConfig:
    """Main application configuration"""
    debug: bool = False
    timeout_seconds: int = 30
    host: str = "0.0.0.0"
    port: int = 8000

@dataclass
class LaborDefaultsConfig:
    """Fallback labor values used when a property has no matching rule"""
    attendees_per_tech: int = 50
    minimum_techs: int = 1
    audio_setup: float = 2.0
    video_setup: float = 1.5
    lighting_setup: float = 3.0
    breakdown: float = 1.0

@dataclass
class AssistantConfig:
    """Chat assistant function-calling configuration"""
    max_function_calls: int = 5

class Config:
    """Central configuration manager"""

    def __init__(self):
        self.database = DatabaseConfig(
            url=os.getenv('DATABASE_URL', 'sqlite:///./venue_planner.db')
        )

        self.logging = LoggingConfig(
            level=os.getenv('LOG_LEVEL', 'INFO'),
            format=os.getenv('LOG_FORMAT', 'json'),
            log_file=os.getenv('LOG_FILE')
        )

        self.app = AppConfig(
            debug=os.getenv('DEBUG', 'False').lower() == 'true',
            timeout_seconds=int(os.getenv('TIMEOUT_SECONDS', '30')),
            host=os.getenv('HOST', '0.0.0.0'),
            port=int(os.getenv('PORT', '8000'))
        )

        self.labor_defaults = LaborDefaultsConfig(
            attendees_per_tech=int(os.getenv('DEFAULT_ATTENDEES_PER_TECH', '50')),
            minimum_techs=int(os.getenv('DEFAULT_MINIMUM_TECHS', '1')),
            audio_setup=float(os.getenv('DEFAULT_AUDIO_SETUP_HOURS', '2')),
            video_setup=float(os.getenv('DEFAULT_VIDEO_SETUP_HOURS', '1.5')),
            lighting_setup=float(os.getenv('DEFAULT_LIGHTING_SETUP_HOURS', '3')),
            breakdown=float(os.getenv('DEFAULT_BREAKDOWN_HOURS', '1'))
        )

        self.assistant = AssistantConfig(
            max_function_calls=int(os.getenv('MAX_FUNCTION_CALLS', '5'))
        )

    def validate(self) -> bool:
        """Validate configuration"""
        defaults = self.labor_defaults
        if defaults.attendees_per_tech <= 0 or defaults.minimum_techs < 1:
            return False
        setup_hours = (defaults.audio_setup, defaults.video_setup, defaults.lighting_setup, defaults.breakdown)
        if any(hours < 0 for hours in setup_hours):
            return False
        if self.app.timeout_seconds <= 0:
            return False
        return True

# Global configuration instance
config = Config()

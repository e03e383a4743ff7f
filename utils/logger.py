"""
Structured logging system for Venue Planner

structlog events and plain stdlib records share one handler. Both are
rendered by structlog's ProcessorFormatter, as JSON or console lines
depending on LOG_FORMAT.
"""
import logging
import sys
from typing import Any, Dict, Optional

import structlog

from config import config

# added to every event, whether it came from structlog or from a stdlib logger
SHARED_PROCESSORS = [
    structlog.stdlib.add_logger_name,
    structlog.stdlib.add_log_level,
    structlog.processors.TimeStamper(fmt="iso", utc=True),
]

def build_formatter(use_json: bool) -> structlog.stdlib.ProcessorFormatter:
    renderer = structlog.processors.JSONRenderer() if use_json else structlog.dev.ConsoleRenderer()
    return structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=SHARED_PROCESSORS,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            structlog.processors.format_exc_info,
            renderer,
        ],
    )

def setup_logging() -> structlog.stdlib.BoundLogger:
    """Route structlog through the root logger and attach the configured handler"""
    if config.logging.log_file:
        handler = logging.FileHandler(config.logging.log_file)
    else:
        handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(build_formatter(config.logging.format.lower() == "json"))

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(config.logging.level.upper())

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *SHARED_PROCESSORS,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.StackInfoRenderer(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    return structlog.get_logger("venue_planner")

class ComponentLogger:
    """Logger bound to one engine component (checker, resolver, validator...)"""

    def __init__(self, component: str):
        self.logger = structlog.get_logger(component)
        self.component = component

    def info(self, message: str, **kwargs):
        self.logger.info(message, **kwargs)

    def error(self, message: str, **kwargs):
        self.logger.error(message, **kwargs)

    def warning(self, message: str, **kwargs):
        self.logger.warning(message, **kwargs)

    def debug(self, message: str, **kwargs):
        self.logger.debug(message, **kwargs)

    def log_check_start(self, check: str, property_id: int, context: Optional[Dict[str, Any]] = None):
        """Log the start of a check against a property"""
        self.logger.info(
            "Check started",
            component=self.component,
            check=check,
            property_id=property_id,
            context=context or {}
        )

    def log_check_complete(self, check: str, property_id: int, summary: Dict[str, Any], duration: float):
        """Log check completion with a small result summary"""
        self.logger.info(
            "Check completed",
            component=self.component,
            check=check,
            property_id=property_id,
            summary=summary,
            duration_ms=round(duration * 1000, 2)
        )

    def log_check_error(self, check: str, error: Exception, context: Optional[Dict[str, Any]] = None):
        """Log a failed check"""
        self.logger.error(
            "Check failed",
            component=self.component,
            check=check,
            error=str(error),
            error_type=type(error).__name__,
            context=context or {},
            exc_info=True
        )

    def log_rule_skipped(self, rule_type: str, reason: str, property_id: int):
        """Log a labor rule that could not be used"""
        self.logger.warning(
            "Labor rule skipped",
            component=self.component,
            rule_type=rule_type,
            reason=reason,
            property_id=property_id
        )

    def log_function_call(self, function_name: str, property_id: int, arguments: Dict[str, Any]):
        """Log a function call coming from the chat assistant"""
        self.logger.info(
            "Assistant function call",
            component=self.component,
            function=function_name,
            property_id=property_id,
            arguments=arguments
        )

# Global logger instance
logger = setup_logging()

def get_component_logger(component: str) -> ComponentLogger:
    """Get a specialized logger for an engine component"""
    return ComponentLogger(component)

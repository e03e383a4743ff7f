"""
Unit tests for structured logging setup
"""
import json
import logging

import structlog

from utils.logger import ComponentLogger, build_formatter, get_component_logger, setup_logging

def render(formatter, message="Inventory check"):
    record = logging.LogRecord("inventory_checker", logging.INFO, __file__, 1, message, None, None)
    return formatter.format(record)

class TestLoggingSetup:

    def test_root_handler_uses_processor_formatter(self):
        setup_logging()
        formatters = [handler.formatter for handler in logging.getLogger().handlers]
        assert any(isinstance(f, structlog.stdlib.ProcessorFormatter) for f in formatters)

    def test_json_rendering_of_stdlib_records(self):
        line = json.loads(render(build_formatter(use_json=True)))

        assert line["event"] == "Inventory check"
        assert line["level"] == "info"
        assert line["logger"] == "inventory_checker"
        assert "timestamp" in line

    def test_console_rendering(self):
        assert "Inventory check" in render(build_formatter(use_json=False))

class TestComponentLogger:

    def test_get_component_logger(self):
        component = get_component_logger("room_resolver")
        assert isinstance(component, ComponentLogger)
        assert component.component == "room_resolver"

    def test_helpers_log_without_error(self):
        component = get_component_logger("labor_calculator")
        component.log_check_start("labor", 1, {"lines": 2})
        component.log_check_complete("labor", 1, {"technicians": 3}, 0.012)
        component.log_rule_skipped("setup_time", "INVALID_JSON", 1)
        component.log_function_call("fetch_inventory", 1, {"category": "Audio"})
        try:
            raise ValueError("bad rule")
        except ValueError as e:
            component.log_check_error("labor", e, {"property_id": 1})

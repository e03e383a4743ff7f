"""
Unit tests for the labor rule evaluator
"""
from unittest.mock import patch

import pytest

from config import config
from tools.labor_calculator import calculate_labor, load_labor_rules, required_technicians, setup_hours_for
from models.labor_rules import SetupTimeRule
from utils.exceptions import ConfigurationException

RATIO_50 = ("technician_ratio", {"attendees_per_tech": 50, "minimum_techs": 1})
SETUP = ("setup_time", {"audio_setup": 2, "video_setup": 1, "lighting_setup": 4, "breakdown": 1.5})

class TestRequiredTechnicians:

    @pytest.mark.parametrize("attendees,per_tech,minimum,expected", [
        (120, 50, 1, 3),
        (100, 50, 1, 2),
        (0, 50, 1, 1),
        (10, 50, 2, 2),
        (101, 50, 2, 3),
    ])
    def test_ceiling_with_floor(self, attendees, per_tech, minimum, expected):
        assert required_technicians(attendees, per_tech, minimum) == expected

class TestSetupHours:

    def test_keyword_in_category(self):
        rule = SetupTimeRule(audio_setup=2.5)
        assert setup_hours_for("Pro Audio", rule) == 2.5

    def test_first_keyword_wins(self):
        rule = SetupTimeRule(audio_setup=2, video_setup=1)
        assert setup_hours_for("audio/video", rule) == 2

    def test_missing_field_uses_default(self):
        assert setup_hours_for("Lighting", SetupTimeRule(audio_setup=2)) == 3.0

    def test_explicit_zero_is_kept(self):
        assert setup_hours_for("Video", SetupTimeRule(video_setup=0)) == 0

    def test_unknown_category(self):
        assert setup_hours_for("Staging", None) == 0

class TestCalculateLabor:

    def test_technicians_from_ratio_rule(self, session, make_property):
        prop = make_property(rules=[RATIO_50])
        plan = calculate_labor(session, prop.id, [], attendees=120, event_duration=4)

        assert plan.required_technicians == 3
        assert plan.technician_ratio == {"attendees_per_tech": 50, "minimum_techs": 1}

    def test_default_ratio_when_rule_missing(self, session, make_property):
        prop = make_property()
        plan = calculate_labor(session, prop.id, [], attendees=10, event_duration=2)

        assert plan.required_technicians == 1
        assert any("No technician_ratio rule configured" in w for w in plan.warnings)

    def test_minimum_floor(self, session, make_property):
        prop = make_property(rules=[("technician_ratio", {"attendees_per_tech": 50, "minimum_techs": 3})])
        plan = calculate_labor(session, prop.id, [], attendees=20, event_duration=2)
        assert plan.required_technicians == 3

    def test_setup_breakdown_and_total_hours(self, session, make_property):
        prop = make_property(rules=[RATIO_50, SETUP])
        plan = calculate_labor(
            session, prop.id,
            [{"category": "Audio", "quantity": 4}, {"category": "Lighting", "quantity": 10}, {"category": "Staging"}],
            attendees=100, event_duration=5
        )

        assert plan.setup_time_hours == 6
        assert plan.breakdown_time_hours == 1.5
        assert plan.total_labor_hours == (6 + 5 + 1.5) * 2
        assert plan.labor_schedule.setup_start == "6 hours before event"
        assert plan.labor_schedule.event_support == "2 technicians during event"
        assert plan.labor_schedule.breakdown == "1.5 hours after event"
        assert plan.warnings == []

    def test_default_setup_times(self, session, make_property):
        prop = make_property(rules=[RATIO_50])
        plan = calculate_labor(session, prop.id, [{"category": "Video"}], attendees=10, event_duration=1)

        assert plan.setup_time_hours == 1.5
        assert plan.breakdown_time_hours == 1.0
        assert "No setup_time rule configured; using default setup and breakdown times" in plan.warnings

    def test_no_setup_warning_without_equipment(self, session, make_property):
        prop = make_property(rules=[RATIO_50])
        plan = calculate_labor(session, prop.id, [], attendees=10, event_duration=1)
        assert plan.warnings == []

    def test_malformed_rule_is_skipped_with_warning(self, session, make_property):
        prop = make_property(rules=[RATIO_50, ("setup_time", "{audio_setup: 2")])
        plan = calculate_labor(session, prop.id, [{"category": "Audio"}], attendees=60, event_duration=3)

        assert "Invalid labor rule format for setup_time" in plan.warnings
        assert plan.setup_time_hours == 2.0
        assert plan.required_technicians == 2

    def test_overtime_warning(self, session, make_property):
        prop = make_property(rules=[RATIO_50, SETUP, ("union_requirements", {"overtime_threshold": 8})])
        plan = calculate_labor(session, prop.id, [], attendees=50, event_duration=10)

        assert "Event duration (10h) exceeds overtime threshold (8h). Additional costs may apply." in plan.warnings
        assert plan.required_technicians == 1

    def test_no_overtime_warning_at_threshold(self, session, make_property):
        prop = make_property(rules=[RATIO_50, SETUP, ("union_requirements", {"overtime_threshold": 8})])
        plan = calculate_labor(session, prop.id, [], attendees=50, event_duration=8)
        assert plan.warnings == []

    def test_unknown_rule_types_are_reported(self, session, make_property):
        prop = make_property(rules=[RATIO_50, ("meal_breaks", {"every_hours": 5})])
        plan = calculate_labor(session, prop.id, [], attendees=10, event_duration=1)
        assert plan.custom_rules == [{"rule_type": "meal_breaks", "rule_data": {"every_hours": 5}}]

    def test_latest_rule_of_a_type_wins(self, session, make_property):
        prop = make_property(rules=[RATIO_50, ("technician_ratio", {"attendees_per_tech": 25})])
        parsed = load_labor_rules(session, prop.id)
        assert parsed.rules["technician_ratio"].attendees_per_tech == 25

    def test_no_unions_means_no_union_context(self, session, make_property):
        prop = make_property(rules=[RATIO_50, SETUP])
        plan = calculate_labor(session, prop.id, [{"category": "Audio"}], attendees=10, event_duration=12)

        assert plan.union_notes == []
        assert plan.cost_estimates == []
        assert plan.crew_requirements == []

class TestInvalidDefaults:

    def test_zero_default_ratio_raises(self, session, make_property):
        prop = make_property(rules=[SETUP])
        with patch.object(config.labor_defaults, "attendees_per_tech", 0):
            with pytest.raises(ConfigurationException) as excinfo:
                calculate_labor(session, prop.id, [], attendees=120, event_duration=4)
        assert excinfo.value.error_code == "INVALID_LABOR_DEFAULTS"

    def test_property_ratio_rule_ignores_defaults(self, session, make_property):
        prop = make_property(rules=[RATIO_50, SETUP])
        with patch.object(config.labor_defaults, "attendees_per_tech", 0):
            plan = calculate_labor(session, prop.id, [], attendees=120, event_duration=4)
        assert plan.required_technicians == 3

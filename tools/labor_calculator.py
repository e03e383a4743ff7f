import time as timer
from dataclasses import dataclass, field
from datetime import date, time
from typing import Any, Dict, List, Optional

from sqlalchemy.exc import SQLAlchemyError

from config import config
from database.models import LaborRule
from models.labor_rules import OpaqueRule, SetupTimeRule, parse_labor_rule
from models.schemas import LaborPlan, LaborSchedule, validate_labor_equipment
from tools.union_rules import evaluate_union_context, fmt_hours
from utils.exceptions import ConfigurationException, DatabaseException, LaborRuleFormatException
from utils.logger import get_component_logger

logger = get_component_logger("labor_calculator")

# category keyword -> setup_time field; the first keyword found in a category wins
SETUP_FIELDS = (
    ("audio", "audio_setup"),
    ("video", "video_setup"),
    ("lighting", "lighting_setup"),
)

@dataclass
class ParsedLaborRules:
    """Labor rules of one property after parsing"""
    rules: Dict[str, Any] = field(default_factory=dict)
    warnings: List[str] = field(default_factory=list)
    custom_rules: List[Dict[str, Any]] = field(default_factory=list)

def load_labor_rules(session, property_id) -> ParsedLaborRules:
    """
    Load and parse every labor rule of a property.

    Rules that fail to parse are skipped with a warning. When a rule type
    appears more than once the last row wins.
    """
    try:
        rows = session.query(LaborRule).filter(LaborRule.property_id == property_id).order_by(LaborRule.id).all()
    except SQLAlchemyError as e:
        raise DatabaseException(f"Labor rule lookup failed: {e}", error_code="LABOR_RULE_QUERY_FAILED") from e

    parsed = ParsedLaborRules()
    for row in rows:
        try:
            payload = parse_labor_rule(row.rule_type, row.rule_data)
        except LaborRuleFormatException as e:
            parsed.warnings.append(e.message)
            logger.log_rule_skipped(row.rule_type, e.error_code, property_id)
            continue

        if isinstance(payload, OpaqueRule):
            parsed.custom_rules.append({"rule_type": payload.rule_type, "rule_data": payload.data})
        else:
            parsed.rules[row.rule_type] = payload
    return parsed

def required_technicians(attendees: int, attendees_per_tech: int, minimum_techs: int) -> int:
    """max(minimum_techs, ceil(attendees / attendees_per_tech))"""
    return max(minimum_techs, -(-attendees // attendees_per_tech))

def setup_hours_for(category: str, setup_rule: Optional[SetupTimeRule]) -> float:
    """Setup hours one equipment line contributes; 0 when no keyword matches"""
    category = (category or "").lower()
    defaults = config.labor_defaults
    for keyword, field_name in SETUP_FIELDS:
        if keyword in category:
            configured = getattr(setup_rule, field_name) if setup_rule is not None else None
            return configured if configured is not None else getattr(defaults, field_name)
    return 0.0

def calculate_labor(session, property_id, equipment_list, attendees, event_duration,
                    event_date: Optional[date] = None, start_time: Optional[time] = None,
                    room_name: Optional[str] = None) -> LaborPlan:
    """
    Calculate technicians, setup/breakdown time and union context for an event.

    Organization:
    - Parses the property's labor rules, skipping malformed ones with a warning
    - Technicians from the technician_ratio rule (default 50 attendees per tech, minimum 1)
    - Setup time summed per equipment line by category keyword (audio, video, lighting)
    - Breakdown from the setup_time rule (default 1h)
    - total_labor_hours = (setup + duration + breakdown) * technicians
    - Overtime, holiday, schedule, penalty and venue findings are advisory only

    Args:
        session (Session): Open database session
        property_id (int): Property whose rules apply
        equipment_list (list): LaborEquipmentItem objects or dicts with category/quantity
        attendees (int): Number of attendees
        event_duration (float): Event duration in hours
        event_date (date, optional): Enables weekend, holiday and schedule checks
        start_time (time, optional): Event start, enables schedule and early-call checks
        room_name (str, optional): Keeps only venue rules for this room (plus property-wide ones)

    Returns:
        LaborPlan
    """
    started = timer.time()
    items = validate_labor_equipment(equipment_list)
    attendees = int(attendees or 0)
    duration = float(event_duration or 0)
    defaults = config.labor_defaults
    logger.log_check_start("labor", property_id, {"lines": len(items), "attendees": attendees, "duration": duration})

    parsed = load_labor_rules(session, property_id)
    warnings = list(parsed.warnings)

    ratio_rule = parsed.rules.get("technician_ratio")
    if ratio_rule is None:
        per_tech, minimum = defaults.attendees_per_tech, defaults.minimum_techs
        if per_tech <= 0 or minimum < 1:
            raise ConfigurationException(
                f"Invalid default technician ratio: {per_tech} attendees per technician, minimum {minimum}",
                error_code="INVALID_LABOR_DEFAULTS",
                context={"attendees_per_tech": per_tech, "minimum_techs": minimum}
            )
        warnings.append(
            f"No technician_ratio rule configured; using default of {per_tech} attendees "
            f"per technician (minimum {minimum})"
        )
    else:
        per_tech, minimum = ratio_rule.attendees_per_tech, ratio_rule.minimum_techs
    technicians = required_technicians(attendees, per_tech, minimum)

    setup_rule = parsed.rules.get("setup_time")
    if setup_rule is None and items:
        warnings.append("No setup_time rule configured; using default setup and breakdown times")
    setup_hours = sum(setup_hours_for(item.category, setup_rule) for item in items)
    breakdown_hours = setup_rule.breakdown if setup_rule is not None and setup_rule.breakdown is not None else defaults.breakdown

    shift_hours = setup_hours + duration + breakdown_hours
    total_labor_hours = shift_hours * technicians

    union_rule = parsed.rules.get("union_requirements")
    if union_rule is not None and union_rule.overtime_threshold is not None and duration > union_rule.overtime_threshold:
        warnings.append(
            f"Event duration ({fmt_hours(duration)}h) exceeds overtime threshold "
            f"({fmt_hours(union_rule.overtime_threshold)}h). Additional costs may apply."
        )

    union_context = evaluate_union_context(
        session, property_id,
        categories=[item.category for item in items],
        technicians=technicians,
        shift_hours=shift_hours,
        setup_hours=setup_hours,
        event_date=event_date,
        start_time=start_time,
        room_name=room_name
    )

    plan = LaborPlan(
        required_technicians=technicians,
        based_on_attendees=attendees,
        technician_ratio={"attendees_per_tech": per_tech, "minimum_techs": minimum},
        setup_time_hours=setup_hours,
        event_duration_hours=duration,
        breakdown_time_hours=breakdown_hours,
        total_labor_hours=total_labor_hours,
        labor_schedule=LaborSchedule(
            setup_start=f"{fmt_hours(setup_hours)} hours before event",
            event_support=f"{technicians} technicians during event",
            breakdown=f"{fmt_hours(breakdown_hours)} hours after event"
        ),
        warnings=warnings,
        custom_rules=parsed.custom_rules,
        **union_context
    )

    logger.log_check_complete("labor", property_id, {
        "required_technicians": technicians,
        "total_labor_hours": total_labor_hours,
        "warnings": len(warnings)
    }, timer.time() - started)
    return plan

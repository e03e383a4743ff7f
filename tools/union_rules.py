"""
Union context for a labor plan.

Everything here is advisory: thresholds, holidays, schedules, penalties and
venue rules produce notes for the caller and never change the technician count
or the order verdict. Venue rules in particular are surfaced as text; their
numeric thresholds are not enforced.
"""
import calendar
import re
from datetime import date, datetime, time, timedelta
from typing import Any, Dict, Iterable, List, Optional

from sqlalchemy.exc import SQLAlchemyError

from database.models import Union as UnionModel
from models.schemas import CostEstimate, CrewRequirement, VenueRuleNote
from utils.exceptions import DatabaseException

DEFAULT_OVERTIME_THRESHOLD = 8.0
OVERTIME_MULTIPLIER = 1.5
DOUBLETIME_MULTIPLIER = 2.0

ORDINALS = {"first": 1, "second": 2, "third": 3, "fourth": 4, "fifth": 5}
WEEKDAYS = {name.lower(): idx for idx, name in enumerate(calendar.day_name)}
MONTHS = {name.lower(): idx for idx, name in enumerate(calendar.month_name) if name}
MONTHS.update({name.lower(): idx for idx, name in enumerate(calendar.month_abbr) if name})
MONTH_DAY_PATTERN = re.compile(r"^(\d{1,2})-(\d{1,2})$")

def fmt_hours(hours: float) -> str:
    """Two decimals at most with trailing zeros dropped, e.g. 2.0 -> 2 and 11.5 -> 11.5"""
    return f"{hours:.2f}".rstrip("0").rstrip(".")

def union_label(union: UnionModel) -> str:
    return f"Local {union.local_number} ({union.trade})"

def load_unions(session, property_id) -> List[UnionModel]:
    try:
        return session.query(UnionModel).filter(UnionModel.property_id == property_id).order_by(
            UnionModel.local_number, UnionModel.name
        ).all()
    except SQLAlchemyError as e:
        raise DatabaseException(f"Union lookup failed: {e}", error_code="UNION_QUERY_FAILED") from e

def sunday_based_weekday(day: date) -> int:
    """0=Sunday ... 6=Saturday, the convention union schedules are stored in"""
    return (day.weekday() + 1) % 7

def matches_date_pattern(pattern: Optional[str], day: date) -> bool:
    """
    Match recurring holiday patterns.

    Supported: ``MM-DD`` (e.g. ``12-25``) and ``<ordinal>_<weekday>_<month>``
    where ordinal is first..fifth or last (e.g. ``last_monday_may``).
    """
    if not pattern:
        return False
    pattern = pattern.strip().lower()

    month_day = MONTH_DAY_PATTERN.match(pattern)
    if month_day:
        return (day.month, day.day) == (int(month_day.group(1)), int(month_day.group(2)))

    parts = pattern.split("_")
    if len(parts) != 3:
        return False
    ordinal, weekday, month = parts
    if weekday not in WEEKDAYS or month not in MONTHS:
        return False
    if day.weekday() != WEEKDAYS[weekday] or day.month != MONTHS[month]:
        return False

    if ordinal == "last":
        days_in_month = calendar.monthrange(day.year, day.month)[1]
        return day.day + 7 > days_in_month
    if ordinal in ORDINALS:
        return (day.day - 1) // 7 + 1 == ORDINALS[ordinal]
    return False

def split_shift_hours(shift_hours: float, overtime_threshold: Optional[float],
                      doubletime_threshold: Optional[float]):
    """Split one technician's shift into (regular, overtime, doubletime) hours"""
    ot = overtime_threshold if overtime_threshold is not None else DEFAULT_OVERTIME_THRESHOLD
    dt = doubletime_threshold if doubletime_threshold is not None else float("inf")
    dt = max(dt, ot)

    regular = min(shift_hours, ot)
    overtime = max(0.0, min(shift_hours, dt) - ot)
    doubletime = max(0.0, shift_hours - dt)
    return regular, overtime, doubletime

def estimate_cost(union: UnionModel, technicians: int, shift_hours: float) -> Optional[CostEstimate]:
    """Price the plan at a union's rates; None when the union has no regular rate"""
    if union.regular_rate is None:
        return None

    regular, overtime, doubletime = split_shift_hours(
        shift_hours, union.overtime_threshold, union.doubletime_threshold
    )
    overtime_rate = union.overtime_rate if union.overtime_rate is not None else union.regular_rate * OVERTIME_MULTIPLIER
    doubletime_rate = union.doubletime_rate if union.doubletime_rate is not None else union.regular_rate * DOUBLETIME_MULTIPLIER

    per_tech = regular * union.regular_rate + overtime * overtime_rate + doubletime * doubletime_rate
    return CostEstimate(
        union=union.name,
        local_number=union.local_number,
        technicians=technicians,
        regular_hours=regular,
        overtime_hours=overtime,
        doubletime_hours=doubletime,
        estimated_cost=round(per_tech * technicians, 2)
    )

def threshold_notes(union: UnionModel, shift_hours: float) -> List[str]:
    label = union_label(union)
    if union.doubletime_threshold is not None and shift_hours > union.doubletime_threshold:
        return [
            f"{label}: {fmt_hours(shift_hours)}h shift per technician exceeds doubletime threshold "
            f"({fmt_hours(union.doubletime_threshold)}h). Doubletime rates apply."
        ]
    if union.overtime_threshold is not None and shift_hours > union.overtime_threshold:
        return [
            f"{label}: {fmt_hours(shift_hours)}h shift per technician exceeds overtime threshold "
            f"({fmt_hours(union.overtime_threshold)}h). Overtime rates apply."
        ]
    return []

def calendar_notes(union: UnionModel, event_date: date, start_time: Optional[time]) -> List[str]:
    label = union_label(union)
    notes = []
    weekday = sunday_based_weekday(event_date)

    if weekday in (0, 6) and union.weekend_rules:
        notes.append(f"{label}: weekend event. {union.weekend_rules}")

    for special in union.special_days:
        if special.date_specific == event_date or matches_date_pattern(special.date_pattern, event_date):
            name = special.holiday_name or "Special day"
            note = f"{label}: {name} rate multiplier {fmt_hours(special.rate_multiplier)}x"
            if special.minimum_call:
                note += f", minimum call {fmt_hours(special.minimum_call)}h"
            if union.holiday_rules:
                note += f". {union.holiday_rules}"
            notes.append(note)
            break

    for schedule in union.schedules:
        if schedule.day_of_week != weekday:
            continue
        if start_time is not None and not (schedule.start_time <= start_time <= schedule.end_time):
            continue
        description = f" ({schedule.description})" if schedule.description else ""
        notes.append(
            f"{label}: {schedule.rate_type} rate x{fmt_hours(schedule.rate_multiplier)} "
            f"from {schedule.start_time.strftime('%H:%M')} to {schedule.end_time.strftime('%H:%M')}{description}"
        )
    return notes

def penalty_notes(union: UnionModel, shift_hours: float, setup_start: Optional[datetime],
                  event_start: Optional[datetime]) -> List[str]:
    """
    Time penalties the plan may trigger.

    ``applies_before_time`` is a cutoff on the event day, so a setup call
    that starts the evening before is still an early call.
    """
    label = union_label(union)
    notes = []
    for penalty in union.time_penalties:
        triggered = False
        if penalty.applies_after_hours is not None and shift_hours > penalty.applies_after_hours:
            triggered = True
        if penalty.applies_before_time is not None and setup_start is not None and event_start is not None:
            cutoff = datetime.combine(event_start.date(), penalty.applies_before_time)
            if setup_start < cutoff:
                triggered = True
        if not triggered:
            continue
        amount = ""
        if penalty.penalty_amount is not None:
            unit = f" {penalty.penalty_type_amount}" if penalty.penalty_type_amount else ""
            amount = f" ({fmt_hours(penalty.penalty_amount)}{unit})"
        notes.append(f"{label}: possible {penalty.penalty_type} penalty: {penalty.condition_description}{amount}")
    return notes

def crew_requirements(union: UnionModel, categories: Iterable[str]) -> List[CrewRequirement]:
    """Union crew requirements whose equipment category or type appears in the order"""
    categories = [c.lower() for c in categories if c]
    matched = []
    for req in union.equipment_requirements:
        keys = []
        if req.equipment_category:
            keys.append(req.equipment_category.lower())
        if req.equipment_type:
            keys.append(req.equipment_type.lower().replace("_", " "))
        if any(key in category or category in key for key in keys for category in categories):
            matched.append(CrewRequirement(
                union=union.name,
                local_number=union.local_number,
                equipment_category=req.equipment_category,
                equipment_type=req.equipment_type,
                minimum_crew_size=req.minimum_crew_size or 1,
                is_required=bool(req.is_required),
                notes=req.notes
            ))
    return matched

def venue_rule_notes(union: UnionModel, room_name: Optional[str] = None) -> List[VenueRuleNote]:
    """Venue rules as advisory text; room-scoped rules are kept only for the named room"""
    notes = []
    for rule in union.venue_rules:
        scoped_room = rule.room.name if rule.room is not None else None
        if room_name and scoped_room and scoped_room != room_name:
            continue
        notes.append(VenueRuleNote(
            union=union.name,
            local_number=union.local_number,
            room=scoped_room,
            rule_type=rule.rule_type,
            condition_text=rule.condition_text,
            threshold_value=rule.threshold_value,
            threshold_unit=rule.threshold_unit,
            action_required=rule.action_required,
            notes=rule.notes
        ))
    return notes

def evaluate_union_context(session, property_id, categories: List[str], technicians: int,
                           shift_hours: float, setup_hours: float,
                           event_date: Optional[date] = None, start_time: Optional[time] = None,
                           room_name: Optional[str] = None) -> Dict[str, Any]:
    """
    Collect advisory union findings for a labor plan.

    Returns:
        dict: {union_notes, crew_requirements, venue_rules, cost_estimates}
    """
    event_start = setup_start = None
    if start_time is not None:
        event_start = datetime.combine(event_date or date.today(), start_time)
        setup_start = event_start - timedelta(hours=setup_hours)

    context = {"union_notes": [], "crew_requirements": [], "venue_rules": [], "cost_estimates": []}
    for union in load_unions(session, property_id):
        context["union_notes"].extend(threshold_notes(union, shift_hours))
        if event_date is not None:
            context["union_notes"].extend(calendar_notes(union, event_date, start_time))
        context["union_notes"].extend(penalty_notes(union, shift_hours, setup_start, event_start))
        context["crew_requirements"].extend(crew_requirements(union, categories))
        context["venue_rules"].extend(venue_rule_notes(union, room_name))

        estimate = estimate_cost(union, technicians, shift_hours)
        if estimate is not None:
            context["cost_estimates"].append(estimate)
    return context

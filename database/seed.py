"""
Demo data for local runs and the CLI demo.

Rooms, stock, labor rules and unions go through the same admin schemas an
import or admin form would use, so bad demo data fails loudly here.
"""
from datetime import time

from models.schemas import InventoryItemCreate, LaborRuleCreate, RoomCreate, UnionCreate
from .models import (
    Property, Room, InventoryItem, LaborRule, Union, UnionSchedule,
    UnionEquipmentRequirement, UnionVenueRule, UnionTimePenalty, UnionSpecialDay
)

DEMO_PROPERTY_CODE = "4339"

def add_room(session, property_id, **fields) -> Room:
    """Validate a room with RoomCreate and add it to the session"""
    room = Room(**RoomCreate(property_id=property_id, **fields).model_dump())
    session.add(room)
    return room

def add_inventory_item(session, property_id, **fields) -> InventoryItem:
    """Validate a stock row with InventoryItemCreate and add it to the session"""
    item = InventoryItem(**InventoryItemCreate(property_id=property_id, **fields).model_dump(mode="json"))
    session.add(item)
    return item

def add_labor_rule(session, property_id, rule_type, rule_data, description=None) -> LaborRule:
    """Validate a labor rule with LaborRuleCreate; dict payloads are stored as JSON text"""
    validated = LaborRuleCreate(property_id=property_id, rule_type=rule_type,
                                rule_data=rule_data, description=description)
    rule = LaborRule(**validated.model_dump())
    session.add(rule)
    return rule

def add_union(session, property_id, **fields) -> Union:
    """Validate a union with UnionCreate and add it to the session"""
    union = Union(**UnionCreate(property_id=property_id, **fields).model_dump())
    session.add(union)
    return union

def seed_demo_property(session):
    """
    Insert a demo property with rooms, inventory, labor rules and one union.

    Returns the existing property untouched if the demo code is already present.
    """
    existing = session.query(Property).filter(Property.property_code == DEMO_PROPERTY_CODE).first()
    if existing:
        return existing

    prop = Property(
        property_code=DEMO_PROPERTY_CODE,
        name="The LaSalle Chicago",
        location="Chicago, IL",
        description="Professional event venue in Chicago, IL",
        contact_info="events@thelasallechicago.com"
    )
    session.add(prop)
    session.flush()

    add_room(session, prop.id, name="Grand Ballroom", capacity=400, dimensions="120x80",
             built_in_av="House sound system, ceiling speakers", features="Stage, dance floor")
    add_room(session, prop.id, name="Salon A", capacity=60, dimensions="40x30",
             built_in_av="Drop-down projection screen", features="Natural light")
    add_room(session, prop.id, name="Boardroom", capacity=16, dimensions="20x15",
             built_in_av="", features="Wall display")

    add_inventory_item(session, prop.id, name="Wireless Mic", category="Audio", sub_category="Microphones",
                       quantity_available=8, model="Shure ULXD2", manufacturer="Shure",
                       description="Handheld wireless microphone")
    add_inventory_item(session, prop.id, name="Line Array Speaker", category="Audio", sub_category="Speakers",
                       quantity_available=4, model="L-Acoustics Kara", manufacturer="L-Acoustics",
                       description="Line array speaker cabinet")
    add_inventory_item(session, prop.id, name="Laser Projector", category="Video", sub_category="Projectors",
                       quantity_available=3, model="Epson L1505U", manufacturer="Epson",
                       description="12,000 lumen laser projector")
    add_inventory_item(session, prop.id, name="Laser Projector", category="Video", sub_category="Projectors",
                       quantity_available=1, status="maintenance", model="Epson L1505U",
                       manufacturer="Epson", description="Awaiting lamp service")
    add_inventory_item(session, prop.id, name="LED Par", category="Lighting", sub_category="Wash",
                       quantity_available=24, model="Chauvet COLORado 1", manufacturer="Chauvet",
                       description="RGBW wash fixture")

    add_labor_rule(session, prop.id, "technician_ratio", {"attendees_per_tech": 50, "minimum_techs": 2},
                   description="One technician per 50 guests, never fewer than two")
    add_labor_rule(session, prop.id, "setup_time",
                   {"audio_setup": 2, "video_setup": 1.5, "lighting_setup": 3, "breakdown": 1.5},
                   description="House setup times")
    add_labor_rule(session, prop.id, "union_requirements", {"overtime_threshold": 8, "requires_union": True},
                   description="Union crew on all AV calls")

    local_134 = add_union(
        session, prop.id,
        local_number="134", name="IBEW Local 134", trade="Electricians",
        regular_rate=62.0, overtime_rate=93.0, doubletime_rate=124.0,
        overtime_threshold=8, doubletime_threshold=12,
        weekend_rules="Saturday time-and-a-half, Sunday double time",
        holiday_rules="Double time on recognized holidays"
    )
    local_134.schedules = [
        UnionSchedule(day_of_week=6, start_time=time(0, 0), end_time=time(23, 59),
                      rate_type="overtime", rate_multiplier=1.5, description="Saturday"),
        UnionSchedule(day_of_week=0, start_time=time(0, 0), end_time=time(23, 59),
                      rate_type="doubletime", rate_multiplier=2.0, description="Sunday"),
    ]
    local_134.equipment_requirements = [
        UnionEquipmentRequirement(equipment_category="electrical", is_required=True, minimum_crew_size=1,
                                  notes="All electrical equipment requires Local 134 electricians"),
        UnionEquipmentRequirement(equipment_category="lighting", equipment_type="lighting_rig",
                                  is_required=True, minimum_crew_size=2),
    ]
    local_134.venue_rules = [
        UnionVenueRule(rule_type="exception",
                       condition_text="Encore Technicians can set up to 3 ICW rooms without projectionists",
                       threshold_value=3, threshold_unit="rooms",
                       action_required="Projectionists required above threshold"),
    ]
    local_134.time_penalties = [
        UnionTimePenalty(penalty_type="early_call", condition_description="Call before 6:00 AM",
                         penalty_amount=50.0, penalty_type_amount="flat_fee",
                         applies_before_time=time(6, 0)),
        UnionTimePenalty(penalty_type="meal_penalty", condition_description="No meal break within 5 hours",
                         penalty_amount=25.0, penalty_type_amount="flat_fee", applies_after_hours=5),
    ]
    local_134.special_days = [
        UnionSpecialDay(date_pattern="12-25", holiday_name="Christmas Day", rate_multiplier=2.0, minimum_call=4),
        UnionSpecialDay(date_pattern="last_monday_may", holiday_name="Memorial Day", rate_multiplier=2.0),
    ]

    session.commit()
    session.refresh(prop)
    return prop

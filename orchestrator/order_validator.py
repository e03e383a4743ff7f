import time
from datetime import date
from typing import List, Optional

from models.schemas import (
    EquipmentRequest, InventoryCheck, LaborCheck, LaborEquipmentItem, RoomCheck, ValidationReport,
    validate_equipment_requests
)
from tools.inventory_checker import check_inventory
from tools.labor_calculator import calculate_labor
from tools.room_resolver import list_rooms
from utils.logger import get_component_logger

logger = get_component_logger("order_validator")

SERVICE_ERROR_PREFIX = "Validation service error: "

def service_error_report(message: str) -> ValidationReport:
    """Fail-closed report used whenever validation itself could not complete"""
    return ValidationReport(
        valid=False,
        errors=[f"{SERVICE_ERROR_PREFIX}{message}"],
        inventory_check=InventoryCheck(passed=False),
        room_check=RoomCheck(passed=False),
        labor_check=LaborCheck(passed=False)
    )

class OrderValidator:
    """
    Runs the inventory, room and labor checks for one order.

    The checks are injected so callers and tests can swap any of them.
    Only inventory shortfalls and a missing room make an order invalid;
    labor findings are reported as warnings.
    """

    def __init__(self, inventory_checker=check_inventory, room_lister=list_rooms, labor_calculator=calculate_labor):
        self.inventory_checker = inventory_checker
        self.room_lister = room_lister
        self.labor_calculator = labor_calculator

    def validate(self, session, equipment_list, property_id, attendees: Optional[int] = None,
                 event_duration: Optional[float] = None, event_date: Optional[date] = None) -> ValidationReport:
        started = time.time()
        logger.log_check_start("order", property_id, {
            "lines": len(equipment_list or []),
            "attendees": attendees,
            "event_duration": event_duration
        })

        try:
            requests = validate_equipment_requests(equipment_list)
            report = ValidationReport()
            self._check_inventory(report, session, property_id, requests)
            if attendees:
                self._check_rooms(report, session, property_id, attendees)
            self._check_labor(report, session, property_id, requests, attendees, event_duration, event_date)
        except Exception as e:
            logger.log_check_error("order", e, {"property_id": property_id})
            return service_error_report(str(e))

        logger.log_check_complete("order", property_id, {
            "valid": report.valid,
            "errors": len(report.errors),
            "warnings": len(report.warnings)
        }, time.time() - started)
        return report

    def _check_inventory(self, report: ValidationReport, session, property_id, requests: List[EquipmentRequest]):
        results = self.inventory_checker(session, property_id, requests)
        report.inventory_check.items = results
        for item in results:
            if not item.sufficient:
                report.valid = False
                report.inventory_check.passed = False
                report.errors.append(
                    f"Insufficient inventory for {item.item_name}: "
                    f"requested {item.requested}, available {item.available}"
                )

    def _check_rooms(self, report: ValidationReport, session, property_id, attendees: int):
        rooms = self.room_lister(session, property_id)
        suitable = [room for room in rooms if room.capacity >= attendees]

        report.room_check.details = {
            "attendees": attendees,
            "suitable_rooms": len(suitable),
            "recommended_room": suitable[0].name if suitable else None,
            "rooms_available": [
                {"name": room.name, "capacity": room.capacity, "built_in_av": room.built_in_av}
                for room in suitable
            ]
        }

        if not suitable:
            report.valid = False
            report.room_check.passed = False
            if rooms:
                largest = max(room.capacity for room in rooms)
                context = f"Largest available room has capacity {largest}"
            else:
                context = "No rooms are configured for this property"
            report.errors.append(f"No rooms available for {attendees} attendees. {context}")

    def _check_labor(self, report: ValidationReport, session, property_id, requests, attendees,
                     event_duration, event_date):
        labor_items = [
            LaborEquipmentItem(category=request.category_key, quantity=request.quantity)
            for request in requests
        ]
        plan = self.labor_calculator(
            session, property_id, labor_items, attendees or 0, event_duration or 0,
            event_date=event_date
        )
        report.warnings.extend(plan.warnings)
        report.warnings.extend(plan.union_notes)
        report.labor_check.details = plan.model_dump(mode="json")

_default_validator = OrderValidator()

def validate_order(session, equipment_list, property_id, attendees: Optional[int] = None,
                   event_duration: Optional[float] = None, event_date: Optional[date] = None) -> ValidationReport:
    """
    Validate an event order against inventory, room capacity and labor rules.

    Args:
        session (Session): Open database session
        equipment_list (list): EquipmentRequest objects or dicts with item_name/category/quantity
        property_id (int): Property the order is for
        attendees (int, optional): Attendee count; skips the room check when falsy
        event_duration (float, optional): Event duration in hours
        event_date (date, optional): Enables weekend and holiday union notes

    Returns:
        ValidationReport: never raises; service failures produce valid=False
    """
    return _default_validator.validate(session, equipment_list, property_id, attendees, event_duration, event_date)

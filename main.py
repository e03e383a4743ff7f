# main.py (CLI-based demo)

from datetime import date

from database.models import DatabaseManager
from database.seed import seed_demo_property
from orchestrator.order_validator import validate_order
from tools.labor_calculator import calculate_labor
from tools.room_resolver import check_room_compatibility

def run_demo():
    print("\n📦 Loading demo property...")
    manager = DatabaseManager("sqlite:///:memory:")
    manager.create_tables()
    session = manager.get_session()

    try:
        prop = seed_demo_property(session)
        print(f"Property: {prop.name} ({prop.property_code})")

        order = [
            {"item_name": "Wireless Mic", "category": "Audio", "quantity": 4},
            {"item_name": "Laser Projector", "category": "Video", "quantity": 4},
            {"category": "Lighting", "quantity": 12}
        ]
        event_date = date(2025, 12, 25)

        print("\n[1] Validating order for 120 attendees, 5 hours, on", event_date.isoformat())
        report = validate_order(session, order, prop.id, attendees=120, event_duration=5, event_date=event_date)
        print("Valid:", report.valid)
        for error in report.errors:
            print("  ERROR:", error)
        for warning in report.warnings:
            print("  WARNING:", warning)
        print("Recommended room:", report.room_check.details.get("recommended_room"))

        print("\n[2] Labor plan")
        plan = calculate_labor(
            session, prop.id,
            [{"category": "Audio", "quantity": 4}, {"category": "Lighting", "quantity": 12}],
            attendees=120, event_duration=5, event_date=event_date
        )
        print("Technicians:", plan.required_technicians)
        print("Total labor hours:", plan.total_labor_hours)
        for line in plan.labor_schedule.model_dump().values():
            print("  -", line)
        for estimate in plan.cost_estimates:
            print(f"  Estimated cost ({estimate.union}): ${estimate.estimated_cost:,.2f}")

        print("\n[3] Room compatibility: Boardroom")
        result = check_room_compatibility(session, prop.id, "Boardroom", ["projector", "speakers", "uplighting"])
        print("Compatible:", result.compatible)
        for note in result.equipment_notes:
            print("  -", note)
    finally:
        session.close()
        manager.close()

if __name__ == "__main__":
    run_demo()

"""
FastAPI web interface for Venue Planner
"""
import asyncio
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from fastapi import Body, Depends, FastAPI, HTTPException, Query
from fastapi.concurrency import run_in_threadpool
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.orm import Session

from agents.function_calls import FUNCTION_HANDLERS, build_property_context, execute_function
from config import config
from database.models import EventOrder, Property, get_db, get_session_factory
from models.schemas import LaborRequest, OrderValidationRequest, RoomCompatibilityRequest
from orchestrator.order_validator import service_error_report, validate_order
from tools.inventory_checker import fetch_inventory, summarize_inventory
from tools.labor_calculator import calculate_labor
from tools.room_resolver import check_room_compatibility, find_suitable_rooms
from utils.logger import get_component_logger

app = FastAPI(
    title="Venue Planner - Order Validation & Labor Engine",
    description="Inventory, room and labor checks for event orders",
    version="1.0.0"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

web_logger = get_component_logger("web_interface")

def get_property_or_404(db: Session, property_id: int) -> Property:
    prop = db.get(Property, property_id)
    if prop is None:
        raise HTTPException(status_code=404, detail=f"Property {property_id} not found")
    return prop

@app.get("/api/health")
async def health_check():
    """Health check endpoint"""
    return {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "version": "1.0.0",
        "config_valid": config.validate()
    }

@app.get("/api/properties/{property_id}/context")
def property_context(property_id: int, db: Session = Depends(get_db)):
    """Rooms, stock summary, labor rules and unions for the assistant prompt"""
    get_property_or_404(db, property_id)
    return build_property_context(db, property_id)

@app.get("/api/properties/{property_id}/inventory")
def list_inventory(property_id: int,
                   category: Optional[str] = None,
                   sub_category: Optional[str] = None,
                   search_term: Optional[str] = None,
                   db: Session = Depends(get_db)):
    get_property_or_404(db, property_id)
    return fetch_inventory(db, property_id, category=category, sub_category=sub_category, search_term=search_term)

@app.get("/api/properties/{property_id}/inventory/summary")
def inventory_summary(property_id: int, db: Session = Depends(get_db)):
    get_property_or_404(db, property_id)
    return {"summary": summarize_inventory(db, property_id)}

@app.get("/api/properties/{property_id}/rooms/suitable")
def suitable_rooms(property_id: int, attendees: int = Query(..., ge=1), db: Session = Depends(get_db)):
    """Rooms that seat the attendee count, tightest fit first"""
    get_property_or_404(db, property_id)
    rooms = find_suitable_rooms(db, property_id, attendees)
    return {"attendees": attendees, "rooms": [room.to_dict() for room in rooms]}

@app.post("/api/properties/{property_id}/rooms/compatibility")
def room_compatibility(property_id: int, request: RoomCompatibilityRequest, db: Session = Depends(get_db)):
    get_property_or_404(db, property_id)
    result = check_room_compatibility(db, property_id, request.room_name, request.equipment_list)
    return result.model_dump(mode="json", exclude_none=True)

@app.post("/api/properties/{property_id}/labor")
def labor_requirements(property_id: int, request: LaborRequest, db: Session = Depends(get_db)):
    get_property_or_404(db, property_id)
    plan = calculate_labor(
        db, property_id, request.equipment_list, request.attendees, request.event_duration,
        event_date=request.event_date, start_time=request.start_time
    )
    return plan.model_dump(mode="json")

@app.post("/api/properties/{property_id}/validate-order")
async def validate_order_endpoint(property_id: int, request: OrderValidationRequest,
                                  db: Session = Depends(get_db),
                                  session_factory=Depends(get_session_factory)):
    """
    Validate an order; optionally keep it as a draft event order.

    The validation runs in a worker thread on a session of its own, so a
    worker that outlives the configured timeout never touches the request
    session. Expiry is reported as a service error, the same as any other
    failure to validate.
    """
    await run_in_threadpool(get_property_or_404, db, property_id)
    try:
        report = await asyncio.wait_for(
            run_in_threadpool(_validate_in_worker_session, session_factory, property_id, request),
            timeout=config.app.timeout_seconds
        )
    except asyncio.TimeoutError:
        web_logger.error("Order validation timed out", property_id=property_id,
                         timeout_seconds=config.app.timeout_seconds)
        report = service_error_report(f"validation timed out after {config.app.timeout_seconds}s")

    response: Dict[str, Any] = report.model_dump(mode="json")
    if request.save_order:
        response["order_id"] = await run_in_threadpool(_save_order, db, property_id, request, response)
    return response

def _validate_in_worker_session(session_factory, property_id: int, request: OrderValidationRequest):
    session = session_factory()
    try:
        return validate_order(
            session, request.equipment_list, property_id,
            request.attendees, request.event_duration, request.event_date
        )
    finally:
        session.close()

def _save_order(db: Session, property_id: int, request: OrderValidationRequest, report: Dict[str, Any]) -> int:
    order = EventOrder(
        property_id=property_id,
        event_name=request.event_name,
        event_date=request.event_date,
        attendees=request.attendees
    )
    order.set_equipment_list([item.model_dump(exclude_none=True) for item in request.equipment_list])
    order.set_labor_plan(report["labor_check"]["details"])
    order.set_validation(report)
    db.add(order)
    db.commit()
    db.refresh(order)
    web_logger.info("Event order saved", order_id=order.id, property_id=property_id, valid=report["valid"])
    return order.id

@app.post("/api/properties/{property_id}/functions/{function_name}")
def call_function(property_id: int, function_name: str,
                  arguments: Optional[Dict[str, Any]] = Body(None),
                  db: Session = Depends(get_db)):
    """Endpoint the chat orchestrator uses to run a function call"""
    get_property_or_404(db, property_id)
    if function_name not in FUNCTION_HANDLERS:
        raise HTTPException(status_code=404, detail=f"Unknown function: {function_name}")
    return execute_function(db, property_id, function_name, arguments)

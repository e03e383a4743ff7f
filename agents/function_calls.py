"""
Function-calling surface for the chat assistant.

The conversation loop lives outside this package; it passes the model's
function name and arguments here and serializes the returned dict back into
the conversation. Nothing in this module raises to the caller.
"""
import json
from typing import Any, Callable, Dict

from models.schemas import LaborRequest, OrderValidationRequest, RoomCompatibilityRequest
from orchestrator.order_validator import validate_order
from tools.inventory_checker import fetch_inventory, summarize_inventory
from tools.labor_calculator import calculate_labor, load_labor_rules
from tools.room_resolver import check_room_compatibility, list_rooms
from tools.union_rules import load_unions
from utils.exceptions import FunctionCallException
from utils.logger import get_component_logger

logger = get_component_logger("assistant_functions")

FUNCTION_DEFINITIONS = [
    {
        "name": "fetch_inventory",
        "description": "Get detailed inventory information for specific categories or items",
        "parameters": {
            "type": "object",
            "properties": {
                "category": {
                    "type": "string",
                    "description": 'Equipment category to search for (e.g., "Audio", "Video", "Lighting")'
                },
                "sub_category": {
                    "type": "string",
                    "description": 'Equipment sub-category to search for (e.g., "Microphones", "Projectors")'
                },
                "search_term": {
                    "type": "string",
                    "description": "Search term to find specific equipment"
                }
            },
            "required": []
        }
    },
    {
        "name": "check_room_capabilities",
        "description": (
            "Get detailed room information and check equipment compatibility. Use this whenever "
            "a user mentions a specific room name or asks about room details."
        ),
        "parameters": {
            "type": "object",
            "properties": {
                "room_name": {"type": "string", "description": "Name of the room to check"},
                "equipment_list": {
                    "type": "array",
                    "description": "List of equipment to check compatibility (can be empty to just get room info)",
                    "items": {"type": "string"}
                }
            },
            "required": ["room_name"]
        }
    },
    {
        "name": "validate_order",
        "description": "Validate an event order against inventory, room capacity and labor rules",
        "parameters": {
            "type": "object",
            "properties": {
                "equipment_list": {
                    "type": "array",
                    "description": "List of equipment with quantities",
                    "items": {
                        "type": "object",
                        "properties": {
                            "item_name": {"type": "string"},
                            "quantity": {"type": "integer"},
                            "category": {"type": "string"}
                        }
                    }
                },
                "attendees": {"type": "integer", "description": "Number of event attendees"},
                "event_duration": {"type": "number", "description": "Event duration in hours"}
            },
            "required": ["equipment_list", "attendees", "event_duration"]
        }
    },
    {
        "name": "calculate_labor_requirements",
        "description": "Calculate labor requirements based on equipment and event details",
        "parameters": {
            "type": "object",
            "properties": {
                "equipment_list": {
                    "type": "array",
                    "description": "List of equipment requiring setup",
                    "items": {
                        "type": "object",
                        "properties": {
                            "category": {"type": "string"},
                            "quantity": {"type": "integer"}
                        }
                    }
                },
                "attendees": {"type": "integer", "description": "Number of event attendees"},
                "event_duration": {"type": "number", "description": "Event duration in hours"}
            },
            "required": ["equipment_list", "attendees", "event_duration"]
        }
    }
]

def _fetch_inventory(session, property_id, args):
    return fetch_inventory(
        session, property_id,
        category=args.get("category"),
        sub_category=args.get("sub_category"),
        search_term=args.get("search_term")
    )

def _check_room_capabilities(session, property_id, args):
    request = RoomCompatibilityRequest(**args)
    result = check_room_compatibility(session, property_id, request.room_name, request.equipment_list)
    return result.model_dump(mode="json", exclude_none=True)

def _validate_order(session, property_id, args):
    request = OrderValidationRequest(**args)
    report = validate_order(
        session, request.equipment_list, property_id,
        attendees=request.attendees,
        event_duration=request.event_duration,
        event_date=request.event_date
    )
    return report.model_dump(mode="json")

def _calculate_labor_requirements(session, property_id, args):
    request = LaborRequest(**args)
    plan = calculate_labor(
        session, property_id, request.equipment_list, request.attendees, request.event_duration,
        event_date=request.event_date, start_time=request.start_time
    )
    return plan.model_dump(mode="json")

FUNCTION_HANDLERS: Dict[str, Callable[..., Dict[str, Any]]] = {
    "fetch_inventory": _fetch_inventory,
    "check_room_capabilities": _check_room_capabilities,
    "validate_order": _validate_order,
    "calculate_labor_requirements": _calculate_labor_requirements,
}

def execute_function(session, property_id, function_name: str, arguments=None) -> Dict[str, Any]:
    """
    Run one assistant function call.

    Args:
        session (Session): Open database session
        property_id (int): Property selected in the conversation
        function_name (str): One of FUNCTION_HANDLERS
        arguments (dict | str, optional): Decoded arguments or the raw JSON string from the model

    Returns:
        dict: The function result, or {"error": message} when the call could not be served
    """
    try:
        if isinstance(arguments, str):
            try:
                arguments = json.loads(arguments) if arguments.strip() else {}
            except json.JSONDecodeError as e:
                raise FunctionCallException(f"Invalid arguments for {function_name}: {e}",
                                            error_code="INVALID_ARGUMENTS") from e
        arguments = arguments or {}
        if not isinstance(arguments, dict):
            raise FunctionCallException(f"Invalid arguments for {function_name}: expected an object",
                                        error_code="INVALID_ARGUMENTS")

        handler = FUNCTION_HANDLERS.get(function_name)
        if handler is None:
            raise FunctionCallException(f"Unknown function: {function_name}", error_code="UNKNOWN_FUNCTION")

        logger.log_function_call(function_name, property_id, arguments)
        return handler(session, property_id, arguments)
    except Exception as e:
        logger.log_check_error(function_name, e, {"property_id": property_id})
        return {"error": str(e)}

def build_property_context(session, property_id) -> Dict[str, Any]:
    """
    Property facts the assistant's system prompt is built from.

    Returns:
        dict: {rooms, inventory_summary, labor_rules, labor_rule_warnings, unions}
    """
    parsed = load_labor_rules(session, property_id)
    return {
        "rooms": [room.to_dict() for room in list_rooms(session, property_id)],
        "inventory_summary": summarize_inventory(session, property_id),
        "labor_rules": {rule_type: payload.model_dump() for rule_type, payload in parsed.rules.items()},
        "labor_rule_warnings": parsed.warnings,
        "unions": [
            {
                "local_number": union.local_number,
                "name": union.name,
                "trade": union.trade,
                "venue_rules": [rule.condition_text for rule in union.venue_rules]
            }
            for union in load_unions(session, property_id)
        ]
    }

"""
Read-only checks the order validator and the chat assistant call
"""
from .inventory_checker import check_inventory, fetch_inventory, summarize_inventory
from .room_resolver import find_suitable_rooms, check_room_compatibility, list_rooms
from .union_rules import evaluate_union_context
from .labor_calculator import calculate_labor, load_labor_rules

__all__ = [
    'check_inventory', 'fetch_inventory', 'summarize_inventory',
    'find_suitable_rooms', 'check_room_compatibility', 'list_rooms',
    'evaluate_union_context', 'calculate_labor', 'load_labor_rules'
]

"""
Database package for Venue Planner
"""
from .models import (
    Base, Property, Room, InventoryItem, LaborRule,
    Union, UnionSchedule, UnionEquipmentRequirement, UnionVenueRule,
    UnionTimePenalty, UnionSpecialDay, EventOrder,
    DatabaseManager, db_manager, get_db, get_session_factory
)

__all__ = [
    'Base', 'Property', 'Room', 'InventoryItem', 'LaborRule',
    'Union', 'UnionSchedule', 'UnionEquipmentRequirement', 'UnionVenueRule',
    'UnionTimePenalty', 'UnionSpecialDay', 'EventOrder',
    'DatabaseManager', 'db_manager', 'get_db', 'get_session_factory'
]

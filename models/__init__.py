"""
Data models for Venue Planner
"""
from .schemas import (
    InventoryStatus, RuleType, EquipmentRequest, LaborEquipmentItem,
    OrderValidationRequest, LaborRequest, RoomCompatibilityRequest,
    InventoryItemCreate, RoomCreate, LaborRuleCreate, UnionCreate,
    MatchingItem, ItemCheckResult, InventoryCheck, RoomCheck, LaborCheck,
    ValidationReport, RoomInfo, CompatibilityResult, LaborSchedule,
    CrewRequirement, VenueRuleNote, CostEstimate, LaborPlan,
    validate_equipment_requests, validate_labor_equipment
)
from .labor_rules import (
    TechnicianRatioRule, SetupTimeRule, UnionRequirementsRule, OpaqueRule,
    parse_labor_rule, rule_payload_data
)

__all__ = [
    'InventoryStatus', 'RuleType', 'EquipmentRequest', 'LaborEquipmentItem',
    'OrderValidationRequest', 'LaborRequest', 'RoomCompatibilityRequest',
    'InventoryItemCreate', 'RoomCreate', 'LaborRuleCreate', 'UnionCreate',
    'MatchingItem', 'ItemCheckResult', 'InventoryCheck', 'RoomCheck', 'LaborCheck',
    'ValidationReport', 'RoomInfo', 'CompatibilityResult', 'LaborSchedule',
    'CrewRequirement', 'VenueRuleNote', 'CostEstimate', 'LaborPlan',
    'validate_equipment_requests', 'validate_labor_equipment',
    'TechnicianRatioRule', 'SetupTimeRule', 'UnionRequirementsRule', 'OpaqueRule',
    'parse_labor_rule', 'rule_payload_data'
]

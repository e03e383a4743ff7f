"""
Data models and validation schemas for Venue Planner
"""
import json
import re
from typing import List, Optional, Dict, Any, Union
from datetime import date, time
from pydantic import BaseModel, Field, field_validator, model_validator
from enum import Enum

HHMM_PATTERN = re.compile(r"^([0-1]?[0-9]|2[0-3]):[0-5][0-9]$")

class InventoryStatus(str, Enum):
    """Inventory item status enumeration"""
    AVAILABLE = "available"
    MAINTENANCE = "maintenance"
    RESERVED = "reserved"
    OUT_OF_SERVICE = "out_of_service"

class RuleType(str, Enum):
    """Labor rule types the engine interprets"""
    TECHNICIAN_RATIO = "technician_ratio"
    SETUP_TIME = "setup_time"
    UNION_REQUIREMENTS = "union_requirements"

def _not_blank(value: Optional[str], label: str) -> str:
    if value is None or not value.strip():
        raise ValueError(f'{label} is required and must be a non-empty string')
    return value.strip()

# ---------------------------------------------------------------------------
# Requests
# ---------------------------------------------------------------------------

class EquipmentRequest(BaseModel):
    """One requested equipment line, matched by item name or category"""
    item_name: Optional[str] = Field(None, description="Exact inventory item name")
    category: Optional[str] = Field(None, description="Inventory category")
    quantity: int = Field(..., ge=1, description="Requested quantity")

    @model_validator(mode="after")
    def require_identifier(self):
        if not (self.item_name or self.category):
            raise ValueError('equipment request needs an item_name or a category')
        return self

    @property
    def identifier(self) -> str:
        return self.item_name or self.category

    @property
    def category_key(self) -> str:
        """Value compared against inventory categories"""
        return self.category or self.item_name

class LaborEquipmentItem(BaseModel):
    """Equipment line as seen by the labor evaluator"""
    category: str = Field("", description="Equipment category, e.g. Audio")
    quantity: int = Field(1, ge=1, description="Quantity requested")

    @field_validator('category', mode='before')
    @classmethod
    def none_to_empty(cls, v):
        return v or ""

class OrderValidationRequest(BaseModel):
    """Order validation request"""
    equipment_list: List[EquipmentRequest] = Field(default_factory=list)
    attendees: Optional[int] = Field(None, ge=0, description="Number of event attendees")
    event_duration: Optional[float] = Field(None, ge=0, description="Event duration in hours")
    event_date: Optional[date] = Field(None, description="Event date for holiday and weekend rules")
    event_name: Optional[str] = Field(None, description="Name used when the order is saved")
    save_order: bool = Field(False, description="Persist the order and its report as a draft")

class LaborRequest(BaseModel):
    """Labor requirement calculation request"""
    equipment_list: List[LaborEquipmentItem] = Field(default_factory=list)
    attendees: int = Field(0, ge=0, description="Number of event attendees")
    event_duration: float = Field(0, ge=0, description="Event duration in hours")
    event_date: Optional[date] = None
    start_time: Optional[time] = None

class RoomCompatibilityRequest(BaseModel):
    """Room capability check request"""
    room_name: str = Field(..., description="Name of the room to check")
    equipment_list: List[str] = Field(default_factory=list, description="Equipment to check; may be empty")

# ---------------------------------------------------------------------------
# Admin-side record validation
# ---------------------------------------------------------------------------

class InventoryItemCreate(BaseModel):
    """Inventory item as submitted by an admin or an import"""
    property_id: int
    name: str
    category: str
    sub_category: Optional[str] = None
    quantity_available: int = Field(0, ge=0)
    status: InventoryStatus = InventoryStatus.AVAILABLE
    description: Optional[str] = None
    model: Optional[str] = None
    manufacturer: Optional[str] = None

    @field_validator('name')
    @classmethod
    def validate_name(cls, v):
        return _not_blank(v, 'Name')

    @field_validator('category')
    @classmethod
    def validate_category(cls, v):
        return _not_blank(v, 'Category')

class RoomCreate(BaseModel):
    """Room as submitted by an admin"""
    property_id: int
    name: str
    capacity: int = Field(..., gt=0, description="Seated capacity")
    dimensions: Optional[str] = None
    built_in_av: Optional[str] = None
    features: Optional[str] = None

    @field_validator('name')
    @classmethod
    def validate_name(cls, v):
        return _not_blank(v, 'Room name')

class LaborRuleCreate(BaseModel):
    """Labor rule as submitted by an admin; rule_data is stored as JSON text"""
    property_id: int
    rule_type: str
    rule_data: Union[str, Dict[str, Any]]
    description: Optional[str] = None

    @field_validator('rule_type')
    @classmethod
    def validate_rule_type(cls, v):
        return _not_blank(v, 'Rule type')

    @field_validator('rule_data')
    @classmethod
    def validate_rule_data(cls, v):
        if isinstance(v, dict):
            return json.dumps(v)
        try:
            json.loads(v)
        except ValueError:
            raise ValueError('Rule data must be valid JSON')
        return v

class UnionCreate(BaseModel):
    """Union as submitted by an admin"""
    property_id: int
    local_number: str
    name: str
    trade: str
    regular_hours_start: Optional[str] = "08:00"
    regular_hours_end: Optional[str] = "17:00"
    regular_rate: Optional[float] = Field(None, ge=0)
    overtime_rate: Optional[float] = Field(None, ge=0)
    doubletime_rate: Optional[float] = Field(None, ge=0)
    overtime_threshold: Optional[float] = Field(8, ge=1)
    doubletime_threshold: Optional[float] = Field(12, ge=1)
    weekend_rules: Optional[str] = None
    holiday_rules: Optional[str] = None

    @field_validator('local_number', 'name', 'trade')
    @classmethod
    def validate_required_text(cls, v, info):
        return _not_blank(v, info.field_name.replace('_', ' ').capitalize())

    @field_validator('regular_hours_start', 'regular_hours_end')
    @classmethod
    def validate_hours(cls, v):
        if v is not None and not HHMM_PATTERN.match(v):
            raise ValueError('Regular hours must be in HH:MM format')
        return v

# ---------------------------------------------------------------------------
# Results
# ---------------------------------------------------------------------------

class MatchingItem(BaseModel):
    name: str
    available: int
    model: Optional[str] = None

class ItemCheckResult(BaseModel):
    """Sufficiency of one requested equipment line"""
    item_name: str
    requested: int
    available: int
    sufficient: bool
    matching_items: List[MatchingItem] = Field(default_factory=list)

class InventoryCheck(BaseModel):
    passed: bool = True
    items: List[ItemCheckResult] = Field(default_factory=list)

class RoomCheck(BaseModel):
    passed: bool = True
    details: Optional[Dict[str, Any]] = None

class LaborCheck(BaseModel):
    passed: bool = True
    details: Optional[Dict[str, Any]] = None

class ValidationReport(BaseModel):
    """Verdict for one proposed order"""
    valid: bool = True
    errors: List[str] = Field(default_factory=list)
    warnings: List[str] = Field(default_factory=list)
    inventory_check: InventoryCheck = Field(default_factory=InventoryCheck)
    room_check: RoomCheck = Field(default_factory=RoomCheck)
    labor_check: LaborCheck = Field(default_factory=LaborCheck)

class RoomInfo(BaseModel):
    name: str
    capacity: int
    dimensions: Optional[str] = None
    built_in_av: Optional[str] = None
    features: Optional[str] = None

class CompatibilityResult(BaseModel):
    """Advisory room/equipment compatibility notes"""
    compatible: bool
    room_name: Optional[str] = None
    reason: Optional[str] = None
    room_info: Optional[RoomInfo] = None
    equipment_notes: List[str] = Field(default_factory=list)
    requirements: List[str] = Field(default_factory=list)

class LaborSchedule(BaseModel):
    setup_start: str
    event_support: str
    breakdown: str

class CrewRequirement(BaseModel):
    union: str
    local_number: str
    equipment_category: Optional[str] = None
    equipment_type: Optional[str] = None
    minimum_crew_size: int = 1
    is_required: bool = False
    notes: Optional[str] = None

class VenueRuleNote(BaseModel):
    union: str
    local_number: str
    room: Optional[str] = None
    rule_type: str
    condition_text: str
    threshold_value: Optional[int] = None
    threshold_unit: Optional[str] = None
    action_required: Optional[str] = None
    notes: Optional[str] = None

class CostEstimate(BaseModel):
    union: str
    local_number: str
    technicians: int
    regular_hours: float
    overtime_hours: float
    doubletime_hours: float
    estimated_cost: float

class LaborPlan(BaseModel):
    """Technician headcount, timing and union context for an event"""
    required_technicians: int
    based_on_attendees: int
    technician_ratio: Dict[str, int]
    setup_time_hours: float
    event_duration_hours: float
    breakdown_time_hours: float
    total_labor_hours: float
    labor_schedule: LaborSchedule
    warnings: List[str] = Field(default_factory=list)
    union_notes: List[str] = Field(default_factory=list)
    crew_requirements: List[CrewRequirement] = Field(default_factory=list)
    venue_rules: List[VenueRuleNote] = Field(default_factory=list)
    cost_estimates: List[CostEstimate] = Field(default_factory=list)
    custom_rules: List[Dict[str, Any]] = Field(default_factory=list)

def validate_equipment_requests(equipment_data) -> List[EquipmentRequest]:
    """Validate and convert order equipment lines; already-built requests pass through"""
    return [
        item if isinstance(item, EquipmentRequest) else EquipmentRequest(**item)
        for item in (equipment_data or [])
    ]

def validate_labor_equipment(equipment_data) -> List[LaborEquipmentItem]:
    """Validate and convert labor equipment lines; already-built items pass through"""
    return [
        item if isinstance(item, LaborEquipmentItem) else LaborEquipmentItem(**item)
        for item in (equipment_data or [])
    ]

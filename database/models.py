"""
Database models for Venue Planner
"""
from sqlalchemy import (
    create_engine, Column, String, Integer, Float, Boolean, Date, DateTime, Time, Text, ForeignKey
)
from sqlalchemy.orm import declarative_base, relationship, sessionmaker
from datetime import datetime, timezone
import json

from config import config

Base = declarative_base()

def _utcnow():
    return datetime.now(timezone.utc)

class Property(Base):
    """A venue whose rooms, stock and labor rules the engine reads"""
    __tablename__ = "properties"

    id = Column(Integer, primary_key=True, autoincrement=True)
    property_code = Column(String(10), unique=True, nullable=False)
    name = Column(String(255), nullable=False)
    location = Column(String(255), nullable=True)
    description = Column(Text, nullable=True)
    contact_info = Column(String(255), nullable=True)
    created_at = Column(DateTime, default=_utcnow)

    rooms = relationship("Room", back_populates="property", cascade="all, delete-orphan")
    inventory_items = relationship("InventoryItem", back_populates="property", cascade="all, delete-orphan")
    labor_rules = relationship("LaborRule", back_populates="property", cascade="all, delete-orphan")
    unions = relationship("Union", back_populates="property", cascade="all, delete-orphan")

class Room(Base):
    """Database model for bookable rooms"""
    __tablename__ = "rooms"

    id = Column(Integer, primary_key=True, autoincrement=True)
    property_id = Column(Integer, ForeignKey("properties.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    capacity = Column(Integer, nullable=False)
    dimensions = Column(String(255), nullable=True)
    built_in_av = Column(Text, nullable=True)  # free text, matched by keyword
    features = Column(Text, nullable=True)  # free text, matched by keyword

    property = relationship("Property", back_populates="rooms")

    def to_dict(self):
        return {
            "name": self.name,
            "capacity": self.capacity,
            "dimensions": self.dimensions,
            "built_in_av": self.built_in_av,
            "features": self.features
        }

class InventoryItem(Base):
    """Database model for equipment stock"""
    __tablename__ = "inventory_items"

    id = Column(Integer, primary_key=True, autoincrement=True)
    property_id = Column(Integer, ForeignKey("properties.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    category = Column(String(100), nullable=True, index=True)
    sub_category = Column(String(100), nullable=True)
    quantity_available = Column(Integer, default=0, nullable=False)
    status = Column(String(50), default="available", nullable=False)  # available, maintenance, reserved, out_of_service
    asset_tag = Column(String(100), nullable=True)
    model = Column(String(255), nullable=True)
    manufacturer = Column(String(255), nullable=True)
    condition_notes = Column(Text, nullable=True)

    property = relationship("Property", back_populates="inventory_items")

class LaborRule(Base):
    """Database model for property labor rules"""
    __tablename__ = "labor_rules"

    id = Column(Integer, primary_key=True, autoincrement=True)
    property_id = Column(Integer, ForeignKey("properties.id", ondelete="CASCADE"), nullable=False, index=True)
    rule_type = Column(String(100), nullable=False)
    rule_data = Column(Text, nullable=False)  # JSON string
    description = Column(Text, nullable=True)
    created_at = Column(DateTime, default=_utcnow)

    property = relationship("Property", back_populates="labor_rules")

    def set_rule_data(self, rule_dict):
        """Set rule payload as JSON string"""
        self.rule_data = json.dumps(rule_dict)

class Union(Base):
    """Database model for labor unions working at a property"""
    __tablename__ = "unions"

    id = Column(Integer, primary_key=True, autoincrement=True)
    property_id = Column(Integer, ForeignKey("properties.id", ondelete="CASCADE"), nullable=False, index=True)
    local_number = Column(String(50), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    trade = Column(String(255), nullable=False)
    regular_hours_start = Column(String(5), default="08:00")
    regular_hours_end = Column(String(5), default="17:00")
    regular_rate = Column(Float, nullable=True)
    overtime_rate = Column(Float, nullable=True)
    doubletime_rate = Column(Float, nullable=True)
    overtime_threshold = Column(Float, default=8)
    doubletime_threshold = Column(Float, default=12)
    weekend_rules = Column(Text, nullable=True)
    holiday_rules = Column(Text, nullable=True)
    contact_info = Column(Text, nullable=True)
    notes = Column(Text, nullable=True)

    property = relationship("Property", back_populates="unions")
    schedules = relationship("UnionSchedule", back_populates="union", cascade="all, delete-orphan")
    equipment_requirements = relationship("UnionEquipmentRequirement", back_populates="union", cascade="all, delete-orphan")
    venue_rules = relationship("UnionVenueRule", back_populates="union", cascade="all, delete-orphan")
    time_penalties = relationship("UnionTimePenalty", back_populates="union", cascade="all, delete-orphan")
    special_days = relationship("UnionSpecialDay", back_populates="union", cascade="all, delete-orphan")

class UnionSchedule(Base):
    """Rate multiplier for a day-of-week and time range"""
    __tablename__ = "union_schedules"

    id = Column(Integer, primary_key=True, autoincrement=True)
    union_id = Column(Integer, ForeignKey("unions.id", ondelete="CASCADE"), nullable=False, index=True)
    day_of_week = Column(Integer, nullable=False)  # 0=Sunday, 1=Monday, ...
    start_time = Column(Time, nullable=False)
    end_time = Column(Time, nullable=False)
    rate_type = Column(String(50), nullable=False)  # regular, overtime, doubletime
    rate_multiplier = Column(Float, nullable=False)
    description = Column(Text, nullable=True)

    union = relationship("Union", back_populates="schedules")

class UnionEquipmentRequirement(Base):
    """Minimum crew a union requires for a kind of equipment"""
    __tablename__ = "union_equipment_requirements"

    id = Column(Integer, primary_key=True, autoincrement=True)
    union_id = Column(Integer, ForeignKey("unions.id", ondelete="CASCADE"), nullable=False, index=True)
    equipment_category = Column(String(255), nullable=True)
    equipment_type = Column(String(255), nullable=True)
    is_required = Column(Boolean, default=False)
    minimum_crew_size = Column(Integer, default=1)
    notes = Column(Text, nullable=True)

    union = relationship("Union", back_populates="equipment_requirements")

class UnionVenueRule(Base):
    """Venue-specific exception or requirement, e.g. the ICW projectionist rule"""
    __tablename__ = "union_venue_rules"

    id = Column(Integer, primary_key=True, autoincrement=True)
    union_id = Column(Integer, ForeignKey("unions.id", ondelete="CASCADE"), nullable=False, index=True)
    room_id = Column(Integer, ForeignKey("rooms.id", ondelete="CASCADE"), nullable=True, index=True)  # NULL: all rooms
    rule_type = Column(String(100), nullable=False)  # exception, requirement, limitation
    condition_text = Column(Text, nullable=False)
    threshold_value = Column(Integer, nullable=True)
    threshold_unit = Column(String(50), nullable=True)
    action_required = Column(Text, nullable=True)
    notes = Column(Text, nullable=True)

    union = relationship("Union", back_populates="venue_rules")
    room = relationship("Room")

class UnionTimePenalty(Base):
    """Late call, early call, meal and turnaround penalties"""
    __tablename__ = "union_time_penalties"

    id = Column(Integer, primary_key=True, autoincrement=True)
    union_id = Column(Integer, ForeignKey("unions.id", ondelete="CASCADE"), nullable=False, index=True)
    penalty_type = Column(String(100), nullable=False)
    condition_description = Column(Text, nullable=False)
    penalty_amount = Column(Float, nullable=True)
    penalty_type_amount = Column(String(50), nullable=True)  # flat_fee, hourly_rate, percentage
    applies_after_hours = Column(Float, nullable=True)
    applies_before_time = Column(Time, nullable=True)
    notes = Column(Text, nullable=True)

    union = relationship("Union", back_populates="time_penalties")

class UnionSpecialDay(Base):
    """Holiday and special day rates"""
    __tablename__ = "union_special_days"

    id = Column(Integer, primary_key=True, autoincrement=True)
    union_id = Column(Integer, ForeignKey("unions.id", ondelete="CASCADE"), nullable=False, index=True)
    date_specific = Column(Date, nullable=True)
    date_pattern = Column(String(100), nullable=True)  # e.g. last_monday_may, 12-25
    holiday_name = Column(String(255), nullable=True)
    rate_multiplier = Column(Float, nullable=False)
    minimum_call = Column(Float, nullable=True)
    special_rules = Column(Text, nullable=True)

    union = relationship("Union", back_populates="special_days")

class EventOrder(Base):
    """Database model for orders a caller chose to keep"""
    __tablename__ = "event_orders"

    id = Column(Integer, primary_key=True, autoincrement=True)
    property_id = Column(Integer, ForeignKey("properties.id", ondelete="CASCADE"), nullable=False, index=True)
    event_name = Column(String(255), nullable=True)
    event_date = Column(Date, nullable=True)
    attendees = Column(Integer, nullable=True)
    status = Column(String(50), default="draft")
    created_at = Column(DateTime, default=_utcnow)

    # JSON fields for complex data
    equipment_list = Column(Text, nullable=False)  # JSON string
    labor_plan = Column(Text, nullable=True)  # JSON string
    validation = Column(Text, nullable=True)  # JSON string

    def set_equipment_list(self, equipment):
        """Set equipment list as JSON string"""
        self.equipment_list = json.dumps(equipment or [])

    def get_equipment_list(self):
        """Get equipment list as list of dicts"""
        return json.loads(self.equipment_list) if self.equipment_list else []

    def set_labor_plan(self, plan_dict):
        """Set labor plan as JSON string"""
        self.labor_plan = json.dumps(plan_dict) if plan_dict else None

    def get_labor_plan(self):
        """Get labor plan as dictionary"""
        return json.loads(self.labor_plan) if self.labor_plan else None

    def set_validation(self, report_dict):
        """Set validation report as JSON string"""
        self.validation = json.dumps(report_dict) if report_dict else None

    def get_validation(self):
        """Get validation report as dictionary"""
        return json.loads(self.validation) if self.validation else None

# Database connection and session management
class DatabaseManager:
    """Database connection and session manager"""

    def __init__(self, url: str = None):
        self.engine = create_engine(url or config.database.url, echo=config.app.debug)
        self.SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)

    def create_tables(self):
        """Create all database tables"""
        Base.metadata.create_all(bind=self.engine)

    def get_session(self):
        """Get a database session"""
        return self.SessionLocal()

    def close(self):
        """Close database connection"""
        if hasattr(self, 'engine'):
            self.engine.dispose()

# Global database manager instance
db_manager = DatabaseManager()

def get_db():
    """Dependency to get database session"""
    db = db_manager.get_session()
    try:
        yield db
    finally:
        db.close()

def get_session_factory():
    """Dependency for work that must open its own sessions, e.g. in a worker thread"""
    return db_manager.SessionLocal

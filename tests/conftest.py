"""
Shared fixtures: an in-memory database and small builders for test data
"""
import json

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from database.models import Base, InventoryItem, LaborRule, Property, Room

@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()

@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False, autocommit=False)

@pytest.fixture
def session(session_factory):
    db = session_factory()
    try:
        yield db
    finally:
        db.close()

@pytest.fixture
def make_property(session):
    """Create a property with optional rooms, stock and labor rules"""
    counter = {"n": 0}

    def _make(rooms=(), items=(), rules=()):
        counter["n"] += 1
        prop = Property(property_code=f"P{counter['n']:03d}", name=f"Test Venue {counter['n']}")
        for name, capacity, built_in_av in rooms:
            prop.rooms.append(Room(name=name, capacity=capacity, built_in_av=built_in_av))
        for item in items:
            prop.inventory_items.append(InventoryItem(**item))
        for rule_type, rule_data in rules:
            if not isinstance(rule_data, str):
                rule_data = json.dumps(rule_data)
            prop.labor_rules.append(LaborRule(rule_type=rule_type, rule_data=rule_data))
        session.add(prop)
        session.commit()
        return prop

    return _make

@pytest.fixture
def demo_property(session):
    from database.seed import seed_demo_property
    return seed_demo_property(session)

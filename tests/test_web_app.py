"""
API tests for the FastAPI interface
"""
import threading
import time
from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient

from config import config
from database.models import EventOrder, get_db, get_session_factory
from database.seed import seed_demo_property
from orchestrator.order_validator import validate_order
from web.app import app

@pytest.fixture
def request_sessions():
    return []

@pytest.fixture
def client(session_factory, request_sessions):
    def override_get_db():
        db = session_factory()
        request_sessions.append(db)
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_session_factory] = lambda: session_factory
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()

@pytest.fixture
def property_id(session_factory):
    db = session_factory()
    try:
        return seed_demo_property(db).id
    finally:
        db.close()

class TestWebApp:

    def test_health(self, client):
        response = client.get("/api/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_unknown_property(self, client):
        response = client.get("/api/properties/999/inventory")
        assert response.status_code == 404

    def test_inventory_search(self, client, property_id):
        response = client.get(f"/api/properties/{property_id}/inventory", params={"search_term": "mic"})
        assert response.status_code == 200
        assert [item["name"] for item in response.json()["items"]] == ["Wireless Mic"]

    def test_inventory_summary(self, client, property_id):
        response = client.get(f"/api/properties/{property_id}/inventory/summary")
        assert response.status_code == 200
        assert len(response.json()["summary"]) == 4

    def test_suitable_rooms(self, client, property_id):
        response = client.get(f"/api/properties/{property_id}/rooms/suitable", params={"attendees": 50})
        assert [room["name"] for room in response.json()["rooms"]] == ["Salon A", "Grand Ballroom"]

    def test_room_compatibility(self, client, property_id):
        response = client.post(f"/api/properties/{property_id}/rooms/compatibility",
                               json={"room_name": "Salon A", "equipment_list": ["speakers", "microphone"]})
        body = response.json()
        assert body["compatible"] is True
        assert body["requirements"] == ["portable_audio_system"]

    def test_labor(self, client, property_id):
        response = client.post(f"/api/properties/{property_id}/labor", json={
            "equipment_list": [{"category": "Lighting", "quantity": 6}],
            "attendees": 80,
            "event_duration": 3,
            "event_date": "2025-05-26"
        })
        body = response.json()
        assert response.status_code == 200
        assert body["required_technicians"] == 2
        assert any("Memorial Day" in note for note in body["union_notes"])

    def test_validate_order(self, client, property_id):
        response = client.post(f"/api/properties/{property_id}/validate-order", json={
            "equipment_list": [{"item_name": "Wireless Mic", "quantity": 10}],
            "attendees": 500,
            "event_duration": 4
        })
        body = response.json()
        assert response.status_code == 200
        assert body["valid"] is False
        assert body["errors"] == [
            "Insufficient inventory for Wireless Mic: requested 10, available 8",
            "No rooms available for 500 attendees. Largest available room has capacity 400",
        ]
        assert "order_id" not in body

    def test_validate_order_rejects_bad_line(self, client, property_id):
        response = client.post(f"/api/properties/{property_id}/validate-order", json={
            "equipment_list": [{"quantity": 1}]
        })
        assert response.status_code == 422

    def test_save_order(self, client, property_id, session_factory):
        response = client.post(f"/api/properties/{property_id}/validate-order", json={
            "equipment_list": [{"category": "Audio", "quantity": 4}],
            "attendees": 40,
            "event_duration": 3,
            "event_name": "Board dinner",
            "save_order": True
        })
        body = response.json()
        assert body["valid"] is True

        db = session_factory()
        try:
            order = db.get(EventOrder, body["order_id"])
            assert order.event_name == "Board dinner"
            assert order.get_equipment_list() == [{"category": "Audio", "quantity": 4}]
            assert order.get_validation()["valid"] is True
            assert order.get_labor_plan()["required_technicians"] == 2
        finally:
            db.close()

    def test_validate_order_timeout_fails_closed(self, client, property_id, request_sessions):
        worker = {}
        finished = threading.Event()

        def slow_validation(session, *args, **kwargs):
            try:
                time.sleep(0.5)
                worker["session"] = session
                worker["report"] = validate_order(session, *args, **kwargs)
            finally:
                finished.set()

        with patch.object(config.app, "timeout_seconds", 0.05), patch("web.app.validate_order", slow_validation):
            response = client.post(f"/api/properties/{property_id}/validate-order", json={
                "equipment_list": [{"category": "Audio", "quantity": 1}],
                "save_order": True
            })
            assert finished.wait(timeout=5)

        body = response.json()
        assert body["valid"] is False
        assert body["errors"][0].startswith("Validation service error: validation timed out")
        assert "order_id" in body

        assert all(worker["session"] is not db for db in request_sessions)
        assert worker["report"].valid is True

    def test_function_endpoint(self, client, property_id):
        response = client.post(f"/api/properties/{property_id}/functions/fetch_inventory", json={"category": "Audio"})
        assert response.json()["total_items"] == 2

    def test_unknown_function_endpoint(self, client, property_id):
        response = client.post(f"/api/properties/{property_id}/functions/book_hotel", json={})
        assert response.status_code == 404

    def test_property_context(self, client, property_id):
        response = client.get(f"/api/properties/{property_id}/context")
        assert response.json()["unions"][0]["local_number"] == "134"

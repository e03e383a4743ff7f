"""
Unit tests for room lookup and compatibility notes
"""
from tools.room_resolver import NO_EQUIPMENT_NOTE, check_room_compatibility, find_suitable_rooms, list_rooms

ROOMS = [
    ("Grand Ballroom", 400, "House sound system, ceiling speakers"),
    ("Boardroom", 16, ""),
    ("Salon A", 60, "Drop-down projection screen"),
]

class TestFindSuitableRooms:

    def test_tightest_fit_first(self, session, make_property):
        prop = make_property(rooms=ROOMS)
        rooms = find_suitable_rooms(session, prop.id, 50)
        assert [room.name for room in rooms] == ["Salon A", "Grand Ballroom"]

    def test_capacity_is_inclusive(self, session, make_property):
        prop = make_property(rooms=ROOMS)
        rooms = find_suitable_rooms(session, prop.id, 60)
        assert rooms[0].name == "Salon A"

    def test_no_room_large_enough(self, session, make_property):
        prop = make_property(rooms=[("Boardroom", 16, ""), ("Salon A", 60, "")])
        assert find_suitable_rooms(session, prop.id, 200) == []

    def test_list_rooms_sorted_by_capacity(self, session, make_property):
        prop = make_property(rooms=ROOMS)
        assert [room.capacity for room in list_rooms(session, prop.id)] == [16, 60, 400]

class TestRoomCompatibility:

    def test_missing_room(self, session, make_property):
        prop = make_property(rooms=ROOMS)
        result = check_room_compatibility(session, prop.id, "Terrace", ["projector"])

        assert result.compatible is False
        assert result.reason == "Room not found"
        assert result.room_name == "Terrace"

    def test_empty_equipment_list(self, session, make_property):
        prop = make_property(rooms=ROOMS)
        result = check_room_compatibility(session, prop.id, "Boardroom", [])

        assert result.compatible is True
        assert result.equipment_notes == [NO_EQUIPMENT_NOTE]
        assert result.room_info.capacity == 16

    def test_projector_without_screen(self, session, make_property):
        prop = make_property(rooms=ROOMS)
        result = check_room_compatibility(session, prop.id, "Boardroom", ["HD projector"])

        assert result.compatible is True
        assert result.equipment_notes == [
            "HD projector: Room has no built-in projection capability. Will need portable projection screen."
        ]
        assert result.requirements == ["portable_projection_screen"]

    def test_projector_with_screen(self, session, make_property):
        prop = make_property(rooms=ROOMS)
        result = check_room_compatibility(session, prop.id, "Salon A", ["projector"])
        assert result.equipment_notes == []
        assert result.requirements == []

    def test_audio_covered_by_house_sound(self, session, make_property):
        prop = make_property(rooms=ROOMS)
        result = check_room_compatibility(session, prop.id, "Grand Ballroom", ["wireless microphone", "sound board"])
        assert result.requirements == []

    def test_requirements_are_deduplicated(self, session, make_property):
        prop = make_property(rooms=ROOMS)
        result = check_room_compatibility(session, prop.id, "Boardroom", ["microphone", "audio mixer", "uplighting"])

        assert len(result.equipment_notes) == 3
        assert result.requirements == ["portable_audio_system", "additional_lighting"]

    def test_unrecognized_equipment_is_not_flagged(self, session, make_property):
        prop = make_property(rooms=ROOMS)
        result = check_room_compatibility(session, prop.id, "Boardroom", ["podium"])
        assert result.compatible is True
        assert result.equipment_notes == []

"""
Room capacity lookup and keyword-based equipment compatibility.

The compatibility check is a heuristic over the free-text ``built_in_av`` and
``features`` columns. It only annotates; it never rejects a room.
"""
from typing import List

from sqlalchemy.exc import SQLAlchemyError

from database.models import Room
from models.schemas import CompatibilityResult, RoomInfo
from utils.exceptions import DatabaseException
from utils.logger import get_component_logger

logger = get_component_logger("room_resolver")

NO_EQUIPMENT_NOTE = "No specific equipment provided for compatibility check"

# (equipment keywords, room keywords that cover them, note, requirement tag)
COMPATIBILITY_KEYWORDS = [
    (
        ("projector", "projection"),
        ("projection", "screen"),
        "Room has no built-in projection capability. Will need portable projection screen.",
        "portable_projection_screen",
    ),
    (
        ("audio", "sound", "microphone"),
        ("sound", "audio"),
        "Room has no built-in audio system. Will need full audio setup.",
        "portable_audio_system",
    ),
    (
        ("lighting",),
        ("lighting", "stage"),
        "Room lighting may need enhancement for this setup.",
        "additional_lighting",
    ),
]

def list_rooms(session, property_id) -> List[Room]:
    """All rooms of a property, ascending by capacity"""
    try:
        return session.query(Room).filter(Room.property_id == property_id).order_by(Room.capacity.asc(), Room.name).all()
    except SQLAlchemyError as e:
        raise DatabaseException(f"Room lookup failed: {e}", error_code="ROOM_QUERY_FAILED") from e

def find_suitable_rooms(session, property_id, attendees: int) -> List[Room]:
    """
    Find rooms that can seat the attendee count.

    Returns:
        list of Room with capacity >= attendees, ascending by capacity,
        so the first element is the tightest fit. Empty if none qualifies.
    """
    return [room for room in list_rooms(session, property_id) if room.capacity >= attendees]

def room_text(room: Room) -> str:
    """Lowercased text the keyword checks run against"""
    return f"{room.built_in_av or ''} {room.features or ''}".lower()

def assess_equipment(room_info_text: str, equipment: str):
    """Yield (note, requirement tag) pairs for one equipment string"""
    equipment_lower = equipment.lower()
    for equipment_keywords, room_keywords, note, tag in COMPATIBILITY_KEYWORDS:
        needs_it = any(keyword in equipment_lower for keyword in equipment_keywords)
        if needs_it and not any(keyword in room_info_text for keyword in room_keywords):
            yield f"{equipment}: {note}", tag

def check_room_compatibility(session, property_id, room_name: str, equipment_list=None) -> CompatibilityResult:
    """
    Look up a room and annotate how well it supports the listed equipment.

    Args:
        session (Session): Open database session
        property_id (int): Property owning the room
        room_name (str): Exact room name
        equipment_list (list of str, optional): Equipment descriptions, may be empty

    Returns:
        CompatibilityResult: compatible=False only when the room does not exist
    """
    try:
        room = session.query(Room).filter(
            Room.property_id == property_id,
            Room.name == room_name
        ).first()
    except SQLAlchemyError as e:
        raise DatabaseException(f"Room lookup failed: {e}", error_code="ROOM_QUERY_FAILED") from e

    if room is None:
        logger.info("Room not found for compatibility check", property_id=property_id, room_name=room_name)
        return CompatibilityResult(compatible=False, reason="Room not found", room_name=room_name)

    result = CompatibilityResult(
        compatible=True,
        room_name=room.name,
        room_info=RoomInfo(**room.to_dict())
    )

    equipment_list = equipment_list or []
    if not equipment_list:
        result.equipment_notes.append(NO_EQUIPMENT_NOTE)
        return result

    info_text = room_text(room)
    for equipment in equipment_list:
        for note, tag in assess_equipment(info_text, equipment):
            result.equipment_notes.append(note)
            if tag not in result.requirements:
                result.requirements.append(tag)

    return result

import time
from typing import Any, Dict, List, Optional

import pandas as pd
from sqlalchemy import or_
from sqlalchemy.exc import SQLAlchemyError

from database.models import InventoryItem
from models.schemas import InventoryStatus, ItemCheckResult, MatchingItem, validate_equipment_requests
from utils.exceptions import DatabaseException
from utils.logger import get_component_logger

logger = get_component_logger("inventory_checker")

AVAILABLE = InventoryStatus.AVAILABLE.value

def _available_items(session, property_id):
    return session.query(InventoryItem).filter(
        InventoryItem.property_id == property_id,
        InventoryItem.status == AVAILABLE
    )

def check_inventory(session, property_id, equipment_requests) -> List[ItemCheckResult]:
    """
    Check requested equipment against available stock of a property.

    Organization:
    - Each request matches available rows by exact item name OR by category
    - Quantities of all matching rows are summed
    - A line is sufficient when the summed quantity covers the request

    Args:
        session (Session): Open database session
        property_id (int): Property whose stock is checked
        equipment_requests (list): EquipmentRequest objects or dicts with item_name/category/quantity

    Returns:
        list of ItemCheckResult, one per request, in request order
    """
    started = time.time()
    requests = validate_equipment_requests(equipment_requests)
    logger.log_check_start("inventory", property_id, {"lines": len(requests)})

    results = []
    try:
        for request in requests:
            rows = _available_items(session, property_id).filter(
                or_(
                    InventoryItem.name == request.identifier,
                    InventoryItem.category == request.category_key
                )
            ).all()

            available = sum(row.quantity_available or 0 for row in rows)
            results.append(ItemCheckResult(
                item_name=request.identifier,
                requested=request.quantity,
                available=available,
                sufficient=available >= request.quantity,
                matching_items=[
                    MatchingItem(name=row.name, available=row.quantity_available or 0, model=row.model)
                    for row in rows
                ]
            ))
    except SQLAlchemyError as e:
        logger.log_check_error("inventory", e, {"property_id": property_id})
        raise DatabaseException(f"Inventory lookup failed: {e}", error_code="INVENTORY_QUERY_FAILED") from e

    logger.log_check_complete("inventory", property_id, {
        "lines": len(results),
        "insufficient": sum(1 for r in results if not r.sufficient)
    }, time.time() - started)
    return results

def fetch_inventory(session, property_id, category: Optional[str] = None,
                    sub_category: Optional[str] = None, search_term: Optional[str] = None) -> Dict[str, Any]:
    """
    List available inventory, optionally narrowed by category, sub-category or a search term.

    Args:
        session (Session): Open database session
        property_id (int): Property to list
        category (str, optional): Exact category, e.g. "Audio"
        sub_category (str, optional): Exact sub-category, e.g. "Microphones"
        search_term (str, optional): Case-insensitive match on name or description

    Returns:
        dict: {
            items: list of dicts (name, description, category, sub_category,
                   quantity_available, model, manufacturer),
            total_items: int
        }
    """
    query = _available_items(session, property_id)
    if category:
        query = query.filter(InventoryItem.category == category)
    if sub_category:
        query = query.filter(InventoryItem.sub_category == sub_category)
    if search_term:
        pattern = f"%{search_term}%"
        query = query.filter(or_(InventoryItem.name.ilike(pattern), InventoryItem.description.ilike(pattern)))

    try:
        rows = query.order_by(InventoryItem.category, InventoryItem.name).all()
    except SQLAlchemyError as e:
        raise DatabaseException(f"Inventory lookup failed: {e}", error_code="INVENTORY_QUERY_FAILED") from e

    items = [
        {
            "name": row.name,
            "description": row.description,
            "category": row.category,
            "sub_category": row.sub_category,
            "quantity_available": row.quantity_available,
            "model": row.model,
            "manufacturer": row.manufacturer
        }
        for row in rows
    ]
    return {"items": items, "total_items": len(items)}

def summarize_inventory(session, property_id) -> List[Dict[str, Any]]:
    """Available stock grouped by (category, sub_category) with row count and total quantity"""
    try:
        rows = _available_items(session, property_id).all()
    except SQLAlchemyError as e:
        raise DatabaseException(f"Inventory lookup failed: {e}", error_code="INVENTORY_QUERY_FAILED") from e

    if not rows:
        return []

    inventory_df = pd.DataFrame([
        {
            "category": row.category or "Uncategorized",
            "sub_category": row.sub_category or "",
            "quantity_available": row.quantity_available or 0
        }
        for row in rows
    ])
    summary = inventory_df.groupby(["category", "sub_category"], as_index=False).agg(
        count=("quantity_available", "size"),
        total_quantity=("quantity_available", "sum")
    )

    return [
        {
            "category": record["category"],
            "sub_category": record["sub_category"] or None,
            "count": int(record["count"]),
            "total_quantity": int(record["total_quantity"])
        }
        for record in summary.to_dict("records")
    ]

from __future__ import annotations

from typing import Dict, Optional


# filter definition id -> table column id. One-directional on purpose;
# filter_id_for scans it rather than keeping a second table.
FILTER_COLUMN_MAP: Dict[str, str] = {
    "part-name": "partName",
    "part-number": "partNumber",
    "type": "type",
    "delivery-status": "deliveryStatus",
    "plant": "plant",
    "supplier": "supplier",
    "buyer-codes": "buyerCodes",
    "escalation-level": "escalationLevel",
    "otd-status": "otdStatus",
    "open-quantity": "openQuantity",
    "price": "price",
    "inventory-value": "inventoryValue",
    "consumed-part-buyer-codes": "consumedPartBuyerCodes",
    "produced-part-buyer-codes": "producedPartBuyerCodes",
    "mrp-code": "mrpCode",
}


def column_id_for(filter_id: str) -> Optional[str]:
    """Column backing a filter definition, or None when it has no column.

    None means "use the generic filter editor", not an error.
    """
    return FILTER_COLUMN_MAP.get(filter_id)


def filter_id_for(column_id: str) -> Optional[str]:
    for filter_id, mapped in FILTER_COLUMN_MAP.items():
        if mapped == column_id:
            return filter_id
    return None

"""Filter definitions for the Purchase Order book.

Display and validation metadata only; merging and equality never look here.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Tuple

from sortfilter.config import CONDITIONS, default_condition_for
from sortfilter.values import ScalarValue


@dataclass(frozen=True)
class FilterOption:
    label: str
    value: ScalarValue


@dataclass(frozen=True)
class FilterDefinition:
    id: str
    label: str
    category: str
    type: str
    options: Tuple[FilterOption, ...] = field(default_factory=tuple)
    is_favorite: bool = False

    @property
    def default_condition(self) -> str:
        return default_condition_for(self.type)

    @property
    def conditions(self) -> Tuple[str, ...]:
        return CONDITIONS.get(self.type, ())


def _options(*values: ScalarValue) -> Tuple[FilterOption, ...]:
    return tuple(FilterOption(str(v), v) for v in values)


FILTER_DEFINITIONS: List[FilterDefinition] = [
    # Favorites
    FilterDefinition("quantity-comparison", "Quantity Comparison", "favorites", "number", is_favorite=True),
    FilterDefinition(
        "consumed-part-buyer-codes",
        "Consumed part Buyer Codes",
        "favorites",
        "multi-select",
        _options("ABC123", "BCD567", "CDE890"),
        is_favorite=True,
    ),
    FilterDefinition(
        "produced-part-buyer-codes",
        "Produced part Buyer Codes",
        "favorites",
        "multi-select",
        _options("XYZ789", "YZA012"),
        is_favorite=True,
    ),
    # General
    FilterDefinition("date-comparison", "Date Comparison", "general", "date"),
    FilterDefinition("quantity-range", "Quantity Range", "general", "number"),
    FilterDefinition("open-quantity", "Open Quantity", "general", "number"),
    FilterDefinition("price", "Price", "general", "number"),
    FilterDefinition("inventory-value", "Inventory Value", "general", "number"),
    # Consumed parts
    FilterDefinition(
        "buyer-codes",
        "Buyer Codes",
        "consumed-parts",
        "multi-select",
        _options("ABC123", "BCD567", "CDE890", "DEF123"),
    ),
    FilterDefinition("escalation-level", "Escalation Level", "consumed-parts", "multi-select", _options(0, 1, 2, 3)),
    FilterDefinition("mrp-code", "MRP Code", "consumed-parts", "text"),
    # Produced parts
    FilterDefinition(
        "part-name",
        "Part Name",
        "produced-parts",
        "multi-select",
        _options(
            "Headset bearings",
            "Brake cables",
            "Brake booster",
            "Bottom bracket",
            "Valve stems",
            "Pedals",
            "Crankset",
        ),
    ),
    FilterDefinition(
        "part-number",
        "Part Number",
        "produced-parts",
        "multi-select",
        _options("Part_54", "Part_8", "Part_50", "Part_99", "Part_101"),
    ),
    FilterDefinition("type", "Type", "produced-parts", "select", _options("PO", "PR", "STO")),
    FilterDefinition(
        "delivery-status",
        "Delivery Status",
        "produced-parts",
        "select",
        _options("Pending", "Shipped", "Delivered", "Cancelled"),
    ),
    FilterDefinition(
        "otd-status",
        "OTD Status",
        "produced-parts",
        "select",
        (FilterOption("On Time", "on-time"), FilterOption("At Risk", "at-risk"), FilterOption("Late", "late")),
    ),
    FilterDefinition(
        "plant",
        "Plant",
        "produced-parts",
        "multi-select",
        _options("plant_1", "plant_100000", "plant_100001", "plant_100002", "plant_100003"),
    ),
    FilterDefinition(
        "supplier",
        "Supplier",
        "produced-parts",
        "multi-select",
        _options(
            "PedalPower Industries",
            "Cyclist's Choice Components",
            "ProPedal Solutions",
            "GearShift Distribution",
            "Velocity Cycle Parts",
        ),
    ),
]


def find_definition(
    filter_id: str, definitions: Optional[Iterable[FilterDefinition]] = None
) -> Optional[FilterDefinition]:
    for d in FILTER_DEFINITIONS if definitions is None else definitions:
        if d.id == filter_id:
            return d
    return None


def group_filter_definitions(definitions: Iterable[FilterDefinition]) -> Dict[str, List[FilterDefinition]]:
    definitions = list(definitions)
    return {
        "favorites": [d for d in definitions if d.is_favorite],
        "general": [d for d in definitions if d.category == "general"],
        "consumed_parts": [d for d in definitions if d.category == "consumed-parts"],
        "produced_parts": [d for d in definitions if d.category == "produced-parts"],
    }


def search_filter_definitions(definitions: Iterable[FilterDefinition], query: str) -> List[FilterDefinition]:
    definitions = list(definitions)
    q = (query or "").strip().lower()
    if not q:
        return definitions
    return [d for d in definitions if q in d.label.lower() or q in d.id.lower()]


def filter_display_values(values: Iterable[ScalarValue], definition: Optional[FilterDefinition]) -> List[str]:
    """Human-readable labels for selected values."""
    if definition is None or not definition.options:
        return [str(v) for v in values]
    labels = {opt.value: opt.label for opt in definition.options}
    return [labels.get(v) or str(v) for v in values]

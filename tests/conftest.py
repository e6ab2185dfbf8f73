"""
Pytest configuration and fixtures for the sort & filter engine tests.
"""
import sys
from pathlib import Path

import pandas as pd
import pytest

# Add project root to Python path
project_dir = Path(__file__).parent.parent
sys.path.insert(0, str(project_dir))

from sortfilter.records import Routine, Scope, ScopeFilter  # noqa: E402
from sortfilter.repository import InMemoryRepository  # noqa: E402


@pytest.fixture
def po_rows():
    """A small purchase order book."""
    return [
        {"id": "1", "type": "PO", "partName": "Pedals", "plant": "plant_1", "deliveryStatus": "Pending",
         "otdStatus": "late", "escalationLevel": 2, "price": 10.5, "openQuantity": 100,
         "supplier": "PedalPower Industries", "deliveryDate": "2024-01-15"},
        {"id": "2", "type": "PR", "partName": "Crankset", "plant": "plant_1", "deliveryStatus": "Shipped",
         "otdStatus": "on-time", "escalationLevel": 0, "price": 42.0, "openQuantity": 5,
         "supplier": "ProPedal Solutions", "deliveryDate": "2024-02-01"},
        {"id": "3", "type": "PO", "partName": "Brake cables", "plant": "plant_100000", "deliveryStatus": "Cancelled",
         "otdStatus": "at-risk", "escalationLevel": 1, "price": 3.25, "openQuantity": 250,
         "supplier": "GearShift Distribution", "deliveryDate": "2024-03-10"},
        {"id": "4", "type": "STO", "partName": "Pedals", "plant": "plant_100001", "deliveryStatus": "Delivered",
         "otdStatus": "on-time", "escalationLevel": 3, "price": 10.5, "openQuantity": 0,
         "supplier": "Velocity Cycle Parts", "deliveryDate": "2023-12-24"},
        {"id": "5", "type": "PO", "partName": "Valve stems", "plant": "plant_1", "deliveryStatus": "Pending",
         "otdStatus": "late", "escalationLevel": 0, "price": 1.0, "openQuantity": 40,
         "supplier": "PedalPower Industries", "deliveryDate": "2024-01-02"},
    ]


@pytest.fixture
def po_df(po_rows):
    return pd.DataFrame(po_rows)


@pytest.fixture
def routine():
    return Routine(
        id="routine-1",
        name="Late POs",
        filters=[{"id": "type", "value": "PO"}, {"id": "otd-status", "value": ["late"]}],
        sorting=[{"id": "price", "desc": True}],
        group_by="plant",
    )


@pytest.fixture
def scope():
    return Scope(
        id="scope-1",
        name="Plant 1",
        filters=[
            ScopeFilter("sf-1", "plant", ["plant_1"]),
            ScopeFilter("sf-2", "delivery-status", ["Cancelled"], condition="isNot"),
            ScopeFilter("sf-3", "supplier", []),
        ],
    )


@pytest.fixture
def routine_repo(routine):
    return InMemoryRepository([routine])


@pytest.fixture
def scope_repo(scope):
    return InMemoryRepository([scope])

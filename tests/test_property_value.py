"""Tests for raw catalog value resolution."""

import pytest

from deadlock_planner.models.item import Item, ItemProperty
from deadlock_planner.parser.property_value import resolve_property, resolve_value, sum_property


@pytest.mark.parametrize(
    "raw, expected",
    [
        (5, 5.0),
        (0.25, 0.25),
        ("42", 42.0),
        ("5m", 5.0),
        ("+12%", 12.0),
        ("-0.4s", -0.4),
        ("1,500", 1500.0),
    ],
)
def test_resolve_value_extracts_number(raw, expected):
    assert resolve_value(raw) == pytest.approx(expected)


@pytest.mark.parametrize("raw", [None, "", "abc", "1.2.3", "+-", ".", True, [1], {"value": 3}])
def test_resolve_value_malformed_is_zero(raw):
    assert resolve_value(raw) == 0.0


def test_resolve_property_handles_missing_descriptor():
    assert resolve_property(None) == 0.0
    assert resolve_property(ItemProperty(value="15m")) == 15.0


def test_sum_property_adds_keys_across_items():
    items = [
        Item(id=1, class_name="a", name="A", properties={
            "FireRate": ItemProperty(value=10),
            "BonusFireRate": ItemProperty(value="5"),
        }),
        Item(id=2, class_name="b", name="B", properties={"FireRate": ItemProperty(value="+20%")}),
        Item(id=3, class_name="c", name="C"),
    ]
    assert sum_property(items, ("FireRate", "BonusFireRate")) == pytest.approx(35.0)
    assert sum_property([], ("FireRate",)) == 0.0

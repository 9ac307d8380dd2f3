"""Shared fixtures.

The design document tree (X and Q are EXPLICIT):

           A
           |
        B-----C
        |     |
      X*--Y   Z
      |
    P---Q*
"""

import copy

import pytest

from field_header_filter.field_filter import clear_field_filter_cache

FULL_OBJECT = {
    "A": {
        "B": {
            "X": {
                "P": "p-value",
                "Q": "q-value",
            },
            "Y": "y-value",
        },
        "C": {
            "Z": "z-value",
        },
    },
}

EXPLICIT_FIELDS = ["A.B.X", "A.B.X.Q"]


@pytest.fixture
def full_object():
    """Fresh copy of the design document tree."""
    return copy.deepcopy(FULL_OBJECT)


@pytest.fixture
def explicit_fields():
    return list(EXPLICIT_FIELDS)


@pytest.fixture(autouse=True)
def fresh_filter_cache():
    clear_field_filter_cache()
    yield
    clear_field_filter_cache()

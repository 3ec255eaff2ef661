# tests/test_validation.py

from __future__ import annotations

import pytest

from task_tracker.domain.errors import ValidationError
from task_tracker.domain.validation import validate_task_input


def test_trims_both_fields() -> None:
    data = validate_task_input({"title": "  Buy milk ", "description": "  2 litres  "})
    assert data.title == "Buy milk"
    assert data.description == "2 litres"


@pytest.mark.parametrize("description", [None, False, 0, ""])
def test_falsy_description_counts_as_absent(description) -> None:
    assert validate_task_input({"title": "Buy milk", "description": description}).description == ""


@pytest.mark.parametrize("payload", [{"title": "Buy milk"}, {"title": "Buy milk", "description": None}])
def test_missing_description_becomes_empty_string(payload) -> None:
    assert validate_task_input(payload).description == ""


def test_limits_apply_after_trimming() -> None:
    data = validate_task_input({"title": "  " + "t" * 100 + "  ", "description": " " + "d" * 500 + " "})
    assert len(data.title) == 100
    assert len(data.description) == 500


@pytest.mark.parametrize(
    "payload, message",
    [
        ([], "Request body must be a JSON object"),
        ({}, "Title is required and must be a string"),
        ({"title": ""}, "Title is required and must be a string"),
        ({"title": "   "}, "Title is required and must be a string"),
        ({"title": 42}, "Title is required and must be a string"),
        ({"title": "t" * 101}, "Title must be 100 characters or less"),
        ({"title": "ok", "description": 7}, "Description must be a string"),
        ({"title": "ok", "description": True}, "Description must be a string"),
        ({"title": "ok", "description": []}, "Description must be a string"),
        ({"title": "ok", "description": "d" * 501}, "Description must be 500 characters or less"),
    ],
)
def test_rejections(payload, message: str) -> None:
    with pytest.raises(ValidationError) as exc:
        validate_task_input(payload)
    assert exc.value.message == message
    assert exc.value.to_body() == {"error": message}


def test_first_violation_wins() -> None:
    # both fields are bad; the title rule is checked first
    with pytest.raises(ValidationError, match="Title must be"):
        validate_task_input({"title": "t" * 101, "description": 5})

import pytest

from taskflow.errors import ValidationError
from taskflow.models import (
    PRIORITIES,
    validate_create,
    validate_parse_request,
    validate_update,
)
from llm.schemas import validate_extraction_result


def _payload(**overrides):
    data = {"name": "Finish landing page", "assignee": "Aman", "dueDate": "11:00 PM, 20 June"}
    data.update(overrides)
    return data


def test_create_defaults():
    t = validate_create(_payload())
    assert t.priority == "P3"
    assert t.status == "pending"
    assert t.due_date == "11:00 PM, 20 June"


def test_create_honours_explicit_status():
    t = validate_create(_payload(status="in-progress"))
    assert t.status == "in-progress"


@pytest.mark.parametrize("priority", PRIORITIES)
def test_create_accepts_every_priority(priority):
    assert validate_create(_payload(priority=priority)).priority == priority


def test_create_accepts_snake_case_due_date():
    data = _payload()
    data["due_date"] = data.pop("dueDate")
    assert validate_create(data).due_date == "11:00 PM, 20 June"


def test_create_keeps_text_as_given():
    t = validate_create(_payload(name="  padded  "))
    assert t.name == "  padded  "


def test_update_empty_is_valid():
    u = validate_update({})
    assert u.changes() == {}


def test_update_only_supplied_fields():
    u = validate_update({"status": "completed", "dueDate": "Friday"})
    assert u.changes() == {"status": "completed", "due_date": "Friday"}


def test_parse_request():
    assert validate_parse_request({"input": "Call mom"}).input == "Call mom"


def test_extraction_result_mapping():
    r = validate_extraction_result(
        {"taskName": "Call client", "assignee": "Rajeev", "dueDate": "5:00 PM, Tomorrow"}
    )
    assert r.priority == "P3"
    assert r.to_create_payload() == {
        "name": "Call client",
        "assignee": "Rajeev",
        "dueDate": "5:00 PM, Tomorrow",
        "priority": "P3",
        "status": "pending",
    }


def test_extraction_result_ignores_extra_keys():
    r = validate_extraction_result({"taskName": "X", "confidence": 0.9})
    assert r.task_name == "X"


def test_extraction_blank_assignee_becomes_unassigned():
    r = validate_extraction_result({"taskName": "X", "assignee": " ", "dueDate": ""})
    assert r.assignee == "Unassigned"
    assert r.due_date == "No due date"


def test_validation_error_lists_fields():
    with pytest.raises(ValidationError) as exc:
        validate_create({"name": "x"})
    assert set(exc.value.fields) == {"assignee", "dueDate"}

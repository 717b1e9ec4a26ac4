import math
from numbers import Real

from .exceptions import FieldValidationError, InvariantViolation

MAX_NAME_LENGTH = 200
MAX_COMPONENT_LENGTH = 100
MAX_TYPE_LENGTH = 50


def is_rank(value):
    # bool is an int subclass but never a valid rank; NaN has no position
    if not isinstance(value, Real) or isinstance(value, bool):
        return False
    return math.isfinite(value)


def assert_section_fields(data):
    """
    Type-check the plain section fields present in `data`.

    sectionData is checked separately against its component schema.
    """
    errors = {}

    if "name" in data and data["name"] is not None:
        if not isinstance(data["name"], str):
            errors["name"] = "must be a string"
        elif len(data["name"]) > MAX_NAME_LENGTH:
            errors["name"] = f"must be at most {MAX_NAME_LENGTH} characters"

    if "component" in data and data["component"] is not None:
        if not isinstance(data["component"], str):
            errors["component"] = "must be a string"
        elif len(data["component"]) > MAX_COMPONENT_LENGTH:
            errors["component"] = f"must be at most {MAX_COMPONENT_LENGTH} characters"

    if "enabled" in data and not isinstance(data["enabled"], bool):
        errors["enabled"] = "must be true or false"

    if "order" in data and not is_rank(data["order"]):
        errors["order"] = "must be a finite number"

    if "type" in data:
        if not isinstance(data["type"], str) or not data["type"].strip():
            errors["type"] = "must be a non-empty string"
        elif len(data["type"]) > MAX_TYPE_LENGTH:
            errors["type"] = f"must be at most {MAX_TYPE_LENGTH} characters"

    if errors:
        raise FieldValidationError(errors)


def assert_reorder_items(items):
    """Validate a reorder payload: [{id, order}, ...] with unique ids."""
    if not isinstance(items, list):
        raise InvariantViolation("Reorder payload must be a list of {id, order} items")

    seen = set()
    for index, item in enumerate(items):
        if not isinstance(item, dict):
            raise InvariantViolation(f"Reorder item {index} must be an object")

        section_id = item.get("id")
        if not isinstance(section_id, str) or not section_id:
            raise InvariantViolation(f"Reorder item {index} is missing an id")

        if not is_rank(item.get("order")):
            raise InvariantViolation(f"Reorder item {section_id} has a non-numeric or non-finite order")

        if section_id in seen:
            raise InvariantViolation(f"Section {section_id} appears more than once")
        seen.add(section_id)


def assert_section_orders(sections):
    orders = sorted(section.order for section in sections)
    expected = list(range(1, len(orders) + 1))

    if orders != expected:
        raise InvariantViolation(
            f"Section orders are not consecutive starting from 1: {orders}"
        )

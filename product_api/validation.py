"""
validation.py — Declarative request validation pipeline

Each route declares an ordered rule table: (field, predicate, message).
The pipeline runs as a FastAPI dependency before the handler, evaluates
every field, and aborts the request with a single 400 listing all
offending fields.

Business Rules:
- Every rule runs; each failing rule adds one {field, message} entry
- Predicates accept any JSON value (missing, null, wrong type) safely
- Path parameters are validated from the raw URL segment (no coercion
  happens before the rules run, so a bad id never reaches the database)
- A body that is not a JSON object is reported as field "body"

Called by: routers/products.py
Depends on: schemas/errors.py (FieldError)
"""

import json
import math
import re
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

from fastapi import Request

from .schemas.errors import FieldError

BODY_METHODS = ("POST", "PUT", "PATCH")

_INT_RE = re.compile(r"-?\d+")


class InputValidationError(Exception):
    """Raised by the pipeline; rendered as 400 by main.py."""

    def __init__(self, errors: list[FieldError]):
        self.errors = errors
        super().__init__(", ".join(f"{e.field}: {e.message}" for e in errors))


@dataclass(frozen=True)
class Rule:
    field: str
    check: Callable[[Any], bool]
    message: str
    location: str = "body"  # "body" | "path"


@dataclass
class ValidatedInput:
    body: dict = field(default_factory=dict)
    path: dict = field(default_factory=dict)

    def path_int(self, name: str) -> int:
        return int(self.path[name])


# ── Predicates ───────────────────────────────────────────────────────


def is_present(value: Any) -> bool:
    return value is not None


def is_string(value: Any) -> bool:
    return isinstance(value, str)


def not_blank(value: Any) -> bool:
    return isinstance(value, str) and bool(value.strip())


def max_length(limit: int) -> Callable[[Any], bool]:
    def check(value: Any) -> bool:
        return not isinstance(value, str) or len(value) <= limit

    return check


def is_number(value: Any) -> bool:
    if isinstance(value, bool):
        return False
    if not isinstance(value, (int, float, str)):
        return False
    try:
        return math.isfinite(float(value))
    except (ValueError, OverflowError):
        return False


def is_positive(value: Any) -> bool:
    return is_number(value) and float(value) > 0


def is_bool(value: Any) -> bool:
    return isinstance(value, bool)


def is_integer(value: Any) -> bool:
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return True
    return isinstance(value, str) and _INT_RE.fullmatch(value) is not None


# ── Rule tables ──────────────────────────────────────────────────────

ID_RULES = (
    Rule("id", is_present, "Product id is required", location="path"),
    Rule("id", is_integer, "Invalid id", location="path"),
)

CREATE_RULES = (
    Rule("name", is_present, "Product name is required"),
    Rule("name", is_string, "Product name must be text"),
    Rule("name", not_blank, "Product name cannot be empty"),
    Rule("name", max_length(100), "Product name must be at most 100 characters"),
    Rule("price", is_present, "Product price is required"),
    Rule("price", is_number, "Product price must be a number"),
    Rule("price", is_positive, "Product price must be greater than 0"),
)

UPDATE_RULES = ID_RULES + CREATE_RULES + (
    Rule("availability", is_bool, "Availability must be a boolean"),
)


# ── Pipeline ─────────────────────────────────────────────────────────


def run_rules(
    rules: Iterable[Rule],
    body: Mapping[str, Any] | None = None,
    path_params: Mapping[str, Any] | None = None,
) -> list[FieldError]:
    """Evaluate every rule in order and return one error per failing rule."""
    sources = {"body": body or {}, "path": path_params or {}}
    errors: list[FieldError] = []
    for rule in rules:
        value = sources[rule.location].get(rule.field)
        if not rule.check(value):
            errors.append(FieldError(field=rule.field, message=rule.message))
    return errors


async def _read_json_object(request: Request) -> dict:
    if not (await request.body()).strip():
        return {}
    try:
        data = await request.json()
    except (UnicodeDecodeError, json.JSONDecodeError):
        raise InputValidationError([FieldError(field="body", message="Malformed JSON body")])
    if not isinstance(data, dict):
        raise InputValidationError(
            [FieldError(field="body", message="Request body must be a JSON object")]
        )
    return data


def validate_request(*rules: Rule):
    """Build a dependency that runs ``rules`` and short-circuits on failure."""
    reads_body = any(r.location == "body" for r in rules)

    async def dependency(request: Request) -> ValidatedInput:
        body = {}
        if reads_body and request.method in BODY_METHODS:
            body = await _read_json_object(request)
        path = dict(request.path_params)
        errors = run_rules(rules, body, path)
        if errors:
            raise InputValidationError(errors)
        return ValidatedInput(body=body, path=path)

    return dependency

# =============================================================================
# app/validation.py - Declarative Request Validation
# =============================================================================
# Routes declare the rules a request must satisfy as chains:
#
#   param("id").is_int().with_message("El ID del producto no es válido")
#   body("price").is_numeric().not_empty().custom(lambda v: ...)
#
# validate(*chains) turns a list of chains into a FastAPI dependency. Every
# check of every chain runs (no bail-out); each failing check adds one error
# entry, in declaration order. If any failed, InputValidationError is raised
# and the exception handler answers 400 before the endpoint runs.
#
# Built-in checks work on the string form of the value (missing -> "",
# True -> "true", 100.0 -> "100"); custom predicates get the raw value.
# =============================================================================

from __future__ import annotations

import json
import logging
import math
import re
from decimal import Decimal
from typing import Any, Callable

from fastapi import Depends, Request

from app.exceptions import InputValidationError, InvalidJSONBodyError

logger = logging.getLogger(__name__)

DEFAULT_MESSAGE = "Invalid value"

INT_PATTERN = re.compile(r"^[-+]?[0-9]+$")
NUMERIC_PATTERN = re.compile(r"^[+-]?([0-9]*[.])?[0-9]+$")
NUMBER_PATTERN = re.compile(r"^[+-]?([0-9]+\.?[0-9]*|\.[0-9]+)([eE][+-]?[0-9]+)?$")
BOOLEAN_STRINGS = {"true", "false", "1", "0"}
TRUTHY_STRINGS = {"true", "1"}


class _Missing:
    """Marker for a field that is absent from the request."""

    def __repr__(self) -> str:
        return "MISSING"


MISSING = _Missing()


# =============================================================================
# Value Coercion
# =============================================================================

def _format_float(value: float) -> str:
    """Shortest round-trip form, positional between 1e-6 and 1e21."""
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value == 0:
        return "0"
    if value.is_integer() and abs(value) < 1e21:
        return str(int(value))
    if 1e-6 <= abs(value) < 1e21:
        return format(Decimal(repr(value)), "f")

    mantissa, _, exponent = repr(value).partition("e")
    return f"{mantissa}e{int(exponent):+d}"


def to_string(value: Any) -> str:
    """
    String form used by the built-in checks.

    Mirrors how JSON values print in a browser: integral floats lose their
    fraction, tiny and huge floats use exponent form, objects become
    "[object Object]", lists are comma-joined.
    """
    if value is MISSING or value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        return _format_float(value)
    if isinstance(value, (list, tuple)):
        return ",".join(to_string(item) for item in value)
    if isinstance(value, dict):
        return "[object Object]"
    return str(value)


def to_number(value: Any) -> float:
    """
    Loose numeric coercion for custom predicates.

    Returns NaN for anything that has no numeric reading.
    """
    if value is MISSING:
        return math.nan
    if value is None:
        return 0.0
    if isinstance(value, bool):
        return 1.0 if value else 0.0
    if isinstance(value, float):
        return value
    if isinstance(value, int):
        try:
            return float(value)
        except OverflowError:
            return math.inf if value > 0 else -math.inf
    if isinstance(value, dict):
        return math.nan

    text = to_string(value).strip()
    if text == "":
        return 0.0
    if not NUMBER_PATTERN.match(text):
        return math.nan
    return float(text)


def to_float(value: Any) -> float:
    """Sanitizer for a value that passed is_numeric()."""
    return float(to_string(value))


def to_boolean(value: Any) -> bool:
    """Sanitizer for a value that passed is_boolean()."""
    return to_string(value).lower() in TRUTHY_STRINGS


def is_greater_than_zero(value: Any) -> bool:
    """Price predicate: finite loose numeric value strictly above zero."""
    number = to_number(value)
    return math.isfinite(number) and number > 0


# =============================================================================
# Validation Chains
# =============================================================================

class ValidationChain:
    """
    Ordered checks for one field of one request location.

    Each check carries its own message; with_message() sets the message of
    the most recently added check.
    """

    def __init__(self, location: str, field: str):
        self.location = location
        self.field = field
        self._checks: list[list[Any]] = []

    def __repr__(self) -> str:
        return f"<ValidationChain {self.location}.{self.field} checks={len(self._checks)}>"

    def _add(self, predicate: Callable[[Any], bool], on_string: bool = True) -> ValidationChain:
        self._checks.append([predicate, on_string, DEFAULT_MESSAGE])
        return self

    # -------------------------------------------------------------------------
    # Checks
    # -------------------------------------------------------------------------

    def is_int(self) -> ValidationChain:
        return self._add(lambda s: bool(INT_PATTERN.match(s)))

    def is_numeric(self) -> ValidationChain:
        return self._add(lambda s: bool(NUMERIC_PATTERN.match(s)))

    def is_boolean(self) -> ValidationChain:
        return self._add(lambda s: s in BOOLEAN_STRINGS)

    def not_empty(self) -> ValidationChain:
        return self._add(lambda s: s != "")

    def custom(self, predicate: Callable[[Any], bool]) -> ValidationChain:
        """Add a predicate that receives the raw value."""
        return self._add(predicate, on_string=False)

    def with_message(self, message: str) -> ValidationChain:
        if not self._checks:
            raise ValueError("with_message() must follow a check")
        self._checks[-1][2] = message
        return self

    # -------------------------------------------------------------------------
    # Execution
    # -------------------------------------------------------------------------

    def run(self, source: dict[str, Any]) -> list[dict[str, Any]]:
        """
        Run every check against the field's value in source.

        Returns:
            One error dict per failed check, in declaration order
        """
        value = source.get(self.field, MISSING)
        as_string = to_string(value)
        errors = []

        for predicate, on_string, message in self._checks:
            try:
                passed = predicate(as_string if on_string else value)
            except (TypeError, ValueError, OverflowError) as e:
                logger.debug(f"Check on {self.location}.{self.field} raised: {e}")
                passed = False

            if not passed:
                errors.append(self._error(value, message))

        return errors

    def _error(self, value: Any, message: str) -> dict[str, Any]:
        error: dict[str, Any] = {"type": "field"}
        if value is not MISSING:
            error["value"] = _json_safe(value)
        error["msg"] = message
        error["path"] = self.field
        error["location"] = self.location
        return error


def _json_safe(value: Any) -> Any:
    """Replace non-finite floats with None so the error echo stays valid JSON."""
    if isinstance(value, float) and not math.isfinite(value):
        return None
    if isinstance(value, list):
        return [_json_safe(item) for item in value]
    if isinstance(value, dict):
        return {key: _json_safe(item) for key, item in value.items()}
    return value


def param(field: str) -> ValidationChain:
    """Start a chain on a path parameter."""
    return ValidationChain("params", field)


def body(field: str) -> ValidationChain:
    """Start a chain on a JSON body field."""
    return ValidationChain("body", field)


# =============================================================================
# Request Dependencies
# =============================================================================

def _parse_int(text: str) -> int | float:
    # Integers past the int-conversion digit limit read as floats (inf).
    try:
        return int(text)
    except ValueError:
        return float(text)


def _reject_constant(name: str) -> Any:
    raise ValueError(f"Unexpected token {name} in JSON")


async def get_json_body(request: Request) -> dict[str, Any]:
    """
    Parse the request body as a JSON object.

    Bodies that are empty or not sent as JSON count as {}; valid JSON that
    is not an object has no fields either.

    Raises:
        InvalidJSONBodyError: If a JSON body cannot be decoded
    """
    content_type = request.headers.get("content-type", "")
    if "json" not in content_type.lower():
        return {}

    raw = await request.body()
    if not raw.strip():
        return {}

    try:
        payload = json.loads(raw, parse_int=_parse_int, parse_constant=_reject_constant)
    except (ValueError, UnicodeDecodeError) as e:
        logger.debug(f"Rejected malformed JSON body: {e}")
        raise InvalidJSONBodyError(str(e))

    return payload if isinstance(payload, dict) else {}


def validate(*chains: ValidationChain) -> Callable:
    """
    Build a dependency that runs chains and rejects the request on failure.

    Usage:
        @router.get("/{id}", dependencies=[Depends(validate(param("id").is_int()))])
    """

    async def dependency(
        request: Request,
        payload: dict[str, Any] = Depends(get_json_body),
    ) -> None:
        sources = {
            "params": request.path_params,
            "body": payload,
        }

        errors = []
        for chain in chains:
            errors.extend(chain.run(sources[chain.location]))

        if errors:
            logger.debug(f"{request.method} {request.url.path} failed validation: {errors}")
            raise InputValidationError(errors)

    return dependency

"""Declarative parameter validation for unified tool handlers.

Each handler declares a schema dict mapping payload keys to type
descriptors and calls :func:`validate_payload` once, instead of checking
every field by hand.

Example::

    _GET_SCHEMA = {
        "task_id": Str(),
        "task_name": Str(),
        "include_subtasks": Bool(default=False),
    }


    async def _handle_get(*, service, **payload):
        err = validate_payload(
            payload,
            _GET_SCHEMA,
            tool_name="dependency",
            action="get",
            cross_field_rules=[AtLeastOne(("task_id", "task_name"))],
        )
        if err:
            return err
        # payload values are now validated and normalised in-place
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, FrozenSet, List, Mapping, Optional, Tuple, Union

from clickup_mcp.core.responses.types import ErrorCode
from clickup_mcp.tools.unified.common import make_validation_error_fn

# ---------------------------------------------------------------------------
# Schema types
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Str:
    """String parameter. Blank strings are treated as absent unless ``allow_empty``."""

    required: bool = False
    strip: bool = True
    allow_empty: bool = False
    max_length: Optional[int] = None
    choices: Optional[FrozenSet[str]] = None
    lower: bool = False
    error_code: ErrorCode = ErrorCode.INVALID_FORMAT
    remediation: Optional[str] = None


@dataclass(frozen=True)
class Num:
    """Numeric parameter. ``integer_only`` keeps the value an ``int``."""

    required: bool = False
    integer_only: bool = False
    min_val: Optional[Union[int, float]] = None
    max_val: Optional[Union[int, float]] = None
    default: Optional[Union[int, float]] = None
    error_code: ErrorCode = ErrorCode.INVALID_FORMAT
    remediation: Optional[str] = None


@dataclass(frozen=True)
class Bool:
    required: bool = False
    default: Optional[bool] = None
    error_code: ErrorCode = ErrorCode.INVALID_FORMAT
    remediation: Optional[str] = None


@dataclass(frozen=True)
class List_:
    required: bool = False
    min_items: Optional[int] = None
    max_items: Optional[int] = None
    error_code: ErrorCode = ErrorCode.INVALID_FORMAT
    remediation: Optional[str] = None


@dataclass(frozen=True)
class Dict_:
    required: bool = False
    error_code: ErrorCode = ErrorCode.INVALID_FORMAT
    remediation: Optional[str] = None


@dataclass(frozen=True)
class AtLeastOne:
    """Cross-field rule: at least one of *fields* must be present after normalisation."""

    fields: Tuple[str, ...]
    error_code: ErrorCode = ErrorCode.MISSING_REQUIRED
    remediation: Optional[str] = None
    message: Optional[str] = None


FieldSchema = Union[Str, Num, Bool, List_, Dict_]

_ErrorFn = Callable[..., dict]


# ---------------------------------------------------------------------------
# Validation engine
# ---------------------------------------------------------------------------


def validate_payload(
    payload: Dict[str, Any],
    schema: Mapping[str, FieldSchema],
    *,
    tool_name: str,
    action: str,
    request_id: Optional[str] = None,
    cross_field_rules: Optional[List[AtLeastOne]] = None,
) -> Optional[dict]:
    """Validate *payload* against *schema*, returning an error dict or ``None``.

    On success, payload values are normalised in-place: strings stripped
    (blank optional strings become ``None``), ``Num`` values coerced to
    ``float`` unless ``integer_only``, and ``Bool``/``Num`` defaults applied.

    Order: defaults, required presence, type, format/range, normalisation,
    then cross-field rules.
    """
    build_error = make_validation_error_fn(tool_name)

    def _error(field: str, message: str, *, code: ErrorCode, remediation: Optional[str] = None) -> dict:
        return build_error(
            field=field,
            action=action,
            message=message,
            request_id=request_id,
            code=code,
            remediation=remediation,
        )

    for field_name, spec in schema.items():
        value = payload.get(field_name)

        default = getattr(spec, "default", None)
        if value is None and default is not None:
            payload[field_name] = value = default

        if spec.required and value is None:
            return _error(
                field_name,
                f"Provide a non-empty {field_name} parameter",
                code=ErrorCode.MISSING_REQUIRED,
                remediation=spec.remediation,
            )
        if value is None:
            continue

        err = _check_type(field_name, value, spec, _error) or _check_format(field_name, value, spec, _error)
        if err is not None:
            return err

        _normalise(field_name, payload, spec)

    for rule in cross_field_rules or ():
        if all(payload.get(f) is None for f in rule.fields):
            names = ", ".join(f"'{f}'" for f in rule.fields)
            return _error(
                rule.fields[0],
                rule.message or f"At least one of {names} must be provided",
                code=rule.error_code,
                remediation=rule.remediation,
            )

    return None


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _check_type(field: str, value: Any, spec: FieldSchema, _error: _ErrorFn) -> Optional[dict]:
    code, remediation = spec.error_code, spec.remediation

    if isinstance(spec, Str) and not isinstance(value, str):
        return _error(field, f"{field} must be a string", code=code, remediation=remediation)

    if isinstance(spec, Num):
        # bool is a subclass of int
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            message = "Provide an integer value" if spec.integer_only else "Provide a numeric value"
            return _error(field, message, code=code, remediation=remediation)
        if spec.integer_only and not isinstance(value, int):
            return _error(field, f"{field} must be an integer", code=code, remediation=remediation)

    if isinstance(spec, Bool) and not isinstance(value, bool):
        return _error(field, "Expected a boolean value", code=code, remediation=remediation)

    if isinstance(spec, List_) and not isinstance(value, list):
        return _error(field, f"{field} must be a list", code=code, remediation=remediation)

    if isinstance(spec, Dict_) and not isinstance(value, dict):
        return _error(field, f"{field} must be an object", code=code, remediation=remediation)

    return None


def _check_format(field: str, value: Any, spec: FieldSchema, _error: _ErrorFn) -> Optional[dict]:
    code, remediation = spec.error_code, spec.remediation

    if isinstance(spec, Str):
        text = value.strip() if spec.strip else value
        if spec.required and not spec.allow_empty and not text:
            return _error(
                field,
                f"Provide a non-empty {field} parameter",
                code=ErrorCode.MISSING_REQUIRED,
                remediation=remediation,
            )
        if spec.max_length is not None and len(text) > spec.max_length:
            return _error(field, f"{field} must be at most {spec.max_length} characters", code=code, remediation=remediation)
        if spec.choices is not None and text:
            candidate = text.lower() if spec.lower else text
            if candidate not in spec.choices:
                allowed = ", ".join(sorted(spec.choices))
                return _error(field, f"Must be one of: {allowed}", code=code, remediation=remediation)

    elif isinstance(spec, Num):
        if spec.min_val is not None and value < spec.min_val:
            return _error(field, f"Value must be >= {spec.min_val}", code=code, remediation=remediation)
        if spec.max_val is not None and value > spec.max_val:
            return _error(field, f"Value must be <= {spec.max_val}", code=code, remediation=remediation)

    elif isinstance(spec, List_):
        if spec.min_items is not None and len(value) < spec.min_items:
            return _error(field, f"{field} must have at least {spec.min_items} items", code=code, remediation=remediation)
        if spec.max_items is not None and len(value) > spec.max_items:
            return _error(field, f"{field} must have at most {spec.max_items} items", code=code, remediation=remediation)

    return None


def _normalise(field: str, payload: Dict[str, Any], spec: FieldSchema) -> None:
    value = payload[field]

    if isinstance(spec, Str):
        if spec.strip:
            value = value.strip()
        if spec.lower:
            value = value.lower()
        payload[field] = value if (value or spec.allow_empty) else None

    elif isinstance(spec, Num) and not spec.integer_only:
        payload[field] = float(value)

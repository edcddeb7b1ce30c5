"""
Menu API — Request Validator
============================

What:  Applies a resource's rules to the path `id` and to request bodies.
How:   Rules are Pydantic models (see schemas/menu.py). Failures are turned
       into a flat list of `{field, reason}` and raised as ValidationError.
       Validation is pure and synchronous: no I/O, no storage access.
Who:   Called by the CRUD service before every storage call; the
       RequestValidationError handler in main.py reuses `format_errors`.
"""

from typing import Any, Dict, Iterable, List, Type

from pydantic import BaseModel, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from menu_api.exceptions import ValidationError

_id_adapter = TypeAdapter(int)

# Location prefixes FastAPI puts in front of field names
_REQUEST_LOCATIONS = {"body", "path", "query", "header", "cookie"}


def format_errors(errors: Iterable[Dict[str, Any]]) -> List[Dict[str, str]]:
    """
    Flatten Pydantic error dicts into `{field, reason}` pairs.

    `("body", "precio")` and `("precio",)` both become `"precio"`; an error
    on the whole body (empty location) is reported as field `"body"`.
    """
    formatted = []
    for err in errors:
        loc = [str(part) for part in err.get("loc", ())]
        if loc and loc[0] in _REQUEST_LOCATIONS:
            loc = loc[1:] or loc[:1]
        formatted.append({
            "field": ".".join(loc) or "body",
            "reason": err.get("msg", "valor inválido"),
        })
    return formatted


def validate_id(raw: Any, field: str = "id") -> int:
    """Validate a path id. Accepts ints and integer strings such as "12"."""
    if isinstance(raw, bool):
        raise ValidationError([{"field": field, "reason": "debe ser un número entero"}])
    try:
        return _id_adapter.validate_python(raw)
    except PydanticValidationError:
        raise ValidationError([{"field": field, "reason": "debe ser un número entero"}])


def validate_body(
    rules: Type[BaseModel],
    raw: Any,
    partial: bool = False,
) -> Dict[str, Any]:
    """
    Validate a request body against a rule set.

    Args:
        rules:   Create or update rules of a resource.
        raw:     Decoded JSON body (None when the request had no body).
        partial: True for updates: only the keys present in `raw` are
                 returned; absent fields are neither checked nor defaulted.

    Returns:
        Normalized value bag keyed by field name. Unknown keys are dropped.

    Raises:
        ValidationError with the list of failing fields.
    """
    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ValidationError([{"field": "body", "reason": "el cuerpo debe ser un objeto JSON"}])

    try:
        model = rules.model_validate(raw)
    except PydanticValidationError as exc:
        raise ValidationError(format_errors(exc.errors()))

    if partial:
        return model.model_dump(exclude_unset=True)
    return model.model_dump()

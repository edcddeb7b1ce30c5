"""
Menu API — Response Writer
==========================

What:  Builds the uniform envelope `{ok, message, data?}` every endpoint
       returns, success or failure.
How:   `success()` for protocol outcomes, `failure()` for the exception
       handlers. Pydantic read models are encoded with FastAPI's
       `jsonable_encoder`, so datetimes become ISO 8601 strings.

Status codes:
    200  list / get / update / delete
    201  create
    400  validation failure, empty update
    404  not found
    409  delete of a referenced row
    500  storage or unexpected failure
"""

from typing import Any, Dict, List, Optional

from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

_NO_DATA = object()


def envelope(ok: bool, message: str, data: Any = _NO_DATA, **extra: Any) -> Dict[str, Any]:
    body: Dict[str, Any] = {"ok": ok, "message": message}
    if data is not _NO_DATA:
        body["data"] = jsonable_encoder(data)
    body.update({k: v for k, v in extra.items() if v is not None})
    return body


def success(message: str, data: Any = _NO_DATA, status_code: int = 200) -> JSONResponse:
    """Successful outcome. Leave `data` out for delete confirmations."""
    return JSONResponse(status_code=status_code, content=envelope(True, message, data))


def failure(
    message: str,
    status_code: int,
    errors: Optional[List[Dict[str, str]]] = None,
    headers: Optional[Dict[str, str]] = None,
) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=envelope(False, message, errors=errors),
        headers=headers,
    )

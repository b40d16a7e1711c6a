"""Helper utility functions."""

from typing import Any, Dict, Optional

from fastapi import HTTPException

from services.errors import FitnessError, NotAuthenticated


def to_http_exception(error: FitnessError) -> HTTPException:
    """Convert a domain error into the matching HTTP error."""
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(error, NotAuthenticated) else None
    return HTTPException(status_code=error.status_code, detail=error.message, headers=headers)


def format_mutation_response(record: Any, view: Any, message: Optional[str] = None) -> Dict[str, Any]:
    """Response body for a write: the new record plus the reloaded view."""
    body = {
        "record": record.model_dump(mode="json") if hasattr(record, "model_dump") else record,
        "view": view.model_dump(mode="json") if hasattr(view, "model_dump") else view,
    }
    if message:
        body["message"] = message
    return body

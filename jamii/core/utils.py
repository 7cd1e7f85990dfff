from typing import Any, Iterable, Optional

def format_api_error(payload: Any, fallback: str) -> str:
    """
    Render an error body as a single message.

    Accepts ``{"detail": "..."}`` or field-keyed validation errors such as
    ``{"email": ["user with this email already exists."]}``.
    """
    if isinstance(payload, dict):
        detail = payload.get("detail")
        if isinstance(detail, str) and detail.strip():
            return detail
        messages = list(_flatten(payload.values()))
        if messages:
            return " ".join(messages)
    elif isinstance(payload, list):
        messages = list(_flatten(payload))
        if messages:
            return " ".join(messages)
    elif isinstance(payload, str) and payload.strip():
        return payload
    return fallback

def _flatten(values: Iterable[Any]):
    for value in values:
        if isinstance(value, (list, tuple)):
            yield from _flatten(value)
        elif isinstance(value, dict):
            yield from _flatten(value.values())
        elif value is not None and str(value).strip():
            yield str(value)

def parse_clinic_id(value: Optional[str]) -> Optional[int]:
    # Stored ids are plain strings; anything unparsable counts as unset
    if value is None:
        return None
    try:
        return int(str(value).strip())
    except ValueError:
        return None

def collapse_path(path: Optional[str]) -> Optional[str]:
    """Return the list-level ancestor of a record-level path, or None."""
    if not path:
        return None
    segments = [s for s in path.split("/") if s]
    if len(segments) > 2:
        return f"/{segments[0]}/{segments[1]}"
    return None

def split_path(path: str) -> list:
    return [s for s in path.split("?")[0].split("/") if s]

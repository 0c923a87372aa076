from collections.abc import Mapping, Sequence
from typing import Any, Iterable, Optional, Tuple, Union

Path = Union[str, Tuple[str, ...]]

_MISSING = object()


def _lookup(obj: Any, field: str) -> Any:
    if isinstance(obj, Mapping):
        return obj.get(field, _MISSING)
    return getattr(obj, field, _MISSING)


def _as_string(value: Any) -> Optional[str]:
    """Return ``value`` as a string if it is a usable primitive, else None."""
    if value is _MISSING or not value:
        return None
    if isinstance(value, bool):
        return None
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)):
        return str(value)
    return None


class RawRecord:
    """Typed read access to a loosely structured record.

    The wrapped value may be a mapping or any object with attributes. Every
    accessor returns a string and falls back to the given default when the
    field is missing, empty or not a string/number.
    """

    def __init__(self, data: Any):
        self.data = data

    def get(self, field: str) -> Any:
        value = _lookup(self.data, field) if self.data is not None else _MISSING
        return None if value is _MISSING else value

    def get_string(self, field: str, default: str) -> str:
        value = _as_string(self.get(field))
        return default if value is None else value

    def get_nested_string(self, path: Path, default: str) -> str:
        if isinstance(path, str):
            return self.get_string(path, default)
        head, *rest = path
        current = self.get(head)
        for field in rest:
            if current is None:
                return default
            if isinstance(current, str):
                # e.g. ``author`` given as a bare name instead of an object
                return current if field == "name" and current else default
            value = _lookup(current, field)
            current = None if value is _MISSING else value
        value = _as_string(current)
        return default if value is None else value

    def first_string(self, paths: Iterable[Path], default: str) -> str:
        for path in paths:
            value = self.get_nested_string(path, "")
            if value:
                return value
        return default

    def first_url(self, field: str) -> str:
        items = self.get(field)
        if isinstance(items, (str, bytes)) or not isinstance(items, Sequence) or not items:
            return ""
        return RawRecord(items[0]).get_string("url", "")

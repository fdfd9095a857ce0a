"""
Dotted-name parameter lookup.

Parameters are addressed by dotted names such as ``data_transfer.remote.host``.
A name may be written literally as one key or spread over nested mappings;
both spellings resolve to the same value, and the most specific literal key
wins.
"""

from typing import Any, Dict, Iterator, Mapping, Optional

_MISSING = object()


class ParameterBag(Mapping):
    """Read-only view over a parameters mapping with dotted-name lookup."""

    def __init__(self, parameters: Optional[Dict[str, Any]] = None):
        self._parameters = dict(parameters or {})

    def _lookup(self, name: str, node: Any) -> Any:
        if not isinstance(node, Mapping):
            return _MISSING
        if name in node:
            return node[name]

        # Try the longest literal prefix first: "a.b.c" -> "a.b" then "a"
        parts = name.split(".")
        for split in range(len(parts) - 1, 0, -1):
            head = ".".join(parts[:split])
            if head in node:
                value = self._lookup(".".join(parts[split:]), node[head])
                if value is not _MISSING:
                    return value
        return _MISSING

    def has(self, name: str) -> bool:
        return self._lookup(name, self._parameters) is not _MISSING

    def get(self, name: str, default: Any = None) -> Any:
        value = self._lookup(name, self._parameters)
        return default if value is _MISSING else value

    def __getitem__(self, name: str) -> Any:
        value = self._lookup(name, self._parameters)
        if value is _MISSING:
            raise KeyError(name)
        return value

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.has(name)

    def __iter__(self) -> Iterator[str]:
        return iter(self._parameters)

    def __len__(self) -> int:
        return len(self._parameters)

    def __repr__(self) -> str:
        return f"ParameterBag(keys={sorted(self._parameters)!r})"

"""In-process query cache shared by the hooks."""
from typing import Any, Callable, Dict, Hashable, List, Optional

Listener = Callable[[Hashable, Any], None]

_MISSING = object()


class QueryCache:
    """
    Key/value cache for query results.

    Listeners are notified with (key, new_value) after every change; an
    invalidation notifies with None.
    """

    def __init__(self):
        self._entries: Dict[Hashable, Any] = {}
        self._listeners: List[Listener] = []

    def __contains__(self, key: Hashable) -> bool:
        return key in self._entries

    def get(self, key: Hashable, default: Any = None) -> Any:
        return self._entries.get(key, default)

    def set(self, key: Hashable, value: Any) -> Any:
        self._entries[key] = value
        self._notify(key, value)
        return value

    def merge(self, key: Hashable, partial: Dict[str, Any]) -> Dict[str, Any]:
        """
        Shallow-merge partial into the cached mapping under key.

        Nested values are replaced, not merged. A missing entry is treated
        as an empty mapping.
        """
        current = self._entries.get(key) or {}
        if not isinstance(current, dict):
            raise TypeError(f"Cannot merge into non-mapping cache entry {key!r}")
        merged = {**current, **partial}
        return self.set(key, merged)

    def invalidate(self, key: Optional[Hashable] = None) -> None:
        """Drop one entry, or every entry when key is None."""
        keys = list(self._entries) if key is None else [key]
        for k in keys:
            if self._entries.pop(k, _MISSING) is not _MISSING:
                self._notify(k, None)

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener; returns a function that removes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self, key: Hashable, value: Any) -> None:
        for listener in list(self._listeners):
            listener(key, value)

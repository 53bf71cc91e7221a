"""
Observable store for the dashboard selection.

All changes go through set(), which swaps the whole selection at once and
then notifies listeners synchronously, so listeners never see a partially
applied update. A set() made from inside a listener is delivered after the
current notification has reached every listener.
"""

import logging
from collections import deque
from dataclasses import fields, replace
from typing import Any, Callable, Deque, Dict, FrozenSet, List, Optional, Tuple

from ..models import Selection, TimeMode

Listener = Callable[[Selection, FrozenSet[str]], None]

_FIELDS = frozenset(f.name for f in fields(Selection))


class ConfigurationStore:
    """Holds the current selection and notifies listeners on change."""

    def __init__(
        self,
        selection: Optional[Selection] = None,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize the store.

        Args:
            selection: Initial selection (defaults to the default channel)
            logger: Logger instance
        """
        self.logger = logger or logging.getLogger(__name__)
        self._selection = selection or Selection()
        self._listeners: List[Listener] = []
        self._pending: Deque[Tuple[Selection, FrozenSet[str]]] = deque()
        self._notifying = False

    def get(self, key: str) -> Any:
        """
        Get one selection field.

        Args:
            key: Field name (channel, observatory, time_mode, start_time, end_time)

        Returns:
            Current value
        """
        if key not in _FIELDS:
            raise KeyError(key)
        return getattr(self._selection, key)

    def snapshot(self) -> Selection:
        """Get the current selection."""
        return self._selection

    def set(self, patch: Optional[Dict[str, Any]] = None, **kwargs: Any) -> bool:
        """
        Apply changes and notify listeners once.

        Selecting a channel clears the observatory and vice versa, unless
        the patch sets both fields explicitly.

        Args:
            patch: Field values to change
            **kwargs: Field values to change

        Returns:
            True if anything changed

        Raises:
            KeyError: On unknown field names
            ValueError: On an unknown time mode, or when the result would not
                        have exactly one of channel and observatory
        """
        changes = dict(patch or {})
        changes.update(kwargs)

        unknown = set(changes) - _FIELDS
        if unknown:
            raise KeyError(f"Unknown selection fields: {', '.join(sorted(unknown))}")

        if "time_mode" in changes:
            changes["time_mode"] = TimeMode.parse(changes["time_mode"])

        if changes.get("channel") is not None and "observatory" not in changes:
            changes["observatory"] = None
        if changes.get("observatory") is not None and "channel" not in changes:
            changes["channel"] = None

        current = self._selection
        changed = frozenset(
            key for key, value in changes.items() if getattr(current, key) != value
        )
        if not changed:
            return False

        # Selection rejects a result with both or neither selected
        updated = replace(current, **{key: changes[key] for key in changed})

        self._selection = updated
        self.logger.debug(f"Selection changed ({', '.join(sorted(changed))}): {updated}")

        self._pending.append((updated, changed))
        if not self._notifying:
            self._notify()
        return True

    def _notify(self) -> None:
        """Deliver queued changes in the order they were made."""
        self._notifying = True
        try:
            while self._pending:
                selection, changed = self._pending.popleft()
                for listener in list(self._listeners):
                    listener(selection, changed)
        finally:
            self._notifying = False
            self._pending.clear()

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """
        Register a change listener.

        Args:
            listener: Called with (selection, changed field names)

        Returns:
            Function that removes the listener
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            self.unsubscribe(listener)

        return unsubscribe

    def unsubscribe(self, listener: Listener) -> None:
        """Remove a change listener, if registered."""
        if listener in self._listeners:
            self._listeners.remove(listener)

"""Storage for elements captured under ``<defs>``.

Each top-level child of defs starts a new definition list keyed by its id;
its descendants are appended to that list, and every closing ``g`` adds an
END_GROUP sentinel so a replay can pop the group's style at the right place.
"""

from __future__ import annotations

import logging

from vectorscene.errors import EmptyIdentifier
from vectorscene.svg.scene import END_GROUP, Definition

logger = logging.getLogger(__name__)


class DefinitionStore:
    def __init__(self) -> None:
        self._defs: dict[str, tuple[Definition, ...]] = {}
        self._pending: list[Definition] = []
        self._depth = 0

    def __contains__(self, def_id: str) -> bool:
        return def_id in self._defs

    def __len__(self) -> int:
        return len(self._defs)

    def get(self, def_id: str) -> tuple[Definition, ...] | None:
        return self._defs.get(def_id)

    def capture(self, tag: str, attrs: tuple[tuple[str, str], ...]) -> None:
        """Record a start element seen inside defs."""
        def_id = next((v for k, v in attrs if k == "id"), None)
        if self._depth == 0:
            self.flush()
            if def_id == "":
                raise EmptyIdentifier(f"<{tag}> in defs has an empty id")
            if def_id is None:
                logger.debug("<%s> in defs has no id and can never be used", tag)
        self._pending.append(Definition(def_id or "", tag, attrs))
        self._depth += 1

    def end(self, tag: str) -> None:
        """Record the end of a captured element."""
        self._depth = max(0, self._depth - 1)
        if tag == "g":
            self._pending.append(Definition("", END_GROUP))

    def flush(self) -> None:
        """Store the pending definition list under its id."""
        if self._pending and self._pending[0].id:
            def_id = self._pending[0].id
            if def_id in self._defs:
                logger.debug("Definition %r redefined", def_id)
            self._defs[def_id] = tuple(self._pending)
        self._pending = []

    def close(self) -> None:
        """Leave a defs section."""
        self.flush()
        self._depth = 0

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Any, Callable, Generic, Iterator, Optional, Protocol, TypeVar


class HasId(Protocol):
    id: str


T = TypeVar("T", bound=HasId)

logger = logging.getLogger(__name__)


class EntityCollection(Generic[T]):
    """Insertion-ordered table of frozen entities keyed by id.

    Updates swap the stored record for a merged copy, so records handed out to
    callers never change under them.
    """

    def __init__(self, name: str, items: tuple[T, ...] = ()):
        self.name = name
        self._items: dict[str, T] = {item.id: item for item in items}

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, entity_id: object) -> bool:
        return entity_id in self._items

    def __iter__(self) -> Iterator[T]:
        return iter(tuple(self._items.values()))

    def all(self) -> tuple[T, ...]:
        return tuple(self._items.values())

    def get(self, entity_id: str) -> Optional[T]:
        return self._items.get(entity_id)

    def filter(self, predicate: Callable[[T], bool]) -> list[T]:
        return [item for item in self._items.values() if predicate(item)]

    def add(self, entity: T) -> T:
        self._items[entity.id] = entity
        logger.debug("%s: added %s", self.name, entity.id)
        return entity

    def update(self, entity_id: str, fields: dict[str, Any]) -> Optional[T]:
        """Merge ``fields`` into the matching entity; unknown id is a no-op (None)."""
        current = self._items.get(entity_id)
        if current is None:
            logger.info("%s: update skipped, no entity %s", self.name, entity_id)
            return None

        fields = {k: v for k, v in fields.items() if k != "id"}
        updated = replace(current, **fields)
        self._items[entity_id] = updated
        logger.debug("%s: updated %s (%s)", self.name, entity_id, ", ".join(sorted(fields)))
        return updated

    def remove(self, entity_id: str) -> bool:
        if self._items.pop(entity_id, None) is None:
            logger.info("%s: remove skipped, no entity %s", self.name, entity_id)
            return False
        logger.debug("%s: removed %s", self.name, entity_id)
        return True

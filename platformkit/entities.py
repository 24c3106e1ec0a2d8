"""A module that owns game entities and drives their lifecycle."""

from __future__ import annotations

import logging
from typing import Any, Callable, Hashable

from platformkit.module import Module

log = logging.getLogger(__name__)


class EntityManager(Module):
    """Creates entities from registered factories and updates the active ones.

    An entity is any object with an ``active`` flag, an ``initial_pos`` and
    ``awake()``, ``start()``, ``update(dt)`` and ``clean_up()`` methods that
    return ``True`` to carry on.
    """

    def __init__(self, start_enabled: bool = False) -> None:
        super().__init__("entitymanager", start_enabled)
        self.entities: list[Any] = []
        self.enemies: list[Any] = []
        self.enemies_dead: list[tuple[int, int]] = []
        self.paused = False
        self._factories: dict[Hashable, tuple[Callable[[], Any], bool]] = {}

    def register(self, entity_type: Hashable, factory: Callable[[], Any], enemy: bool = False) -> None:
        """Make ``create_entity(entity_type)`` build entities with ``factory``."""
        self._factories[entity_type] = (factory, enemy)

    def awake(self, config: Any) -> bool:
        """Awaken every active entity, stopping at the first failure."""
        log.debug("Loading entity manager")
        return all(entity.awake() for entity in list(self.entities) if entity.active)

    def start(self) -> bool:
        """Start every active entity, stopping at the first failure."""
        for entity in list(self.entities):
            if not entity.active:
                continue
            if not entity.start():
                return False
        return True

    def update(self, dt: float) -> bool:
        """Update every active entity unless the game is paused."""
        if self.paused:
            return True
        return all(entity.update(dt) for entity in list(self.entities) if entity.active)

    def clean_up(self) -> bool:
        """Clean up entities in reverse order, then forget them all."""
        ok = all(entity.clean_up() for entity in reversed(self.entities))
        self.entities.clear()
        return ok

    def create_entity(self, entity_type: Hashable) -> Any:
        """Build, keep and return a new entity of ``entity_type``."""
        try:
            factory, enemy = self._factories[entity_type]
        except KeyError:
            raise ValueError(f"no entity registered for type {entity_type!r}") from None
        entity = factory()
        if enemy:
            self.enemies.append(entity)
        self.entities.append(entity)
        return entity

    def destroy_entity(self, entity: Any) -> None:
        """Stop managing ``entity``."""
        self.entities = [existing for existing in self.entities if existing is not entity]

    def add_entity(self, entity: Any) -> None:
        """Manage an entity built elsewhere; None is ignored."""
        if entity is not None:
            self.entities.append(entity)

    def kill_enemies_load(self) -> None:
        """Deactivate every enemy whose starting position is recorded as dead."""
        dead = {tuple(position) for position in self.enemies_dead}
        for enemy in self.enemies:
            if tuple(enemy.initial_pos) in dead:
                enemy.active = False
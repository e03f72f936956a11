"""Tests kinematic ray colliders against static colliders each tick."""

from __future__ import annotations

import threading
from typing import Optional

from .colliders import Collider, RayCollider
from .components import ColliderComponent
from .messages import Addressee, ColliderType, ComponentType, Message, SystemMessage, UpdateEntityMessage
from .system import System


class CollisionSystem(System):
    """Casts every enabled kinematic ray against the enabled static colliders."""

    def __init__(
        self,
        entities: list,
        frequency: float = 60,
        core: Optional[int] = None,
        *,
        entity_mutex=None,
        **system_options,
    ) -> None:
        super().__init__(frequency, core, **system_options)
        self.address |= Addressee.COLLISION_SYSTEM
        self._entities = entities
        self._entity_mutex = entity_mutex if entity_mutex is not None else threading.Lock()
        self._mutex = threading.RLock()
        self._kinematics: list[ColliderComponent] = []
        self._statics: list[Collider] = []
        for entity in entities:
            self.add_entity(entity)

    @property
    def kinematics(self) -> list[ColliderComponent]:
        with self._mutex:
            return list(self._kinematics)

    @property
    def statics(self) -> list[Collider]:
        with self._mutex:
            return list(self._statics)

    def add_entity(self, entity) -> None:
        """Keep a copy of the entity's collider component if it is kinematic."""
        component = entity.get_component(ComponentType.COLLISION)
        if component is None:
            return
        with self._mutex:
            if component.collider_type is ColliderType.KINEMATIC:
                self._kinematics.append(component.clone())

    def add_collider(self, collider: Collider) -> None:
        with self._mutex:
            self._statics.append(collider)

    def update_entity(self, entity) -> None:
        """Replace the stored copy of the entity's kinematic collider component."""
        component = entity.get_component(ComponentType.COLLISION)
        if component is None:
            return
        with self._mutex:
            for index, kinematic in enumerate(self._kinematics):
                if kinematic.owner is entity:
                    self._kinematics[index] = component.clone()
                    return

    def on_message(self, message: Message) -> None:
        if not message.addressed_to(self.address):
            return
        if isinstance(message, SystemMessage):
            self._apply_system_message(message)
        elif isinstance(message, UpdateEntityMessage):
            self.update_entity(message.entity)

    def process(self) -> None:
        if self.pull_requested:
            with self._entity_mutex:
                with self._mutex:
                    self._kinematics.clear()
                    self._statics.clear()
                for entity in list(self._entities):
                    self.add_entity(entity)
                self._finish_pull()

        with self._mutex:
            for kinematic in self._kinematics:
                if not kinematic.enabled:
                    continue
                ray = kinematic.collider
                if not isinstance(ray, RayCollider):
                    continue
                for static in self._statics:
                    if not static.enabled:
                        continue
                    if static.collides_with_ray(ray) and kinematic.on_collision is not None:
                        kinematic.on_collision()
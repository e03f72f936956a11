"""Keeps copies of render and transform components and draws them each tick."""

from __future__ import annotations

import threading
from typing import Callable, Optional

from .components import RenderComponent, TransformComponent
from .messages import Addressee, ComponentType, Message, PullEntityMessage, SystemMessage, UpdateEntityMessage
from .renderer import Renderer
from .system import System


def _null_transform() -> TransformComponent:
    return TransformComponent((0.0, 0.0, 0.0), (0.0, 0.0, 0.0))


class RenderSystem(System):
    """Draws every enabled render component with its matching transform.

    The render and transform lists are kept index-aligned; an entity without a
    transform gets a zero-scale placeholder.
    """

    def __init__(
        self,
        entities: list,
        renderer: Optional[Renderer] = None,
        frequency: float = 60,
        core: Optional[int] = None,
        *,
        entity_mutex=None,
        render_lock=None,
        before_present: Optional[Callable[[], None]] = None,
        **system_options,
    ) -> None:
        super().__init__(frequency, core, **system_options)
        self.address |= Addressee.RENDER_SYSTEM
        self.renderer = renderer
        self._entities = entities
        self._entity_mutex = entity_mutex if entity_mutex is not None else threading.Lock()
        self._render_lock = render_lock if render_lock is not None else threading.Lock()
        self._before_present = before_present
        self._renderables: list[RenderComponent] = []
        self._transforms: list[TransformComponent] = []
        for entity in entities:
            self.add_entity(entity)

    @property
    def renderables(self) -> list[RenderComponent]:
        with self._entity_lock:
            return list(self._renderables)

    @property
    def transforms(self) -> list[TransformComponent]:
        with self._entity_lock:
            return list(self._transforms)

    @staticmethod
    def _transform_for(entity) -> TransformComponent:
        transform = entity.get_component(ComponentType.TRANSFORM)
        return _null_transform() if transform is None else transform.clone()

    def add_entity(self, entity) -> None:
        render = entity.get_component(ComponentType.RENDER)
        if render is None:
            return
        with self._entity_lock:
            self._renderables.append(render.clone())
            self._transforms.append(self._transform_for(entity))

    def update_entity(self, entity) -> None:
        """Refresh the entity's copies; waits for any pending pull to finish first."""
        self._wait_for_pull()
        render = entity.get_component(ComponentType.RENDER)
        if render is None:
            return
        with self._entity_lock:
            for index, existing in enumerate(self._renderables):
                if existing.owner is entity:
                    self._renderables[index] = render.clone()
                    self._transforms[index] = self._transform_for(entity)
                    return

    def on_message(self, message: Message) -> None:
        if not message.addressed_to(self.address):
            return
        if isinstance(message, UpdateEntityMessage):
            self.update_entity(message.entity)
        elif isinstance(message, SystemMessage):
            self._apply_system_message(message)
        elif isinstance(message, PullEntityMessage):
            self._request_pull()

    def process(self) -> None:
        renderer = self.renderer
        if renderer is None:
            return

        with self._render_lock:
            renderer.clear_back_buffer()
            view_projection = renderer.vp
            with self._entity_lock:
                pairs = list(zip(self._renderables, self._transforms))
            for render, transform in pairs:
                if render.enabled:
                    renderer.draw_component(render, transform, view_projection)
            if self._before_present is not None:
                self._before_present()
            renderer.swap_buffers()

        if self.pull_requested and self._entity_mutex.acquire(blocking=False):
            try:
                with self._entity_lock:
                    self._renderables.clear()
                    self._transforms.clear()
                for entity in list(self._entities):
                    self.add_entity(entity)
                self._finish_pull()
            finally:
                self._entity_mutex.release()
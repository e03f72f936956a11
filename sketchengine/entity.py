"""Entities: named bags of components that react to engine messages."""

from __future__ import annotations

from typing import Optional, Union

from .components import Component
from .messages import (
    Addressee,
    ChangeRenderComponentColourAndEnabledMessage,
    ChangeRenderComponentMessage,
    ComponentType,
    Message,
)


class Entity:
    """A named object holding at most one component of each type."""

    address = Addressee.ALL | Addressee.ENTITY

    def __init__(self, name: str = "") -> None:
        self.name = name
        self.delete = False
        self.enabled = True
        self._components: dict[ComponentType, Component] = {}
        self._listeners: dict[Addressee, list[Component]] = {}
        self._listening_at_all = False

    @property
    def components(self) -> dict[ComponentType, Component]:
        return dict(self._components)

    @property
    def listening(self) -> bool:
        """True once any listener has been registered."""
        return self._listening_at_all

    def listeners(self, addressee: Addressee) -> list[Component]:
        return list(self._listeners.get(addressee, ()))

    def add_component(self, component: Component) -> bool:
        """Add a component; False if one of that type is already present."""
        if component.type in self._components:
            return False
        self._components[component.type] = component
        return True

    def remove_component(self, component: Union[Component, ComponentType]) -> bool:
        """Remove by component or by type; False if nothing was removed."""
        key = component if isinstance(component, ComponentType) else component.type
        return self._components.pop(key, None) is not None

    def get_component(self, component_type: ComponentType) -> Optional[Component]:
        return self._components.get(component_type)

    def register_listener(self, addressee: Addressee, component: Component) -> None:
        self._listening_at_all = True
        self._listeners.setdefault(addressee, []).append(component)

    def unregister_listener(self, addressee: Addressee, component: Component) -> None:
        """Remove the first registration of ``component`` for ``addressee``."""
        registered = self._listeners.get(addressee)
        if registered and component in registered:
            registered.remove(component)

    def start(self) -> None:
        for component in self._components.values():
            component.start()

    def update(self, dt: float) -> None:
        for component in self._components.values():
            component.update(dt)

    def on_message(self, message: Message) -> None:
        """Apply render colour changes addressed to this entity."""
        if not message.addressed_to(self.address):
            return
        if isinstance(message, (ChangeRenderComponentMessage, ChangeRenderComponentColourAndEnabledMessage)):
            render = self._components.get(ComponentType.RENDER)
            if render is None:
                return
            render.colour = (message.r, message.g, message.b, 1.0)
            if isinstance(message, ChangeRenderComponentColourAndEnabledMessage):
                render.enabled = message.enabled

    def end(self) -> None:
        """End every component and drop them all."""
        for component in self._components.values():
            component.end()
        self._components.clear()

    def reset(self) -> None:
        """Clear the delete mark and enable the entity again."""
        self.delete = False
        self.enabled = True
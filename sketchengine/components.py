"""Components that entities are built from: transforms, render data and colliders."""

from __future__ import annotations

import copy
from typing import TYPE_CHECKING, Callable, Optional

from .colliders import Collider, Vec3
from .messages import ColliderType, ComponentType, Message, send_message

if TYPE_CHECKING:
    from .entity import Entity
    from .mesh import Mesh

Colour = tuple[float, float, float, float]


class Component:
    """A piece of behaviour or data attached to an entity."""

    def __init__(self, component_type: ComponentType, owner: Optional[Entity] = None) -> None:
        self.type = component_type
        self.owner = owner
        self.enabled = True
        self.running = False
        self.elapsed = 0.0
        self.last_message: Optional[Message] = None

    def start(self) -> None:
        """Mark the component as running; called when the owning entity starts."""
        self.running = True

    def update(self, dt: float) -> None:
        """Accumulate the elapsed seconds; called once per frame."""
        self.elapsed += dt

    def end(self) -> None:
        """Mark the component as stopped; called when the owning entity ends."""
        self.running = False

    def on_message(self, message: Message) -> None:
        """Receive a message addressed to this component, keeping the latest."""
        self.last_message = message

    def send_message(self, message: Message) -> None:
        """Send a message through the engine's dispatcher."""
        send_message(message)

    def get_component(self, component_type: ComponentType) -> Optional[Component]:
        """Return a sibling component of the given type from the owner, if any."""
        if self.owner is None:
            return None
        return self.owner.get_component(component_type)

    def clone(self) -> Component:
        """Return a shallow copy sharing the owner, mesh and collider references."""
        return copy.copy(self)


class ColliderComponent(Component):
    """Attaches a collider to an entity, with a callback run on collision."""

    def __init__(self, collider: Collider, owner: Optional[Entity] = None) -> None:
        super().__init__(ComponentType.COLLISION, owner)
        self.collider = collider
        self.on_collision: Optional[Callable[[], None]] = None

    @property
    def collider_type(self) -> ColliderType:
        return self.collider.type

    def collides_with(self, other: ColliderComponent) -> bool:
        return self.collider.collides_with(other.collider)


class RenderComponent(Component):
    """Holds the mesh an entity is drawn with and its RGBA colour."""

    def __init__(self, owner: Optional[Entity] = None) -> None:
        super().__init__(ComponentType.RENDER, owner)
        self.mesh: Optional[Mesh] = None
        self.colour: Colour = (1.0, 1.0, 1.0, 1.0)

    def add_colour(self, colour) -> None:
        """Brighten the RGB channels, each clamped to at most 1; alpha is kept."""
        r, g, b, a = self.colour
        dr, dg, db = tuple(colour)[:3]
        self.colour = (min(1.0, r + dr), min(1.0, g + dg), min(1.0, b + db), a)

    def sub_colour(self, colour) -> None:
        """Darken the RGB channels, each clamped to at least 0; alpha is kept."""
        r, g, b, a = self.colour
        dr, dg, db = tuple(colour)[:3]
        self.colour = (max(0.0, r - dr), max(0.0, g - dg), max(0.0, b - db), a)


class TransformComponent(Component):
    """Position and scale of an entity."""

    def __init__(self, position: Vec3, scale: Vec3, owner: Optional[Entity] = None) -> None:
        super().__init__(ComponentType.TRANSFORM, owner)
        self.position = tuple(float(v) for v in position)
        self.scale = tuple(float(v) for v in scale)
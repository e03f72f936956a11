"""Addressing flags, engine enums and the messages passed between engine parts."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any, Callable, Optional

SET_FREQUENCY = 0
SET_CORE = 1


class Addressee(enum.IntFlag):
    """Bit flags naming who a message is meant for."""

    NONE = 0
    ALL = 1
    ENTITY = 2
    SCENE = 4
    RENDER_SYSTEM = 8
    COLLISION_SYSTEM = 16
    NETWORK_SYSTEM = 32


class ComponentType(enum.Enum):
    """The kinds of component an entity can hold, one of each at most."""

    TRANSFORM = "transform"
    RENDER = "render"
    COLLISION = "collision"


class ColliderType(enum.Enum):
    """Whether a collider stays put or moves."""

    STATIC = "static"
    KINEMATIC = "kinematic"


@dataclass
class Message:
    """A message sent through the engine, tagged with the addressees it targets."""

    address: Addressee

    def addressed_to(self, address: Addressee) -> bool:
        """True when this message shares at least one addressee bit with ``address``."""
        return bool(Addressee(self.address) & Addressee(address))


@dataclass
class ChangeRenderComponentMessage(Message):
    """Asks an entity to recolour its render component."""

    r: float
    g: float
    b: float


@dataclass
class ChangeRenderComponentColourAndEnabledMessage(Message):
    """Asks an entity to recolour its render component and toggle it."""

    r: float
    g: float
    b: float
    enabled: bool


@dataclass
class UpdateEntityMessage(Message):
    """Tells systems that an entity's components changed."""

    entity: Any


@dataclass
class SystemMessage(Message):
    """Reconfigures a system: instruction SET_FREQUENCY or SET_CORE with a value."""

    instruction: int
    value: int


@dataclass
class PullEntityMessage(Message):
    """Tells systems to rebuild their component lists from the game's entities."""


Dispatcher = Callable[[Message], None]


@dataclass
class _DispatcherSlot:
    handler: Optional[Dispatcher] = None

    def swap(self, handler: Optional[Dispatcher]) -> Optional[Dispatcher]:
        previous, self.handler = self.handler, handler
        return previous


_slot = _DispatcherSlot()


def set_dispatcher(handler: Optional[Dispatcher]) -> Optional[Dispatcher]:
    """Install the function that delivers sent messages; returns the previous one."""
    return _slot.swap(handler)


def send_message(message: Message) -> None:
    """Deliver a message through the installed dispatcher."""
    if _slot.handler is None:
        raise RuntimeError("no message dispatcher is installed")
    _slot.handler(message)
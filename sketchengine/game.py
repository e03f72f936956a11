"""The game object tying scenes, systems, entities and the window together."""

from __future__ import annotations

import logging
import threading
from collections import deque
from dataclasses import dataclass
from typing import Any, Iterable, Optional

from .collision_system import CollisionSystem
from .messages import Addressee, Message, PullEntityMessage, set_dispatcher
from .render_system import RenderSystem
from .renderer import Renderer
from .scene import SceneManager
from .timer import Timer

logger = logging.getLogger(__name__)

DEFAULT_HISTORY = 100
_PLOT_MARGIN = 20.0


class Window:
    """The surface a game is shown in: its size and the renderer drawing to it."""

    def __init__(self, game: Any, width: int, height: int, renderer: Optional[Renderer] = None) -> None:
        self.game = game
        self.width = width
        self.height = height
        self.renderer = renderer if renderer is not None else Renderer()


@dataclass(frozen=True)
class FrequencyStats:
    """Recent frequency samples of one system, with the range to plot them in."""

    label: str
    values: tuple[float, ...]
    scale_min: float
    scale_max: float


def _frequency_stats(label: str, values: Iterable[float]) -> FrequencyStats:
    samples = tuple(values)
    low = min(samples, default=0.0)
    high = max(samples, default=0.0)
    return FrequencyStats(
        label=label,
        values=samples,
        scale_min=max(0.0, low - _PLOT_MARGIN),
        scale_max=high + _PLOT_MARGIN,
    )


class Game:
    """Owns the entities and systems, routes messages and drives the current scene.

    Creating a game installs its ``send_message`` as the engine's message
    dispatcher; ``shutdown`` puts the previous dispatcher back.
    """

    def __init__(
        self,
        history: int = DEFAULT_HISTORY,
        timer: Optional[Timer] = None,
        system_options: Optional[dict] = None,
    ) -> None:
        if history <= 0:
            raise ValueError(f"history must be positive, got {history}")
        self.entity_mutex = threading.Lock()
        self.render_lock = threading.Lock()
        self.scene_manager = SceneManager(self)
        self.timer = timer if timer is not None else Timer()
        self.window: Optional[Window] = None
        self.renderer: Optional[Renderer] = None
        self.render_system: Optional[RenderSystem] = None
        self.collision_system: Optional[CollisionSystem] = None
        self._system_options = dict(system_options or {})
        self._entities: list = []
        self._frame_times: deque[float] = deque(maxlen=history)
        self._collision_times: deque[float] = deque(maxlen=history)
        self._initialised = False
        self._closed = False
        self._previous_dispatcher = set_dispatcher(self.send_message)

    @property
    def entities(self) -> list:
        with self.entity_mutex:
            return list(self._entities)

    @property
    def initialised(self) -> bool:
        return self._initialised

    @property
    def game_width(self) -> int:
        if self.window is None:
            raise RuntimeError("game has no window")
        return self.window.width

    @property
    def game_height(self) -> int:
        if self.window is None:
            raise RuntimeError("game has no window")
        return self.window.height

    def _systems(self) -> list:
        return [s for s in (self.render_system, self.collision_system) if s is not None]

    def initialise(self, window: Window) -> None:
        """Attach the window and build the render and collision systems."""
        self.window = window
        self.renderer = window.renderer
        self.render_system = RenderSystem(
            self._entities,
            self.renderer,
            entity_mutex=self.entity_mutex,
            render_lock=self.render_lock,
            before_present=self._ui_frame,
            **self._system_options,
        )
        self.collision_system = CollisionSystem(
            self._entities,
            entity_mutex=self.entity_mutex,
            **self._system_options,
        )
        self._initialised = True

    def add_entities(self, entities: Iterable) -> None:
        with self.entity_mutex:
            self._entities.extend(entities)
        if self._initialised:
            self.command_systems_to_pull()

    def add_entity(self, entity) -> None:
        with self.entity_mutex:
            self._entities.append(entity)
        if self._initialised:
            self.command_systems_to_pull()

    def send_message(self, message: Message) -> None:
        """Deliver a message to the scenes, the systems and, if addressed, the entities."""
        self.scene_manager.on_message(message)
        for system in self._systems():
            system.on_message(message)
        if message.addressed_to(Addressee.ENTITY):
            for entity in list(self._entities):
                entity.on_message(message)

    def command_systems_to_pull(self) -> None:
        """Tell every system to rebuild its lists from the game's entities."""
        self.send_message(PullEntityMessage(Addressee.ALL))

    def run(self) -> None:
        """Advance the current scene by the time since the last run."""
        self.timer.tick()
        self.scene_manager.update(self.timer.dt)

    def add_frame_time(self, value: float) -> None:
        self._frame_times.append(float(value))

    def add_collision_time(self, value: float) -> None:
        self._collision_times.append(float(value))

    def _ui_frame(self) -> None:
        try:
            self.scene_manager.imgui()
            if self.render_system is not None:
                self.add_frame_time(self.render_system.actual_frequency)
            if self.collision_system is not None:
                self.add_collision_time(self.collision_system.actual_frequency)
        except Exception:
            logger.exception("user interface frame failed")

    def stats(self) -> dict[str, FrequencyStats]:
        """Recent render and collision frequencies, labelled as the overlay shows them."""
        render_now = self.render_system.actual_frequency if self.render_system else 0
        collision_now = self.collision_system.actual_frequency if self.collision_system else 0
        return {
            "render": _frequency_stats(f"Render FPS: {render_now}", self._frame_times),
            "collision": _frequency_stats(f"Collision TPS: {collision_now}", self._collision_times),
        }

    def shutdown(self) -> None:
        """Stop the systems and restore the previous message dispatcher."""
        if self._closed:
            return
        self._closed = True
        for system in self._systems():
            system.cancel_system()
        set_dispatcher(self._previous_dispatcher)

    def __enter__(self) -> Game:
        return self

    def __exit__(self, *exc_info) -> None:
        self.shutdown()
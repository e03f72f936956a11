"""Scenes and the stack that decides which one is current."""

from __future__ import annotations

from typing import Any, Optional

from .messages import Addressee, Message


class Scene:
    """A game state; subclasses override the hooks they need."""

    def __init__(self) -> None:
        self.scene_manager: Optional[SceneManager] = None
        self.initialised = False
        self.last_message: Optional[Message] = None
        self.elapsed = 0.0
        self.imgui_frames = 0
        self.render_system: Any = None

    def initialise(self) -> None:
        """Mark the scene as initialised; called once when it is pushed."""
        self.initialised = True

    def on_message(self, message: Message) -> None:
        """Receive a message addressed to scenes, keeping the latest."""
        self.last_message = message

    def update(self, dt: float) -> None:
        """Advance the scene's clock by ``dt`` seconds."""
        self.elapsed += dt

    def imgui(self) -> None:
        """Count a debug interface frame."""
        self.imgui_frames += 1

    def render(self, render_system) -> None:
        """Remember the render system the scene was last drawn with."""
        self.render_system = render_system


class SceneManager:
    """A stack of scenes; only the top one receives calls."""

    address = Addressee.ALL | Addressee.SCENE

    def __init__(self, game: Any = None) -> None:
        self.game = game
        self._scenes: list[Scene] = []

    def __len__(self) -> int:
        return len(self._scenes)

    def current_scene(self) -> Optional[Scene]:
        return self._scenes[-1] if self._scenes else None

    def on_message(self, message: Message) -> None:
        if not message.addressed_to(self.address):
            return
        current = self.current_scene()
        if current is not None:
            current.on_message(message)

    def update(self, dt: float) -> None:
        current = self.current_scene()
        if current is not None:
            current.update(dt)

    def imgui(self) -> None:
        current = self.current_scene()
        if current is not None:
            current.imgui()

    def render(self, render_system) -> None:
        current = self.current_scene()
        if current is not None:
            current.render(render_system)

    def push(self, scene: Scene) -> None:
        """Make ``scene`` current and initialise it."""
        self._scenes.append(scene)
        scene.scene_manager = self
        scene.initialise()
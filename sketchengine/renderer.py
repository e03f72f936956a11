"""Headless renderer holding the camera matrices and recording draw calls per frame."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import numpy as np

from .components import RenderComponent, TransformComponent


def _matrix(value) -> np.ndarray:
    matrix = np.array(value, dtype=float)
    if matrix.shape != (4, 4):
        raise ValueError(f"expected a 4x4 matrix, got shape {matrix.shape}")
    return matrix


def _scaling(x: float, y: float, z: float) -> np.ndarray:
    return np.diag([x, y, z, 1.0])


def _translation(x: float, y: float, z: float) -> np.ndarray:
    matrix = np.eye(4)
    matrix[3, :3] = (x, y, z)
    return matrix


@dataclass(frozen=True)
class DrawCall:
    """One mesh drawn with a model-view-projection matrix and an RGBA colour."""

    mesh: Any
    mvp: np.ndarray
    colour: tuple


class Renderer:
    """Keeps view and projection matrices (row-vector convention) and collects draws.

    Draw calls go into the frame being built; ``swap_buffers`` presents it.
    """

    def __init__(self, clear_colour=(0.0, 0.0, 0.0, 1.0)) -> None:
        self.clear_colour = tuple(float(c) for c in clear_colour)
        self._projection = np.eye(4)
        self._view = np.eye(4)
        self._vp = np.eye(4)
        self._inv_vp = np.eye(4)
        self.frame: list[DrawCall] = []
        self.last_frame: list[DrawCall] = []
        self.frames_presented = 0

    @property
    def projection(self) -> np.ndarray:
        return self._projection.copy()

    @property
    def view(self) -> np.ndarray:
        return self._view.copy()

    @property
    def vp(self) -> np.ndarray:
        """View matrix times projection matrix."""
        return self._vp.copy()

    @property
    def inv_vp(self) -> np.ndarray:
        """Inverse of ``vp``; all NaN when ``vp`` is singular."""
        return self._inv_vp.copy()

    def _update_view_projection(self) -> None:
        self._vp = self._view @ self._projection
        try:
            self._inv_vp = np.linalg.inv(self._vp)
        except np.linalg.LinAlgError:
            self._inv_vp = np.full((4, 4), np.nan)

    def set_projection(self, projection) -> None:
        self._projection = _matrix(projection)
        self._update_view_projection()

    def set_view(self, view) -> None:
        self._view = _matrix(view)
        self._update_view_projection()

    def draw_component(
        self,
        render: RenderComponent,
        transform: TransformComponent,
        view_projection,
    ) -> None:
        """Draw a render component placed by a transform.

        A transform with any zero scale component is a placeholder and leaves
        the view-projection matrix unchanged.
        """
        vp = _matrix(view_projection)
        scale = transform.scale
        if all(s != 0 for s in scale):
            mvp = _scaling(*scale) @ _translation(*transform.position) @ vp
        else:
            mvp = vp
        if render.mesh is not None:
            self.draw(render.mesh, mvp, render.colour)

    def draw(self, mesh, mvp, colour) -> None:
        """Record a draw of ``mesh`` in the current frame."""
        self.frame.append(DrawCall(mesh, _matrix(mvp), tuple(float(c) for c in colour)))

    def clear_back_buffer(self) -> None:
        """Discard everything drawn into the current frame."""
        self.frame = []

    def swap_buffers(self) -> None:
        """Present the current frame and start an empty one."""
        self.last_frame = self.frame
        self.frame = []
        self.frames_presented += 1
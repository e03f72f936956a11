"""Vertex meshes and the loader that reads them from mesh files."""

from __future__ import annotations

import math
import os
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass
from typing import Iterable, Optional, Union

Vec3 = tuple[float, float, float]
PathLike = Union[str, "os.PathLike[str]"]

CUBE_MESH_FILE = "cube.sm"
_FLOATS_PER_VERTEX = 6


@dataclass(frozen=True)
class Vertex:
    """A mesh vertex: a position and an RGB colour."""

    position: Vec3 = (0.0, 0.0, 0.0)
    colour: Vec3 = (0.0, 0.0, 0.0)


class Mesh:
    """An editable list of vertices that is frozen once handed to a renderer."""

    def __init__(self, vertices: Optional[Iterable[Vertex]] = None) -> None:
        self._vertices: list[Vertex] = list(vertices or ())
        self._locked = False

    @property
    def vertices(self) -> list[Vertex]:
        return list(self._vertices)

    @property
    def locked(self) -> bool:
        return self._locked

    def __len__(self) -> int:
        return len(self._vertices)

    def _ensure_unlocked(self) -> None:
        if self._locked:
            raise RuntimeError("mesh is locked")

    def add_vertex(self, vertex: Vertex) -> None:
        self._ensure_unlocked()
        self._vertices.append(vertex)

    def add_vertices(self, vertices: Iterable[Vertex]) -> None:
        """Replace the mesh's vertices."""
        self._ensure_unlocked()
        self._vertices = list(vertices)

    def delete_vertex(self, index: int) -> None:
        self._ensure_unlocked()
        del self._vertices[index]

    def clear(self) -> None:
        self._ensure_unlocked()
        self._vertices.clear()

    def lock(self) -> None:
        """Freeze the vertices, as done when the mesh is uploaded for drawing."""
        self._locked = True

    def load_from_file(self, filename: PathLike, resources: ResourceManager) -> bool:
        """Load vertices through ``resources``; True when any were read."""
        self._vertices = list(resources.load_mesh_from_file(filename).result())
        return bool(self._vertices)

    def reset(self) -> None:
        self._locked = False

    def calculate_max_size(self) -> float:
        """Square root of the largest vertex distance from the origin."""
        longest = max((math.hypot(*v.position) for v in self._vertices), default=0.0)
        return math.sqrt(longest)


def read_mesh(filename: PathLike) -> list[Vertex]:
    """Read a mesh file: a vertex count, then x y z r g b for each vertex."""
    with open(filename, encoding="utf-8") as handle:
        tokens = handle.read().split()
    if not tokens:
        raise ValueError(f"{filename}: missing vertex count")
    try:
        count = int(tokens[0])
    except ValueError:
        raise ValueError(f"{filename}: bad vertex count {tokens[0]!r}") from None
    if count < 0:
        raise ValueError(f"{filename}: negative vertex count {count}")
    needed = count * _FLOATS_PER_VERTEX
    fields = tokens[1 : 1 + needed]
    if len(fields) < needed:
        raise ValueError(f"{filename}: expected {count} vertices, file is truncated")
    values = iter(map(float, fields))
    return [
        Vertex(position=(x, y, z), colour=(r, g, b))
        for x, y, z, r, g, b in zip(*[values] * _FLOATS_PER_VERTEX)
    ]


class ResourceManager:
    """Loads mesh files in the background and caches what it has loaded."""

    def __init__(self, max_workers: Optional[int] = None) -> None:
        self._models: dict[str, list[Vertex]] = {}
        self._lock = threading.Lock()
        self._executor = ThreadPoolExecutor(max_workers=max_workers)

    def _load(self, key: str, filename: PathLike) -> list[Vertex]:
        vertices = read_mesh(filename)
        with self._lock:
            self._models[key] = vertices
        return list(vertices)

    def load_mesh_from_file(self, filename: PathLike) -> "Future[list[Vertex]]":
        """Return a future holding the file's vertices."""
        key = os.fspath(filename)
        with self._lock:
            cached = self._models.get(key)
        if cached is not None:
            future: Future[list[Vertex]] = Future()
            future.set_result(list(cached))
            return future
        return self._executor.submit(self._load, key, filename)

    def load_cube(self) -> "Future[list[Vertex]]":
        return self.load_mesh_from_file(CUBE_MESH_FILE)

    def close(self) -> None:
        self._executor.shutdown(wait=True)

    def __enter__(self) -> ResourceManager:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
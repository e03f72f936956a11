# sketchengine

The core of a small entity-component game engine, written as a library. It provides:

- **Messages** (`sketchengine.messages`): `Addressee` bit flags, the `ComponentType` and `ColliderType` enums, and the message dataclasses `ChangeRenderComponentMessage`, `ChangeRenderComponentColourAndEnabledMessage`, `UpdateEntityMessage`, `SystemMessage` and `PullEntityMessage`. `Message.addressed_to` checks whether a message shares an addressee bit. A process-wide dispatcher is installed with `set_dispatcher` (which returns the previous one) and used through `send_message`, which raises `RuntimeError` when none is installed.
- **Timing** (`sketchengine.timer`): `Timer` measures `dt` and `fps` on each `tick()`, and `wait_for_interval()` sleeps out the remaining whole milliseconds of the interval set by the frequency. A non-positive frequency raises `ValueError`.
- **Colliders** (`sketchengine.colliders`): `AABB` (with `size`, `centre`, `intersects`), `AABBCollider`, `RayCollider`, and the slab test `aabb_ray_collision`.
- **Meshes** (`sketchengine.mesh`): `Vertex`, `Mesh` and a caching, thread-pool backed `ResourceManager` that reads plain-text `.sm` model files through `read_mesh`.
- **Components and entities** (`sketchengine.components`, `sketchengine.entity`): `TransformComponent`, `RenderComponent` and `ColliderComponent` attached to an `Entity`, which holds at most one component of each type.
- **Spatial queries** (`sketchengine.octree`): an `Octree` of box-collider components that answers ray queries and calls a component's `on_collision` handler on a new hit.
- **Rendering** (`sketchengine.renderer`): a headless `Renderer` that keeps view and projection matrices (as numpy arrays) and records `DrawCall`s for each frame.
- **Scenes and systems** (`sketchengine.scene`, `sketchengine.system`, `sketchengine.collision_system`, `sketchengine.render_system`): a `SceneManager` stack of `Scene`s, and fixed-rate `System` threads for collision and rendering.
- **Game** (`sketchengine.game`): `Game` owns the entities and systems, routes messages, and keeps frame-rate statistics for a `Window`.

## Installing

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Ray tests

```python
from sketchengine.colliders import AABB, AABBCollider, RayCollider, aabb_ray_collision

box = AABB((-1.0, -1.0, -1.0), (1.0, 1.0, 1.0))
ray = RayCollider((-5.0, 0.1, 0.1), (1.0, 0.01, 0.01))
assert aabb_ray_collision(box, ray)

collider = AABBCollider((-1.0, -1.0, -1.0), (1.0, 1.0, 1.0))
assert collider.collides_with_ray(ray)
```

`aabb_ray_collision` tests the ray's whole line, not only the part in front of the origin. A direction component so large that its inverse lies within 1e-6 of zero counts as a miss. `RayCollider.collides_with` and `collides_with_ray` always return `False`; an `AABBCollider` only ever collides with rays.

## A game with one entity

```python
from sketchengine.components import RenderComponent, TransformComponent
from sketchengine.entity import Entity
from sketchengine.game import Game, Window
from sketchengine.mesh import Mesh, Vertex

with Game() as game:
    game.initialise(Window(game, 800, 600))

    cube = Entity("cube")
    render = RenderComponent(cube)
    render.mesh = Mesh([Vertex((0.0, 0.0, 0.0)), Vertex((1.0, 0.0, 0.0)), Vertex((0.0, 1.0, 0.0))])
    cube.add_component(render)
    cube.add_component(TransformComponent((0.0, 0.0, 0.0), (1.0, 1.0, 1.0), cube))
    game.add_entity(cube)

    game.render_system.process()   # draws, then picks up the new entity
    game.render_system.process()   # draws the cube
    assert len(game.renderer.last_frame) == 1
```

Creating a `Game` installs its `send_message` as the engine's dispatcher; `shutdown()` (or leaving the `with` block) stops the systems and restores the previous one. Adding entities after `initialise` tells every system to rebuild its lists on its next `process()`.

Systems do not run until `start_system()` is called; they then call `process()` on their own thread at their frequency, and `cancel_system()` stops them. Where the platform offers `os.sched_setaffinity`, a running system pins itself to its chosen core. A `SystemMessage` with instruction `SET_FREQUENCY` or `SET_CORE` changes a system's frequency or core.

`Game.stats()` returns the recent render and collision frequencies as `FrequencyStats`, each with a label and a plotting range 20 below the smallest sample (not below 0) to 20 above the largest.

## Mesh files

A `.sm` file is whitespace-separated text. It starts with the vertex count, followed by six numbers for each vertex: the position x, y, z and then the colour r, g, b. `read_mesh` raises `ValueError` for a missing, bad or negative count or a truncated file. `ResourceManager.load_mesh_from_file` returns a `concurrent.futures.Future` and caches what it reads; `ResourceManager.load_cube()` loads `cube.sm` from the working directory. A `Mesh` that has been locked raises `RuntimeError` on any edit until `reset()`.

## What it does not do

There is no on-screen window, GPU drawing, keyboard or mouse input, debug overlay drawing, or networking. `Window` only holds a size and a `Renderer`, and the `Renderer` records draw calls in memory rather than showing them. There is no command to run; the package is used as a library.
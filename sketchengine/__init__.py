"""Core of a small entity-component game engine: messages, timing, colliders, meshes, components, octree ray queries, a headless renderer, scenes, systems and the game object."""

__version__ = "0.1.0"
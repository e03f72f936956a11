"""An octree of box colliders answering ray queries."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from itertools import product
from typing import Optional

from .colliders import AABB, AABBCollider, Collider, RayCollider, aabb_ray_collision
from .components import ColliderComponent
from .messages import ColliderType, ComponentType

logger = logging.getLogger(__name__)

MAX_OCTNODE_SIZE = 5192


@dataclass
class OctreeNode:
    """A cube of space holding collider components, or eight child nodes."""

    bounds: AABB
    elements: list[ColliderComponent] = field(default_factory=list)
    children: list[OctreeNode] = field(default_factory=list)

    @property
    def is_leaf(self) -> bool:
        return not self.children


class Octree(Collider):
    """Spatial index of box-collider components that fires callbacks on ray hits."""

    def __init__(self, min, max, capacity: int = MAX_OCTNODE_SIZE, lock=None) -> None:
        super().__init__(ColliderType.STATIC)
        self.root = OctreeNode(AABB(min, max))
        self.capacity = capacity
        self._lock = lock if lock is not None else threading.RLock()
        self._last_collider: Optional[ColliderComponent] = None

    def insert(self, component: ColliderComponent) -> None:
        """Insert a component whose collider is a box; others are ignored."""
        self._insert(self.root, component)

    def _insert(self, node: OctreeNode, component: ColliderComponent) -> None:
        collider = component.collider
        if not isinstance(collider, AABBCollider):
            return
        if not node.bounds.intersects(collider.bounds):
            return
        if node.is_leaf and len(node.elements) < self.capacity:
            node.elements.append(component)
            return
        if node.is_leaf:
            node.children = self._split(node.bounds)
            for element in node.elements:
                for child in node.children:
                    self._insert(child, element)
            node.elements.clear()
        for child in node.children:
            self._insert(child, component)

    @staticmethod
    def _split(bounds: AABB) -> list[OctreeNode]:
        centre = bounds.centre()
        half = tuple(extent * 0.25 for extent in bounds.size())
        children = []
        for sz, sy, sx in product((-1, 1), repeat=3):
            c = (centre[0] + sx * half[0], centre[1] + sy * half[1], centre[2] + sz * half[2])
            children.append(
                OctreeNode(
                    AABB(
                        tuple(v - h for v, h in zip(c, half)),
                        tuple(v + h for v, h in zip(c, half)),
                    )
                )
            )
        return children

    def collides_with(self, collider: Collider) -> bool:
        return False

    def collides_with_ray(self, ray: RayCollider) -> bool:
        """True when the ray hits an enabled element; fires its callback on a new hit."""
        if not aabb_ray_collision(self.root.bounds, ray):
            return False
        return self._traverse(self.root, ray)

    def _traverse(self, node: OctreeNode, ray: RayCollider) -> bool:
        if node.is_leaf:
            for element in node.elements:
                if not element.enabled:
                    continue
                if element.collider.collides_with_ray(ray):
                    if element is not self._last_collider and element.on_collision is not None:
                        element.on_collision()
                    self._last_collider = element
                    return True
            return False
        collided = False
        for child in node.children:
            if aabb_ray_collision(child.bounds, ray):
                collided |= self._traverse(child, ray)
        return collided

    def update_entity(self, entity) -> bool:
        """Copy the entity's collider and enabled flag onto its stored element."""
        with self._lock:
            new = entity.get_component(ComponentType.COLLISION)
            if not isinstance(new, ColliderComponent):
                return False
            if self._update_collider(new, entity, self.root):
                return True
            logger.warning("octree: failed to update collider for entity %r", entity)
            return False

    def _update_collider(self, new: ColliderComponent, entity, node: OctreeNode) -> bool:
        for element in node.elements:
            if element.owner is entity:
                element.collider = new.collider
                element.enabled = new.enabled
                return True
        return any(self._update_collider(new, entity, child) for child in node.children)
"""Axis-aligned boxes, rays and the slab test between them."""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from dataclasses import dataclass

from .messages import ColliderType

Vec3 = tuple[float, float, float]

_DEGENERATE_INVERSE = 1e-6


def _vec3(value) -> Vec3:
    x, y, z = value
    return (float(x), float(y), float(z))


@dataclass
class AABB:
    """An axis-aligned bounding box given by its minimum and maximum corners."""

    min: Vec3
    max: Vec3

    def __post_init__(self) -> None:
        self.min = _vec3(self.min)
        self.max = _vec3(self.max)

    def size(self) -> Vec3:
        """Extent of the box along each axis."""
        return tuple(hi - lo for lo, hi in zip(self.min, self.max))

    def centre(self) -> Vec3:
        """Midpoint of the box."""
        return tuple((hi + lo) * 0.5 for lo, hi in zip(self.min, self.max))

    def intersects(self, other: AABB) -> bool:
        """True when the boxes overlap or touch."""
        return all(
            not (hi < other_lo or lo > other_hi)
            for lo, hi, other_lo, other_hi in zip(self.min, self.max, other.min, other.max)
        )


class Collider(ABC):
    """Base for anything that can be tested for collision."""

    def __init__(self, collider_type: ColliderType = ColliderType.STATIC) -> None:
        self.type = collider_type
        self.enabled = True

    @abstractmethod
    def collides_with(self, collider: Collider) -> bool:
        """Test against another collider."""

    @abstractmethod
    def collides_with_ray(self, ray: RayCollider) -> bool:
        """Test against a ray."""


class AABBCollider(Collider):
    """A collider shaped as an axis-aligned box."""

    def __init__(self, min, max, collider_type: ColliderType = ColliderType.STATIC) -> None:
        super().__init__(collider_type)
        self.bounds = AABB(min, max)

    @property
    def min(self) -> Vec3:
        return self.bounds.min

    @min.setter
    def min(self, value) -> None:
        self.bounds.min = _vec3(value)

    @property
    def max(self) -> Vec3:
        return self.bounds.max

    @max.setter
    def max(self, value) -> None:
        self.bounds.max = _vec3(value)

    def collides_with(self, collider: Collider) -> bool:
        """Only rays are tested; any other collider never collides."""
        if isinstance(collider, RayCollider):
            return aabb_ray_collision(self.bounds, collider)
        return False

    def collides_with_ray(self, ray: RayCollider) -> bool:
        return aabb_ray_collision(self.bounds, ray)


class RayCollider(Collider):
    """A ray given by an origin and a direction."""

    def __init__(self, origin, direction, collider_type: ColliderType = ColliderType.KINEMATIC) -> None:
        super().__init__(collider_type)
        self.origin = _vec3(origin)
        self.direction = _vec3(direction)

    def collides_with(self, collider: Collider) -> bool:
        """Rays are the testers, never the tested."""
        return False

    def collides_with_ray(self, ray: RayCollider) -> bool:
        return False


def _inverse(component: float) -> float:
    if component == 0.0:
        return math.copysign(math.inf, component)
    return 1.0 / component


def aabb_ray_collision(aabb: AABB, ray: RayCollider) -> bool:
    """Slab test of the ray's line against the box.

    A direction component so large that its inverse is within 1e-6 of zero
    counts as a miss.
    """
    tmin, tmax = -math.inf, math.inf
    for lo, hi, origin, direction in zip(aabb.min, aabb.max, ray.origin, ray.direction):
        inverse = _inverse(direction)
        if -_DEGENERATE_INVERSE < inverse < _DEGENERATE_INVERSE:
            return False
        t0 = (lo - origin) * inverse
        t1 = (hi - origin) * inverse
        if inverse < 0.0:
            t0, t1 = t1, t0
        if t0 > tmin:
            tmin = t0
        if t1 < tmax:
            tmax = t1
        if tmax < tmin:
            return False
    return True
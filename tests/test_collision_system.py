import pytest

from sketchengine.collision_system import CollisionSystem
from sketchengine.colliders import AABBCollider, RayCollider
from sketchengine.components import ColliderComponent
from sketchengine.entity import Entity
from sketchengine.messages import (
    SET_CORE,
    Addressee,
    ColliderType,
    PullEntityMessage,
    SystemMessage,
    UpdateEntityMessage,
)


def _ray_entity(origin=(-5.0, 0.5, 0.5), direction=(1.0, 0.0, 0.0), hits=None):
    entity = Entity("ray")
    component = ColliderComponent(RayCollider(origin, direction), entity)
    if hits is not None:
        component.on_collision = lambda: hits.append(entity)
    entity.add_component(component)
    return entity


def _system(entities):
    return CollisionSystem(entities, core_record=[], cpu_count=2)


def test_only_kinematic_colliders_tracked():
    static_entity = Entity("box")
    static_entity.add_component(ColliderComponent(AABBCollider((0, 0, 0), (1, 1, 1)), static_entity))
    ray_entity = _ray_entity()
    system = _system([static_entity, ray_entity, Entity("empty")])
    assert [k.owner for k in system.kinematics] == [ray_entity]


def test_kinematics_are_copies():
    entity = _ray_entity()
    system = _system([entity])
    assert system.kinematics[0] is not entity.get_component(ColliderComponent(None).type)
    assert system.kinematics[0].collider is entity.get_component(system.kinematics[0].type).collider


def test_ray_hitting_static_fires_callback():
    hits = []
    entity = _ray_entity(hits=hits)
    system = _system([entity])
    system.add_collider(AABBCollider((0, 0, 0), (1, 1, 1)))
    system.process()
    assert hits == [entity]


def test_each_hit_static_fires():
    hits = []
    entity = _ray_entity(hits=hits)
    system = _system([entity])
    system.add_collider(AABBCollider((0, 0, 0), (1, 1, 1)))
    system.add_collider(AABBCollider((3, 0, 0), (4, 1, 1)))
    system.process()
    assert len(hits) == 2


def test_miss_fires_nothing():
    hits = []
    system = _system([_ray_entity(hits=hits)])
    system.add_collider(AABBCollider((0, 2, 0), (1, 3, 1)))
    system.process()
    assert hits == []


def test_disabled_static_and_kinematic_skipped():
    hits = []
    entity = _ray_entity(hits=hits)
    system = _system([entity])
    box = AABBCollider((0, 0, 0), (1, 1, 1))
    box.enabled = False
    system.add_collider(box)
    system.process()
    assert hits == []
    box.enabled = True
    system.kinematics[0].enabled = False
    system.process()
    assert hits == []


def test_non_ray_kinematic_ignored():
    hits = []
    entity = Entity("moving box")
    component = ColliderComponent(AABBCollider((0, 0, 0), (1, 1, 1), ColliderType.KINEMATIC), entity)
    component.on_collision = lambda: hits.append(entity)
    entity.add_component(component)
    system = _system([entity])
    system.add_collider(AABBCollider((0, 0, 0), (1, 1, 1)))
    system.process()
    assert len(system.kinematics) == 1
    assert hits == []


def test_update_entity_message_replaces_copy():
    hits = []
    entity = _ray_entity(hits=hits)
    system = _system([entity])
    system.add_collider(AABBCollider((0, 0, 0), (1, 1, 1)))
    entity.remove_component(ColliderComponent(None).type)
    replacement = ColliderComponent(RayCollider((-5, 0.5, 0.5), (1, 0, 0)), entity)
    replacement.enabled = False
    entity.add_component(replacement)
    system.on_message(UpdateEntityMessage(Addressee.COLLISION_SYSTEM, entity))
    assert system.kinematics[0].enabled is False
    system.process()
    assert hits == []


def test_messages_for_other_systems_ignored():
    system = CollisionSystem([], core=0, core_record=[], cpu_count=4)
    system.on_message(SystemMessage(Addressee.RENDER_SYSTEM, SET_CORE, 3))
    assert system.core == 0
    system.on_message(SystemMessage(Addressee.COLLISION_SYSTEM, SET_CORE, 3))
    assert system.core == 3


def test_pull_message_not_handled():
    system = _system([])
    system.on_message(PullEntityMessage(Addressee.ALL))
    assert system.pull_requested is False


@pytest.mark.parametrize("address", [Addressee.ALL, Addressee.COLLISION_SYSTEM])
def test_address_includes_collision_system(address):
    system = _system([])
    assert (system.address & address) == address
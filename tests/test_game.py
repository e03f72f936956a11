import pytest

from sketchengine.components import RenderComponent, TransformComponent
from sketchengine.entity import Entity
from sketchengine.game import Game, Window
from sketchengine.mesh import Mesh
from sketchengine.messages import (
    Addressee,
    ChangeRenderComponentMessage,
    Message,
    send_message,
)
from sketchengine.renderer import Renderer
from sketchengine.scene import Scene
from sketchengine.timer import Timer


class RecordingScene(Scene):
    def __init__(self):
        super().__init__()
        self.updates = []
        self.messages = []
        self.imgui_calls = 0

    def update(self, dt):
        self.updates.append(dt)

    def on_message(self, message):
        self.messages.append(message)

    def imgui(self):
        self.imgui_calls += 1


def _options():
    return {"core_record": [], "cpu_count": 2}


@pytest.fixture
def game():
    g = Game(system_options=_options())
    yield g
    g.shutdown()


def _drawable(name="thing"):
    entity = Entity(name)
    render = RenderComponent(entity)
    render.mesh = Mesh()
    entity.add_component(render)
    entity.add_component(TransformComponent((1.0, 2.0, 3.0), (1.0, 1.0, 1.0), entity))
    return entity


def test_window_dimensions_reach_game(game):
    window = Window(game, 640, 480)
    game.initialise(window)
    assert (game.game_width, game.game_height) == (640, 480)
    assert game.renderer is window.renderer


def test_dimensions_without_window_raise(game):
    with pytest.raises(RuntimeError):
        game.game_width
    with pytest.raises(RuntimeError):
        game.game_height
    game.initialise(Window(game, 320, 200))
    assert game.game_width == 320
    assert game.game_height == 200


def test_invalid_history_rejected():
    with pytest.raises(ValueError):
        Game(history=0)


def test_initialise_collects_existing_entities(game):
    entity = _drawable()
    game.add_entity(entity)
    game.initialise(Window(game, 100, 100))
    assert [r.owner for r in game.render_system.renderables] == [entity]


def test_add_entity_after_initialise_requests_pull(game):
    game.initialise(Window(game, 100, 100))
    assert game.render_system.pull_requested is False
    entity = _drawable()
    game.add_entity(entity)
    assert game.render_system.pull_requested is True
    game.render_system.process()
    assert game.render_system.pull_requested is False
    assert [r.owner for r in game.render_system.renderables] == [entity]


def test_add_entities_keeps_order(game):
    first, second = Entity("a"), Entity("b")
    game.add_entities([first, second])
    assert game.entities == [first, second]


def test_render_process_draws_and_samples_ui(game):
    renderer = Renderer()
    game.initialise(Window(game, 100, 100, renderer))
    scene = RecordingScene()
    game.scene_manager.push(scene)
    game.add_entity(_drawable())
    game.render_system.process()
    game.render_system.process()
    assert len(renderer.last_frame) == 1
    assert scene.imgui_calls == 2
    stats = game.stats()
    assert len(stats["render"].values) == 2
    assert len(stats["collision"].values) == 2
    assert stats["render"].label == "Render FPS: 0"
    assert stats["collision"].label == "Collision TPS: 0"


def test_frame_history_is_bounded():
    with Game(history=3, system_options=_options()) as g:
        for value in (1, 2, 3, 4, 5):
            g.add_frame_time(value)
        render = g.stats()["render"]
        assert render.values == (3.0, 4.0, 5.0)
        assert render.scale_min == 0.0
        assert render.scale_max == 25.0


def test_collision_history_scale_encloses_values(game):
    for value in (60, 58, 61):
        game.add_collision_time(value)
    collision = game.stats()["collision"]
    assert collision.values == (60.0, 58.0, 61.0)
    assert collision.scale_min <= min(collision.values)
    assert collision.scale_max >= max(collision.values)


def test_send_message_reaches_entities(game):
    entity = _drawable()
    game.add_entity(entity)
    game.send_message(ChangeRenderComponentMessage(Addressee.ENTITY, 0.5, 0.25, 0.125))
    render = entity.get_component(RenderComponent(None).type)
    assert render.colour == (0.5, 0.25, 0.125, 1.0)


def test_send_message_not_for_entities_leaves_them(game):
    entity = _drawable()
    game.add_entity(entity)
    game.send_message(ChangeRenderComponentMessage(Addressee.SCENE, 0.5, 0.25, 0.125))
    render = entity.get_component(RenderComponent(None).type)
    assert render.colour == (1.0, 1.0, 1.0, 1.0)


def test_scene_receives_scene_messages(game):
    scene = RecordingScene()
    game.scene_manager.push(scene)
    message = Message(Addressee.SCENE)
    game.send_message(message)
    assert scene.messages == [message]


def test_game_is_the_dispatcher_until_shutdown():
    g = Game(system_options=_options())
    scene = RecordingScene()
    g.scene_manager.push(scene)
    message = Message(Addressee.SCENE)
    send_message(message)
    assert scene.messages == [message]
    g.shutdown()
    with pytest.raises(RuntimeError):
        send_message(message)


def test_run_updates_scene_with_timer_delta():
    times = iter([0.0, 0.5])
    timer = Timer(clock=lambda: next(times))
    with Game(timer=timer, system_options=_options()) as g:
        scene = RecordingScene()
        g.scene_manager.push(scene)
        g.run()
        assert scene.updates == [0.5]
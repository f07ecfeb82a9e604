"""
Tests for the session controller: state machine, input dispatch,
high-score persistence and snapshots.
"""

import json

import pytest

from conftest import hazard_on
from game.survivor.config import GameConfig
from game.survivor.entities import SessionState
from game.survivor.session import JsonHighScoreStore, MemoryHighScoreStore, SessionController


class FailingStore:
    """Store whose backend is unavailable."""

    def __init__(self):
        self.commits = 0

    def load(self):
        raise OSError("storage unavailable")

    def commit(self, value):
        self.commits += 1
        raise OSError("storage unavailable")


@pytest.fixture
def controller():
    return SessionController(GameConfig(hazard_count=0), seed=3)


def _kill_with_hazard(controller):
    state = controller.state
    state.lives = 0
    state.hazards = [hazard_on(state.player.rect())]
    controller.step(0.016)


# =============================================================================
# State machine
# =============================================================================

class TestTransitions:
    def test_starts_not_started(self, controller):
        assert controller.session_state is SessionState.NOT_STARTED
        assert not controller.running

    def test_primary_action_starts_session(self, controller):
        assert controller.primary_action((10.0, 10.0)) is True
        assert controller.session_state is SessionState.RUNNING
        assert not controller.dragging

    def test_primary_action_while_running_begins_drag(self, controller):
        controller.primary_action()
        assert controller.primary_action((300.0, 200.0)) is False
        assert controller.dragging
        controller.step(0.0)
        assert controller.state.player.center() == (300.0, 200.0)

    def test_begin_is_idempotent_while_running(self, controller):
        controller.begin_session()
        controller.step(2.0)
        assert controller.begin_session() is False
        assert controller.score == pytest.approx(2.0)

    def test_restart_resets_everything(self, controller):
        controller.begin_session()
        state = controller.state
        controller.step(12.0)
        state.player.invincible = True
        state.player.invincibility_remaining = 0.5
        state.session = SessionState.GAME_OVER

        assert controller.restart_session() is True
        assert state.score == 0.0
        assert state.lives == 3
        assert not state.player.invincible
        assert state.player.invincibility_remaining == 0.0
        assert not state.pickup.active
        assert not state.hunter.active
        assert state.hunter.speed == state.config.hunter_base_speed
        assert (state.last_pickup_step, state.last_hunter_step) == (-1, -1)
        assert len(state.hazards) == state.config.hazard_count

    def test_hazard_death_then_restart(self, controller):
        controller.begin_session()
        _kill_with_hazard(controller)
        assert controller.session_state is SessionState.GAME_OVER
        assert controller.primary_action() is True
        assert controller.session_state is SessionState.RUNNING


# =============================================================================
# Input
# =============================================================================

class TestInput:
    def test_move_ignored_without_drag(self, controller):
        controller.begin_session()
        before = controller.state.player.rect()
        controller.move_to((10.0, 10.0))
        controller.step(0.0)
        assert controller.state.player.rect() == before

    def test_drag_then_release(self, controller):
        controller.begin_session()
        controller.primary_action((200.0, 200.0))
        controller.move_to((250.0, 220.0))
        controller.step(0.0)
        assert controller.state.player.center() == (250.0, 220.0)
        controller.release()
        controller.move_to((100.0, 100.0))
        controller.step(0.0)
        assert controller.state.player.center() == (250.0, 220.0)

    def test_explicit_target_wins(self, controller):
        controller.begin_session()
        controller.primary_action((200.0, 200.0))
        controller.step(0.0, target=(300.0, 300.0))
        assert controller.state.player.center() == (300.0, 300.0)


# =============================================================================
# High score
# =============================================================================

class TestHighScore:
    def test_loaded_at_startup(self):
        controller = SessionController(store=MemoryHighScoreStore(42.0))
        assert controller.high_score == 42.0

    def test_committed_on_game_over(self):
        store = MemoryHighScoreStore(1.0)
        controller = SessionController(GameConfig(hazard_count=0), store=store)
        controller.begin_session()
        controller.step(3.0)
        _kill_with_hazard(controller)
        assert store.value == pytest.approx(3.016)
        assert controller.high_score == pytest.approx(3.016)

    def test_not_committed_when_lower(self):
        store = MemoryHighScoreStore(100.0)
        controller = SessionController(GameConfig(hazard_count=0), store=store)
        controller.begin_session()
        controller.step(3.0)
        _kill_with_hazard(controller)
        assert store.value == 100.0
        assert controller.high_score == 100.0

    def test_store_failures_are_swallowed(self):
        store = FailingStore()
        controller = SessionController(GameConfig(hazard_count=0), store=store)
        assert controller.high_score == 0.0

        controller.begin_session()
        controller.step(2.0)
        _kill_with_hazard(controller)
        assert store.commits == 1
        assert controller.session_state is SessionState.GAME_OVER
        assert controller.high_score == pytest.approx(2.016)

    def test_json_store(self, tmp_path):
        path = tmp_path / "highscore.json"
        store = JsonHighScoreStore(str(path))
        assert store.load() == 0.0

        controller = SessionController(GameConfig(hazard_count=0), store=store)
        controller.begin_session()
        controller.step(4.0)
        _kill_with_hazard(controller)

        assert json.loads(path.read_text())["highscore"] == pytest.approx(4.016)
        assert SessionController(store=JsonHighScoreStore(str(path))).high_score == pytest.approx(4.016)

    def test_corrupt_json_falls_back_to_zero(self, tmp_path):
        path = tmp_path / "highscore.json"
        path.write_text("{not json")
        controller = SessionController(store=JsonHighScoreStore(str(path)))
        assert controller.high_score == 0.0


# =============================================================================
# Snapshot
# =============================================================================

def test_snapshot_reflects_state(controller):
    controller.begin_session()
    state = controller.state
    state.lives = -1
    state.pickup.active = True
    snap = controller.snapshot()

    assert snap.state is SessionState.RUNNING
    assert snap.player == state.player.rect()
    assert snap.display_lives == 0
    assert snap.lives == -1
    assert snap.hunter is None
    assert snap.pickup == state.pickup.rect()
    assert snap.hazards == ()
    with pytest.raises(AttributeError):
        snap.score = 99.0

"""
Tests for the tick scheduler.

A recording wait function replaces real sleeping so the tests are
deterministic and fast.
"""

import pytest
import sys
import os
import threading

# Add backend to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from main import GameLoop
from domain import Snake
from services.tick_scheduler import TickScheduler


class FixedRandom:
    def __init__(self, value: float):
        self.value = value

    def random(self) -> float:
        return self.value


class RecordingWait:
    """Records requested wait periods; optional hooks run on the Nth call."""

    def __init__(self, hooks=None, stop_after=None):
        self.periods = []
        self.hooks = hooks or {}
        self.stop_after = stop_after

    def __call__(self, seconds: float) -> bool:
        self.periods.append(seconds)
        hook = self.hooks.get(len(self.periods))
        if hook:
            hook()
        return self.stop_after is not None and len(self.periods) > self.stop_after


@pytest.fixture
def game():
    return GameLoop(rng=FixedRandom(0.9))


class TestRunBlocking:
    """Tests for run_blocking()."""

    def test_runs_until_wall_and_stops(self, game):
        """Moving right from x=100 hits the right wall on the 16th tick."""
        wait = RecordingWait()
        scheduler = TickScheduler(game, wait=wait)

        ticks = scheduler.run_blocking()

        assert ticks == 16
        assert game.is_running is False
        assert game.death_reason == "wall"
        assert len(wait.periods) == 16
        assert scheduler.is_active is False

    def test_waits_for_current_speed_before_each_tick(self, game):
        wait = RecordingWait(stop_after=3)
        TickScheduler(game, wait=wait).run_blocking()
        assert wait.periods == [0.09, 0.09, 0.09, 0.09]

    def test_speed_change_applies_from_next_tick(self, game):
        """A speed change during a wait affects the following wait only."""
        wait = RecordingWait(hooks={2: lambda: game.set_speed(40)}, stop_after=4)
        scheduler = TickScheduler(game, wait=wait)

        ticks = scheduler.run_blocking()

        assert ticks == 4
        assert wait.periods[:2] == [0.09, 0.09]
        assert wait.periods[2:] == [0.04, 0.04, 0.04]
        assert game.snake.head == (200, 0)
        assert game.score == 0

    def test_direction_change_between_ticks(self, game):
        wait = RecordingWait(hooks={2: lambda: game.set_direction("DOWN")}, stop_after=3)
        TickScheduler(game, wait=wait).run_blocking()
        assert list(game.snake.positions)[:3] == [(125, 50), (125, 25), (125, 0)]

    def test_stop_request_exits_without_ticking(self, game):
        scheduler = TickScheduler(game, wait=lambda seconds: True)
        assert scheduler.run_blocking() == 0
        assert game.tick_number == 0

    def test_no_ticks_after_game_over(self, game):
        game.snake = Snake([(0, 0), (25, 0)])
        game.velocity = (-25, 0)
        wait = RecordingWait(stop_after=10)

        assert TickScheduler(game, wait=wait).run_blocking() == 1
        assert game.tick_number == 1
        assert len(wait.periods) == 1

    def test_game_already_over_runs_nothing(self, game):
        game.snake = Snake([(0, 0), (25, 0)])
        game.velocity = (-25, 0)
        game.tick()

        scheduler = TickScheduler(game, wait=RecordingWait())
        assert scheduler.run_blocking() == 0

    def test_run_blocking_refuses_second_runner(self, game):
        scheduler = TickScheduler(game, wait=lambda seconds: True)
        scheduler._active = True
        with pytest.raises(RuntimeError):
            scheduler.run_blocking()

    def test_tick_error_halts_scheduler(self, game):
        scheduler = TickScheduler(game, wait=RecordingWait())

        def broken_tick():
            raise RuntimeError("boom")

        game.tick = broken_tick
        with pytest.raises(RuntimeError):
            scheduler.run_blocking()
        assert scheduler.is_active is False


class TestBackgroundStart:
    """Tests for start()/stop() on a worker thread."""

    def test_only_one_worker(self, game):
        release = threading.Event()

        def gated_wait(seconds):
            release.wait(2)
            return False

        scheduler = TickScheduler(game, wait=gated_wait)
        try:
            assert scheduler.start() is True
            assert scheduler.start() is False
            assert scheduler.is_active is True
        finally:
            scheduler._stop_event.set()
            release.set()
            scheduler.stop(timeout=2)

        assert scheduler.is_active is False
        assert game.tick_number == 0

    def test_worker_stops_on_game_over_and_can_restart(self, game):
        game.set_speed(1)
        scheduler = TickScheduler(game)

        assert scheduler.start() is True
        scheduler._thread.join(timeout=5)

        assert game.is_running is False
        assert scheduler.is_active is False
        assert scheduler.ticks_run == 16

        game.reset()
        game.snake = Snake([(0, 0), (25, 0)])
        game.velocity = (-25, 0)
        assert scheduler.start() is True
        scheduler._thread.join(timeout=5)
        assert scheduler.ticks_run == 17

    def test_stop_interrupts_default_wait(self, game):
        game.set_speed(60000)
        scheduler = TickScheduler(game)
        scheduler.start()
        scheduler.stop(timeout=2)
        assert scheduler._thread.is_alive() is False
        assert game.tick_number == 0

    def test_restart_while_previous_worker_is_still_exiting(self, game):
        """A restart right after stop() gets a fresh worker; the old one never ticks."""
        release = threading.Event()

        def gated_wait(seconds):
            release.wait(2)
            return False

        scheduler = TickScheduler(game, wait=gated_wait)
        assert scheduler.start() is True
        old_worker = scheduler._thread

        scheduler.stop(timeout=0.01)
        assert old_worker.is_alive() is True
        assert scheduler.is_active is False

        game.reset()
        assert scheduler.start() is True
        new_worker = scheduler._thread
        assert new_worker is not old_worker

        release.set()
        old_worker.join(timeout=5)
        new_worker.join(timeout=5)

        assert game.is_running is False
        assert game.death_reason == "wall"
        assert scheduler.ticks_run == 16
        assert scheduler.is_active is False

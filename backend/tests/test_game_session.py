"""
Tests for services/game_session.py.
"""

import pytest
import sys
import os
from unittest.mock import patch

# Add backend to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from data_access import BestScoreStore, save_best_score  # noqa: E402
from database import init_database  # noqa: E402
from domain import RunningState  # noqa: E402
from services.game_session import GameSession  # noqa: E402


class TestFromEnv:
    """Tests for GameSession.from_env()."""

    def test_reads_board_settings(self, tmp_path, monkeypatch):
        monkeypatch.setenv("SNAKE_DB_PATH", str(tmp_path / "snake.db"))
        monkeypatch.setenv("SNAKE_BOARD_WIDTH", "300")
        monkeypatch.setenv("SNAKE_BOARD_HEIGHT", "200")
        monkeypatch.setenv("SNAKE_UNIT_SIZE", "20")
        monkeypatch.setenv("SNAKE_DEFAULT_SPEED", "120")

        session = GameSession.from_env()

        game = session.game
        assert (game.width, game.height, game.unit, game.speed) == (300, 200, 20, 120)
        assert isinstance(game.best_score_store, BestScoreStore)
        assert list(game.snake.positions)[0] == (80, 0)

    def test_arguments_override_env(self, tmp_path, monkeypatch):
        monkeypatch.setenv("SNAKE_DB_PATH", str(tmp_path / "snake.db"))
        monkeypatch.setenv("SNAKE_DEFAULT_SPEED", "120")
        session = GameSession.from_env(speed=35)
        assert session.game.speed == 35

    @pytest.mark.parametrize("kwargs", [{"width": 0}, {"height": 0}, {"unit": 0}, {"speed": 0}])
    def test_explicit_zero_is_not_replaced_by_env(self, tmp_path, monkeypatch, kwargs):
        monkeypatch.setenv("SNAKE_DB_PATH", str(tmp_path / "snake.db"))
        monkeypatch.setenv("SNAKE_BOARD_WIDTH", "300")
        monkeypatch.setenv("SNAKE_BOARD_HEIGHT", "200")
        monkeypatch.setenv("SNAKE_UNIT_SIZE", "20")
        monkeypatch.setenv("SNAKE_DEFAULT_SPEED", "120")

        with pytest.raises(ValueError):
            GameSession.from_env(**kwargs)

    def test_picks_up_persisted_best_score(self, tmp_path, monkeypatch):
        monkeypatch.setenv("SNAKE_DB_PATH", str(tmp_path / "snake.db"))
        init_database()
        save_best_score(14)

        assert GameSession.from_env().game.best_score == 14


class TestActions:
    """Tests for the player actions exposed by the session."""

    def setup_method(self):
        self.session = GameSession(wait=lambda seconds: True)

    def teardown_method(self):
        self.session.stop()

    def test_set_speed_requires_a_value(self):
        with pytest.raises(ValueError):
            self.session.set_speed()

    def test_level_wins_over_period(self):
        assert self.session.set_speed(period=70, level="easy") == 150
        assert self.session.game.speed == 150

    def test_start_twice_starts_one_scheduler(self):
        with patch.object(self.session.scheduler, "start", side_effect=[True, False]) as mock_start:
            assert self.session.start() is True
            assert self.session.start() is False
        assert mock_start.call_count == 2

    def test_reset_restarts_game_and_scheduler(self):
        self.session.game.running_state = RunningState.GAME_OVER
        with patch.object(self.session.scheduler, "start") as mock_start:
            self.session.reset()
        assert self.session.game.is_running is True
        mock_start.assert_called_once()

    def test_state_and_frame(self):
        assert self.session.state()["running"] is True
        assert self.session.frame_png().startswith(b'\x89PNG')

    def test_levels_copy(self):
        levels = self.session.levels()
        levels["hard"] = 1
        assert GameSession.levels()["hard"] == 60

import asyncio

import numpy as np
import pygame
import pytest

from superadventure.backend import GameBackend
from superadventure.errors import InvalidPlayerName
from superadventure.game import Game, validate_player_name
from superadventure.state import GameState
from superadventure.storage import MemoryStorage

from conftest import VIEW_H, VIEW_W, flat_level, stand

RIGHT = frozenset({pygame.K_RIGHT})


@pytest.fixture
def game(clock):
    levels = [flat_level(), flat_level("Second")]
    return Game(GameBackend(MemoryStorage()), VIEW_W, VIEW_H,
                rng=np.random.default_rng(3), clock=clock, levels=levels)


def test_start_game_schedules_one_loop(game):
    game.start_game()
    assert game.state is GameState.PLAYING
    assert game.loop_active
    assert len(game.scheduler.pending) == 1
    assert game.scheduler.run_frame() == 1


def test_timer_waits_for_first_move(game, clock):
    game.start_game()
    clock.advance(5000)
    game.scheduler.run_frame()
    assert not game.timer.running
    game.held_keys = RIGHT
    game.scheduler.run_frame()
    assert game.timer.running
    clock.advance(200)
    assert game.timer.get_elapsed_time() == 200


def test_pause_stops_ticks_and_time(game, clock):
    game.start_game()
    game.held_keys = RIGHT
    game.scheduler.run_frame()
    clock.advance(100)
    x = game.world.player.x

    assert game.toggle_pause()
    assert game.state is GameState.PAUSED
    assert not game.loop_active
    clock.advance(10000)
    assert game.scheduler.run_frame() == 0
    assert game.tick(RIGHT) == []
    assert game.world.player.x == x

    assert game.toggle_pause()
    assert game.state is GameState.PLAYING
    assert len(game.scheduler.pending) == 1
    assert game.timer.get_elapsed_time() == 100


def test_back_to_menu_cancels_loop(game):
    game.start_game()
    game.back_to_menu()
    assert game.state is GameState.MENU
    assert game.scheduler.pending == []
    assert not game.pause()
    assert not game.resume()


def test_game_over_is_recorded(game):
    game.start_game()
    game.world.run.lives = 1
    game.world.player.y = 900
    game.scheduler.run_frame()

    assert game.state is GameState.GAME_OVER
    assert not game.loop_active
    assert game.pending_result.level == 1
    assert not game.pending_result.won

    summary = asyncio.run(game.finish_game_over())
    assert summary.name == "Player"
    assert summary.stats["gamesPlayed"] == 1
    assert summary.stats["gamesWon"] == 0
    assert len(summary.high_scores) == 1
    assert game.pending_result is None
    # a second call does not save twice
    asyncio.run(game.finish_game_over())
    assert asyncio.run(game.backend.get_stats())["gamesPlayed"] == 1


def test_restart_after_game_over(game):
    game.start_game()
    game.world.run.lives = 1
    game.world.player.y = 900
    game.scheduler.run_frame()
    game.start_game()
    assert game.state is GameState.PLAYING
    assert game.world.run.lives == 3
    assert len(game.scheduler.pending) == 1


class GatedStorage(MemoryStorage):
    """Writes wait until the test opens the gate."""

    def __init__(self):
        super().__init__()
        self.open = False

    async def set(self, key, value):
        while not self.open:
            await asyncio.sleep(0)
        await super().set(key, value)


def test_restart_is_refused_while_saving(clock):
    storage = GatedStorage()
    game = Game(GameBackend(storage), VIEW_W, VIEW_H, rng=np.random.default_rng(3),
                clock=clock, levels=[flat_level()])
    game.start_game()
    game.world.run.lives = 1
    game.world.player.y = 900
    game.scheduler.run_frame()

    async def scenario():
        save = asyncio.ensure_future(game.finish_game_over())
        await asyncio.sleep(0)
        assert game.saving
        assert game.pending_result is None
        assert not game.start_game()
        assert game.state is GameState.GAME_OVER
        storage.open = True
        return await save

    summary = asyncio.run(scenario())
    assert not game.saving
    assert game.summary is summary
    assert summary.stats["gamesPlayed"] == 1
    assert game.start_game()


def win(game):
    game.start_game()
    game.world.generate_level(1)
    stand(game.world.player, 1895)
    game.tick(RIGHT)


def test_win_requires_valid_name(game, clock):
    win(game)
    assert game.state is GameState.WIN
    assert game.pending_result.won
    assert game.pending_result.level == 2

    with pytest.raises(InvalidPlayerName):
        asyncio.run(game.submit_score_name("ab"))
    assert game.state is GameState.WIN
    assert game.pending_result is not None
    assert asyncio.run(game.backend.get_high_scores()) == []

    summary = asyncio.run(game.submit_score_name("  Alice "))
    assert summary.name == "Alice"
    assert summary.stats["gamesWon"] == 1
    assert summary.high_scores[0]["name"] == "Alice"


def test_skip_name_saves_default(game):
    win(game)
    summary = asyncio.run(game.skip_score_name())
    assert summary.high_scores[0]["name"] == "Player"


def test_menu_overview(game):
    win(game)
    asyncio.run(game.skip_score_name())
    game.back_to_menu()
    scores, summary = asyncio.run(game.menu_overview())
    assert len(scores) == 1
    assert summary["gamesWon"] == 1
    assert summary["bestScore"] == scores[0]["score"]


@pytest.mark.parametrize("name", ["", "ab", "   ab   ", "x" * 13])
def test_bad_names(name):
    with pytest.raises(InvalidPlayerName):
        validate_player_name(name)


def test_good_name_is_stripped():
    assert validate_player_name(" Bob ") == "Bob"

import logging
from enum import Enum

import numpy as np

from superadventure.collision import overlaps
from superadventure.entities import (
    Background, Camera, Coin, Enemy, Platform, Player, RunState, burst, held,
)
from superadventure.levels import get_level_data
from superadventure.settings import (
    COIN_BONUS, COIN_GOLD, COIN_PARTICLES, DEATH_PARTICLES, DEATH_RED,
    ENEMY_COLORS, KEYS_JUMP, KEYS_LEFT, KEYS_RIGHT, LEVEL_BONUS,
    LEVEL_END_MARGIN, STOMP_BONUS, STOMP_BOUNCE, STOMP_PARTICLES,
)

logger = logging.getLogger(__name__)


class Event(Enum):
    JUMP = "jump"
    STOMP = "stomp"
    COIN = "coin"
    DEATH = "death"
    LEVEL_COMPLETE = "level_complete"
    GAME_OVER = "game_over"
    WIN = "win"


class Outcome(Enum):
    GAME_OVER = "game_over"
    WIN = "win"


def wants_to_move(keys):
    return held(keys, KEYS_LEFT) or held(keys, KEYS_RIGHT) or held(keys, KEYS_JUMP)


class World:
    """Everything one tick of the simulation reads and writes."""

    def __init__(self, viewport_width, viewport_height, rng=None, levels=None):
        self.viewport_width = viewport_width
        self.viewport_height = viewport_height
        self.levels = levels if levels is not None else get_level_data(viewport_height)
        self.rng = rng if rng is not None else np.random.default_rng()
        self.player = Player(viewport_height)
        self.camera = Camera()
        self.background = Background(viewport_width, viewport_height)
        self.run = RunState()
        self.platforms = []
        self.enemies = []
        self.coins = []
        self.particles = []
        self.level_width = 0
        self.outcome = None

    @property
    def level(self):
        return self.levels[self.run.level_index]

    @property
    def enemy_color(self):
        return ENEMY_COLORS[min(self.run.level_index, len(ENEMY_COLORS) - 1)]

    def new_run(self):
        self.run = RunState()
        self.outcome = None
        self.background.init_clouds(self.rng)
        self.generate_level(0)
        self.reset_player()

    def generate_level(self, index):
        assert 0 <= index < len(self.levels), f"no level at index {index}"
        self.run.level_index = index
        level = self.levels[index]
        self.platforms = [Platform(p.x, p.y, p.w, p.h, level.color) for p in level.platforms]
        self.coins = [Coin(c.x, c.y) for c in level.coins]
        self.spawn_enemies()
        self.particles = []
        self.level_width = level.width
        logger.debug("Generated level %d (%s)", index + 1, level.name)

    def spawn_enemies(self):
        color = self.enemy_color
        self.enemies = [Enemy(e.x, e.y, e.speed, color) for e in self.level.enemies]

    def reset_player(self):
        self.player.reset()
        self.camera.reset()

    def emit(self, x, y, color, count):
        self.particles.extend(burst(self.rng, x, y, color, count))

    def kill_player(self, events):
        self.run.lives -= 1
        cx, cy = self.player.center
        self.emit(cx, cy, DEATH_RED, DEATH_PARTICLES)
        events.append(Event.DEATH)
        if self.run.lives <= 0:
            self.outcome = Outcome.GAME_OVER
            events.append(Event.GAME_OVER)
            logger.info("Game over on level %d with %d points", self.run.level_number, self.run.score)
            return
        logger.info("Player died, %d lives left", self.run.lives)
        self.reset_player()
        self.spawn_enemies()

    def complete_level(self, events):
        self.run.score += LEVEL_BONUS
        next_index = self.run.level_index + 1
        if next_index >= len(self.levels):
            self.outcome = Outcome.WIN
            events.append(Event.WIN)
            logger.info("All levels cleared with %d points", self.run.score)
            return
        self.reset_player()
        self.generate_level(next_index)
        events.append(Event.LEVEL_COMPLETE)
        logger.info("Entering level %d: %s", self.run.level_number, self.level.name)


def update_enemies(world, events):
    player = world.player
    for enemy in world.enemies:
        if not enemy.alive:
            continue
        enemy.update(world.platforms)
        if not overlaps(player, enemy):
            continue
        if player.stomps(enemy):
            enemy.kill()
            player.vel_y = STOMP_BOUNCE
            world.run.score += STOMP_BONUS
            cx, cy = enemy.center
            world.emit(cx, cy, enemy.color, STOMP_PARTICLES)
            events.append(Event.STOMP)
            logger.debug("Stomped enemy at %.0f", enemy.x)
        else:
            world.kill_player(events)
            # the enemy list was replaced or the run is over
            return


def update_coins(world, events):
    player = world.player
    for coin in world.coins:
        if coin.collected:
            continue
        if coin.update(player):
            world.run.coins += 1
            world.run.score += COIN_BONUS
            cx, cy = coin.center
            world.emit(cx, cy, COIN_GOLD, COIN_PARTICLES)
            events.append(Event.COIN)


def update_particles(world):
    world.particles = [p for p in world.particles if p.update()]


def step(world, keys):
    """Advance the world by one tick and return what happened.

    keys is the set of currently held key codes. Nothing moves once the
    run has an outcome.
    """
    events = []
    if world.outcome is not None:
        return events
    player = world.player

    if player.handle_input(keys):
        events.append(Event.JUMP)
    player.update(world.platforms)

    if player.fell_out(world.viewport_height):
        world.kill_player(events)
        if world.outcome is not None:
            return events

    update_enemies(world, events)
    if world.outcome is not None:
        return events

    update_coins(world, events)
    update_particles(world)
    world.background.update(world.rng)
    world.camera.follow(player, world.viewport_width, world.level_width)

    if player.x > world.level_width - LEVEL_END_MARGIN:
        world.complete_level(events)
    return events

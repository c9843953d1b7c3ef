import os

os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")

import numpy as np
import pytest

from superadventure.levels import LevelDescriptor, PlatformSpec
from superadventure.world import World

VIEW_W, VIEW_H = 800, 600
GROUND_Y = 500
STANDING_Y = GROUND_Y - 35


class FakeClock:
    def __init__(self, now=0):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, ms):
        self.now += ms


def flat_level(name="Flat", width=2000, coins=(), enemies=()):
    return LevelDescriptor(
        name=name,
        platforms=(PlatformSpec(0, GROUND_Y, width, 50),),
        coins=tuple(coins),
        enemies=tuple(enemies),
        color=(10, 20, 30),
    )


def make_world(levels=None):
    world = World(VIEW_W, VIEW_H, rng=np.random.default_rng(7),
                  levels=levels or [flat_level(), flat_level("Second", width=2400)])
    world.new_run()
    return world


def stand(player, x):
    player.x = x
    player.y = STANDING_Y
    player.vel_x = 0.0
    player.vel_y = 0.0
    player.on_ground = True


@pytest.fixture
def clock():
    return FakeClock(1000)


@pytest.fixture
def world():
    return make_world()

from typing import NamedTuple, Tuple

from superadventure.settings import GROUND_OFFSET


class PlatformSpec(NamedTuple):
    x: float
    y: float
    w: float
    h: float


class CoinSpawn(NamedTuple):
    x: float
    y: float


class EnemySpawn(NamedTuple):
    x: float
    y: float
    speed: float


class LevelDescriptor(NamedTuple):
    name: str
    platforms: Tuple[PlatformSpec, ...]
    coins: Tuple[CoinSpawn, ...]
    enemies: Tuple[EnemySpawn, ...]
    color: Tuple[int, int, int]

    @property
    def width(self):
        return max(p.x + p.w for p in self.platforms)


def _platforms(ground_y, rows):
    # rows are (x, height above ground, width, thickness)
    return tuple(PlatformSpec(x, ground_y - dy, w, h) for x, dy, w, h in rows)


def _coins(ground_y, rows):
    return tuple(CoinSpawn(x, ground_y - dy) for x, dy in rows)


def _enemies(ground_y, rows):
    return tuple(EnemySpawn(x, ground_y - dy, speed) for x, dy, speed in rows)


def get_level_data(viewport_height):
    """The three levels, with the ground line anchored to the screen bottom."""
    ground_y = viewport_height - GROUND_OFFSET

    green_plains = LevelDescriptor(
        name="Planície Verde",
        platforms=_platforms(ground_y, [
            (0, 0, 250, 50), (300, 70, 120, 20), (470, 150, 100, 20),
            (620, 230, 130, 20), (800, 100, 150, 20), (1000, 200, 120, 20),
            (1170, 270, 100, 20), (1320, 150, 180, 20), (1550, 50, 150, 20),
            (1750, 130, 120, 20), (1920, 0, 200, 50),
        ]),
        coins=_coins(ground_y, [
            (330, 110), (490, 190), (640, 270), (820, 140), (1020, 240),
            (1190, 310), (1360, 190), (1580, 90), (1770, 170),
        ]),
        enemies=_enemies(ground_y, [
            (320, 90, 2), (640, 250, 1.5), (1030, 220, 2.5),
            (1370, 170, 2), (1770, 150, 1.8),
        ]),
        color=(139, 69, 19),
    )

    rocky_mountain = LevelDescriptor(
        name="Montanha Rochosa",
        platforms=_platforms(ground_y, [
            (0, 0, 180, 50), (230, 50, 100, 20), (380, 130, 90, 20),
            (520, 210, 110, 20), (680, 290, 100, 20), (830, 170, 140, 20),
            (1020, 250, 100, 20), (1170, 330, 110, 20), (1330, 410, 120, 20),
            (1500, 290, 130, 20), (1680, 170, 150, 20), (1880, 50, 140, 20),
            (2070, 0, 200, 50),
        ]),
        coins=_coins(ground_y, [
            (250, 90), (400, 170), (540, 250), (700, 330), (850, 210),
            (1040, 290), (1190, 370), (1350, 450), (1520, 330), (1700, 210),
            (1900, 90),
        ]),
        enemies=_enemies(ground_y, [
            (250, 70, 2.2), (540, 230, 2.5), (700, 310, 2), (1050, 270, 2.8),
            (1350, 430, 2.3), (1710, 190, 2.6), (1900, 70, 2.4),
        ]),
        color=(101, 67, 33),
    )

    dark_cave = LevelDescriptor(
        name="Caverna Escura",
        platforms=_platforms(ground_y, [
            (0, 0, 150, 50), (200, 70, 80, 20), (330, 150, 90, 20),
            (470, 230, 80, 20), (600, 310, 100, 20), (750, 210, 90, 20),
            (890, 290, 100, 20), (1040, 370, 90, 20), (1180, 270, 110, 20),
            (1340, 350, 100, 20), (1490, 430, 110, 20), (1650, 310, 120, 20),
            (1820, 190, 130, 20), (2000, 70, 150, 20), (2200, 0, 250, 50),
        ]),
        coins=_coins(ground_y, [
            (220, 110), (350, 190), (490, 270), (620, 350), (770, 250),
            (910, 330), (1060, 410), (1200, 310), (1360, 390), (1510, 470),
            (1670, 350), (1840, 230), (2020, 110),
        ]),
        enemies=_enemies(ground_y, [
            (220, 90, 2.5), (490, 250, 3), (620, 330, 2.7), (920, 310, 3.2),
            (1200, 290, 2.9), (1370, 370, 3.1), (1680, 330, 2.8),
            (1850, 210, 3), (2030, 90, 2.6),
        ]),
        color=(74, 74, 74),
    )

    return [green_plains, rocky_mountain, dark_cave]

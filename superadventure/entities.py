from superadventure.collision import find_support, overlaps, resolve
from superadventure.settings import (
    CLOUD_COUNT, COIN_PULSE, COIN_SIZE, COIN_SPIN, ENEMY_FOOTING_DEPTH,
    ENEMY_SIZE, FALL_DEATH_MARGIN, FAST_FALL_ACCEL, GRAVITY, JUMP_POWER,
    KEYS_FAST_FALL, KEYS_JUMP, KEYS_LEFT, KEYS_RIGHT, PARTICLE_GRAVITY,
    PARTICLE_LIFE, PLAYER_HEIGHT, PLAYER_RED, PLAYER_SPEED, PLAYER_WIDTH,
    SPAWN_X, SPAWN_Y_OFFSET, START_LIVES, STOMP_TOLERANCE, SUN_GLOW_SPEED,
)


def held(keys, bindings):
    return any(k in keys for k in bindings)


class Player:
    def __init__(self, viewport_height):
        self.width = PLAYER_WIDTH
        self.height = PLAYER_HEIGHT
        self.speed = PLAYER_SPEED
        self.jump_power = JUMP_POWER
        self.color = PLAYER_RED
        self.spawn_x = SPAWN_X
        self.spawn_y = viewport_height - SPAWN_Y_OFFSET
        self.reset()

    def reset(self):
        self.x = float(self.spawn_x)
        self.y = float(self.spawn_y)
        self.vel_x = 0.0
        self.vel_y = 0.0
        self.on_ground = False

    @property
    def center(self):
        return self.x + self.width / 2, self.y + self.height / 2

    def jump(self):
        if self.on_ground:
            self.vel_y = -self.jump_power
            self.on_ground = False
            return True
        return False

    def handle_input(self, keys):
        """Set the velocity from the held keys. Returns True when a jump starts."""
        self.vel_x = 0.0
        if held(keys, KEYS_LEFT):
            self.vel_x = -self.speed
        if held(keys, KEYS_RIGHT):
            self.vel_x = self.speed
        jumped = held(keys, KEYS_JUMP) and self.jump()
        if held(keys, KEYS_FAST_FALL) and not self.on_ground and self.vel_y > 0:
            self.vel_y += FAST_FALL_ACCEL
        return jumped

    def update(self, platforms):
        self.vel_y += GRAVITY
        self.x += self.vel_x
        self.y += self.vel_y
        self.on_ground = False
        for platform in platforms:
            if overlaps(self, platform):
                resolve(self, platform)

    def fell_out(self, viewport_height):
        return self.y > viewport_height + FALL_DEATH_MARGIN

    def stomps(self, enemy):
        # falling, with the body midpoint still above the enemy's top
        return self.vel_y > 0 and self.y + self.height / 2 < enemy.y + STOMP_TOLERANCE


class Platform:
    def __init__(self, x, y, width, height, color):
        self.x = x
        self.y = y
        self.width = width
        self.height = height
        self.color = color

    @property
    def right(self):
        return self.x + self.width


class Enemy:
    def __init__(self, x, y, speed, color):
        self.x = float(x)
        self.y = float(y)
        self.width = ENEMY_SIZE
        self.height = ENEMY_SIZE
        self.speed = speed
        self.direction = 1
        self.alive = True
        self.color = color

    @property
    def center(self):
        return self.x + self.width / 2, self.y + self.height / 2

    def kill(self):
        self.alive = False

    def update(self, platforms):
        """Walk along, turning round at the edges of the platform underfoot."""
        self.x += self.speed * self.direction
        support = find_support(self, platforms, ENEMY_FOOTING_DEPTH)
        if support is None:
            return
        if self.x <= support.x or self.x + self.width >= support.right:
            self.direction *= -1
            self.x = max(support.x, min(self.x, support.right - self.width))


class Coin:
    def __init__(self, x, y):
        self.x = x
        self.y = y
        self.width = COIN_SIZE
        self.height = COIN_SIZE
        self.collected = False
        self.rotation = 0.0
        self.pulse = 0.0

    @property
    def center(self):
        return self.x + self.width / 2, self.y + self.height / 2

    def spin(self):
        self.rotation += COIN_SPIN
        self.pulse += COIN_PULSE

    def collect(self):
        self.collected = True

    def update(self, player):
        """Spin, and get collected on contact. Returns True when collected."""
        self.spin()
        if overlaps(player, self):
            self.collect()
            return True
        return False


class Particle:
    __slots__ = ("x", "y", "vel_x", "vel_y", "life", "max_life", "color", "size")

    def __init__(self, x, y, vel_x, vel_y, color, size, life=PARTICLE_LIFE):
        self.x = x
        self.y = y
        self.vel_x = vel_x
        self.vel_y = vel_y
        self.life = life
        self.max_life = life
        self.color = color
        self.size = size

    def update(self):
        self.x += self.vel_x
        self.y += self.vel_y
        self.vel_y += PARTICLE_GRAVITY
        self.life -= 1
        return self.life > 0


def burst(rng, x, y, color, count):
    """Particles spraying up and out from (x, y)."""
    vel_x = (rng.random(count) - 0.5) * 12
    vel_y = rng.random(count) * -10 - 3
    sizes = rng.random(count) * 5 + 2
    return [Particle(x, y, float(vx), float(vy), color, float(s))
            for vx, vy, s in zip(vel_x, vel_y, sizes)]


class Camera:
    def __init__(self):
        self.x = 0.0

    def follow(self, player, viewport_width, level_width):
        max_x = max(0.0, level_width - viewport_width)
        target = player.x - viewport_width / 2 + player.width / 2
        self.x = max(0.0, min(target, max_x))

    def reset(self):
        self.x = 0.0


class Cloud:
    def __init__(self, x, y, width, height, speed, opacity):
        self.x = x
        self.y = y
        self.width = width
        self.height = height
        self.speed = speed
        self.opacity = opacity


class Sun:
    def __init__(self):
        self.x = 150
        self.y = 80
        self.radius = 50
        self.glow_phase = 0.0


class Background:
    def __init__(self, viewport_width, viewport_height):
        self.viewport_width = viewport_width
        self.viewport_height = viewport_height
        self.clouds = []
        self.sun = Sun()

    def init_clouds(self, rng):
        w, h = self.viewport_width, self.viewport_height
        self.clouds = [
            Cloud(x=float(rng.random() * w * 2),
                  y=float(rng.random() * h * 0.4),
                  width=float(60 + rng.random() * 80),
                  height=float(30 + rng.random() * 30),
                  speed=float(0.3 + rng.random() * 0.5),
                  opacity=float(0.6 + rng.random() * 0.4))
            for _ in range(CLOUD_COUNT)
        ]

    def update(self, rng):
        for cloud in self.clouds:
            cloud.x += cloud.speed
            if cloud.x > self.viewport_width + cloud.width:
                cloud.x = -cloud.width
                cloud.y = float(rng.random() * self.viewport_height * 0.4)
        self.sun.glow_phase += SUN_GLOW_SPEED


class RunState:
    """Lives, score, coins and level for one run."""

    def __init__(self):
        self.lives = START_LIVES
        self.score = 0
        self.coins = 0
        self.level_index = 0

    @property
    def level_number(self):
        return self.level_index + 1

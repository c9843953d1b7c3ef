import os
from pathlib import Path

import pygame

# Configuration
SCREEN_WIDTH, SCREEN_HEIGHT = 960, 600
FPS = 60
TITLE = "Super Adventure"

# Physics (per tick)
GRAVITY = 0.85
FAST_FALL_ACCEL = 1.2
PARTICLE_GRAVITY = 0.4
LANDING_TOLERANCE = 5
FALL_DEATH_MARGIN = 100
LEVEL_END_MARGIN = 100
GROUND_OFFSET = 50
ENEMY_FOOTING_DEPTH = 5
STOMP_TOLERANCE = 5

# Player
PLAYER_WIDTH = 35
PLAYER_HEIGHT = 35
PLAYER_SPEED = 6
JUMP_POWER = 16
STOMP_BOUNCE = -10
SPAWN_X = 80
SPAWN_Y_OFFSET = 200
START_LIVES = 3

# Entities
ENEMY_SIZE = 28
COIN_SIZE = 20
COIN_SPIN = 0.08
COIN_PULSE = 0.15
PARTICLE_LIFE = 40
CLOUD_COUNT = 8
SUN_GLOW_SPEED = 0.02

# Scoring
STOMP_BONUS = 150
COIN_BONUS = 100
LEVEL_BONUS = 500

# Particle bursts
DEATH_PARTICLES = 15
STOMP_PARTICLES = 10
COIN_PARTICLES = 12

# Colors
SKY_BLUE = (135, 206, 235)
GRASS_GREEN = (152, 251, 152)
SUN_YELLOW = (255, 215, 0)
CLOUD_WHITE = (255, 255, 255)
PLAYER_RED = (255, 68, 68)
PLAYER_OUTLINE = (204, 0, 0)
DEATH_RED = (255, 0, 0)
COIN_GOLD = (255, 215, 0)
COIN_ORANGE = (255, 165, 0)
BLACK = (0, 0, 0)
WHITE = (255, 255, 255)
ENEMY_COLORS = [(138, 43, 226), (220, 20, 60), (255, 99, 71)]

# Key bindings
KEYS_LEFT = (pygame.K_LEFT, pygame.K_a)
KEYS_RIGHT = (pygame.K_RIGHT, pygame.K_d)
KEYS_JUMP = (pygame.K_UP, pygame.K_w, pygame.K_SPACE)
KEYS_FAST_FALL = (pygame.K_DOWN, pygame.K_s)

# Storage
STORAGE_PREFIX = "superadventure_"
HIGH_SCORE_LIMIT = 10
MENU_SCORE_ROWS = 5
NAME_MIN_LENGTH = 3
NAME_MAX_LENGTH = 12
DEFAULT_PLAYER_NAME = "Player"
DATA_DIR = Path(os.environ.get("SUPERADVENTURE_DATA_DIR", Path.home() / ".superadventure"))
LOG_LEVEL = os.environ.get("SUPERADVENTURE_LOG_LEVEL", "INFO")

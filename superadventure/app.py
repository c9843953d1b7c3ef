import asyncio
import logging
import math

import pygame

from superadventure.backend import GameBackend
from superadventure.errors import InvalidPlayerName
from superadventure.game import Game, validate_player_name
from superadventure.settings import (
    BLACK, CLOUD_WHITE, COIN_GOLD, COIN_ORANGE, DATA_DIR, FPS, GRASS_GREEN,
    KEYS_FAST_FALL, KEYS_JUMP, KEYS_LEFT, KEYS_RIGHT, LOG_LEVEL, NAME_MAX_LENGTH,
    PLAYER_OUTLINE, SCREEN_HEIGHT, SCREEN_WIDTH, SKY_BLUE, SUN_YELLOW, TITLE,
    WHITE,
)
from superadventure.scheduler import BackgroundTasks
from superadventure.state import GameState
from superadventure.storage import default_storage

logger = logging.getLogger(__name__)

TRACKED_KEYS = KEYS_LEFT + KEYS_RIGHT + KEYS_JUMP + KEYS_FAST_FALL


def held_keys(pressed):
    return frozenset(k for k in TRACKED_KEYS if pressed[k])


class SuperAdventure:
    def __init__(self):
        pygame.init()
        self.screen = pygame.display.set_mode((SCREEN_WIDTH, SCREEN_HEIGHT))
        pygame.display.set_caption(TITLE)
        self.clock = pygame.time.Clock()
        self.font = pygame.font.Font(None, 48)
        self.small_font = pygame.font.Font(None, 26)
        self.tasks = BackgroundTasks()
        self.save_task = None
        self.game = Game(GameBackend(default_storage(DATA_DIR)), SCREEN_WIDTH, SCREEN_HEIGHT)
        self.running = True
        self.name_text = ""
        self.name_error = ""
        self.menu_scores = []
        self.menu_stats = {}
        self.refresh_menu()

    @property
    def saving(self):
        return self.save_task is not None and not self.save_task.done()

    def save(self, coro):
        self.save_task = self.tasks.spawn(coro)

    def refresh_menu(self):
        self.tasks.spawn(self.load_menu(self.save_task))

    async def load_menu(self, pending_save):
        # the menu lists the run that is still being saved
        if pending_save is not None and not pending_save.done():
            await asyncio.wait([pending_save])
        self.menu_scores, self.menu_stats = await self.game.menu_overview()

    # input

    def handle_key(self, event):
        state = self.game.state
        if state is GameState.WIN and self.game.pending_result is not None:
            self.handle_name_key(event)
            return
        if event.key == pygame.K_RETURN and state in (GameState.MENU, GameState.GAME_OVER, GameState.WIN):
            self.game.start_game()
        elif event.key in (pygame.K_p, pygame.K_ESCAPE) and state in (GameState.PLAYING, GameState.PAUSED):
            self.game.toggle_pause()
        elif event.key == pygame.K_m and state is not GameState.MENU:
            self.game.back_to_menu()
            self.refresh_menu()

    def handle_name_key(self, event):
        if self.saving:
            return
        if event.key == pygame.K_RETURN:
            try:
                validate_player_name(self.name_text)
            except InvalidPlayerName as e:
                self.name_error = str(e)
                return
            self.save(self.game.submit_score_name(self.name_text))
            self.name_text = ""
            self.name_error = ""
        elif event.key == pygame.K_ESCAPE:
            self.save(self.game.skip_score_name())
            self.name_text = ""
            self.name_error = ""
        elif event.key == pygame.K_BACKSPACE:
            self.name_text = self.name_text[:-1]
        elif event.unicode and event.unicode.isprintable() and len(self.name_text) < NAME_MAX_LENGTH:
            self.name_text += event.unicode

    # drawing

    def draw_background(self):
        world = self.game.world
        self.screen.fill(SKY_BLUE)
        pygame.draw.rect(self.screen, GRASS_GREEN, (0, int(SCREEN_HEIGHT * 0.7), SCREEN_WIDTH, SCREEN_HEIGHT))
        sun = world.background.sun
        glow = 1 + math.sin(sun.glow_phase) * 0.15
        glow_surf = pygame.Surface((SCREEN_WIDTH, SCREEN_HEIGHT), pygame.SRCALPHA)
        pygame.draw.circle(glow_surf, (255, 255, 100, 70), (sun.x, sun.y), int(sun.radius * glow * 2))
        self.screen.blit(glow_surf, (0, 0))
        pygame.draw.circle(self.screen, SUN_YELLOW, (sun.x, sun.y), sun.radius)
        for i in range(12):
            angle = i * math.pi * 2 / 12 + sun.glow_phase
            start = (sun.x + math.cos(angle) * (sun.radius + 5), sun.y + math.sin(angle) * (sun.radius + 5))
            end = (sun.x + math.cos(angle) * sun.radius * 2.5, sun.y + math.sin(angle) * sun.radius * 2.5)
            pygame.draw.line(self.screen, SUN_YELLOW, start, end, 3)
        for cloud in world.background.clouds:
            surf = pygame.Surface((int(cloud.width * 1.5), int(cloud.height * 2)), pygame.SRCALPHA)
            alpha = int(255 * cloud.opacity)
            pygame.draw.ellipse(surf, (*CLOUD_WHITE, alpha), surf.get_rect())
            self.screen.blit(surf, (int(cloud.x), int(cloud.y - cloud.height)))

    def draw_world(self):
        world = self.game.world
        cam = world.camera.x
        for p in world.platforms:
            rect = pygame.Rect(int(p.x - cam), int(p.y), int(p.width), int(p.height))
            pygame.draw.rect(self.screen, p.color, rect)
            pygame.draw.rect(self.screen, BLACK, rect, 2)
        for coin in world.coins:
            if coin.collected:
                continue
            cx, cy = coin.center
            radius = int(10 * (1 + math.sin(coin.pulse) * 0.1))
            pygame.draw.circle(self.screen, COIN_GOLD, (int(cx - cam), int(cy)), radius)
            pygame.draw.circle(self.screen, COIN_ORANGE, (int(cx - cam), int(cy)), max(1, radius - 3))
        for enemy in world.enemies:
            if not enemy.alive:
                continue
            x, y = int(enemy.x - cam), int(enemy.y)
            pygame.draw.rect(self.screen, enemy.color, (x, y, enemy.width, enemy.height))
            pygame.draw.rect(self.screen, BLACK, (x, y, enemy.width, enemy.height), 2)
            pygame.draw.rect(self.screen, WHITE, (x + 5, y + 6, 7, 7))
            pygame.draw.rect(self.screen, WHITE, (x + 16, y + 6, 7, 7))
            pygame.draw.rect(self.screen, BLACK, (x + 8, y + 18, 12, 3))
        player = world.player
        x, y = int(player.x - cam), int(player.y)
        pygame.draw.rect(self.screen, player.color, (x, y, player.width, player.height))
        pygame.draw.rect(self.screen, PLAYER_OUTLINE, (x, y, player.width, player.height), 3)
        pygame.draw.rect(self.screen, WHITE, (x + 7, y + 8, 8, 8))
        pygame.draw.rect(self.screen, WHITE, (x + 20, y + 8, 8, 8))
        for p in world.particles:
            surf = pygame.Surface((max(1, int(p.size)), max(1, int(p.size))), pygame.SRCALPHA)
            surf.fill((*p.color, int(255 * p.life / p.max_life)))
            self.screen.blit(surf, (int(p.x - cam), int(p.y)))

    def draw_hud(self):
        run = self.game.world.run
        items = [
            f"LIVES: {run.lives}",
            f"SCORE: {run.score:06d}",
            f"LEVEL: {run.level_number}",
            f"COINS: {run.coins:02d}",
            f"TIME: {self.game.timer.formatted()}",
        ]
        x = 10
        for item in items:
            text = self.small_font.render(item, True, WHITE)
            self.screen.blit(text, (x, 10))
            x += text.get_width() + 30

    def draw_centered(self, lines, top):
        y = top
        for text, font in lines:
            surf = font.render(text, True, WHITE)
            self.screen.blit(surf, (SCREEN_WIDTH // 2 - surf.get_width() // 2, y))
            y += surf.get_height() + 12

    def draw_overlay(self):
        overlay = pygame.Surface((SCREEN_WIDTH, SCREEN_HEIGHT), pygame.SRCALPHA)
        overlay.fill((0, 0, 0, 160))
        self.screen.blit(overlay, (0, 0))

    def draw_menu(self):
        self.screen.fill(SKY_BLUE)
        lines = [
            (TITLE.upper(), self.font),
            ("Press ENTER to Start", self.small_font),
            ("Arrows/A/D - Move   Up/W/Space - Jump   Down/S - Fast fall", self.small_font),
            ("P/Esc - Pause   M - Menu", self.small_font),
            (f"Games played: {self.menu_stats.get('gamesPlayed', 0)}   "
             f"Won: {self.menu_stats.get('gamesWon', 0)}   "
             f"Record: {self.menu_stats.get('bestScore', 0)}", self.small_font),
        ]
        if self.menu_scores:
            for i, entry in enumerate(self.menu_scores):
                lines.append((f"#{i + 1}  {entry.get('name', '-')}  {entry.get('score', 0)} pts  "
                              f"{entry.get('date', '')}", self.small_font))
        else:
            lines.append(("No records yet!", self.small_font))
        self.draw_centered(lines, 120)

    def draw_summary(self):
        self.draw_overlay()
        game = self.game
        if game.state is GameState.WIN and game.pending_result is not None and not self.saving:
            result = game.pending_result
            lines = [
                ("CONGRATULATIONS!", self.font),
                (f"Score: {result.score}   Coins: {result.coins}   Time: {result.time_text}", self.small_font),
                ("Enter your name and press ENTER (Esc to skip)", self.small_font),
                (self.name_text + "_", self.font),
            ]
            if self.name_error:
                lines.append((self.name_error, self.small_font))
            self.draw_centered(lines, SCREEN_HEIGHT // 3)
            return
        summary = game.summary
        if summary is None:
            self.draw_centered([("Saving...", self.font)], SCREEN_HEIGHT // 3)
            return
        result = summary.result
        title = "CONGRATULATIONS!" if result.won else "GAME OVER"
        lines = [
            (title, self.font),
            (f"Final score: {result.score}", self.small_font),
            (f"Coins collected: {result.coins}", self.small_font),
            (f"Reached level: {result.level}", self.small_font),
            (f"Time: {result.time_text}", self.small_font),
            ("ENTER - Play again   M - Menu", self.small_font),
        ]
        self.draw_centered(lines, SCREEN_HEIGHT // 3)

    def draw(self):
        state = self.game.state
        if state is GameState.MENU:
            self.draw_menu()
            return
        self.draw_background()
        self.draw_world()
        self.draw_hud()
        if self.game.paused:
            self.draw_overlay()
            self.draw_centered([("PAUSED", self.font), ("Press P to resume", self.small_font)],
                               SCREEN_HEIGHT // 3)
        elif state in (GameState.GAME_OVER, GameState.WIN):
            self.draw_summary()

    def run(self):
        while self.running:
            self.clock.tick(FPS)
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    self.running = False
                elif event.type == pygame.KEYDOWN:
                    self.handle_key(event)

            self.game.held_keys = held_keys(pygame.key.get_pressed())
            self.game.scheduler.run_frame()
            if (self.game.state is GameState.GAME_OVER and self.game.pending_result is not None
                    and not self.saving):
                self.save(self.game.finish_game_over())
            self.tasks.pump()

            self.draw()
            pygame.display.flip()

        self.tasks.close()
        pygame.quit()


def main():
    logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s %(name)s %(levelname)s %(message)s")
    SuperAdventure().run()


if __name__ == "__main__":
    main()

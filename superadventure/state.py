from enum import Enum

from superadventure.errors import IllegalTransition


class GameState(Enum):
    MENU = "menu"
    PLAYING = "playing"
    PAUSED = "paused"
    GAME_OVER = "game_over"
    WIN = "win"


LEGAL_TRANSITIONS = {
    GameState.MENU: {GameState.PLAYING},
    GameState.PLAYING: {GameState.PAUSED, GameState.GAME_OVER, GameState.WIN, GameState.MENU},
    GameState.PAUSED: {GameState.PLAYING, GameState.MENU},
    GameState.GAME_OVER: {GameState.MENU, GameState.PLAYING},
    GameState.WIN: {GameState.MENU, GameState.PLAYING},
}


class StateMachine:
    def __init__(self, state=GameState.MENU):
        self.state = state

    def can_go(self, target):
        return target in LEGAL_TRANSITIONS[self.state]

    def go(self, target):
        if not self.can_go(target):
            raise IllegalTransition(self.state, target)
        previous, self.state = self.state, target
        return previous

import argparse
import logging
import random
import sys
import termios
import time
from typing import Callable, Optional

from config import GameConfig, load_config
from data_access import (
    ScoreStore,
    SavedGame,
    SaveFormatError,
    encode_saved,
    decode_saved,
    read_save,
    write_save,
)
from domain.constants import (
    DIRECTION_VECTORS,
    UP,
    DOWN,
    LEFT,
    RIGHT,
    EASY_MODE_PENALTY,
    FOODS_PER_LEVEL,
    BASE_INTERVAL,
    LEVEL_STEP,
    MIN_INTERVAL,
    VERTICAL_FACTOR,
    SPEED_MULTIPLIERS,
    SpeedTier,
)
from domain.food import FoodItem
from domain.food_spawner import FoodSpawner, NoPlacementAvailable
from domain.game_state import GameState
from domain.geometry import Board, Position
from domain.snake import Snake
from services.renderer import Renderer
from services.terminal_input import KeyEvent, TerminalInput

logger = logging.getLogger(__name__)

# Commands handed back to the session loop by handle_key()
QUIT = "quit"
SAVE = "save"
LOAD = "load"

KEY_DIRECTIONS = {
    'w': DIRECTION_VECTORS[UP],
    's': DIRECTION_VECTORS[DOWN],
    'a': DIRECTION_VECTORS[LEFT],
    'd': DIRECTION_VECTORS[RIGHT],
}


class SnakeGame:
    """
    Manages:
      - Board (fixed size, walled)
      - The snake and its heading
      - Regular, bonus and hazard food
      - Score, level and the persisted high score
      - Mode flags (easy, wrap, speed tier)

    One call to tick() advances the world by one step. The score store is
    injected; it only needs ``record(score)`` and ``best()``.
    """

    def __init__(
        self,
        score_store,
        easy_mode: bool = False,
        wrap_mode: bool = False,
        speed_tier: SpeedTier = SpeedTier.NORMAL,
        rng: Optional[random.Random] = None,
        board: Optional[Board] = None
    ):
        self.score_store = score_store
        self.board = board or Board()
        self.rng = rng or random.Random()
        self.easy_mode = easy_mode
        self.wrap_mode = wrap_mode
        self.speed_tier = SpeedTier(speed_tier)

        self.snake = self._new_snake()
        self.spawner = FoodSpawner(self.board, self.rng, lambda: self.snake)
        self.score = 0
        self.high_score = 0
        self.foods_eaten = 0
        self.level = 1
        self.game_over = False
        self.paused = False
        self.tick_count = 0
        self.new_high_score = False

        self.reset()

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def _new_snake(self) -> Snake:
        return Snake([self.board.center], DIRECTION_VECTORS[RIGHT])

    def reset(self):
        """Start a fresh game with the current mode flags."""
        self.snake = self._new_snake()
        self.score = 0
        self.foods_eaten = 0
        self.level = 1
        self.game_over = False
        self.paused = False
        self.tick_count = 0
        self.new_high_score = False
        self.spawner.reset()
        self.high_score = self.score_store.best()
        logger.info(
            f"New game: easy={self.easy_mode} wrap={self.wrap_mode} "
            f"speed={self.speed_tier.name.lower()} high_score={self.high_score}"
        )

    def toggle_pause(self):
        # A finished game cannot be paused
        if not self.game_over:
            self.paused = not self.paused

    # ------------------------------------------------------------------
    # Input
    # ------------------------------------------------------------------

    def change_direction(self, direction) -> bool:
        wrap = self.board.wrap if self.wrap_mode else None
        return self.snake.set_direction(direction, wrap=wrap)

    def handle_key(self, event: Optional[KeyEvent]) -> Optional[str]:
        """
        Apply one key press. Returns QUIT, SAVE or LOAD when the session
        loop has to act, otherwise None.
        """
        if event is None:
            return None

        if event.arrow is not None:
            if not self.paused:
                self.change_direction(DIRECTION_VECTORS[event.arrow])
            return None

        key = (event.char or "").lower()
        if key in KEY_DIRECTIONS:
            if not self.paused:
                self.change_direction(KEY_DIRECTIONS[key])
        elif key == 'p':
            self.toggle_pause()
        elif key == 'r':
            if self.game_over:
                self.reset()
        elif key == 'q':
            return QUIT
        elif key == 'k' and self.paused:
            return SAVE
        elif key == 'l' and self.paused:
            return LOAD
        return None

    # ------------------------------------------------------------------
    # Simulation
    # ------------------------------------------------------------------

    def _collides(self, head: Position) -> bool:
        if not self.wrap_mode and not self.board.contains(head):
            return True
        return self.snake.hits_self(head)

    def _handle_collision(self):
        if self.easy_mode:
            self.score = max(0, self.score - EASY_MODE_PENALTY)
            self.snake = self._new_snake()
            self.spawner.reset()
            logger.info(f"Collision in easy mode: score now {self.score}, snake reset")
            return

        self.game_over = True
        if self.score > self.high_score:
            self.high_score = self.score
            self.new_high_score = True
        # Save score to leaderboard
        if self.score > 0:
            self.score_store.record(self.score)
        logger.info(f"Game over: score={self.score} level={self.level}")

    def tick(self):
        """
        Execute one step:
          1) Do nothing while over or paused
          2) Advance bonus/hazard timers
          3) Compute the next head (wrapped in wrap mode)
          4) Resolve collisions (easy-mode soft reset or game over)
          5) Resolve food pickup, move the snake, update score and level
        """
        if self.game_over or self.paused:
            return

        self.tick_count += 1
        self.spawner.advance_timers()

        new_head = self.snake.next_head()
        if self.wrap_mode:
            new_head = self.board.wrap(new_head)

        if self._collides(new_head):
            self._handle_collision()
            return

        # Bonus, then hazard, then regular
        eaten: Optional[FoodItem] = None
        for item in self.spawner.items:
            if item.occupies(new_head):
                eaten = item
                break

        grow = False
        if eaten is not None:
            spec = eaten.spec
            self.score = max(0, self.score + spec.points)
            # Growing foods are the ones that count toward the level
            if spec.grows:
                self.foods_eaten += 1
                grow = True
            if spec.shrink:
                self.snake.shrink(spec.shrink)
            if not spec.always_present:
                eaten.consume()

        self.snake.advance(new_head, grow)

        # Relocate only after the head has moved onto the eaten cell
        if eaten is self.spawner.regular:
            self.spawner.relocate_regular()
            self.spawner.roll_extra_spawns()
        elif eaten is self.spawner.bonus:
            self.spawner.relocate_regular()

        self.level = self.foods_eaten // FOODS_PER_LEVEL + 1

    def tick_interval(self) -> float:
        """Seconds the loop should wait before the next tick."""
        interval = max(MIN_INTERVAL, BASE_INTERVAL - self.level * LEVEL_STEP)
        if self.snake.direction[1] != 0:
            interval *= VERTICAL_FACTOR
        return interval * SPEED_MULTIPLIERS[self.speed_tier]

    def get_current_state(self) -> GameState:
        """
        Return a snapshot of the current board as a GameState.
        """
        return GameState(
            width=self.board.width,
            height=self.board.height,
            snake_positions=list(self.snake.positions),
            direction=self.snake.direction,
            foods=self.spawner.active_positions(),
            score=self.score,
            high_score=self.high_score,
            level=self.level,
            foods_eaten=self.foods_eaten,
            game_over=self.game_over,
            paused=self.paused,
            easy_mode=self.easy_mode,
            wrap_mode=self.wrap_mode,
            speed_tier=self.speed_tier,
            tick_count=self.tick_count,
            new_high_score=self.new_high_score
        )

    # ------------------------------------------------------------------
    # Save / load
    # ------------------------------------------------------------------

    def to_saved(self) -> SavedGame:
        bonus = self.spawner.bonus
        hazard = self.spawner.hazard
        food = self.spawner.regular.position
        dx, dy = self.snake.direction
        return SavedGame(
            score=self.score,
            foods_eaten=self.foods_eaten,
            easy_mode=self.easy_mode,
            wrap_mode=self.wrap_mode,
            speed_tier=self.speed_tier,
            bonus_active=bonus.active,
            bonus_x=bonus.position.x,
            bonus_y=bonus.position.y,
            bonus_lifetime=bonus.remaining_lifetime,
            bonus_cooldown=bonus.cooldown,
            hazard_active=hazard.active,
            hazard_x=hazard.position.x,
            hazard_y=hazard.position.y,
            hazard_cooldown=hazard.cooldown,
            food_x=food.x,
            food_y=food.y,
            body=list(self.snake.positions),
            dx=dx,
            dy=dy,
        )

    def save_game(self) -> bytes:
        return encode_saved(self.to_saved())

    def _check_on_board(self, saved: SavedGame):
        cells = list(saved.body) + [(saved.food_x, saved.food_y)]
        if saved.bonus_active:
            cells.append((saved.bonus_x, saved.bonus_y))
        if saved.hazard_active:
            cells.append((saved.hazard_x, saved.hazard_y))
        for cell in cells:
            if not self.board.contains(cell):
                raise SaveFormatError(f"Saved position {cell} is outside {self.board!r}")

        # The heading may not point back into the neck
        if len(saved.body) > 1:
            ahead = saved.body[0].offset(saved.direction)
            if saved.wrap_mode:
                ahead = self.board.wrap(ahead)
            if ahead == saved.body[1]:
                raise SaveFormatError(f"Heading {saved.direction} points into the snake's neck")

    def load_game(self, data: bytes) -> bool:
        """
        Replace the whole game with saved data.

        Nothing is applied unless the data parses completely. Returns False
        (and keeps the current game) on malformed data.
        """
        try:
            saved = decode_saved(data)
            self._check_on_board(saved)
        except SaveFormatError as e:
            logger.warning(f"Could not load saved game: {e}")
            return False

        self.score = max(0, saved.score)
        self.foods_eaten = max(0, saved.foods_eaten)
        self.level = self.foods_eaten // FOODS_PER_LEVEL + 1
        self.easy_mode = saved.easy_mode
        self.wrap_mode = saved.wrap_mode
        self.speed_tier = saved.speed_tier
        self.snake = Snake(saved.body, saved.direction)

        bonus = self.spawner.bonus
        bonus.active = saved.bonus_active
        bonus.position = Position(saved.bonus_x, saved.bonus_y)
        bonus.remaining_lifetime = saved.bonus_lifetime
        bonus.cooldown = saved.bonus_cooldown

        hazard = self.spawner.hazard
        hazard.active = saved.hazard_active
        hazard.position = Position(saved.hazard_x, saved.hazard_y)
        hazard.remaining_lifetime = 0
        hazard.cooldown = saved.hazard_cooldown

        self.spawner.regular.place(Position(saved.food_x, saved.food_y))

        self.game_over = False
        self.paused = False
        self.tick_count = 0
        self.new_high_score = False
        self.high_score = self.score_store.best()
        logger.info(f"Loaded saved game: score={self.score} length={len(self.snake)}")
        return True

    def __repr__(self):
        return (
            f"<SnakeGame score={self.score} level={self.level} length={len(self.snake)} "
            f"over={self.game_over} paused={self.paused}>"
        )


# -------------------------------
# Session loop
# -------------------------------

def save_to_file(game: SnakeGame, path: str) -> bool:
    try:
        write_save(path, game.save_game())
    except OSError as e:
        logger.warning(f"Could not write save file {path}: {e}")
        return False
    return True


def load_from_file(game: SnakeGame, path: str) -> bool:
    try:
        data = read_save(path)
    except OSError as e:
        logger.warning(f"Could not read save file {path}: {e}")
        return False
    return game.load_game(data)


def run_session(
    game: SnakeGame,
    keys,
    renderer: Renderer,
    save_path: str,
    sleep: Callable[[float], None] = time.sleep,
    max_ticks: Optional[int] = None
) -> None:
    """
    Cooperative loop: poll one key, tick once, draw, sleep.

    Returns when the player quits (or after ``max_ticks`` iterations).
    """
    iterations = 0
    while max_ticks is None or iterations < max_ticks:
        iterations += 1

        command = game.handle_key(keys.poll_key())
        if command == QUIT:
            logger.info("Player quit")
            return
        if command == SAVE:
            if save_to_file(game, save_path):
                renderer.message(f"Game saved to {save_path}")
            else:
                renderer.message("Save failed")
        elif command == LOAD:
            if load_from_file(game, save_path):
                renderer.message("Saved game loaded")
            else:
                renderer.message("No valid saved game - continuing current game")

        game.tick()
        renderer.draw(game.get_current_state())
        sleep(game.tick_interval())


START_SCREEN = [
    "",
    "  ============================================",
    "  |         SNAKE GAME                       |",
    "  ============================================",
    "  Press any key to start, 'L' to resume a saved game, 'Q' to quit",
]


def build_game(config: GameConfig) -> SnakeGame:
    return SnakeGame(
        score_store=ScoreStore(config.score_file),
        easy_mode=config.easy_mode,
        wrap_mode=config.wrap_mode,
        speed_tier=config.speed_tier,
        rng=random.Random(config.seed),
    )


def play(config: GameConfig) -> None:
    game = build_game(config)
    renderer = Renderer()
    with TerminalInput() as keys:
        renderer.open()
        try:
            renderer.draw_text(START_SCREEN)
            choice = (keys.wait_key().char or "").lower()
            if choice == 'q':
                return
            if choice == 'l' and not load_from_file(game, config.save_file):
                renderer.message("No valid saved game - starting a new one")
            run_session(game, keys, renderer, config.save_file)
        finally:
            renderer.close()


# -------------------------------
# Main Entry Point
# -------------------------------
def main():
    parser = argparse.ArgumentParser(
        description=(
            "Play snake in the terminal. Settings come from SNAKE_* environment "
            "variables (or a .env file)."
        )
    )
    parser.parse_args()

    try:
        config = load_config()
    except ValueError as e:
        parser.error(str(e))

    logging.basicConfig(
        filename=config.log_file,
        level=config.log_level,
        format="%(asctime)s [%(levelname)s] %(message)s",
    )

    try:
        play(config)
    except KeyboardInterrupt:
        logger.info("Interrupted")
    except (NoPlacementAvailable, OSError, termios.error) as e:
        logger.exception("Fatal error")
        print(f"snake: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()

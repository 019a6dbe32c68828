"""pygame front end: fixed-step loop, keyboard commands and a plain renderer."""

from __future__ import annotations

import logging

import pygame

from .audio import AudioCues
from .config import GameConfig
from .engine import GameEngine, GameSnapshot, GameStatus
from .errors import SpawnExhausted
from .grid import Direction

logger = logging.getLogger(__name__)

CELL_SIZE: int = 25
HUD_HEIGHT: int = 40
FONT_NAME: str = "consolas"
FONT_SIZE: int = 24
FPS: int = 120

KEY_TO_DIRECTION = {
    pygame.K_UP: Direction.UP,
    pygame.K_w: Direction.UP,
    pygame.K_DOWN: Direction.DOWN,
    pygame.K_s: Direction.DOWN,
    pygame.K_LEFT: Direction.LEFT,
    pygame.K_a: Direction.LEFT,
    pygame.K_RIGHT: Direction.RIGHT,
    pygame.K_d: Direction.RIGHT,
}
QUIT_KEYS = (pygame.K_q, pygame.K_ESCAPE)

PALETTE = {
    "bg": pygame.Color(31, 41, 55),
    "board": pygame.Color(17, 24, 39),
    "grid": pygame.Color(31, 41, 55),
    "border": pygame.Color(249, 168, 212),
    "head": pygame.Color(236, 72, 153),
    "body": [pygame.Color(244, 114, 182), pygame.Color(236, 72, 153)],
    "body_edge": pygame.Color(219, 39, 119),
    "food": pygame.Color(255, 255, 255),
    "text": pygame.Color(219, 39, 119),
    "overlay": pygame.Color(5, 5, 15, 140),
}


class SnakeArcade:
    """Window and main loop around a :class:`GameEngine`.

    Holds no game rules: keys become engine commands, the timer becomes
    ``tick()`` calls and every frame draws the engine snapshot.
    """

    def __init__(self, config: GameConfig | None = None, *, sound: bool = True) -> None:
        pygame.init()
        self.config = config or GameConfig()
        self.engine = GameEngine(self.config)
        self.audio: AudioCues | None = None
        if sound:
            self.audio = AudioCues()
            self.engine.events.subscribe(self.audio)

        self.board_px = self.config.grid_size * CELL_SIZE
        self.window = pygame.display.set_mode(
            (self.board_px, self.board_px + HUD_HEIGHT), pygame.DOUBLEBUF
        )
        pygame.display.set_caption("Snake")
        self.font = pygame.font.SysFont(FONT_NAME, FONT_SIZE)
        self.background = self._build_background()

        self.move_interval = self.config.tick_interval_ms / 1000.0
        self._move_accumulator = 0.0

    # --- Input ---------------------------------------------------------

    def handle_events(self) -> bool:
        """Drain the pygame event queue into engine commands."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                return False
            if event.type != pygame.KEYDOWN:
                continue
            if event.key in QUIT_KEYS:
                return False
            if event.key == pygame.K_SPACE:
                self.engine.toggle_pause()
                self._move_accumulator = 0.0
            elif event.key == pygame.K_r:
                self.engine.reset()
                self._move_accumulator = 0.0
            elif event.key in KEY_TO_DIRECTION:
                self.engine.set_direction(KEY_TO_DIRECTION[event.key])
        return True

    def advance(self, dt: float) -> int:
        """Feed ``dt`` seconds to the fixed-step timer; return ticks run."""
        if self.engine.status != GameStatus.RUNNING:
            self._move_accumulator = 0.0
            return 0
        steps = 0
        self._move_accumulator += dt
        while self._move_accumulator >= self.move_interval:
            try:
                self.engine.tick()
            except SpawnExhausted as exc:
                logger.warning("Board is full, ending the round: %s", exc)
                self.engine.end_round()
                self._move_accumulator = 0.0
                return steps
            self._move_accumulator -= self.move_interval
            steps += 1
        return steps

    # --- Draw ----------------------------------------------------------

    def _build_background(self) -> pygame.Surface:
        """Pre-render the board and grid lines once to keep draw() light."""
        surface = pygame.Surface((self.board_px, self.board_px))
        surface.fill(PALETTE["board"])
        for i in range(0, self.board_px, CELL_SIZE):
            pygame.draw.line(surface, PALETTE["grid"], (i, 0), (i, self.board_px), 1)
            pygame.draw.line(surface, PALETTE["grid"], (0, i), (self.board_px, i), 1)
        pygame.draw.rect(surface, PALETTE["border"], surface.get_rect(), width=2)
        return surface

    def _cell_rect(self, cell: tuple[int, int], inset: int = 1) -> pygame.Rect:
        x, y = cell
        return pygame.Rect(
            x * CELL_SIZE + inset,
            HUD_HEIGHT + y * CELL_SIZE + inset,
            CELL_SIZE - inset * 2,
            CELL_SIZE - inset * 2,
        )

    def draw(self, snap: GameSnapshot) -> None:
        """Render one frame: board, food, snake, HUD and overlays."""
        self.window.fill(PALETTE["bg"])
        self.window.blit(self.background, (0, HUD_HEIGHT))

        for food in snap.foods:
            radius = 9 if food.is_bonus else 6
            center = self._cell_rect(food.cell, inset=0).center
            pygame.draw.circle(self.window, PALETTE["food"], center, radius)

        for idx, cell in enumerate(snap.snake):
            rect = self._cell_rect(cell)
            color = PALETTE["head"] if idx == 0 else PALETTE["body"][idx % 2]
            pygame.draw.rect(self.window, color, rect, border_radius=4)
            pygame.draw.rect(
                self.window, PALETTE["body_edge"], rect, width=2, border_radius=4
            )

        hud = self.font.render(
            f"Score: {snap.score}   Level: {snap.level}", True, PALETTE["text"]
        )
        self.window.blit(hud, (10, (HUD_HEIGHT - hud.get_height()) // 2))

        if snap.status == GameStatus.PAUSED:
            self._draw_overlay(["Paused", "SPACE to resume"])
        elif snap.status == GameStatus.GAME_OVER:
            self._draw_overlay(
                ["Game Over!", f"Score: {snap.score}", "R to play again / Q to quit"]
            )

    def _draw_overlay(self, lines: list[str]) -> None:
        overlay = pygame.Surface((self.board_px, self.board_px), pygame.SRCALPHA)
        overlay.fill(PALETTE["overlay"])
        top = self.board_px // 2 - (len(lines) - 1) * (FONT_SIZE + 8) // 2
        for idx, text in enumerate(lines):
            surf = self.font.render(text, True, PALETTE["border"])
            rect = surf.get_rect()
            rect.center = (self.board_px // 2, top + idx * (FONT_SIZE + 8))
            overlay.blit(surf, rect)
        self.window.blit(overlay, (0, HUD_HEIGHT))

    # --- Main loop -----------------------------------------------------

    def start(self) -> None:
        """Run the main loop: handle events, tick at a fixed rate, then render."""
        logger.info(
            "Starting %dx%d board, one move every %d ms",
            self.config.grid_size,
            self.config.grid_size,
            self.config.tick_interval_ms,
        )
        clock = pygame.time.Clock()
        running = True

        while running:
            dt = clock.tick(FPS) / 1000.0
            running = self.handle_events()
            self.advance(dt)
            self.draw(self.engine.snapshot())
            pygame.display.update()

        logger.info("Quit with score %d", self.engine.score)
        pygame.quit()

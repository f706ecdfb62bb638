# src/astar_stepper/app/viewer.py
#!/usr/bin/env python3
"""
A* Stepper Viewer — watch the search frontier grow one expansion per tick.

- Keyboard:
    [SPACE]      -> run/pause
    [N]          -> single step
    [R]          -> restart on a fresh random grid
    [+]/[-]      -> steps/sec
    [Q]/[ESC]    -> quit

Settings come from app.config (env ASTAR_* or --seed= / --cell-size= /
--delay-ms= / --headless).
"""

import logging
import random
import sys
import time
from typing import List, Optional, Tuple

import pygame

from astar_stepper.app.config import ViewerConfig, resolve_config
from astar_stepper.core.astar import AStarSearch, initialize_search, run
from astar_stepper.core.grid_gen import random_cell
from astar_stepper.core.types import Cell, ConfigError, Node

logger = logging.getLogger(__name__)

PANEL_W = 220
FONT_NAME = None  # default pygame font

# Colors
BG_COLOUR       = (222, 231, 231)
CLOSED_COLOUR   = (130, 190, 230)
OPEN_COLOUR     = (104, 179, 229)
TEXT_COLOUR     = (255, 255, 255)
PATH_COLOUR     = ( 25,  32,  37)
OBSTACLE_COLOUR = (255, 255, 255)
START_COLOUR    = (164, 255, 186)
FINISH_COLOUR   = (164, 255, 186)
CURRENT_COLOUR  = (248, 255, 142)

CARD_BG     = (24, 28, 36)
TEXT_LIGHT  = (230, 235, 240)
ACCENT_GOLD = (255, 210, 0)


def new_session(config: ViewerConfig, rng: random.Random) -> AStarSearch:
    """Random grid with random start and finish, both forced to blank."""
    start = random_cell(config.columns, config.rows, rng)
    finish = random_cell(config.columns, config.rows, rng)
    session = initialize_search(
        config.columns, config.rows, start, finish,
        config.obstacle_probability, config.adjacent_boost_probability, rng,
    )
    logger.info("new %dx%d search %s -> %s", config.columns, config.rows, start, finish)
    return session


# ---------- Simple UI Button ----------
class UIButton:
    def __init__(self, label: str, rect: pygame.Rect, callback, *, togglable: bool = False):
        self.label = label
        self.rect = rect
        self.callback = callback
        self.hover = False
        self.togglable = togglable
        self.active = False

    def set_active(self, value: bool):
        self.active = bool(value)

    def draw(self, screen: pygame.Surface, font: pygame.font.Font):
        if self.active and self.togglable:
            bg = (58, 86, 160)
        elif self.hover:
            bg = (46, 50, 60)
        else:
            bg = (36, 40, 48)
        pygame.draw.rect(screen, bg, self.rect, border_radius=10)
        if self.active and self.togglable:
            pygame.draw.rect(screen, (120, 170, 255), self.rect, width=2, border_radius=10)

        text = font.render(self.label, True, (235, 238, 242))
        screen.blit(text, text.get_rect(center=self.rect.center))

    def handle_mouse(self, event: pygame.event.Event):
        if event.type == pygame.MOUSEMOTION:
            self.hover = self.rect.collidepoint(event.pos)
        elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            if self.rect.collidepoint(event.pos):
                self.callback()


# ---------- Viewer ----------
class Viewer:
    def __init__(self, config: ViewerConfig):
        pygame.init()

        self.config = config
        self.rng = random.Random(config.seed)
        self.cell_size = config.cell_size
        self.font_small = pygame.font.Font(FONT_NAME, 15)
        self.font = pygame.font.Font(FONT_NAME, 18)
        self.font_big = pygame.font.Font(FONT_NAME, 22)

        win_w = config.canvas_width + PANEL_W
        win_h = max(config.canvas_height, 420)
        self.screen = pygame.display.set_mode((win_w, win_h))
        pygame.display.set_caption("A* Stepper")
        self.canvas_rect = pygame.Rect(0, 0, config.canvas_width, config.canvas_height)
        self._right_band = pygame.Rect(config.canvas_width, 0, PANEL_W, win_h)

        self._buttons: List[UIButton] = []
        self._build_buttons()

        self.running = True
        self.clock = pygame.time.Clock()
        self.steps_per_sec = max(1, 1000 // config.delay_ms)
        self._last_step_t = 0.0
        self.state = "Running"

        self.session = new_session(config, self.rng)
        self.current: Optional[Node] = None
        self._refresh_active_states()

    def run(self):
        while True:
            self._handle_events()
            if self.running:
                self._tick_algorithm()
            self._draw()
            self.clock.tick(60)

    def _tick_algorithm(self):
        t0 = time.time()
        step_interval = 1.0 / max(1, self.steps_per_sec)
        if t0 - self._last_step_t >= step_interval:
            self._last_step_t = t0
            self._do_step()

    def _do_step(self):
        node = self.session.step()
        if node is not None:
            self.current = node
        status = self.session.status
        if status == "done":
            self.state = "Done"; self.running = False
        elif status == "no_path":
            self.state = "No path"; self.running = False
        else:
            self.state = "Running" if self.running else "Paused"
        self._refresh_active_states()

    def _handle_events(self):
        for e in pygame.event.get():
            if e.type == pygame.QUIT:
                pygame.quit(); sys.exit(0)
            elif e.type == pygame.KEYDOWN:
                if e.key in (pygame.K_ESCAPE, pygame.K_q):
                    pygame.quit(); sys.exit(0)
                elif e.key == pygame.K_SPACE:
                    self._toggle_run()
                elif e.key == pygame.K_r:
                    self._restart()
                elif e.key == pygame.K_n:
                    self._do_step()
                elif e.key in (pygame.K_PLUS, pygame.K_EQUALS):
                    self._bump_speed(+1)
                elif e.key in (pygame.K_MINUS, pygame.K_UNDERSCORE):
                    self._bump_speed(-1)
            elif e.type in (pygame.MOUSEMOTION, pygame.MOUSEBUTTONDOWN):
                for b in self._buttons:
                    b.handle_mouse(e)

    def _restart(self):
        self.session = new_session(self.config, self.rng)
        self.current = None
        self.running = True
        self.state = "Running"
        self._refresh_active_states()

    def _toggle_run(self):
        if self.state in ("Done", "No path"):
            return
        self.running = not self.running
        self.state = "Running" if self.running else "Paused"
        self._refresh_active_states()

    def _bump_speed(self, dv: int):
        self.steps_per_sec = int(max(1, min(60, self.steps_per_sec + dv)))

    # ---------- drawing ----------
    def _draw(self):
        self.screen.fill(CARD_BG)
        self._draw_grid()
        self._draw_metrics_and_buttons()
        pygame.display.flip()

    def _cell_rect(self, c: Cell) -> pygame.Rect:
        cs = self.cell_size
        return pygame.Rect(c[0] * cs, c[1] * cs, cs, cs)

    def _draw_grid(self):
        session = self.session
        pygame.draw.rect(self.screen, BG_COLOUR, self.canvas_rect)

        for node in session.closed:
            pygame.draw.rect(self.screen, CLOSED_COLOUR, self._cell_rect(node.position))

        for node in session.open:
            rect = self._cell_rect(node.position)
            pygame.draw.rect(self.screen, OPEN_COLOUR, rect)
            score = self.font_small.render(str(node.f), True, TEXT_COLOUR)
            self.screen.blit(score, score.get_rect(center=rect.center))

        if self.current is not None:
            pygame.draw.rect(self.screen, CURRENT_COLOUR, self._cell_rect(self.current.position))

        # the start cell keeps its own colour, so skip the path's last entry
        for c in session.path()[:-1]:
            pygame.draw.rect(self.screen, PATH_COLOUR, self._cell_rect(c))

        for c in session.grid.obstacles():
            pygame.draw.rect(self.screen, OBSTACLE_COLOUR, self._cell_rect(c))

        pygame.draw.rect(self.screen, START_COLOUR, self._cell_rect(session.start))
        pygame.draw.rect(self.screen, FINISH_COLOUR, self._cell_rect(session.goal))

    # ---------- buttons + metrics ----------
    def _build_buttons(self):
        self._buttons.clear()
        rb = self._right_band
        x = rb.x + 16
        y = rb.y + 200  # leaves space for metrics card above
        w = rb.width - 32
        h = 38
        gap = 10

        def add(label, cb, *, togglable=False, store_as: Optional[str] = None):
            rect = pygame.Rect(x, y, w, h)
            btn = UIButton(label, rect, cb, togglable=togglable)
            self._buttons.append(btn)
            if store_as:
                setattr(self, store_as, btn)

        add("Run / Pause", self._toggle_run, togglable=True, store_as="btn_run"); y += h + gap
        add("Step Once", self._do_step); y += h + gap
        add("New Grid", self._restart); y += h + gap

        minus_rect = pygame.Rect(x, y, (w - 8) // 2, h)
        plus_rect = pygame.Rect(x + (w - 8) // 2 + 8, y, (w - 8) // 2, h)
        self._buttons.append(UIButton("Speed -", minus_rect, lambda: self._bump_speed(-1)))
        self._buttons.append(UIButton("Speed +", plus_rect, lambda: self._bump_speed(+1)))

    def _refresh_active_states(self):
        if hasattr(self, "btn_run"):
            self.btn_run.set_active(self.running)

    def _draw_metrics_and_buttons(self):
        rb = self._right_band
        pygame.draw.rect(self.screen, (36, 40, 48),
                         pygame.Rect(rb.x + 10, rb.y + 10, rb.width - 20, 180), border_radius=14)

        x0 = rb.x + 24
        y0 = rb.y + 18

        def line(text, big=False, color=TEXT_LIGHT):
            nonlocal y0
            f = self.font_big if big else self.font
            surf = f.render(text, True, color)
            self.screen.blit(surf, (x0, y0))
            y0 += surf.get_height() + 6

        m = self.session.metrics()
        line("Metrics", big=True, color=ACCENT_GOLD)
        line(f"State: {self.state}")
        line(f"Popped: {m['popped']}")
        line(f"Open: {m['open_size']}")
        line(f"Closed: {m['closed_count']}")
        line(f"Path Len: {m['path_len']}")
        line(f"Speed: {self.steps_per_sec} steps/s")

        for b in self._buttons:
            b.draw(self.screen, self.font)


def run_headless(config: ViewerConfig) -> Tuple[str, List[Cell]]:
    session = new_session(config, random.Random(config.seed))
    ticks = run(session)
    path = session.path()
    logger.info("finished in %d ticks: %s, path %s", ticks, session.status, list(reversed(path)))
    return session.status, path


# ---------- main ----------
def main():
    try:
        config = resolve_config()
    except ConfigError as ex:
        logging.basicConfig(level=logging.INFO)
        logger.error("bad configuration: %s", ex)
        sys.exit(2)
    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )
    if config.headless:
        run_headless(config)
        return
    Viewer(config).run()


if __name__ == "__main__":
    main()

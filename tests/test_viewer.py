import random
import sys

import pytest

pygame = pytest.importorskip("pygame")

from astar_stepper.app.config import ViewerConfig
from astar_stepper.app.viewer import Viewer, main, new_session, run_headless
from astar_stepper.core.types import Tile


def test_new_session_uses_config_grid():
    config = ViewerConfig(cell_size=50)
    session = new_session(config, random.Random(4))
    assert (session.grid.width, session.grid.height) == (12, 12)
    assert session.grid.tile_at(session.start) == Tile.BLANK
    assert session.grid.tile_at(session.goal) == Tile.BLANK
    assert session.open.positions() == [session.start]


def test_headless_run_finishes():
    status, path = run_headless(ViewerConfig(seed=3))
    assert status in ("done", "no_path")
    if status == "done":
        assert path
    else:
        assert path == []


@pytest.fixture
def clean_env(monkeypatch):
    for name in ("ASTAR_SEED", "ASTAR_CELL_SIZE", "ASTAR_DELAY_MS", "ASTAR_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


def test_main_bad_config_exits_2(clean_env):
    clean_env.setattr(sys, "argv", ["astar-stepper", "--cell-size=0"])
    with pytest.raises(SystemExit) as exc:
        main()
    assert exc.value.code == 2


def test_main_bad_log_level_exits_2(clean_env):
    clean_env.setattr(sys, "argv", ["astar-stepper", "--headless"])
    clean_env.setenv("ASTAR_LOG_LEVEL", "basic_format")
    with pytest.raises(SystemExit) as exc:
        main()
    assert exc.value.code == 2


def test_main_headless_returns(clean_env):
    clean_env.setattr(sys, "argv", ["astar-stepper", "--headless", "--seed=2"])
    assert main() is None


def test_run_button_lit_on_first_frame(clean_env):
    clean_env.setenv("SDL_VIDEODRIVER", "dummy")
    viewer = Viewer(ViewerConfig(seed=1))
    try:
        assert viewer.running
        assert viewer.btn_run.active
        viewer._toggle_run()
        assert not viewer.btn_run.active
    finally:
        pygame.quit()

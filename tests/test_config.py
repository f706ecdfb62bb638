import pytest

from astar_stepper.app.config import ViewerConfig, resolve_config
from astar_stepper.core.types import ConfigError


def test_defaults():
    config = resolve_config(argv=[], env={})
    assert config == ViewerConfig()
    assert (config.columns, config.rows) == (20, 20)
    assert config.delay_ms == 40
    assert config.seed is None
    assert not config.headless


def test_env_then_argv_override():
    env = {"ASTAR_SEED": "5", "ASTAR_CELL_SIZE": "20", "ASTAR_LOG_LEVEL": "debug"}
    config = resolve_config(argv=["--seed=9", "--headless"], env=env)
    assert config.seed == 9
    assert config.cell_size == 20
    assert (config.columns, config.rows) == (30, 30)
    assert config.headless
    assert config.log_level == "DEBUG"


def test_delay_from_argv():
    assert resolve_config(argv=["--delay-ms=100"], env={}).delay_ms == 100


@pytest.mark.parametrize("argv", [
    ["--seed=abc"],
    ["--cell-size=0"],
    ["--cell-size=601"],
    ["--delay-ms=0"],
    ["--delay-ms=-5"],
])
def test_bad_values_rejected(argv):
    with pytest.raises(ConfigError):
        resolve_config(argv=argv, env={})


def test_delay_from_env():
    config = resolve_config(argv=[], env={"ASTAR_DELAY_MS": "250"})
    assert config.delay_ms == 250


def test_argv_delay_beats_env():
    config = resolve_config(argv=["--delay-ms=10"], env={"ASTAR_DELAY_MS": "250"})
    assert config.delay_ms == 10


@pytest.mark.parametrize("level", ["basic_format", "loud", "root"])
def test_unknown_log_level_rejected(level):
    with pytest.raises(ConfigError):
        resolve_config(argv=[], env={"ASTAR_LOG_LEVEL": level})


def test_known_log_levels_accepted():
    for level in ("debug", "INFO", "Warning", "error", "CRITICAL"):
        assert resolve_config(argv=[], env={"ASTAR_LOG_LEVEL": level}).log_level == level.upper()

"""Tests for configuration management system."""

import pytest
import tempfile
import shutil
from pathlib import Path
from omegaconf import DictConfig, OmegaConf

from river_solver.config import (
    ConfigManager, load_config, get_config, get_parameter, validate_config, ConfigValidationError
)
from river_solver.config.config_manager import ConfigContext, DEFAULT_CONFIG_DIR
from river_solver.config.validators import check_config_consistency, normalize_start


class TestConfigManager:
    """Test ConfigManager functionality."""

    @pytest.fixture
    def temp_config_dir(self):
        """Create temporary configuration directory."""
        temp_dir = tempfile.mkdtemp()
        config_dir = Path(temp_dir) / "conf"
        config_dir.mkdir()

        config_content = """
puzzle:
  name: farmer_wolf_duck_corn
  start: "1010"

search:
  astar:
    max_nodes_expanded: 25
    skip_parent_state: true
    early_goal_test: false
    record_trace: false

reporting:
  trace: false
  show_frontier: false
"""

        config_file = config_dir / "config.yaml"
        with open(config_file, 'w') as f:
            f.write(config_content)

        yield config_dir

        # Cleanup
        shutil.rmtree(temp_dir)

    def test_config_manager_initialization(self, temp_config_dir):
        """Test ConfigManager initialization."""
        manager = ConfigManager(temp_config_dir)
        assert manager.config_dir == temp_config_dir.resolve()
        assert manager.config is None

    def test_missing_config_dir(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            ConfigManager(tmp_path / "nowhere")

    def test_load_config_basic(self, temp_config_dir):
        """Test basic configuration loading."""
        manager = ConfigManager(temp_config_dir)
        config = manager.load_config()

        assert isinstance(config, DictConfig)
        assert config.puzzle.start == "1010"
        assert config.search.astar.max_nodes_expanded == 25
        assert config.search.astar.early_goal_test is False
        assert manager.get_config() is config

    def test_load_config_with_overrides(self, temp_config_dir):
        """Test configuration loading with overrides."""
        manager = ConfigManager(temp_config_dir)
        config = manager.load_config(overrides=[
            "search.astar.max_nodes_expanded=40",
            "reporting.trace=true",
        ])

        assert config.search.astar.max_nodes_expanded == 40
        assert config.reporting.trace is True

    def test_invalid_override_rejected(self, temp_config_dir):
        manager = ConfigManager(temp_config_dir)
        with pytest.raises(ConfigValidationError):
            manager.load_config(overrides=["search.astar.max_nodes_expanded=0"])

    def test_get_parameter(self, temp_config_dir):
        """Test dotted parameter access."""
        manager = ConfigManager(temp_config_dir)
        manager.load_config()

        assert manager.get_parameter("search.astar.max_nodes_expanded") == 25
        assert manager.get_parameter("search.astar.missing", "fallback") == "fallback"

    @pytest.mark.parametrize("override,expected", [
        ("puzzle.start=1010", "1010"),
        ("puzzle.start=11", "0011"),
        ("puzzle.start=0", "0000"),
        ("puzzle.start='0101'", "0101"),
    ])
    def test_unquoted_start_becomes_bits(self, temp_config_dir, override, expected):
        """Test integer start overrides are turned back into bit strings."""
        config = ConfigManager(temp_config_dir).load_config(overrides=[override])
        assert config.puzzle.start == expected

    def test_start_with_other_digits_rejected(self, temp_config_dir):
        manager = ConfigManager(temp_config_dir)
        with pytest.raises(ConfigValidationError, match="puzzle.start"):
            manager.load_config(overrides=["puzzle.start=1210"])

    def test_methods_require_loaded_config(self, temp_config_dir):
        manager = ConfigManager(temp_config_dir)
        with pytest.raises(RuntimeError, match="No configuration loaded"):
            manager.get_parameter("puzzle.start")


class TestDefaultConfig:
    """Test the configuration shipped with the package."""

    def test_default_config_dir_exists(self):
        assert (DEFAULT_CONFIG_DIR / "config.yaml").exists()

    def test_load_default_config(self):
        config = load_config()

        assert config.puzzle.name == "farmer_wolf_duck_corn"
        assert config.puzzle.start == "0000"
        assert config.search.astar.max_nodes_expanded is None
        assert config.search.astar.skip_parent_state is True
        assert config.search.astar.early_goal_test is True
        assert config.reporting.trace is True
        assert get_config() is config
        assert check_config_consistency(config) == []

    def test_global_parameter(self):
        load_config(overrides=["search.astar.record_trace=true"])
        assert get_parameter("search.astar.record_trace") is True
        assert get_parameter("search.astar.nonexistent", 7) == 7

    def test_config_context(self):
        """Test temporary changes are undone on exit."""
        load_config()

        with ConfigContext(**{"search.astar.max_nodes_expanded": 5}) as config:
            assert config.search.astar.max_nodes_expanded == 5

        assert get_config().search.astar.max_nodes_expanded is None


class TestConfigValidation:
    """Test configuration validation."""

    @staticmethod
    def make_config(**sections):
        base = {
            'puzzle': {'name': 'farmer_wolf_duck_corn', 'start': '0000'},
            'search': {'astar': {'max_nodes_expanded': None, 'skip_parent_state': True,
                                 'early_goal_test': True, 'record_trace': False}},
            'reporting': {'trace': True, 'show_frontier': True},
        }
        config = OmegaConf.create(base)
        for key, value in sections.items():
            OmegaConf.update(config, key.replace('__', '.'), value, merge=True)
        return config

    def test_valid_config(self):
        validate_config(self.make_config())

    def test_unknown_puzzle(self):
        with pytest.raises(ConfigValidationError, match="puzzle.name"):
            validate_config(self.make_config(puzzle__name='missionaries'))

    @pytest.mark.parametrize("start", ["000", "00a0", 0])
    def test_bad_start(self, start):
        """Test start must be a string of four 0/1 digits."""
        with pytest.raises(ConfigValidationError, match="puzzle.start"):
            validate_config(self.make_config(puzzle__start=start))

    @pytest.mark.parametrize("max_nodes", [0, -3, "ten", True])
    def test_bad_max_nodes(self, max_nodes):
        with pytest.raises(ConfigValidationError, match="max_nodes_expanded"):
            validate_config(self.make_config(search__astar__max_nodes_expanded=max_nodes))

    def test_flags_must_be_booleans(self):
        with pytest.raises(ConfigValidationError, match="skip_parent_state"):
            validate_config(self.make_config(search__astar__skip_parent_state="yes"))
        with pytest.raises(ConfigValidationError, match="reporting.trace"):
            validate_config(self.make_config(reporting__trace=1))

    def test_consistency_warnings(self):
        config = self.make_config(reporting__trace=False, search__astar__max_nodes_expanded=10)
        warnings = check_config_consistency(config)

        assert len(warnings) == 2
        assert any("show_frontier" in warning for warning in warnings)
        assert any("max_nodes_expanded" in warning for warning in warnings)

    @pytest.mark.parametrize("value,expected", [
        (1010, "1010"),
        (1, "0001"),
        ("0110", "0110"),
        (1210, 1210),
        (11111, 11111),
        (-1, -1),
        (True, True),
    ])
    def test_normalize_start(self, value, expected):
        """Test only integers spelled with 0/1 digits are converted."""
        assert normalize_start(value) == expected

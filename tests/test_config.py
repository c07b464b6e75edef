"""Tests for configuration management system."""

import pytest
import tempfile
import shutil
from pathlib import Path
from omegaconf import DictConfig, OmegaConf

from npuzzle.config import (
    ConfigManager, load_config, get_config, get_parameter, validate_config, ConfigValidationError
)
from npuzzle.config.config_manager import DEFAULT_CONFIG_DIR


class TestConfigManager:
    """Test ConfigManager functionality."""

    @pytest.fixture
    def temp_config_dir(self):
        """Create temporary configuration directory."""
        temp_dir = tempfile.mkdtemp()
        config_dir = Path(temp_dir) / "conf"
        config_dir.mkdir()

        # 2x2 configuration
        config_content = """
puzzle:
  dimension: 2
  goal:
    - [1, 2]
    - [3, 0]
  default_start:
    - [0, 3]
    - [2, 1]

search:
  heuristic: misplaced_tiles
  max_nodes_expanded: 500
  max_computation_time: 10.0

batch:
  max_workers: 2
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
        assert manager.config_dir.resolve() == temp_config_dir.resolve()
        assert manager.config is None

    def test_missing_config_dir(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            ConfigManager(tmp_path / "missing")

    def test_load_config_basic(self, temp_config_dir):
        """Test basic configuration loading."""
        manager = ConfigManager(temp_config_dir)
        config = manager.load_config()

        assert isinstance(config, DictConfig)
        assert config.puzzle.dimension == 2
        assert config.search.heuristic == "misplaced_tiles"
        assert manager.config is config

    def test_load_config_with_overrides(self, temp_config_dir):
        """Test configuration loading with overrides."""
        manager = ConfigManager(temp_config_dir)
        overrides = [
            "search.heuristic=uniform_cost",
            "batch.max_workers=4"
        ]

        config = manager.load_config(overrides=overrides)

        assert config.search.heuristic == "uniform_cost"
        assert config.batch.max_workers == 4

    def test_get_parameter(self, temp_config_dir):
        """Test parameter retrieval."""
        manager = ConfigManager(temp_config_dir)
        manager.load_config()

        assert manager.get_parameter("search.max_nodes_expanded") == 500
        assert manager.get_parameter("puzzle.goal") == [[1, 2], [3, 0]]

        # Non-existent parameter with default
        assert manager.get_parameter("nonexistent.param", "default") == "default"

    def test_set_parameter(self, temp_config_dir):
        """Test parameter setting."""
        manager = ConfigManager(temp_config_dir)
        manager.load_config()

        manager.set_parameter("search.heuristic", "manhattan_distance")
        assert manager.get_parameter("search.heuristic") == "manhattan_distance"

        manager.set_parameter("new.parameter", "test_value")
        assert manager.get_parameter("new.parameter") == "test_value"

    def test_update_config(self, temp_config_dir):
        """Test configuration updates."""
        manager = ConfigManager(temp_config_dir)
        manager.load_config()

        manager.update_config({
            "search.max_nodes_expanded": 50,
            "puzzle.default_start": [[1, 2], [0, 3]]
        })

        assert manager.get_parameter("search.max_nodes_expanded") == 50
        assert manager.get_parameter("puzzle.default_start") == [[1, 2], [0, 3]]

    def test_save_config(self, temp_config_dir):
        """Test configuration saving."""
        manager = ConfigManager(temp_config_dir)
        manager.load_config()

        manager.set_parameter("search.heuristic", "uniform_cost")

        output_file = temp_config_dir / "saved" / "saved_config.yaml"
        manager.save_config(output_file)

        assert output_file.exists()

        saved_config = OmegaConf.load(output_file)
        assert saved_config.search.heuristic == "uniform_cost"
        assert saved_config.puzzle.dimension == 2

    def test_config_without_loading(self, temp_config_dir):
        """Test operations without loading config first."""
        manager = ConfigManager(temp_config_dir)

        with pytest.raises(RuntimeError, match="No configuration loaded"):
            manager.get_parameter("search.heuristic")

        with pytest.raises(RuntimeError, match="No configuration loaded"):
            manager.set_parameter("search.heuristic", "uniform_cost")

        with pytest.raises(RuntimeError, match="No configuration loaded"):
            manager.update_config({"search.heuristic": "uniform_cost"})

        with pytest.raises(RuntimeError, match="No configuration loaded"):
            manager.save_config("test.yaml")

    def test_invalid_override_rejected(self, temp_config_dir):
        manager = ConfigManager(temp_config_dir)

        with pytest.raises(ConfigValidationError):
            manager.load_config(overrides=["search.heuristic=euclidean"])

    def test_skip_validation(self, temp_config_dir):
        manager = ConfigManager(temp_config_dir)
        config = manager.load_config(overrides=["search.heuristic=euclidean"], validate=False)

        assert config.search.heuristic == "euclidean"


class TestBundledConfig:
    """Test the configuration shipped with the package."""

    def test_bundled_dir_exists(self):
        assert (DEFAULT_CONFIG_DIR / "config.yaml").exists()

    def test_bundled_defaults(self):
        config = load_config()

        assert config.puzzle.dimension == 3
        assert OmegaConf.to_container(config.puzzle.goal) == [[1, 2, 3], [4, 5, 6], [7, 8, 0]]
        assert OmegaConf.to_container(config.puzzle.default_start) == [[1, 6, 7], [5, 0, 3], [4, 8, 2]]
        assert config.search.heuristic == "manhattan_distance"
        assert config.search.max_nodes_expanded is None
        assert config.batch.max_workers == 1

    def test_dimension_must_match_goal(self):
        with pytest.raises(ConfigValidationError, match="puzzle.goal"):
            load_config(overrides=["puzzle.dimension=4"])


class TestGlobalConfigFunctions:
    """Test global configuration functions."""

    @pytest.fixture
    def temp_config_dir(self):
        """Create temporary configuration directory."""
        temp_dir = tempfile.mkdtemp()
        config_dir = Path(temp_dir) / "conf"
        config_dir.mkdir()

        config_content = """
search:
  heuristic: uniform_cost
  max_nodes_expanded: 100
"""

        config_file = config_dir / "config.yaml"
        with open(config_file, 'w') as f:
            f.write(config_content)

        yield config_dir

        # Cleanup
        shutil.rmtree(temp_dir)

    def test_load_config_global(self, temp_config_dir):
        """Test global load_config function."""
        config = load_config(config_dir=temp_config_dir)

        assert isinstance(config, DictConfig)
        assert config.search.heuristic == "uniform_cost"

        assert get_config() is config
        assert get_parameter("search.max_nodes_expanded") == 100
        assert get_parameter("missing.key", 7) == 7

    def test_load_config_with_overrides_global(self, temp_config_dir):
        """Test global load_config with overrides."""
        overrides = ["search.max_nodes_expanded=20"]
        config = load_config(overrides=overrides, config_dir=temp_config_dir)

        assert config.search.max_nodes_expanded == 20


class TestConfigValidation:
    """Test configuration validation."""

    def test_valid_config(self):
        """Test validation of valid configuration."""
        config = OmegaConf.create({
            "puzzle": {
                "dimension": 3,
                "goal": [[1, 2, 3], [4, 5, 6], [7, 8, 0]],
                "default_start": [[1, 6, 7], [5, 0, 3], [4, 8, 2]]
            },
            "search": {
                "heuristic": "misplaced-tiles",
                "max_nodes_expanded": 1000,
                "max_computation_time": 2.5
            },
            "batch": {
                "max_workers": 8
            }
        })

        # Should not raise exception
        validate_config(config)

    def test_numeric_heuristic_selector(self):
        config = OmegaConf.create({"search": {"heuristic": 2}})
        validate_config(config)

    @pytest.mark.parametrize("section", [
        {"puzzle": {"dimension": 1}},
        {"puzzle": {"dimension": 3, "goal": [[1, 2, 3], [4, 5, 6], [7, 8, 8]]}},
        {"puzzle": {"dimension": 2, "default_start": [[1, 2, 3], [4, 5, 6], [7, 8, 0]]}},
        {"search": {"heuristic": "euclidean"}},
        {"search": {"max_nodes_expanded": -100}},
        {"search": {"max_nodes_expanded": 0}},
        {"search": {"max_computation_time": -1.0}},
        {"batch": {"max_workers": 0}},
        {"batch": {"max_workers": "many"}},
    ])
    def test_invalid_config(self, section):
        """Test that each invalid section is rejected."""
        with pytest.raises(ConfigValidationError):
            validate_config(OmegaConf.create(section))

    def test_empty_config_sections(self):
        """Test validation with empty configuration sections."""
        config = OmegaConf.create({})

        # Should not raise exception for empty config
        validate_config(config)


if __name__ == "__main__":
    pytest.main([__file__])

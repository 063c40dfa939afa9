"""Tests for configuration management."""

import pytest
import yaml

from productcover.config import (
    ConfigManager,
    CoverConfig,
    create_default_config_file,
    get_config,
)
from productcover.errors import ConfigError


class TestCoverConfig:
    """Test CoverConfig dataclass."""

    def test_default_config_creation(self):
        """Test default configuration creation."""
        config = CoverConfig()

        assert config.min_len == 3
        assert config.max_len == 12
        assert config.non_overlap is True
        assert config.verbose is False
        assert config.workers == 1
        assert config.max_candidates is None
        assert config.pattern == "*.txt"

    def test_validate_returns_self(self):
        """Test validation of a valid config."""
        config = CoverConfig()
        assert config.validate() is config

    def test_min_len_below_one(self):
        """Test min_len must be positive."""
        with pytest.raises(ConfigError) as exc_info:
            CoverConfig(min_len=0).validate()
        assert "min_len must be >= 1" in str(exc_info.value)

    def test_max_len_below_min_len(self):
        """Test max_len may not be below min_len, and is not clamped."""
        config = CoverConfig(min_len=5, max_len=4)
        with pytest.raises(ConfigError):
            config.validate()
        assert config.max_len == 4

    def test_collects_all_problems(self):
        """Test every problem is reported at once."""
        config = CoverConfig(min_len=0, workers=0, max_candidates=0)
        with pytest.raises(ConfigError) as exc_info:
            config.validate()
        assert len(exc_info.value.problems) == 3

    def test_non_integer_lengths(self):
        """Test lengths must be integers."""
        with pytest.raises(ConfigError):
            CoverConfig(min_len=2.5).validate()

    def test_config_from_dict(self):
        """Test configuration deserialization."""
        config = CoverConfig.from_dict({"min_len": 4, "max_len": 8, "non_overlap": False})

        assert config.min_len == 4
        assert config.max_len == 8
        assert config.non_overlap is False

    def test_from_dict_unknown_key(self):
        """Test unknown keys are rejected."""
        with pytest.raises(ConfigError) as exc_info:
            CoverConfig.from_dict({"minLen": 4})
        assert exc_info.value.details["unknown_keys"] == ["minLen"]


class TestConfigManager:
    """Test ConfigManager functionality."""

    @pytest.fixture
    def config_file(self, tmp_path):
        """Create a config file."""
        path = tmp_path / "cover.yml"
        path.write_text(yaml.dump({"min_len": 4, "max_len": 9, "non_overlap": False}))
        return path

    def test_load_existing_config(self, config_file):
        """Test loading existing configuration."""
        config = ConfigManager(config_file).load()

        assert config.min_len == 4
        assert config.max_len == 9
        assert config.non_overlap is False
        assert config.workers == 1

    def test_load_nonexistent_config(self, tmp_path):
        """Test loading when config file doesn't exist."""
        config = ConfigManager(tmp_path / "missing.yml").load()
        assert config == CoverConfig()

    def test_load_is_cached(self, config_file):
        """Test repeated loads return the same object."""
        manager = ConfigManager(config_file)
        assert manager.load() is manager.load()

    def test_malformed_yaml(self, tmp_path):
        """Test unparsable files raise ConfigError."""
        path = tmp_path / "bad.yml"
        path.write_text("min_len: [1, 2\n")
        with pytest.raises(ConfigError):
            ConfigManager(path).load()

    def test_non_mapping_yaml(self, tmp_path):
        """Test the file must hold a mapping."""
        path = tmp_path / "list.yml"
        path.write_text("- 1\n- 2\n")
        with pytest.raises(ConfigError):
            ConfigManager(path).load()

    def test_save_and_reload(self, tmp_path):
        """Test a saved config loads back unchanged."""
        path = tmp_path / "nested" / "cover.yml"
        config = CoverConfig(min_len=2, max_len=5, max_candidates=1000)

        ConfigManager(path).save(config)

        assert ConfigManager(path).load() == config

    def test_update(self, config_file):
        """Test updating known parameters."""
        manager = ConfigManager(config_file)
        config = manager.update(max_len=20)
        assert config.max_len == 20

    def test_update_unknown(self, config_file):
        """Test unknown parameters are refused."""
        with pytest.raises(ConfigError):
            ConfigManager(config_file).update(alpha=1.5)

    def test_env_overrides(self, config_file, monkeypatch):
        """Test environment variables win over the file."""
        monkeypatch.setenv("PRODUCTCOVER_MIN_LEN", "2")
        monkeypatch.setenv("PRODUCTCOVER_NON_OVERLAP", "yes")
        monkeypatch.setenv("PRODUCTCOVER_MAX_CANDIDATES", "500")

        config = ConfigManager(config_file).load()

        assert config.min_len == 2
        assert config.max_len == 9
        assert config.non_overlap is True
        assert config.max_candidates == 500

    def test_invalid_env_override(self, config_file, monkeypatch):
        """Test malformed environment values raise ConfigError."""
        monkeypatch.setenv("PRODUCTCOVER_WORKERS", "many")
        with pytest.raises(ConfigError) as exc_info:
            ConfigManager(config_file).load()
        assert exc_info.value.details["variable"] == "PRODUCTCOVER_WORKERS"

    def test_display(self, config_file, capsys):
        """Test the config is printed as YAML."""
        manager = ConfigManager(config_file)
        manager.display()

        captured = capsys.readouterr()
        assert "min_len" in captured.err


class TestHelpers:
    """Test module-level helpers."""

    def test_create_default_config_file(self, tmp_path):
        """Test the default file holds the default parameters."""
        path = create_default_config_file(tmp_path / ".productcover.yml")

        data = yaml.safe_load(path.read_text())
        assert data == CoverConfig().to_dict()

    def test_get_config(self, tmp_path):
        """Test get_config loads from the given path."""
        path = tmp_path / "c.yml"
        path.write_text("max_len: 7\n")
        assert get_config(path).max_len == 7

"""Tests for configuration loading."""

import pytest

from passforge.config import AnalysisConfig, GenerationConfig, PassforgeConfig


class TestPassforgeConfig:
    def test_defaults(self):
        config = PassforgeConfig()
        assert config.generation.min_length == 4
        assert config.generation.max_length == 64
        assert config.analysis.guesses_per_second == 1e12
        assert config.log_level == "WARNING"

    def test_load_toml(self, tmp_path):
        path = tmp_path / "passforge.toml"
        path.write_text(
            "[generation]\n"
            "default_length = 20\n"
            "unknown = 1\n"
            "[analysis]\n"
            "guesses_per_second = 1e9\n"
            "[vault]\n"
            'path = "/tmp/v.json"\n'
            "[logging]\n"
            'level = "debug"\n'
        )
        config = PassforgeConfig.load(path)
        assert config.generation.default_length == 20
        assert config.generation.max_length == 64
        assert config.analysis.guesses_per_second == 1e9
        assert config.vault.path == "/tmp/v.json"
        assert config.log_level == "DEBUG"

    def test_explicit_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            PassforgeConfig.load(tmp_path / "missing.toml")

    def test_inconsistent_values(self, tmp_path):
        path = tmp_path / "bad.toml"
        path.write_text("[generation]\nmin_length = 10\nmax_length = 5\n")
        with pytest.raises(ValueError):
            PassforgeConfig.load(path)

    def test_to_dict(self):
        data = PassforgeConfig().to_dict()
        assert data["analysis"]["weak_threshold"] == 20


class TestSections:
    def test_generation_bounds(self):
        with pytest.raises(ValueError):
            GenerationConfig(min_length=0)

    def test_rate_positive(self):
        with pytest.raises(ValueError):
            AnalysisConfig(guesses_per_second=0)

    def test_thresholds(self):
        assert AnalysisConfig().thresholds == (20, 40, 60, 80)

"""
Tests for config.py — environment-driven settings

Run with: pytest tests/test_config.py -v
"""

import os
from dataclasses import replace

import pytest

from wagering.config import WageringConfig
from wagering.core.devig import NormalizationMethod
from wagering.core.display import DisplayFormat

ENV_VARS = [
    "WAGERING_SOLVER_TOLERANCE",
    "WAGERING_SOLVER_MAX_ITER",
    "WAGERING_DEFAULT_METHOD",
    "WAGERING_DISPLAY_FORMAT",
    "WAGERING_KELLY_MULTIPLIER",
    "WAGERING_LOG_LEVEL",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


class TestDefaults:
    def test_defaults(self):
        cfg = WageringConfig.from_env(dotenv=False)
        assert cfg == WageringConfig()
        assert cfg.solver_tolerance == 1e-12
        assert cfg.solver_max_iter == 1000
        assert cfg.default_method is NormalizationMethod.EQUAL_MARGIN
        assert cfg.display_format is DisplayFormat.AMERICAN
        assert cfg.kelly_multiplier == 1.0
        assert cfg.log_level == "WARNING"

    def test_blank_values_use_defaults(self, monkeypatch):
        monkeypatch.setenv("WAGERING_SOLVER_MAX_ITER", "  ")
        assert WageringConfig.from_env(dotenv=False).solver_max_iter == 1000

    @pytest.mark.parametrize("tolerance", [float("inf"), float("nan"), -1e-9])
    def test_tolerance_must_be_finite_and_positive(self, tolerance):
        with pytest.raises(ValueError, match="solver_tolerance"):
            WageringConfig(solver_tolerance=tolerance)

    def test_frozen(self):
        with pytest.raises(AttributeError):
            WageringConfig().kelly_multiplier = 0.5

    def test_replace(self):
        cfg = replace(WageringConfig(), kelly_multiplier=0.25)
        assert cfg.kelly_multiplier == 0.25


class TestFromEnv:
    def test_overrides(self, monkeypatch):
        monkeypatch.setenv("WAGERING_SOLVER_TOLERANCE", "1e-9")
        monkeypatch.setenv("WAGERING_SOLVER_MAX_ITER", "50")
        monkeypatch.setenv("WAGERING_DEFAULT_METHOD", "Shin")
        monkeypatch.setenv("WAGERING_DISPLAY_FORMAT", "decimal")
        monkeypatch.setenv("WAGERING_KELLY_MULTIPLIER", "0.5")
        monkeypatch.setenv("WAGERING_LOG_LEVEL", "debug")

        cfg = WageringConfig.from_env(dotenv=False)

        assert cfg.solver_tolerance == 1e-9
        assert cfg.solver_max_iter == 50
        assert cfg.default_method is NormalizationMethod.SHIN
        assert cfg.display_format is DisplayFormat.DECIMAL
        assert cfg.kelly_multiplier == 0.5
        assert cfg.log_level == "DEBUG"

    @pytest.mark.parametrize(
        "name,value",
        [
            ("WAGERING_SOLVER_TOLERANCE", "tiny"),
            ("WAGERING_SOLVER_TOLERANCE", "0"),
            ("WAGERING_SOLVER_TOLERANCE", "inf"),
            ("WAGERING_SOLVER_TOLERANCE", "nan"),
            ("WAGERING_SOLVER_MAX_ITER", "1.5"),
            ("WAGERING_SOLVER_MAX_ITER", "0"),
            ("WAGERING_DEFAULT_METHOD", "power"),
            ("WAGERING_DISPLAY_FORMAT", "fractional"),
            ("WAGERING_KELLY_MULTIPLIER", "half"),
            ("WAGERING_LOG_LEVEL", "LOUD"),
        ],
    )
    def test_malformed_values(self, monkeypatch, name, value):
        monkeypatch.setenv(name, value)
        with pytest.raises(ValueError):
            WageringConfig.from_env(dotenv=False)

    def test_dotenv_in_working_directory(self, monkeypatch, tmp_path):
        (tmp_path / ".env").write_text("WAGERING_KELLY_MULTIPLIER=0.3\n")
        monkeypatch.chdir(tmp_path)
        try:
            assert WageringConfig.from_env().kelly_multiplier == 0.3
        finally:
            os.environ.pop("WAGERING_KELLY_MULTIPLIER", None)

    def test_explicit_dotenv_path(self, tmp_path):
        env_file = tmp_path / "wagering.env"
        env_file.write_text("WAGERING_DISPLAY_FORMAT=decimal\n")
        try:
            cfg = WageringConfig.from_env(dotenv_path=env_file)
            assert cfg.display_format is DisplayFormat.DECIMAL
        finally:
            os.environ.pop("WAGERING_DISPLAY_FORMAT", None)

    def test_environment_wins_over_dotenv(self, monkeypatch, tmp_path):
        env_file = tmp_path / ".env"
        env_file.write_text("WAGERING_SOLVER_MAX_ITER=10\n")
        monkeypatch.setenv("WAGERING_SOLVER_MAX_ITER", "20")
        assert WageringConfig.from_env(dotenv_path=env_file).solver_max_iter == 20

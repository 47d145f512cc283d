"""Tests for the command-line interface."""

import pytest

from quantum_arbitrage.cli import main
from quantum_arbitrage.config import COARSE_THRESHOLD_ENV


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    monkeypatch.delenv(COARSE_THRESHOLD_ENV, raising=False)


MISPRICED = ["--spot", "1000000:1000000", "--cond", "900000:1100000", "--cond", "900000:1100000"]


class TestOptimize:
    def test_finds_arbitrage(self, capsys):
        assert main(["optimize", *MISPRICED]) == 0
        out = capsys.readouterr().out
        assert "Outcomes:    2" in out
        assert "Spot price:  1.000000" in out
        assert "Direction:   spot_to_conditional" in out
        assert "Profit:" in out

    def test_balanced_market(self, capsys):
        args = ["optimize", "--spot", "1000:1000", "--cond", "1000:1000", "--cond", "1000:1000"]
        assert main(args) == 0
        assert "No arbitrage found" in capsys.readouterr().out

    def test_hint_bounds_amount(self, capsys):
        assert main(["optimize", *MISPRICED, "--hint", "10:20"]) == 0
        out = capsys.readouterr().out
        amount = int(out.split("Amount:")[1].split()[0])
        assert 10 <= amount <= 20

    def test_single_outcome_rejected(self, capsys):
        assert main(["optimize", "--spot", "1000:1000", "--cond", "1000:1000"]) == 1
        assert "at least 2 --cond pools are required" in capsys.readouterr().out

    def test_missing_conditionals(self, capsys):
        assert main(["optimize", "--spot", "1000:1000"]) == 1
        assert "at least 2 --cond pools are required" in capsys.readouterr().out

    def test_invalid_pool(self, capsys):
        assert main(["optimize", "--spot", "0:1000", "--cond", "1:1", "--cond", "1:1"]) == 1
        assert "asset_reserve" in capsys.readouterr().out

    def test_malformed_pair(self):
        with pytest.raises(SystemExit):
            main(["optimize", "--spot", "1000-1000"])

    def test_threshold_flag(self, capsys):
        assert main(["--threshold", "3", "optimize", *MISPRICED]) == 0
        assert main(["--threshold", "2", "optimize", *MISPRICED]) == 1
        assert "coarse_threshold" in capsys.readouterr().out

    def test_threshold_flag_overrides_env(self, monkeypatch):
        monkeypatch.setenv(COARSE_THRESHOLD_ENV, "1")
        assert main(["optimize", *MISPRICED]) == 1
        assert main(["--threshold", "4", "optimize", *MISPRICED]) == 0


class TestBench:
    def test_small_run(self, capsys):
        assert main(["bench", "--seed", "3", "--markets", "3", "--outcomes", "4"]) == 0
        out = capsys.readouterr().out
        assert "Markets:          3" in out
        assert out.strip().endswith("OK")

    def test_bad_env_threshold(self, monkeypatch, capsys):
        monkeypatch.setenv(COARSE_THRESHOLD_ENV, "1")
        assert main(["bench", "--markets", "1"]) == 1
        assert COARSE_THRESHOLD_ENV in capsys.readouterr().out


def test_no_command(capsys):
    assert main([]) == 1

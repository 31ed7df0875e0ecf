"""
Tests for the run_simulator CLI: config resolution and exit codes.
"""

import pytest

import run_simulator
from models.config import SimulatorConfig
from simulation.errors import CryptoUnavailable


class _FakeSession:
    """Replaces SessionLoop so main() runs without a terminal."""

    seen_market = None

    def __init__(self, market):
        _FakeSession.seen_market = market

    def run(self) -> int:
        return 0


class TestLoadConfig:

    def test_defaults_without_config(self):
        args = run_simulator._parse_args([])
        assert run_simulator.load_config(args) == SimulatorConfig()

    def test_flags_override_yaml(self, tmp_path):
        path = tmp_path / "sim.yaml"
        path.write_text("users_file: from_yaml.dat\nseed: 1\n", encoding="utf-8")
        args = run_simulator._parse_args(
            ["--config", str(path), "--seed", "9", "--log-level", "DEBUG"]
        )
        config = run_simulator.load_config(args)
        assert config.users_file == "from_yaml.dat"
        assert config.seed == 9
        assert config.log_level == "DEBUG"


class TestMain:

    def test_clean_run_returns_zero(self, tmp_path, monkeypatch):
        monkeypatch.setattr(run_simulator, "SessionLoop", _FakeSession)
        users = tmp_path / "users.dat"
        code = run_simulator.main(["--users-file", str(users), "--seed", "5"])
        assert code == run_simulator.EXIT_OK
        assert _FakeSession.seen_market.users.path == users

    def test_missing_config_file(self, tmp_path, capsys):
        code = run_simulator.main(["--config", str(tmp_path / "missing.yaml")])
        assert code == run_simulator.EXIT_STARTUP_ERROR
        assert "Invalid configuration" in capsys.readouterr().err

    def test_malformed_yaml(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("users_file: [unclosed\n", encoding="utf-8")
        assert run_simulator.main(["--config", str(path)]) == run_simulator.EXIT_STARTUP_ERROR

    def test_crypto_unavailable_aborts(self, tmp_path, monkeypatch):
        def _broken_market(config):
            raise CryptoUnavailable("SHA-256 is not available")

        monkeypatch.setattr(run_simulator, "Market", _broken_market)
        code = run_simulator.main(["--users-file", str(tmp_path / "u.dat")])
        assert code == run_simulator.EXIT_STARTUP_ERROR

    def test_io_failure_returns_one(self, tmp_path, monkeypatch):
        class _FailingSession(_FakeSession):
            def run(self) -> int:
                raise OSError("stdin closed")

        monkeypatch.setattr(run_simulator, "SessionLoop", _FailingSession)
        code = run_simulator.main(["--users-file", str(tmp_path / "u.dat")])
        assert code == run_simulator.EXIT_IO_ERROR

    def test_unknown_log_level_rejected_by_argparse(self):
        with pytest.raises(SystemExit):
            run_simulator._parse_args(["--log-level", "LOUD"])

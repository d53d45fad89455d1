"""
Tests for autoconf.py — the unattended enable flag.
"""

import json

import pytest

from saptuner.autoconf import AutoConfig
from saptuner.runner import CommandResult

STATUS = ("saptune", "service", "status")


class TestImportExport:
    def test_default_is_disabled(self, make_orchestrator):
        assert AutoConfig(make_orchestrator()).export() == {"enable": False}

    def test_import_then_export(self, make_orchestrator):
        auto = AutoConfig(make_orchestrator())
        assert auto.import_settings({"enable": True}) is True
        assert auto.export() == {"enable": True}

    def test_import_missing_key_disables(self, make_orchestrator):
        auto = AutoConfig(make_orchestrator(), enable=True)
        auto.import_settings({})
        assert auto.enable is False

    def test_reset(self, make_orchestrator):
        auto = AutoConfig(make_orchestrator(), enable=True)
        assert auto.reset() is True
        assert auto.enable is False

    def test_summary_mentions_state(self, make_orchestrator):
        auto = AutoConfig(make_orchestrator())
        assert "not enabled" in auto.summary()
        auto.enable = True
        assert "will be enabled" in auto.summary()

    def test_packages(self, make_orchestrator):
        assert AutoConfig(make_orchestrator()).packages() == {"install": ["saptune"], "remove": []}


class TestSaveLoad:
    def test_round_trip(self, tmp_path, make_orchestrator):
        path = tmp_path / "profiles" / "saptune.json"
        assert AutoConfig(make_orchestrator(), enable=True).save(path) is True
        assert json.loads(path.read_text()) == {"enable": True}

        other = AutoConfig(make_orchestrator())
        assert other.load(path) is True
        assert other.enable is True

    def test_load_missing_file(self, tmp_path, make_orchestrator):
        auto = AutoConfig(make_orchestrator(), enable=True)
        assert auto.load(tmp_path / "missing.json") is False
        assert auto.enable is True

    def test_load_malformed_json(self, tmp_path, make_orchestrator):
        path = tmp_path / "bad.json"
        path.write_text("{enable: yes")
        assert AutoConfig(make_orchestrator()).load(path) is False

    def test_load_non_object(self, tmp_path, make_orchestrator):
        path = tmp_path / "list.json"
        path.write_text("[true]")
        assert AutoConfig(make_orchestrator()).load(path) is False

    def test_save_into_unwritable_location(self, tmp_path, make_orchestrator):
        blocker = tmp_path / "file"
        blocker.write_text("")
        assert AutoConfig(make_orchestrator()).save(blocker / "sub" / "x.json") is False


class TestRead:
    @pytest.mark.parametrize("code, enabled", [
        (0, True),      # active
        (1, False),     # stopped
        (2, True),      # not configured
        (3, False),     # not tuned
        (127, False),   # saptune missing
    ])
    def test_read_from_state(self, make_orchestrator, runner, code, enabled):
        runner.responses[STATUS] = CommandResult("", code)
        auto = AutoConfig(make_orchestrator())
        assert auto.read() is True
        assert auto.enable is enabled


class TestApply:
    def test_enabled_runs_auto_configure(self, make_orchestrator, runner):
        auto = AutoConfig(make_orchestrator(nw=True), enable=True)
        assert auto.apply() == (True, False, True, "")
        assert ("saptune", "solution", "apply", "NETWEAVER") in runner.calls

    def test_disabled_stops_saptune(self, make_orchestrator, runner):
        auto = AutoConfig(make_orchestrator(), enable=False)
        assert auto.apply() == (True, "")
        assert runner.calls == [("saptune", "service", "disablestop")]

    def test_write_returns_success(self, make_orchestrator, runner):
        runner.responses[("saptune", "service", "takeover")] = CommandResult("boom\n", 1)
        assert AutoConfig(make_orchestrator(), enable=True).write() is False
        assert AutoConfig(make_orchestrator(), enable=False).write() is True

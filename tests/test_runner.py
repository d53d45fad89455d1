"""
Tests for runner.py.

Covers:
  - exit status and output capture (real POSIX commands)
  - stderr merged into output
  - missing or unstartable executable → TOOL_MISSING, no exception
  - C locale forced
"""

from unittest.mock import MagicMock, patch

from saptuner.runner import TOOL_MISSING, CommandResult, run_command


class TestRunCommand:
    def test_success(self):
        result = run_command("echo", "hello")
        assert result == CommandResult("hello\n", 0)
        assert result.ok is True

    def test_failing_exit_code_is_returned(self):
        result = run_command("sh", "-c", "exit 3")
        assert result.status == 3
        assert result.ok is False

    def test_stderr_is_merged_into_output(self):
        result = run_command("sh", "-c", "echo out; echo err >&2")
        assert "out" in result.output
        assert "err" in result.output

    def test_missing_executable(self):
        result = run_command("saptuner-test-no-such-binary", "status")
        assert result == CommandResult("", TOOL_MISSING)

    def test_tool_missing_is_127(self):
        assert TOOL_MISSING == 127

    def test_extra_env_is_passed(self):
        result = run_command("sh", "-c", "echo $SAPTUNER_TEST", env={"SAPTUNER_TEST": "x1"})
        assert result.output.strip() == "x1"

    def test_locale_forced_to_c(self):
        with patch("subprocess.run") as mock_run:
            mock_run.return_value = MagicMock(returncode=0, stdout="")
            run_command("saptune", "service", "status")
        kwargs = mock_run.call_args.kwargs
        assert kwargs["env"]["LC_ALL"] == "C"
        assert mock_run.call_args.args[0] == ["saptune", "service", "status"]

    def test_none_stdout_becomes_empty_string(self):
        with patch("subprocess.run") as mock_run:
            mock_run.return_value = MagicMock(returncode=1, stdout=None)
            assert run_command("saptune") == CommandResult("", 1)


class TestSpawnFailure:
    """A tool that exists but cannot be started reads as missing, never raises."""

    def test_file_without_execute_bit(self, tmp_path):
        tool = tmp_path / "saptune"
        tool.write_text("#!/bin/sh\necho hi\n")
        tool.chmod(0o644)
        assert run_command(str(tool), "service", "status") == CommandResult("", TOOL_MISSING)

    def test_corrupt_binary(self, tmp_path):
        tool = tmp_path / "saptune"
        tool.write_bytes(b"\x7fELF garbage")
        tool.chmod(0o755)
        assert run_command(str(tool), "service", "status") == CommandResult("", TOOL_MISSING)

    def test_path_through_a_regular_file(self, tmp_path):
        blocker = tmp_path / "sbin"
        blocker.write_text("")
        assert run_command(str(blocker / "saptune")).status == TOOL_MISSING

    def test_any_os_error_is_contained(self):
        with patch("subprocess.run", side_effect=OSError(7, "Argument list too long")):
            assert run_command("saptune", "x") == CommandResult("", TOOL_MISSING)

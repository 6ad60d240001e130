"""Tests for gitreq.services.git (config, origin lookup, checkout)."""

import subprocess
from pathlib import Path
from unittest.mock import patch

import pytest

from gitreq.services.git import GitConfig, GitRunnerError, fetch_and_checkout_request, get_origin_url
from gitreq.services.git._run import _run_git


class TestRunGit:
    def test_returns_stdout(self) -> None:
        completed = subprocess.CompletedProcess(["git"], 0, stdout="value\n", stderr="")
        with patch("gitreq.services.git._run.subprocess.run", return_value=completed) as run:
            assert _run_git(["config", "--get", "x"], cwd=Path("/tmp/repo")) == "value"
        assert run.call_args[0][0] == ["git", "config", "--get", "x"]
        assert run.call_args[1]["cwd"] == Path("/tmp/repo")

    def test_failure_keeps_returncode(self) -> None:
        error = subprocess.CalledProcessError(1, ["git"], output="", stderr="")
        with patch("gitreq.services.git._run.subprocess.run", side_effect=error):
            with pytest.raises(GitRunnerError) as exc_info:
                _run_git(["config", "--get", "x"], cwd=Path("/tmp/repo"))
        assert exc_info.value.returncode == 1

    def test_git_not_installed(self) -> None:
        with patch("gitreq.services.git._run.subprocess.run", side_effect=FileNotFoundError):
            with pytest.raises(GitRunnerError, match="git not found"):
                _run_git(["status"], cwd=Path("/tmp/repo"))


class TestGitConfig:
    """GitConfig reads and writes req.* keys in the local config."""

    def test_get(self) -> None:
        with patch("gitreq.services.git.config._run_git", return_value="42") as run:
            assert GitConfig(Path("/tmp/repo")).get("projectid") == "42"
        assert run.call_args[0][0] == ["config", "--local", "--get", "req.projectid"]
        assert run.call_args[1]["cwd"] == Path("/tmp/repo")

    def test_get_scoped_missing_returns_none(self) -> None:
        with patch("gitreq.services.git.config._run_git", side_effect=GitRunnerError("missing", returncode=1)):
            assert GitConfig(Path("/tmp/repo")).get_scoped("gitlab.com", "projectid") is None

    def test_get_other_failure_propagates(self) -> None:
        with patch("gitreq.services.git.config._run_git", side_effect=GitRunnerError("not a repo", returncode=128)):
            with pytest.raises(GitRunnerError):
                GitConfig(Path("/tmp/repo")).get("projectid")

    def test_set_scoped(self) -> None:
        with patch("gitreq.services.git.config._run_git", return_value="") as run:
            GitConfig(Path("/tmp/repo")).set_scoped("gitlab.com", "apikey", "tok")
        assert run.call_args[0][0] == ["config", "--local", "req.gitlab.com.apikey", "tok"]

    def test_set(self) -> None:
        with patch("gitreq.services.git.config._run_git", return_value="") as run:
            GitConfig(Path("/tmp/repo")).set("projectid", "42")
        assert run.call_args[0][0] == ["config", "--local", "req.projectid", "42"]

    def test_unset_scoped(self) -> None:
        with patch("gitreq.services.git.config._run_git", return_value="") as run:
            assert GitConfig(Path("/tmp/repo")).unset_scoped("gitlab.com", "projectid") is True
        assert run.call_args[0][0] == ["config", "--local", "--unset", "req.gitlab.com.projectid"]

    def test_unset_scoped_missing(self) -> None:
        with patch("gitreq.services.git.config._run_git", side_effect=GitRunnerError("missing", returncode=5)):
            assert GitConfig(Path("/tmp/repo")).unset_scoped("gitlab.com", "projectid") is False

    def test_defaults_to_cwd(self) -> None:
        assert GitConfig().repo_dir == Path.cwd()


class TestBranches:
    def test_get_origin_url(self) -> None:
        with patch("gitreq.services.git.branches._run_git", return_value="git@github.com:o/r.git") as run:
            assert get_origin_url(repo_dir=Path("/tmp/repo")) == "git@github.com:o/r.git"
        run.assert_called_once_with(["remote", "get-url", "origin"], cwd=Path("/tmp/repo"), log=None)

    def test_fetch_and_checkout(self) -> None:
        """Fetches the ref into the local branch, then checks it out."""
        with patch("gitreq.services.git.branches._run_git", side_effect=["main", "", ""]) as run:
            fetch_and_checkout_request("pull/7/head", "pr/7", repo_dir=Path("/tmp/repo"))
        commands = [call[0][0] for call in run.call_args_list]
        assert commands == [
            ["branch", "--show-current"],
            ["fetch", "origin", "+pull/7/head:pr/7"],
            ["checkout", "pr/7"],
        ]

    def test_current_branch_is_pulled(self) -> None:
        with patch("gitreq.services.git.branches._run_git", side_effect=["pr/7", ""]) as run:
            fetch_and_checkout_request("pull/7/head", "pr/7", repo_dir=Path("/tmp/repo"))
        commands = [call[0][0] for call in run.call_args_list]
        assert commands == [["branch", "--show-current"], ["pull", "origin", "pull/7/head"]]

    def test_fetch_failure_propagates(self) -> None:
        with patch("gitreq.services.git.branches._run_git", side_effect=["main", GitRunnerError("no such ref")]):
            with pytest.raises(GitRunnerError, match="no such ref"):
                fetch_and_checkout_request("pull/99/head", "pr/99", repo_dir=Path("/tmp/repo"))

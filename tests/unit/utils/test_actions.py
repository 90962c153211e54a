"""
Module: test_actions.py
Description: Unit tests for the runner context and step outputs.
"""

import pytest
from pydantic import ValidationError

from speaker_notify.utils.actions import GitHubContext, set_output


class TestGitHubContext:
    """Test cases for GitHubContext."""

    def test_loaded_from_environment(self, action_env):
        context = GitHubContext()

        assert context.owner == "testowner"
        assert context.repo == "testrepo"
        assert context.workflow == "CI"

    def test_workflow_optional(self, action_env, monkeypatch):
        monkeypatch.delenv("GITHUB_WORKFLOW")

        assert GitHubContext().workflow == ""

    def test_repository_required(self, action_env, monkeypatch):
        monkeypatch.delenv("GITHUB_REPOSITORY")

        with pytest.raises(ValidationError):
            GitHubContext()

    @pytest.mark.parametrize("repository", ["noslash", "/repo", "owner/"])
    def test_malformed_repository(self, action_env, repository):
        with pytest.raises(ValidationError):
            GitHubContext(repository=repository)

    def test_repo_keeps_extra_slashes(self, action_env):
        assert GitHubContext(repository="owner/a/b").repo == "a/b"


class TestSetOutput:
    """Test cases for set_output."""

    def test_appends_delimited_values(self, action_env, read_outputs):
        set_output("status", "success")
        set_output("response", '{"status": "processed"}')

        assert read_outputs(action_env) == {
            "status": "success",
            "response": '{"status": "processed"}',
        }

    def test_multiline_value(self, action_env, read_outputs):
        set_output("message_sent", "line one\nline two")

        assert read_outputs(action_env)["message_sent"] == "line one\nline two"

    def test_legacy_command_without_output_file(self, action_env, monkeypatch, capsys):
        monkeypatch.delenv("GITHUB_OUTPUT")

        set_output("status", "failed")

        assert "::set-output name=status::failed" in capsys.readouterr().out

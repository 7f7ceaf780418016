"""Tests for GitClient — project lookup and dev-branch checkout."""

import subprocess
from pathlib import Path
from unittest.mock import MagicMock, call, patch

import pytest

from konducta.clients.git import GitClient, GitProjects, Project
from konducta.core.errors import ErrorCategory, GitError
from konducta.core.settings import KonductaSettings, ProjectSettings


@pytest.fixture
def project() -> Project:
    return Project(
        name="konducta_data",
        remote="https://github.com/Acme/Konducta_Data.git",
        path=Path("/srv/konducta_data"),
    )


class TestProject:
    def test_url_is_parsed(self, project):
        assert project.url.path == "/Acme/Konducta_Data.git"
        assert project.url.netloc == "github.com"

    def test_ssh_style_remote(self):
        project = Project(name="p", remote="ssh://git@github.com/acme/p.git", path=Path("/tmp/p"))
        assert project.url.path == "/acme/p.git"


class TestGitProjects:
    def test_get_missing_returns_none(self, project):
        projects = GitProjects({"konducta_data": project})
        assert projects.get("carrier_vuln_tests") is None
        assert projects.get("konducta_data") is project

    def test_mapping_protocol(self, project):
        projects = GitProjects({"konducta_data": project})
        assert "konducta_data" in projects
        assert list(projects) == ["konducta_data"]
        assert len(projects) == 1

    def test_empty(self):
        assert len(GitProjects()) == 0


class TestFromSettings:
    def test_builds_projects(self, tmp_path):
        settings = KonductaSettings(
            data_dir=tmp_path,
            dev_branch="develop",
            projects={
                "carrier_vuln_tests": ProjectSettings(
                    url="https://github.com/acme/carrier_vuln_tests.git", path=tmp_path / "cvt"
                )
            },
        )
        client = GitClient.from_settings(settings)
        assert client.dev_branch == "develop"
        project = client.projects.get("carrier_vuln_tests")
        assert project.name == "carrier_vuln_tests"
        assert project.path == tmp_path / "cvt"


class TestCheckoutDevBranch:
    @patch("konducta.clients.git.subprocess.run")
    def test_checkout_then_clean(self, mock_run, project):
        mock_run.return_value = MagicMock(stdout=b"")
        GitClient(dev_branch="dev").checkout_dev_branch(project)

        kwargs = {"capture_output": True, "cwd": "/srv/konducta_data", "check": True, "timeout": 120}
        assert mock_run.call_args_list == [
            call(["git", "checkout", "--force", "dev"], **kwargs),
            call(["git", "clean", "-fd"], **kwargs),
        ]

    @patch("konducta.clients.git.subprocess.run")
    def test_command_failure_raises_git_error(self, mock_run, project):
        failure = subprocess.CalledProcessError(
            1, ["git", "checkout"], stderr=b"error: pathspec 'dev' did not match"
        )
        mock_run.side_effect = failure

        with pytest.raises(GitError) as exc_info:
            GitClient().checkout_dev_branch(project)

        error = exc_info.value
        assert error.category == ErrorCategory.GIT
        assert error.cause is failure
        assert "pathspec 'dev'" in error.message
        assert error.context.project == "konducta_data"
        assert error.context.command == "git checkout --force dev"
        assert mock_run.call_count == 1

    @patch("konducta.clients.git.subprocess.run")
    def test_missing_git_binary(self, mock_run, project):
        mock_run.side_effect = FileNotFoundError("git")
        with pytest.raises(GitError, match="could not run"):
            GitClient().checkout_dev_branch(project)

    @patch("konducta.clients.git.subprocess.run")
    def test_timeout(self, mock_run, project):
        mock_run.side_effect = subprocess.TimeoutExpired(["git", "clean"], 5)
        with pytest.raises(GitError):
            GitClient(timeout=5).checkout_dev_branch(project)

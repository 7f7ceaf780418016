"""Git client for the projects a run may reset.

A project is reset by forcing a checkout of the development branch and
removing untracked files, so the next transform or upload starts from a
clean tree.

Usage::

    from konducta.clients.git import GitClient

    git = GitClient.from_settings(get_settings())
    project = git.projects.get("konducta_data")
    if project is not None:
        git.checkout_dev_branch(project)
"""

from __future__ import annotations

import subprocess
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING
from urllib.parse import ParseResult, urlparse

from konducta.core.errors import GitError
from konducta.framework.logging import get_logger

if TYPE_CHECKING:
    from konducta.core.settings import KonductaSettings

logger = get_logger(__name__)

DEFAULT_TIMEOUT = 120


@dataclass(frozen=True)
class Project:
    """A configured git checkout."""

    name: str
    remote: str
    path: Path
    url: ParseResult = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "url", urlparse(self.remote))


class GitProjects(Mapping[str, Project]):
    """Read-only lookup of configured projects by key."""

    def __init__(self, projects: Mapping[str, Project] | None = None) -> None:
        self._projects = dict(projects or {})

    def __getitem__(self, key: str) -> Project:
        return self._projects[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._projects)

    def __len__(self) -> int:
        return len(self._projects)


class GitClient:
    """Runs git commands against configured projects."""

    def __init__(
        self,
        projects: GitProjects | None = None,
        *,
        dev_branch: str = "dev",
        timeout: int = DEFAULT_TIMEOUT,
    ) -> None:
        self.projects = projects if projects is not None else GitProjects()
        self.dev_branch = dev_branch
        self.timeout = timeout

    @classmethod
    def from_settings(cls, settings: KonductaSettings) -> GitClient:
        projects = GitProjects(
            {
                key: Project(name=key, remote=conf.url, path=conf.path)
                for key, conf in settings.projects.items()
            }
        )
        return cls(projects, dev_branch=settings.dev_branch)

    def checkout_dev_branch(self, project: Project) -> None:
        """Force-checkout the dev branch and remove untracked files.

        Raises:
            GitError: If a git command fails, times out, or git is missing.
        """
        self._git(project, "checkout", "--force", self.dev_branch)
        self._git(project, "clean", "-fd")

    def _git(self, project: Project, *args: str) -> str:
        cmd = ["git", *args]
        logger.debug("git.run", project=project.name, command=" ".join(cmd))
        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                cwd=str(project.path),
                check=True,
                timeout=self.timeout,
            )
        except subprocess.CalledProcessError as exc:
            stderr = (exc.stderr or b"").decode("utf-8", errors="replace").strip()
            raise GitError(
                f"git {args[0]} failed for {project.name}: {stderr or exc}", cause=exc
            ).with_context(project=project.name, path=str(project.path), command=" ".join(cmd)) from exc
        except (subprocess.TimeoutExpired, FileNotFoundError, NotADirectoryError) as exc:
            raise GitError(
                f"git {args[0]} could not run for {project.name}: {exc}", cause=exc
            ).with_context(project=project.name, path=str(project.path), command=" ".join(cmd)) from exc
        return result.stdout.decode("utf-8", errors="replace")

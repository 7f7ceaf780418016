"""
Shared pytest fixtures for konducta tests.

This module provides:
- Registry, settings and log-context cleanup for test isolation
- Recording fakes for the log, git client and data store
- Factories for recording sources/vendors and run contexts

Usage:
    def test_dispatch(make_context, make_source, events):
        ctx = make_context(sources=[make_source("A")])
        Bot(ctx).process_advisories()
        assert events == [...]
"""

import sys
from collections.abc import Callable, Generator
from pathlib import Path
from typing import Any

import pytest

# Ensure konducta package is importable
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from konducta.clients import Clients, GitClient, GitProjects, Project
from konducta.companies import Source, Vendor, clear_registry
from konducta.context import RunContext
from konducta.core.settings import clear_settings_cache
from konducta.data import DataStore
from konducta.framework.logging import RunLog, clear_context
from konducta.options import RunOptions


# =============================================================================
# Isolation Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def clean_company_registry() -> Generator[None, None, None]:
    """Clear the company registry and skip entry-point discovery."""
    clear_registry(mark_loaded=True)
    yield
    clear_registry(mark_loaded=True)


@pytest.fixture(autouse=True)
def clean_settings_cache() -> Generator[None, None, None]:
    clear_settings_cache()
    yield
    clear_settings_cache()


@pytest.fixture(autouse=True)
def clean_log_context() -> Generator[None, None, None]:
    clear_context()
    yield
    clear_context()


# =============================================================================
# Recording Fakes
# =============================================================================


class RecordingLogger:
    """Stands in for a structlog logger and records (level, event) pairs."""

    def __init__(self) -> None:
        self.records: list[tuple[str, str]] = []

    def _record(self, level: str, event: str, **_: Any) -> None:
        self.records.append((level, event))

    def debug(self, event: str, **kw: Any) -> None:
        self._record("debug", event, **kw)

    def info(self, event: str, **kw: Any) -> None:
        self._record("info", event, **kw)

    def warning(self, event: str, **kw: Any) -> None:
        self._record("warning", event, **kw)

    def error(self, event: str, **kw: Any) -> None:
        self._record("error", event, **kw)

    def critical(self, event: str, **kw: Any) -> None:
        self._record("critical", event, **kw)

    def messages(self, level: str | None = None) -> list[str]:
        return [event for lvl, event in self.records if level is None or lvl == level]


class RecordingGit(GitClient):
    """Git client that records resets instead of running git."""

    def __init__(self, projects: GitProjects, events: list) -> None:
        super().__init__(projects)
        self.events = events
        self.checked_out: list[str] = []

    def checkout_dev_branch(self, project: Project) -> None:
        self.checked_out.append(project.name)
        self.events.append(("reset", project.name))


class RecordingDataStore(DataStore):
    """Data store that records clean calls instead of touching disk."""

    def __init__(self, root: Path, events: list) -> None:
        super().__init__(root)
        self.events = events
        self.clean_calls = 0

    def clean(self) -> None:
        self.clean_calls += 1
        self.events.append(("clean", None))


# =============================================================================
# Factories
# =============================================================================


@pytest.fixture
def events() -> list:
    """Ordered record of everything the fakes and recording companies did."""
    return []


@pytest.fixture
def logger() -> RecordingLogger:
    return RecordingLogger()


@pytest.fixture
def run_log(logger: RecordingLogger) -> RunLog:
    return RunLog(logger=logger)


@pytest.fixture
def projects() -> GitProjects:
    return GitProjects(
        {
            "carrier_vuln_tests": Project(
                name="carrier_vuln_tests",
                remote="https://github.com/Acme/Carrier_Vuln_Tests.git",
                path=Path("/srv/carrier_vuln_tests"),
            ),
            "konducta_data": Project(
                name="konducta_data",
                remote="https://github.com/Acme/Konducta_Data.git",
                path=Path("/srv/konducta_data"),
            ),
        }
    )


def _recording_company(base: type, alias: str, events: list) -> type:
    class Recorded(base):
        display_name = alias

        def fetch(self) -> None:
            events.append((alias, "fetch"))

        def transform(self) -> None:
            events.append((alias, "transform"))

        def upload(self) -> None:
            events.append((alias, "upload"))

    Recorded.__name__ = f"Recorded{base.__name__}{alias}"
    return Recorded


@pytest.fixture
def make_source(events: list) -> Callable[[str], type[Source]]:
    """Build a Source class whose stages append (alias, stage) to ``events``."""
    return lambda alias: _recording_company(Source, alias, events)


@pytest.fixture
def make_vendor(events: list) -> Callable[[str], type[Vendor]]:
    """Build a Vendor class whose stages append (alias, stage) to ``events``."""
    return lambda alias: _recording_company(Vendor, alias, events)


@pytest.fixture
def make_context(
    tmp_path: Path,
    run_log: RunLog,
    projects: GitProjects,
    events: list,
) -> Callable[..., RunContext]:
    """Build a RunContext wired to recording fakes."""

    def factory(
        options: RunOptions | None = None,
        *,
        sources: list[type[Source]] | None = None,
        git_projects: GitProjects | None = None,
    ) -> RunContext:
        return RunContext(
            options or RunOptions(),
            log=run_log,
            data=RecordingDataStore(tmp_path / "data", events),
            clients=Clients(git=RecordingGit(git_projects if git_projects is not None else projects, events)),
            sources=sources or [],
        )

    return factory

"""Run context shared by the bot and every company.

One ``RunContext`` is built per run. It holds the resolved options, the
collaborators (log, data store, git client) and the ticket currently claimed,
if any. Companies receive it at construction and reach every shared resource
through it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from enum import Enum

from konducta.clients import Clients, GitClient
from konducta.companies.base import Source
from konducta.companies.registry import get_source, list_sources
from konducta.core.settings import KonductaSettings, get_settings
from konducta.data import DataStore
from konducta.framework.logging import RunLog
from konducta.options import RunOptions


class TicketStatus(str, Enum):
    """Ticket lifecycle status."""

    OPEN = "open"
    CANCELLED = "cancelled"
    CLOSED = "closed"


@dataclass
class Ticket:
    """A claimed unit of work that must be released if the run stops early."""

    key: str
    summary: str = ""
    status: TicketStatus = TicketStatus.OPEN
    claimed_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    def cancel(self) -> None:
        self.status = TicketStatus.CANCELLED

    def close(self) -> None:
        self.status = TicketStatus.CLOSED


class RunContext:
    """Options, collaborators and in-flight state for a single run."""

    def __init__(
        self,
        options: RunOptions,
        *,
        settings: KonductaSettings | None = None,
        log: RunLog | None = None,
        data: DataStore | None = None,
        clients: Clients | None = None,
        sources: list[type[Source]] | None = None,
        start: datetime | None = None,
    ) -> None:
        self.options = options
        self.settings = settings
        self.log = log or RunLog()
        self.data = data if data is not None else DataStore((settings or get_settings()).data_dir)
        self.clients = clients or Clients()
        self.sources = list(sources or [])
        self.start = start or datetime.now(UTC)
        self.ticket: Ticket | None = None

    @classmethod
    def create(cls, options: RunOptions, settings: KonductaSettings | None = None) -> RunContext:
        """Build a context wired from settings and the company registry.

        Raises:
            CompanyNotFoundError: If a configured source is not registered.
        """
        settings = settings or get_settings()
        source_names = settings.sources or list_sources()
        return cls(
            options,
            settings=settings,
            data=DataStore(settings.data_dir),
            clients=Clients(git=GitClient.from_settings(settings)),
            sources=[get_source(name) for name in source_names],
        )

    @property
    def run_id(self) -> int:
        """Run identifier: start time in whole seconds since the epoch."""
        return int(self.start.timestamp())

    @property
    def runtime(self) -> timedelta:
        """Time elapsed since the run started."""
        return datetime.now(UTC) - self.start

    # ── Tickets ──────────────────────────────────────────────────

    def claim_ticket(self, key: str, summary: str = "") -> Ticket:
        """Record ``key`` as the ticket in flight, replacing any previous one."""
        self.ticket = Ticket(key=key, summary=summary)
        self.log.debug(f"claimed ticket {key}")
        return self.ticket

    def close_ticket(self) -> None:
        """Mark the in-flight ticket as done and release it."""
        if self.ticket is None:
            return
        self.ticket.close()
        self.log.debug(f"closed ticket {self.ticket.key}")
        self.ticket = None

    def cancel_ticket(self) -> None:
        """Cancel and release the in-flight ticket, if any."""
        if self.ticket is None:
            return
        self.ticket.cancel()
        self.log.warn(f"cancelled ticket {self.ticket.key}")
        self.ticket = None

"""
Run orchestration: option checks, project resets, stage dispatch, cleanup.

Manifesto:
    The bot sequences a run and nothing else. Companies do the domain work,
    the git client resets projects, the data store wipes working files. The
    bot decides the order, applies the fail/force policy for invalid options
    and is the only component allowed to end the process.

Architecture:
    ::

        Bot.run()
          │
          ├─ BEGIN -- run #<run_id>
          ├─ check_options() ──► warn (force) | fatal + exit
          ├─ reset(project)      unless --safe, per enabled stage
          ├─ process_advisories()
          │     (sources + vendors) × enabled stages, in order
          ├─ data.clean()        upload enabled and not --keep
          └─ END -- runtime: <elapsed>

        Bot.stop()  ◄── SIGINT / SIGTERM
          └─ header, cancel in-flight ticket, exit

Guardrails:
    Collaborator failures are never caught here. A stage that raises aborts
    the rest of the matrix and the run.

Tags:
    konducta, orchestration, run-lifecycle, dispatch

Doc-Types:
    api-reference
"""

from __future__ import annotations

import itertools
import signal
import sys
from collections.abc import Iterable
from dataclasses import dataclass
from types import FrameType
from typing import NoReturn

from konducta.companies.base import Company, Source, Vendor
from konducta.companies.registry import get_vendor
from konducta.context import RunContext
from konducta.framework.logging import RunLog, bind_context, push_context
from konducta.options import RunOptions, Stage

EXIT_INVALID_OPTIONS = 2

# Project reset before a run, keyed by the stage that needs it
RESET_PROJECTS: tuple[tuple[Stage, str], ...] = (
    (Stage.TRANSFORM, "carrier_vuln_tests"),
    (Stage.UPLOAD, "konducta_data"),
)


@dataclass(frozen=True)
class OptionsCheck:
    """Outcome of validating run options."""

    message: str
    fatal: bool


def check_options(options: RunOptions) -> OptionsCheck | None:
    """Report invalid option tokens, or ``None`` when there are none.

    The check is fatal unless ``force`` is set.
    """
    if not options.invalid:
        return None
    return OptionsCheck(
        message=f"invalid options: {', '.join(options.invalid)}",
        fatal=not options.force,
    )


class Bot:
    """Runs every enabled stage for every company, with setup and shutdown."""

    def __init__(self, context: RunContext) -> None:
        self.context = context
        self.sources: list[Source] = [source(context) for source in context.sources]
        self.vendors: list[Vendor] = [
            get_vendor(vendor)(context, apps) for vendor, apps in context.options.products.items()
        ]

    @property
    def log(self) -> RunLog:
        return self.context.log

    @property
    def companies(self) -> list[Company]:
        """Sources then vendors, in construction order."""
        return [*self.sources, *self.vendors]

    def run(self) -> None:
        """Run the full lifecycle once."""
        options = self.context.options
        bind_context(run_id=self.context.run_id)
        self.log.info(f"BEGIN -- run #{self.context.run_id}")

        check = check_options(options)
        if check is not None:
            if check.fatal:
                self.log.fatal(check.message)
                sys.exit(EXIT_INVALID_OPTIONS)
            self.log.warn(check.message)

        if not options.safe:
            for stage, project_key in RESET_PROJECTS:
                if options.stages.is_enabled(stage):
                    self.reset(project_key)

        self.process_advisories()

        if options.stages.upload and not options.keep:
            self.log.info("clean data directory")
            self.context.data.clean()

        self.log.info(f"END -- runtime: {self.context.runtime}")

    def stop(self, exit_code: int = 0) -> NoReturn:
        """Release the in-flight ticket, if any, and exit."""
        self.log.header()
        if self.context.ticket is not None:
            self.context.cancel_ticket()
        sys.exit(exit_code)

    def process_advisories(self) -> None:
        """Dispatch each enabled stage to each company, strictly in order."""
        self.log.header()
        stages = self.context.options.stages.enabled()
        for company, stage in itertools.product(self.companies, stages):
            self.log.info(f"{company.alias().lower()} {stage.value}")
            token = push_context(company=company.alias(), stage=stage.value)
            try:
                company.run_stage(stage)
            finally:
                token.restore()

    def reset(self, project_key: str) -> None:
        """Check out the dev branch of a configured project and drop untracked files.

        Unconfigured projects are skipped silently.
        """
        self.log.header()
        git = self.context.clients.git
        project = git.projects.get(project_key)
        if project is None:
            return
        self.log.debug(f"checkout dev branch for {project.url.path.lower()}")
        token = push_context(project=project_key)
        try:
            git.checkout_dev_branch(project)
        finally:
            token.restore()


def install_signal_handlers(
    bot: Bot,
    signals: Iterable[signal.Signals] = (signal.SIGINT, signal.SIGTERM),
) -> None:
    """Route termination signals to ``bot.stop`` with exit code 128 + signum."""

    def _handle(signum: int, frame: FrameType | None) -> None:
        bot.stop(128 + signum)

    for sig in signals:
        signal.signal(sig, _handle)

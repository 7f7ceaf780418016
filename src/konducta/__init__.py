"""
konducta - run orchestrator for the security-advisory pipeline.

Drives the fetch, transform and upload stages across every configured
source and vendor, resetting supporting git projects before a run and
cleaning working data after it.

Usage:
    from konducta import Bot, RunContext, RunOptions

    bot = Bot(RunContext.create(RunOptions()))
    bot.run()
"""

from konducta.bot import Bot, OptionsCheck, check_options, install_signal_handlers
from konducta.companies import Company, Source, Vendor, register_source, register_vendor
from konducta.context import RunContext, Ticket, TicketStatus
from konducta.options import RunOptions, Stage, StageToggles

__version__ = "0.1.0"

__all__ = [
    "Bot",
    "OptionsCheck",
    "check_options",
    "install_signal_handlers",
    "Company",
    "Source",
    "Vendor",
    "register_source",
    "register_vendor",
    "RunContext",
    "Ticket",
    "TicketStatus",
    "RunOptions",
    "Stage",
    "StageToggles",
]

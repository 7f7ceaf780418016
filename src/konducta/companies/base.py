"""Base company interface: sources and vendors.

Every company answers every stage. A subclass overrides the stage methods it
actually performs; the rest fall through to a logged no-op, so the bot can
dispatch the full company × stage matrix without knowing which company does
what.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, ClassVar

from konducta.options import Stage

if TYPE_CHECKING:
    from konducta.context import RunContext
    from konducta.framework.logging import RunLog


class Company:
    """Base class for sources and vendors."""

    # Registry metadata
    kind: ClassVar[str] = "company"
    name: ClassVar[str] = ""
    display_name: ClassVar[str] = ""

    def __init__(self, context: RunContext) -> None:
        self.context = context

    @property
    def log(self) -> RunLog:
        return self.context.log

    def alias(self) -> str:
        """Display name used in run logs."""
        return self.display_name or self.name or type(self).__name__

    # ── Stages ───────────────────────────────────────────────────

    def fetch(self) -> None:
        self._unsupported(Stage.FETCH)

    def transform(self) -> None:
        self._unsupported(Stage.TRANSFORM)

    def upload(self) -> None:
        self._unsupported(Stage.UPLOAD)

    # ── Dispatch ─────────────────────────────────────────────────

    @classmethod
    def supports(cls, stage: Stage | str) -> bool:
        """True when this company overrides the stage method."""
        method = Stage(stage).value
        return getattr(cls, method) is not getattr(Company, method)

    def run_stage(self, stage: Stage | str) -> None:
        """Run the method named after ``stage``."""
        getattr(self, Stage(stage).value)()

    def _unsupported(self, stage: Stage) -> None:
        self.log.debug(f"{self.alias().lower()} has no {stage.value} stage")

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(alias={self.alias()!r})"


class Source(Company):
    """An advisory data source, built from configuration's source list."""

    kind = "source"


class Vendor(Company):
    """A vendor integration, built once per ``(vendor, apps)`` product entry."""

    kind = "vendor"

    def __init__(self, context: RunContext, apps: list[str] | tuple[str, ...]) -> None:
        super().__init__(context)
        self.apps = tuple(apps)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(alias={self.alias()!r}, apps={list(self.apps)!r})"

"""Run options: stage toggles, behaviour flags, products and invalid tokens.

Options are resolved once per run. Settings supply the defaults and the CLI
flags override them, so the last layer to set a value wins. Anything the CLI
did not recognise is kept, in order, in ``RunOptions.invalid`` for the bot to
report.
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field

if TYPE_CHECKING:
    from konducta.core.settings import KonductaSettings


class Stage(str, Enum):
    """Pipeline stage. The value is the Company method run for the stage."""

    FETCH = "fetch"
    TRANSFORM = "transform"
    UPLOAD = "upload"

    def __str__(self) -> str:
        return self.value


class StageToggles(BaseModel):
    """Enabled state per stage, in dispatch order.

    Field order must follow ``Stage`` declaration order.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    fetch: bool = True
    transform: bool = True
    upload: bool = True

    def to_dict(self) -> dict[str, bool]:
        return self.model_dump()

    def enabled(self) -> list[Stage]:
        """Stages whose toggle is ``True``, in declaration order."""
        return [Stage(name) for name, value in self.to_dict().items() if value is True]

    def is_enabled(self, stage: Stage | str) -> bool:
        return bool(getattr(self, Stage(stage).value))


class RunOptions(BaseModel):
    """Resolved options for a single run."""

    model_config = ConfigDict(frozen=True)

    force: bool = False
    safe: bool = False
    keep: bool = False
    stages: StageToggles = Field(default_factory=StageToggles)
    products: dict[str, list[str]] = Field(default_factory=dict)
    invalid: tuple[str, ...] = ()

    @classmethod
    def from_cli(
        cls,
        settings: KonductaSettings,
        *,
        force: bool = False,
        safe: bool = False,
        keep: bool = False,
        only: list[str] | None = None,
        skip: list[str] | None = None,
        products: list[str] | None = None,
        extra: list[str] | None = None,
    ) -> RunOptions:
        """
        Merge CLI flags over settings defaults.

        Args:
            settings: Resolved settings providing stage and product defaults
            force: Continue even when invalid options were given
            safe: Never reset git projects
            keep: Keep the data directory after upload
            only: Stage names to run; every other stage is disabled
            skip: Stage names to disable
            products: ``vendor=app1,app2`` entries, overriding settings per vendor
            extra: Unrecognised command line tokens

        Returns:
            Frozen RunOptions. Unknown stage names, malformed product entries
            and ``extra`` tokens are collected into ``invalid``.
        """
        invalid: list[str] = []
        toggles = settings.stages.to_dict()
        known = set(toggles)

        if only:
            requested = set()
            for name in only:
                if name in known:
                    requested.add(name)
                else:
                    invalid.append(f"--stage={name}")
            toggles = {name: name in requested for name in toggles}

        for name in skip or []:
            if name in known:
                toggles[name] = False
            else:
                invalid.append(f"--skip={name}")

        merged_products = {vendor: list(apps) for vendor, apps in settings.products.items()}
        for entry in products or []:
            vendor, sep, apps = entry.partition("=")
            vendor = vendor.strip()
            if not sep or not vendor:
                invalid.append(f"--product={entry}")
                continue
            merged_products[vendor] = [app.strip() for app in apps.split(",") if app.strip()]

        invalid.extend(extra or [])

        return cls(
            force=force,
            safe=safe,
            keep=keep,
            stages=StageToggles(**toggles),
            products=merged_products,
            invalid=tuple(invalid),
        )

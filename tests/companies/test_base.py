"""Tests for the Company interface."""

import pytest

from konducta.companies.base import Company, Source, Vendor
from konducta.options import Stage


class Feed(Source):
    display_name = "Feed"

    def __init__(self, context):
        super().__init__(context)
        self.calls = []

    def fetch(self) -> None:
        self.calls.append("fetch")


class Portal(Vendor):
    name = "portal"

    def upload(self) -> None:
        pass


class TestAlias:
    def test_display_name(self, make_context):
        assert Feed(make_context()).alias() == "Feed"

    def test_falls_back_to_name(self, make_context):
        assert Portal(make_context(), ["web"]).alias() == "portal"

    def test_falls_back_to_class_name(self, make_context):
        class Bare(Source):
            pass

        assert Bare(make_context()).alias() == "Bare"


class TestStages:
    def test_supports_overridden_stages_only(self):
        assert Feed.supports(Stage.FETCH) is True
        assert Feed.supports("transform") is False
        assert Portal.supports(Stage.UPLOAD) is True
        assert Company.supports(Stage.UPLOAD) is False

    def test_run_stage_dispatches_by_name(self, make_context):
        feed = Feed(make_context())
        feed.run_stage(Stage.FETCH)
        feed.run_stage("fetch")
        assert feed.calls == ["fetch", "fetch"]

    def test_unsupported_stage_logs_debug(self, make_context, logger):
        Feed(make_context()).run_stage(Stage.UPLOAD)
        assert logger.messages("debug") == ["feed has no upload stage"]

    def test_unknown_stage_rejected(self, make_context):
        with pytest.raises(ValueError):
            Feed(make_context()).run_stage("publish")


class TestVendor:
    def test_apps_stored_as_tuple(self, make_context):
        vendor = Portal(make_context(), ["web", "api"])
        assert vendor.apps == ("web", "api")
        assert vendor.kind == "vendor"

    def test_shares_context(self, make_context):
        ctx = make_context()
        vendor = Portal(ctx, [])
        assert vendor.context is ctx
        assert vendor.log is ctx.log

    def test_repr(self, make_context):
        assert repr(Portal(make_context(), ["web"])) == "Portal(alias='portal', apps=['web'])"

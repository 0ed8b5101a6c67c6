"""Tests for the publish driver — catalog once, resolve, publish, report."""

from __future__ import annotations

import pytest

from shipforge.core.publish_driver import PublishDriver, PublishError, publish, publish_all
from shipforge.models import Artifact, PublishTarget
from shipforge.publishers import DryRunPublisher


class FailingPublisher:
    name = "failing"

    def publish(self, assets):
        raise OSError("remote closed the connection")


@pytest.fixture
def release_context(make_context, make_file):
    make_file("app.zip")
    return make_context(
        files=[Artifact(path="app.zip")],
        catalog={
            "sbom": {
                "syft": {"enabled": True, "formats": ["spdx-json"]},
                "cyclonedx": {"enabled": True, "formats": ["json"]},
            }
        },
    )


def _names(assets) -> list[str]:
    return [a.filename for a in assets]


class TestPublishSingleTarget:
    def test_catalogs_then_publishes(self, release_context, make_tool):
        tools = {"syft": make_tool("syft"), "cyclonedx": make_tool("cyclonedx")}
        publisher = DryRunPublisher()

        report = publish(release_context, release_context.model.release, publisher, tools=tools)

        assert report.ok
        assert _names(publisher.published[0]) == [
            "app-1.0.0-cyclonedx-sboms.zip",
            "app-1.0.0-syft-sboms.zip",
            "app.zip",
        ]
        kinds = sorted(a.kind.value for a in publisher.published[0])
        assert kinds == ["catalog", "catalog", "file"]
        assert report.published["release"] == publisher.published[0]

    def test_failed_cataloger_contributes_no_catalogs(self, release_context, make_tool):
        tools = {
            "cyclonedx": make_tool("cyclonedx", fail_with=1),
            "syft": make_tool("syft"),
        }
        publisher = DryRunPublisher()

        with pytest.raises(PublishError) as excinfo:
            publish(release_context, release_context.model.release, publisher, tools=tools)

        assert list(excinfo.value.failures) == ["catalog:cyclonedx"]
        published = publisher.published[0]
        catalog_paths = [a.effective_path for a in published if a.kind.value == "catalog"]
        assert len(catalog_paths) == 1
        assert catalog_paths[0].parent.name == "syft"

    def test_fail_fast_publishes_nothing(self, release_context, make_tool):
        tools = {
            "cyclonedx": make_tool("cyclonedx", fail_with=1),
            "syft": make_tool("syft"),
        }
        publisher = DryRunPublisher()

        with pytest.raises(PublishError, match="catalog:cyclonedx"):
            publish(
                release_context,
                release_context.model.release,
                publisher,
                tools=tools,
                fail_fast=True,
            )

        assert publisher.published == []
        assert tools["syft"].calls == []


class TestPublishAll:
    def test_catalogers_run_once_for_many_targets(self, release_context, make_tool):
        tools = {"syft": make_tool("syft"), "cyclonedx": make_tool("cyclonedx")}
        release = DryRunPublisher("release")
        mirror = DryRunPublisher("mirror")

        report = publish_all(
            release_context,
            [
                (release_context.model.release, release),
                (PublishTarget(name="mirror", catalogs=False), mirror),
            ],
            tools=tools,
        )

        assert len(tools["syft"].calls) == 1
        assert len(tools["cyclonedx"].calls) == 1
        assert _names(mirror.published[0]) == ["app.zip"]
        assert len(release.published[0]) == 3
        assert set(report.published) == {"release", "mirror"}

    def test_no_catalog_targets_skip_catalogers(self, release_context, make_tool):
        tools = {"syft": make_tool("syft"), "cyclonedx": make_tool("cyclonedx")}
        publish_all(
            release_context,
            [(PublishTarget(catalogs=False), DryRunPublisher())],
            tools=tools,
        )
        assert tools["syft"].setup_calls == 0
        assert tools["cyclonedx"].setup_calls == 0

    def test_disabled_target_skipped(self, release_context, make_tool):
        publisher = DryRunPublisher()
        report = publish_all(
            release_context,
            [(PublishTarget(name="off", enabled=False), publisher)],
            tools={"syft": make_tool("syft"), "cyclonedx": make_tool("cyclonedx")},
        )
        assert publisher.published == []
        assert report.published == {}

    def test_collect_mode_continues_after_target_failure(self, release_context, make_tool):
        tools = {"syft": make_tool("syft"), "cyclonedx": make_tool("cyclonedx")}
        after = DryRunPublisher("after")

        with pytest.raises(PublishError) as excinfo:
            publish_all(
                release_context,
                [
                    (PublishTarget(name="broken"), FailingPublisher()),
                    (PublishTarget(name="after"), after),
                ],
                tools=tools,
            )

        assert list(excinfo.value.failures) == ["broken"]
        assert str(excinfo.value).startswith("1 unit(s) failed: broken")
        assert len(after.published) == 1

    def test_fail_fast_stops_at_failing_target(self, release_context, make_tool):
        tools = {"syft": make_tool("syft"), "cyclonedx": make_tool("cyclonedx")}
        after = DryRunPublisher("after")

        with pytest.raises(PublishError):
            PublishDriver(release_context, fail_fast=True, tools=tools).publish_all(
                [
                    (PublishTarget(name="broken"), FailingPublisher()),
                    (PublishTarget(name="after"), after),
                ]
            )

        assert after.published == []

    def test_aggregate_counts_catalog_and_target_failures(self, release_context, make_tool):
        tools = {
            "syft": make_tool("syft", available=False),
            "cyclonedx": make_tool("cyclonedx"),
        }
        with pytest.raises(PublishError) as excinfo:
            publish_all(
                release_context,
                [(PublishTarget(name="broken"), FailingPublisher())],
                tools=tools,
            )
        assert list(excinfo.value.failures) == ["catalog:syft", "broken"]
        assert str(excinfo.value).startswith("2 unit(s) failed")

    def test_excluded_cataloger_not_run(self, release_context, make_tool):
        tools = {"syft": make_tool("syft"), "cyclonedx": make_tool("cyclonedx")}
        publish_all(
            release_context,
            [(release_context.model.release, DryRunPublisher())],
            exclude=["syft"],
            tools=tools,
        )
        assert tools["syft"].calls == []
        assert len(tools["cyclonedx"].calls) == 1

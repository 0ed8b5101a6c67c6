"""Tests for the individual-checksum cascade: artifact > distribution > global."""

from __future__ import annotations

import itertools

import pytest

from shipforge.core.checksum_policy import first_explicit, resolve_individual
from shipforge.models.artifacts import Artifact, Distribution
from shipforge.models.config import ChecksumConfig


def _artifact(value: bool | None) -> Artifact:
    extras = {} if value is None else {"individualChecksum": value}
    return Artifact(path="app.zip", extra_properties=extras)


def _distribution(value: bool | None) -> Distribution:
    extras = {} if value is None else {"individualChecksum": value}
    return Distribution(name="app", extra_properties=extras)


class TestFirstExplicit:
    def test_returns_default_when_no_override(self):
        assert first_explicit(None, None, default=True) is True
        assert first_explicit(default=False) is False

    def test_first_non_none_wins(self):
        assert first_explicit(None, False, True, default=True) is False


class TestResolveIndividual:
    @pytest.mark.parametrize(
        "artifact_value, group_value, global_value",
        list(itertools.product([None, True, False], [None, True, False], [True, False])),
    )
    def test_cascade_order(self, artifact_value, group_value, global_value):
        resolved = resolve_individual(
            _artifact(artifact_value),
            _distribution(group_value),
            ChecksumConfig(individual=global_value),
        )
        if artifact_value is not None:
            assert resolved is artifact_value
        elif group_value is not None:
            assert resolved is group_value
        else:
            assert resolved is global_value

    def test_standalone_file_uses_global(self):
        assert resolve_individual(_artifact(None), None, ChecksumConfig(individual=True))

    def test_string_override_is_parsed(self):
        artifact = Artifact(path="a", extra_properties={"individualChecksum": "false"})
        assert not resolve_individual(artifact, None, ChecksumConfig(individual=True))

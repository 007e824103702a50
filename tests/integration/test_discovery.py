# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""Tests for startup discovery: registration modules and entry points."""

import logging
from importlib.metadata import EntryPoint

import pytest

from classreg.registry import (
    ENTRY_POINT_GROUP,
    DiscoveryError,
    class_count,
    discover_registrations,
    is_initialized,
    list_classes,
)
from tests.fixtures.components import broken, clocks, codecs


def _entry_point(name: str, value: str) -> EntryPoint:
    return EntryPoint(name=name, value=value, group=ENTRY_POINT_GROUP)


@pytest.fixture
def fake_entry_points(monkeypatch):
    """Replace installed-package entry points with the given list."""

    def _install(*eps: EntryPoint):
        def _entry_points(group=None):
            return [ep for ep in eps if ep.group == group]

        monkeypatch.setattr("classreg.registry._discovery.entry_points", _entry_points)

    return _install


class TestRegistrationModules:

    def test_modules_processed_in_order(self, write_config):
        write_config(
            "registration_modules:\n"
            "  - tests.fixtures.components.codecs\n"
            "  - tests.fixtures.components.more_codecs\n"
            "load_entry_points: false\n"
        )

        discover_registrations()

        assert list_classes(codecs.CODECS) == ["gzip", "lz4", "raw"]

    def test_second_call_is_a_no_op(self, write_config):
        write_config(
            "registration_modules:\n"
            "  - tests.fixtures.components.codecs\n"
            "load_entry_points: false\n"
        )

        discover_registrations()
        discover_registrations()

        assert class_count(codecs.CODECS) == 2

    def test_force_refresh_skips_processed_modules(self, write_config):
        write_config(
            "registration_modules:\n"
            "  - tests.fixtures.components.codecs\n"
            "load_entry_points: false\n"
        )
        discover_registrations()

        write_config(
            "registration_modules:\n"
            "  - tests.fixtures.components.codecs\n"
            "  - tests.fixtures.components.more_codecs\n"
            "load_entry_points: false\n"
        )
        discover_registrations(force_refresh=True)

        assert list_classes(codecs.CODECS) == ["gzip", "lz4", "raw"]

    def test_no_configuration_discovers_nothing(self, fake_entry_points):
        fake_entry_points()

        discover_registrations()

        assert is_initialized()

    def test_module_without_register_all(self, write_config, caplog):
        write_config(
            "registration_modules:\n"
            "  - tests.fixtures.components\n"
            "load_entry_points: false\n"
        )

        with caplog.at_level(logging.DEBUG, logger="classreg.registry._discovery"):
            discover_registrations()

        assert "relying on decorators" in caplog.text


class TestStrictDiscovery:

    def test_missing_module_raises_in_strict_mode(self, write_config):
        write_config(
            "registration_modules:\n"
            "  - tests.fixtures.components.does_not_exist\n"
            "load_entry_points: false\n"
        )

        with pytest.raises(DiscoveryError, match="does_not_exist"):
            discover_registrations()

    def test_failing_hook_raises_in_strict_mode(self, write_config):
        write_config(
            "registration_modules:\n"
            "  - tests.fixtures.components.broken\n"
            "load_entry_points: false\n"
        )

        with pytest.raises(DiscoveryError, match="backend library not installed"):
            discover_registrations()

    def test_lenient_mode_logs_and_continues(self, write_config, caplog):
        write_config(
            "registration_modules:\n"
            "  - tests.fixtures.components.does_not_exist\n"
            "  - tests.fixtures.components.broken\n"
            "  - tests.fixtures.components.codecs\n"
            "strict_discovery: false\n"
            "load_entry_points: false\n"
        )

        with caplog.at_level(logging.ERROR, logger="classreg.registry._discovery"):
            discover_registrations()

        assert list_classes(codecs.CODECS) == ["gzip", "lz4"]
        assert "does_not_exist" in caplog.text
        assert "backend library not installed" in caplog.text
        assert is_initialized()

    def test_failed_hook_not_rerun(self, write_config):
        write_config(
            "registration_modules:\n"
            "  - tests.fixtures.components.broken\n"
            "strict_discovery: false\n"
            "load_entry_points: false\n"
        )
        calls_before = broken.calls

        discover_registrations()
        discover_registrations(force_refresh=True)

        assert broken.calls == calls_before + 1


class TestEntryPoints:

    def test_module_entry_point_runs_register_all(self, write_config, fake_entry_points):
        write_config("registration_modules: []\n")
        fake_entry_points(_entry_point("codecs", "tests.fixtures.components.codecs"))

        discover_registrations()

        assert list_classes(codecs.CODECS) == ["gzip", "lz4"]

    def test_callable_entry_point_is_called(self, write_config, fake_entry_points):
        write_config("registration_modules: []\n")
        fake_entry_points(_entry_point("clocks", "tests.fixtures.components.clocks:register_all"))

        discover_registrations()

        assert list_classes(clocks.CLOCKS) == ["system", "frozen", "slow"]

    def test_entry_points_after_modules(self, write_config, fake_entry_points):
        write_config(
            "registration_modules:\n"
            "  - tests.fixtures.components.codecs\n"
        )
        fake_entry_points(_entry_point("more", "tests.fixtures.components.more_codecs"))

        discover_registrations()

        assert list_classes(codecs.CODECS) == ["gzip", "lz4", "raw"]

    def test_module_also_published_as_entry_point_runs_once(self, write_config, fake_entry_points):
        write_config(
            "registration_modules:\n"
            "  - tests.fixtures.components.codecs\n"
        )
        fake_entry_points(_entry_point("codecs", "tests.fixtures.components.codecs"))

        discover_registrations()

        assert list_classes(codecs.CODECS) == ["gzip", "lz4"]

    def test_entry_point_module_then_configured_module_runs_once(self, write_config, fake_entry_points):
        write_config("registration_modules: []\n")
        fake_entry_points(_entry_point("codecs", "tests.fixtures.components.codecs"))
        discover_registrations()

        write_config(
            "registration_modules:\n"
            "  - tests.fixtures.components.codecs\n"
        )
        discover_registrations(force_refresh=True)

        assert list_classes(codecs.CODECS) == ["gzip", "lz4"]

    def test_two_entry_points_for_one_module_run_once(self, write_config, fake_entry_points):
        write_config("registration_modules: []\n")
        fake_entry_points(
            _entry_point("codecs", "tests.fixtures.components.codecs"),
            _entry_point("codecs-alias", "tests.fixtures.components.codecs"),
        )

        discover_registrations()

        assert list_classes(codecs.CODECS) == ["gzip", "lz4"]

    def test_disabled_entry_points(self, write_config, fake_entry_points):
        write_config("load_entry_points: false\n")
        fake_entry_points(_entry_point("codecs", "tests.fixtures.components.codecs"))

        discover_registrations()

        assert class_count(codecs.CODECS) == 0

    def test_broken_entry_point_strict(self, write_config, fake_entry_points):
        write_config("registration_modules: []\n")
        fake_entry_points(_entry_point("broken", "tests.fixtures.components.missing_module"))

        with pytest.raises(DiscoveryError, match="entry point 'broken'"):
            discover_registrations()

    def test_broken_entry_point_lenient(self, write_config, fake_entry_points):
        write_config("strict_discovery: false\n")
        fake_entry_points(
            _entry_point("broken", "tests.fixtures.components.broken:register_all"),
            _entry_point("codecs", "tests.fixtures.components.codecs"),
        )

        discover_registrations()

        assert list_classes(codecs.CODECS) == ["gzip", "lz4"]

    def test_entry_point_not_callable(self, write_config, fake_entry_points):
        write_config("registration_modules: []\n")
        fake_entry_points(_entry_point("constant", "tests.fixtures.components.codecs:CODECS"))

        with pytest.raises(DiscoveryError, match="expected module or callable"):
            discover_registrations()

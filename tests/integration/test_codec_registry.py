# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""End-to-end registry behavior over the Codec and Clock test components.

Registration runs through discover_registrations() with classreg.yaml
listing the component modules, the way an application starts up.
"""

import logging

import pytest

from classreg.registry import (
    ClassRegisterer,
    DuplicateRegistrationError,
    EntryIndexError,
    class_count,
    class_name,
    create_object,
    define_registry,
    discover_registrations,
    get_singleton,
    has_class,
    is_initialized,
    list_classes,
)
from tests.fixtures.components import clocks, codecs

COMPONENT_MODULES = """\
registration_modules:
  - tests.fixtures.components.codecs
  - tests.fixtures.components.clocks
load_entry_points: false
"""


@pytest.fixture
def discovered(write_config):
    write_config(COMPONENT_MODULES)
    discover_registrations()


class TestCodecScenario:

    def test_count_and_order(self, discovered):
        assert class_count(codecs.CODECS) == 2
        assert class_name(codecs.CODECS, 0) == "gzip"
        assert class_name(codecs.CODECS, 1) == "lz4"

    def test_create_gzip(self, discovered):
        codec = create_object(codecs.CODECS, "gzip")

        assert isinstance(codec, codecs.GzipCodec)
        payload = b"hello hello hello hello"
        assert codec.decompress(codec.compress(payload)) == payload

    def test_create_unregistered_is_not_found(self, discovered):
        assert create_object(codecs.CODECS, "zstd") is None

    def test_factory_returns_distinct_instances(self, discovered):
        first = create_object(codecs.CODECS, "lz4")
        second = create_object(codecs.CODECS, "lz4")

        assert first is not second

    def test_name_at_count_out_of_range(self, discovered):
        with pytest.raises(EntryIndexError):
            class_name(codecs.CODECS, class_count(codecs.CODECS))

    def test_discovery_marks_initialized(self, discovered):
        assert is_initialized()


class TestClockScenario:

    def test_singleton_shared(self, discovered):
        first = get_singleton(clocks.CLOCKS, "system")
        second = get_singleton(clocks.CLOCKS, "system")

        assert isinstance(first, clocks.SystemClock)
        assert first is second

    def test_singleton_built_on_first_retrieval(self, discovered):
        before = clocks.construction_count(clocks.FrozenClock)

        clock = get_singleton(clocks.CLOCKS, "frozen")
        get_singleton(clocks.CLOCKS, "frozen")

        assert clocks.construction_count(clocks.FrozenClock) == before + 1
        assert clock.now() == 0.0

    def test_singleton_state_is_shared(self, discovered):
        get_singleton(clocks.CLOCKS, "frozen").value = 42.0

        assert get_singleton(clocks.CLOCKS, "frozen").now() == 42.0

    def test_registration_order(self, discovered):
        assert list_classes(clocks.CLOCKS) == ["system", "frozen", "slow"]


class TestDuplicatePolicy:

    def test_error_policy_fails_discovery(self, write_config):
        write_config(
            "registration_modules:\n"
            "  - tests.fixtures.components.codecs\n"
            "  - tests.fixtures.components.duplicate_codecs\n"
            "load_entry_points: false\n"
        )

        with pytest.raises(DuplicateRegistrationError, match="'gzip'"):
            discover_registrations()

        assert isinstance(create_object(codecs.CODECS, "gzip"), codecs.GzipCodec)

    def test_error_policy_propagates_in_lenient_mode(self, write_config):
        write_config(
            "registration_modules:\n"
            "  - tests.fixtures.components.codecs\n"
            "  - tests.fixtures.components.duplicate_codecs\n"
            "strict_discovery: false\n"
            "load_entry_points: false\n"
        )

        with pytest.raises(DuplicateRegistrationError):
            discover_registrations()

    def test_warn_policy_keeps_first(self, write_config, caplog):
        write_config(
            "registration_modules:\n"
            "  - tests.fixtures.components.codecs\n"
            "  - tests.fixtures.components.duplicate_codecs\n"
            "duplicate_policy: warn\n"
            "load_entry_points: false\n"
        )

        with caplog.at_level(logging.WARNING):
            discover_registrations()

        assert isinstance(create_object(codecs.CODECS, "gzip"), codecs.GzipCodec)
        assert class_count(codecs.CODECS) == 2
        assert "Ignoring duplicate registration of 'gzip'" in caplog.text


class TestNamespaceIsolation:

    def test_same_base_class_different_registries(self, discovered, registry_name):
        archive_codecs = define_registry(registry_name, codecs.Codec)
        ClassRegisterer(archive_codecs, "tar-gzip", codecs.GzipCodec)

        assert has_class(archive_codecs, "tar-gzip")
        assert not has_class(codecs.CODECS, "tar-gzip")
        assert create_object(codecs.CODECS, "tar-gzip") is None
        assert not has_class(archive_codecs, "gzip")

# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""Unit tests for the module-level lookup and introspection functions."""

import pytest

from classreg.registry import (
    EntryIndexError,
    RegistryKindError,
    UnknownRegistryError,
    class_count,
    class_name,
    create_object,
    define_registry,
    format_not_found,
    get_singleton,
    has_class,
    list_classes,
    registry_instance,
)
from tests.fixtures.components import clocks, codecs


@pytest.fixture
def populated():
    codecs.register_all()
    clocks.register_all()


@pytest.mark.fast
class TestObjectAccess:

    def test_create_object_by_tag_and_name(self, populated):
        assert isinstance(create_object(codecs.CODECS, "gzip"), codecs.GzipCodec)
        assert isinstance(create_object("Codec", "lz4"), codecs.Lz4Codec)

    def test_create_object_missing_is_none(self, populated):
        assert create_object(codecs.CODECS, "zstd") is None

    def test_get_singleton(self, populated):
        clock = get_singleton(clocks.CLOCKS, "frozen")

        assert isinstance(clock, clocks.FrozenClock)
        assert get_singleton("Clock", "frozen") is clock

    def test_get_singleton_missing_is_none(self, populated):
        assert get_singleton(clocks.CLOCKS, "atomic") is None

    def test_create_object_on_singleton_registry(self, populated):
        with pytest.raises(RegistryKindError, match="use get_singleton"):
            create_object(clocks.CLOCKS, "system")

    def test_get_singleton_on_factory_registry(self, populated):
        with pytest.raises(RegistryKindError, match="use create_object"):
            get_singleton(codecs.CODECS, "gzip")

    def test_kind_error_is_a_type_error(self, populated):
        with pytest.raises(TypeError):
            get_singleton(codecs.CODECS, "gzip")

    def test_unknown_registry_name(self):
        with pytest.raises(UnknownRegistryError):
            create_object("NoSuchRegistry", "gzip")


@pytest.mark.fast
class TestIntrospection:

    def test_counts_and_order(self, populated):
        assert class_count(codecs.CODECS) == 2
        assert class_name(codecs.CODECS, 0) == "gzip"
        assert class_name("Codec", 1) == "lz4"
        assert list_classes(codecs.CODECS) == ["gzip", "lz4"]
        assert list_classes(clocks.CLOCKS) == ["system", "frozen", "slow"]

    def test_class_name_out_of_range(self, populated):
        with pytest.raises(EntryIndexError):
            class_name(codecs.CODECS, class_count(codecs.CODECS))

    def test_has_class(self, populated):
        assert has_class(codecs.CODECS, "gzip")
        assert not has_class(codecs.CODECS, "zstd")

    def test_empty_registry(self, registry_name):
        tag = define_registry(registry_name, object)

        assert class_count(tag) == 0
        assert list_classes(tag) == []
        assert create_object(tag, "anything") is None


@pytest.mark.fast
class TestFormatNotFound:

    def test_lists_available_names(self, populated):
        msg = format_not_found(codecs.CODECS, "zstd")

        assert "No entry named 'zstd' in registry 'Codec'" in msg
        assert "Available: gzip, lz4" in msg

    def test_empty_registry_gives_troubleshooting(self, registry_name):
        tag = define_registry(registry_name, object)

        msg = format_not_found(tag, "anything")

        assert "The registry is empty" in msg
        assert "registration_modules" in msg

    def test_truncates_long_listings(self, registry_name):
        tag = define_registry(registry_name, object)
        for i in range(12):
            registry_instance(tag).add_class(f"impl{i}", object)

        msg = format_not_found(tag, "missing")

        assert "... and 2 more" in msg
        assert "impl11" not in msg

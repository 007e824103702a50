# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""Process-wide registry access.

registry_instance() is the only way to reach a registry object. The first
call for a tag constructs the registry; every later call, from any thread or
any module import, returns that same object.
"""

import logging

from . import _state
from ._identity import RegistryTag, resolve_tag

logger = logging.getLogger(__name__)


def registry_instance(tag: RegistryTag | str):
    """Return the single registry for tag, creating it on first use.

    Args:
        tag: Registry tag or registry name

    Returns:
        ClassRegistry for factory tags, SingletonClassRegistry for singleton tags

    Raises:
        UnknownRegistryError: If tag is a name that was never defined
    """
    tag = resolve_tag(tag)

    # Fast path once the registry exists
    registry = _state._registries.get(tag)
    if registry is not None:
        return registry

    with _state._registries_lock:
        registry = _state._registries.get(tag)
        if registry is None:
            registry = tag.registry_type(tag)
            _state._registries[tag] = registry
        return registry

# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""Startup discovery of registrations.

Runs the explicit registration step of every participating module:
- Registration modules listed in configuration (registration_modules)
- Entry points from installed packages (group 'classreg.registrations')

For each module, importing it fires any @register_class decorators, then its
register_all() hook (if defined) is called. Every module or entry point is
processed at most once per process, so calling discover_registrations()
again never registers anything twice.

Logging Strategy:
    - DEBUG: Individual modules and entry points, skips
    - INFO: Discovery phases (start/complete)
    - WARNING: Entry point scan failures in lenient mode
    - ERROR: Module or entry point load failures
"""

import importlib
import logging
import os
import time
from contextlib import contextmanager
from importlib.metadata import entry_points
from types import ModuleType

from . import _state
from .constants import ENTRY_POINT_GROUP, REGISTER_ALL_HOOK
from .exceptions import DiscoveryError, DuplicateRegistrationError

logger = logging.getLogger(__name__)


# ============================================================================
# Performance Instrumentation
# ============================================================================

@contextmanager
def _measure_load(operation: str):
    """Time and log discovery (only when CLASSREG_PROFILE is set)."""
    if not os.environ.get('CLASSREG_PROFILE'):
        yield
        return

    start = time.perf_counter()
    try:
        yield
    finally:
        duration_ms = (time.perf_counter() - start) * 1000
        logger.debug(f"{operation}: {duration_ms:.1f}ms")


# ============================================================================
# Source Processing
# ============================================================================

def _module_key(module_name: str) -> str:
    return f"module:{module_name}"


def _call_register_all(module: ModuleType) -> None:
    hook = getattr(module, REGISTER_ALL_HOOK, None)
    if hook is None:
        logger.debug(f"Module {module.__name__} has no {REGISTER_ALL_HOOK}(), relying on decorators")
        return
    if not callable(hook):
        raise TypeError(f"{module.__name__}.{REGISTER_ALL_HOOK} is not callable")
    hook()
    logger.debug(f"Ran {module.__name__}.{REGISTER_ALL_HOOK}()")


def _handle_failure(label: str, error: Exception, strict: bool) -> None:
    """Log a failed source; re-raise as DiscoveryError in strict mode."""
    logger.error(f"Failed to load registrations from {label}: {error}")
    if strict:
        raise DiscoveryError(f"Failed to load registrations from {label}: {error}") from error


def _load_registration_module(module_name: str, strict: bool) -> bool:
    """Import module_name and run its registration hook once.

    Returns:
        True if the module was processed by this call
    """
    key = _module_key(module_name)
    if key in _state._processed_sources:
        logger.debug(f"Registration module {module_name} already processed, skipping")
        return False

    try:
        module = importlib.import_module(module_name)
    except DuplicateRegistrationError:
        raise
    except Exception as e:
        _handle_failure(f"module '{module_name}'", e, strict)
        return False

    # Mark before running the hook so a partial register_all() is never re-run
    _state._processed_sources.add(key)
    try:
        _call_register_all(module)
    except DuplicateRegistrationError:
        raise
    except Exception as e:
        _handle_failure(f"module '{module_name}'", e, strict)
        return False
    return True


def _load_entry_point_registrations(strict: bool) -> int:
    """Process entry points in the classreg.registrations group.

    An entry point may name a module (its register_all() is called) or a
    callable (it is called with no arguments). A module is tracked by its
    name, so one that is also a configured registration module runs once.

    Returns:
        Number of entry points processed by this call
    """
    logger.debug(f"Scanning entry points in group '{ENTRY_POINT_GROUP}'")
    processed = 0

    try:
        eps = list(entry_points(group=ENTRY_POINT_GROUP))
    except Exception as e:
        logger.warning(f"Entry point discovery failed: {e}")
        return processed

    for ep in eps:
        ep_key = f"entry_point:{ep.name}={ep.value}"
        if ep_key in _state._processed_sources:
            continue

        try:
            target = ep.load()
        except DuplicateRegistrationError:
            raise
        except Exception as e:
            _handle_failure(f"entry point '{ep.name}'", e, strict)
            continue

        key = _module_key(target.__name__) if isinstance(target, ModuleType) else ep_key
        if key in _state._processed_sources:
            _state._processed_sources.add(ep_key)
            logger.debug(f"Entry point '{ep.name}' loads {target.__name__}, already processed, skipping")
            continue

        _state._processed_sources.update((key, ep_key))
        try:
            if isinstance(target, ModuleType):
                _call_register_all(target)
            elif callable(target):
                target()
            else:
                raise TypeError(f"entry point resolved to {type(target).__name__}, expected module or callable")
        except DuplicateRegistrationError:
            raise
        except Exception as e:
            _handle_failure(f"entry point '{ep.name}'", e, strict)
            continue

        processed += 1
        logger.debug(f"Loaded registrations from entry point '{ep.name}' ({ep.value})")

    return processed


# ============================================================================
# Main Discovery Entry Point
# ============================================================================

def discover_registrations(force_refresh: bool = False) -> None:
    """Run the registration step of every configured module and entry point.

    Called explicitly at startup (the CLI calls it before every command).
    Configuration is read once per call: duplicate_policy applies to every
    registration made from then on, strict_discovery to this run.

    Args:
        force_refresh: Scan configuration and entry points again even if
            discovery already completed. Sources processed before are still
            skipped, so only newly configured or installed ones register.

    Raises:
        DiscoveryError: If a source fails to load and strict_discovery is set
        DuplicateRegistrationError: If a source registers a taken name under
            the 'error' duplicate policy
    """
    with _state._discovery_lock:
        if _state._registrations_discovered and not force_refresh:
            return

        with _measure_load('discover_registrations'):
            from classreg.settings import get_config
            config = get_config()
            _state._duplicate_policy = config.duplicate_policy
            strict = config.strict_discovery

            logger.info("Discovering registrations...")

            # 1. Configured registration modules, in order
            module_count = 0
            for module_name in config.registration_modules:
                if _load_registration_module(module_name, strict):
                    module_count += 1

            # 2. Entry point registrations from installed packages
            ep_count = 0
            if config.load_entry_points:
                ep_count = _load_entry_point_registrations(strict)
            else:
                logger.debug("Entry point registrations disabled via load_entry_points setting")

            _state._registrations_discovered = True

            entry_total = sum(len(r) for r in list(_state._registries.values()))
            logger.info(
                f"Registration discovery complete: "
                f"{module_count} modules, {ep_count} entry points, "
                f"{len(_state._registries)} registries, {entry_total} entries"
            )

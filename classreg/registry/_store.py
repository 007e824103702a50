# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""Untyped entry storage shared by all registry variants.

EntryStore keeps two structures that must agree at all times:
- a name -> Entry mapping for lookup
- a registration-ordered list of names for enumeration

A name is appended to the ordered list only when it is inserted into the
mapping, and nothing is ever removed, so both always hold the same names.

Logging Strategy:
    - DEBUG: Individual registrations
    - WARNING: Duplicates kept out under the 'warn' policy
"""

import logging
import operator
import threading
from typing import Any, Callable, Iterator, Literal

from ._metadata import Entry
from .constants import DEFAULT_DUPLICATE_POLICY, DUPLICATE_ERROR
from .exceptions import DuplicateRegistrationError, EntryIndexError

logger = logging.getLogger(__name__)

DuplicatePolicy = Literal["error", "warn"]


class EntryStore:
    """Name -> factory mapping plus registration order.

    Registration is serialized by a lock. Reads are lock-free and assume the
    registration phase has completed.
    """

    def __init__(self, registry_name: str = "") -> None:
        self.registry_name = registry_name
        self._entries: dict[str, Entry] = {}
        self._names: list[str] = []
        self._lock = threading.Lock()

    def register(
        self,
        name: str,
        factory: Callable[[], Any],
        *,
        origin: str = "",
        on_duplicate: DuplicatePolicy = DEFAULT_DUPLICATE_POLICY,
    ) -> bool:
        """Insert an entry.

        Args:
            name: Entry name
            factory: Zero-argument callable stored opaquely
            origin: 'module:qualname' of the implementation (display only)
            on_duplicate: 'error' raises, 'warn' logs and keeps the first entry

        Returns:
            True if inserted, False if a duplicate was kept out

        Raises:
            DuplicateRegistrationError: If name exists and policy is 'error'
        """
        with self._lock:
            existing = self._entries.get(name)
            if existing is not None:
                if on_duplicate == DUPLICATE_ERROR:
                    raise DuplicateRegistrationError(self.registry_name, name, existing.origin)
                logger.warning(
                    f"Ignoring duplicate registration of '{name}' in registry "
                    f"'{self.registry_name}' (keeping {existing.origin or 'first entry'})"
                )
                return False

            self._entries[name] = Entry(name=name, factory=factory, origin=origin)
            self._names.append(name)

        logger.debug(f"Registered '{name}' in '{self.registry_name}'")
        return True

    def lookup(self, name: str) -> Callable[[], Any] | None:
        """Return the factory for name, or None."""
        entry = self._entries.get(name)
        return entry.factory if entry is not None else None

    def entry(self, name: str) -> Entry | None:
        return self._entries.get(name)

    def count(self) -> int:
        return len(self._names)

    def name_at(self, index: int) -> str:
        """Return the name registered at position index.

        Raises:
            TypeError: If index is not an integer
            EntryIndexError: If index is not in [0, count())
        """
        index = operator.index(index)
        if not 0 <= index < len(self._names):
            raise EntryIndexError(
                f"Index {index} out of range for registry '{self.registry_name}' "
                f"with {len(self._names)} entries"
            )
        return self._names[index]

    def names(self) -> list[str]:
        return list(self._names)

    def __len__(self) -> int:
        return len(self._names)

    def __contains__(self, name: object) -> bool:
        return name in self._entries

    def __iter__(self) -> Iterator[Entry]:
        for name in list(self._names):
            yield self._entries[name]

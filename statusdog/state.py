# statusdog/state.py
# DESIGNER'S NOTE:
# Shared state of the application. Instances are created once in context.py and handed to every
# consumer, instead of living as module globals. Each store notifies its subscribers after a change
# has been applied; the local storage writer is one such subscriber.

from __future__ import annotations

import enum
import logging
from typing import Callable, Iterable

from .models import SavedList, StatusCode
from .storage import SAVED_LIST_KEY, TEMP_LIST_KEY, LocalStorage

logger = logging.getLogger(__name__)


class Mutation(enum.Enum):
    """Where a change comes from."""

    LOCAL_ONLY = "local-only"              # applied immediately, no server involved
    SERVER_CONFIRMED = "server-confirmed"  # applied after the backend acknowledged it


Listener = Callable[[Mutation, list], None]


class _Observable:
    def __init__(self):
        self._listeners: list[Listener] = []

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Registers `listener`; returns a function that unregisters it."""
        self._listeners.append(listener)
        return lambda: self._listeners.remove(listener)

    def _snapshot(self) -> list:
        raise NotImplementedError

    def _notify(self, mutation: Mutation):
        snapshot = self._snapshot()
        for listener in list(self._listeners):
            listener(mutation, snapshot)


class TempSelectionStore(_Observable):
    """The in-progress selection: ordered, without duplicates."""

    def __init__(self, initial: Iterable[StatusCode] = ()):
        super().__init__()
        self._codes: list[StatusCode] = list(dict.fromkeys(initial))

    @classmethod
    def restore(cls, storage: LocalStorage) -> "TempSelectionStore":
        stored = storage.get(TEMP_LIST_KEY, [])
        store = cls(stored if isinstance(stored, list) else [])
        write = storage.writer(TEMP_LIST_KEY)
        store.subscribe(lambda mutation, codes: write(codes))
        logger.info(f"Temporary selection restored with {len(store)} code(s).")
        return store

    def _snapshot(self) -> list:
        return list(self._codes)

    @property
    def codes(self) -> list[StatusCode]:
        return list(self._codes)

    def __len__(self):
        return len(self._codes)

    def __iter__(self):
        return iter(list(self._codes))

    def __contains__(self, code):
        return code in self._codes

    def add(self, code: StatusCode) -> bool:
        if code in self._codes:
            return False
        self._codes.append(code)
        self._notify(Mutation.LOCAL_ONLY)
        return True

    def add_all(self, codes: Iterable[StatusCode]) -> int:
        new_codes = [c for c in dict.fromkeys(codes) if c not in self._codes]
        if not new_codes:
            return 0
        self._codes.extend(new_codes)
        self._notify(Mutation.LOCAL_ONLY)
        return len(new_codes)

    def remove(self, code: StatusCode) -> bool:
        if code not in self._codes:
            return False
        self._codes.remove(code)
        self._notify(Mutation.LOCAL_ONLY)
        return True

    def remove_all(self, confirm: Callable[[], bool]) -> bool:
        """Empties the selection only if `confirm()` answers yes."""
        if not confirm():
            return False
        self._codes.clear()
        self._notify(Mutation.LOCAL_ONLY)
        return True

    def clear(self):
        """Called once the selection has been saved to the backend."""
        self._codes.clear()
        self._notify(Mutation.SERVER_CONFIRMED)


class SavedListCache(_Observable):
    """Client-side copy of the user's saved lists."""

    def __init__(self, lists: Iterable[SavedList] = ()):
        super().__init__()
        self._lists: list[SavedList] = list(lists)

    @classmethod
    def restore(cls, storage: LocalStorage) -> "SavedListCache":
        stored = storage.get(SAVED_LIST_KEY, [])
        lists = [SavedList.from_dict(d) for d in stored if isinstance(d, dict)] if isinstance(stored, list) else []
        cache = cls(lists)
        write = storage.writer(SAVED_LIST_KEY)
        cache.subscribe(lambda mutation, data: write(data))
        return cache

    def _snapshot(self) -> list:
        return [saved.to_dict() for saved in self._lists]

    @property
    def lists(self) -> list[SavedList]:
        return list(self._lists)

    def get(self, list_id: str) -> SavedList | None:
        return next((saved for saved in self._lists if saved.id == list_id), None)

    def replace(self, lists: Iterable[SavedList]):
        self._lists = list(lists)
        self._notify(Mutation.SERVER_CONFIRMED)

    def remove_list(self, list_id: str):
        self._lists = [saved for saved in self._lists if saved.id != list_id]
        self._notify(Mutation.SERVER_CONFIRMED)

    def remove_item(self, list_id: str, code: StatusCode, updated: SavedList | None = None):
        """Drops `code` from a cached list; `updated` is the backend's copy when it sent one."""
        current = self.get(list_id)
        if current is None:
            return
        if updated is not None and updated.id == list_id and code not in updated.codes:
            replacement = updated
        else:
            replacement = current.without(code)
        self._lists = [replacement if saved.id == list_id else saved for saved in self._lists]
        self._notify(Mutation.SERVER_CONFIRMED)

    def clear(self):
        self._lists = []
        self._notify(Mutation.LOCAL_ONLY)

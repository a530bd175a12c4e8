"""In-memory shift collection kept in sync with persistent storage."""

import asyncio
import logging
from typing import Any, Iterable, Optional, Union

from pydantic import ValidationError

from .models import Shift, normalize_shifts
from .storage import JSONGateway

logger = logging.getLogger(__name__)

DEFAULT_KEY = "taxiShifts"


class ShiftStore:
    """Owns the shift collection of one driver.

    The whole collection is persisted as one JSON document under a
    single key. Writes are serialized, so the last call always wins.
    """

    def __init__(self, gateway: JSONGateway, key: str = DEFAULT_KEY):
        self.gateway = gateway
        self.key = key
        self._shifts: tuple[Shift, ...] = ()
        self._loaded = False
        self._lock = asyncio.Lock()

    @property
    def is_loaded(self) -> bool:
        """False until the first load finished, even if storage was empty."""
        return self._loaded

    async def load(self) -> tuple[Shift, ...]:
        raw = await self.gateway.load(self.key, [])
        try:
            shifts = normalize_shifts(raw)
        except (ValidationError, TypeError) as e:
            logger.warning(f"Stored shifts under {self.key} are unreadable, starting empty: {e}")
            shifts = []
        self._shifts = tuple(shifts)
        self._loaded = True
        logger.info(f"Loaded {len(self._shifts)} shifts from {self.key}")
        return self._shifts

    def current(self) -> tuple[Shift, ...]:
        """Snapshot of the collection in stored order."""
        return self._shifts

    def get(self, shift_id: str) -> Optional[Shift]:
        return next((s for s in self._shifts if s.id == shift_id), None)

    def sorted_by_date(self) -> list[Shift]:
        """Newest first, as shown in the shift list."""
        return sorted(self._shifts, key=lambda s: s.date, reverse=True)

    async def replace_all(self, records: Iterable[Union[Shift, dict[str, Any]]]) -> bool:
        """Replace the whole collection and persist it.

        Returns whether the save succeeded; a failed save keeps the new
        collection in memory.
        """
        shifts = tuple(
            r if isinstance(r, Shift) else Shift.model_validate(r) for r in records
        )
        async with self._lock:
            self._require_loaded()
            return await self._commit(shifts)

    async def upsert(self, shift: Shift) -> Shift:
        """Insert a new shift or replace the one sharing its id."""
        async with self._lock:
            self._require_loaded()
            if any(s.id == shift.id for s in self._shifts):
                updated = [shift if s.id == shift.id else s for s in self._shifts]
            else:
                updated = [*self._shifts, shift]
            updated.sort(key=lambda s: s.date, reverse=True)
            await self._commit(tuple(updated))
        return shift

    async def delete(self, shift_id: str) -> bool:
        """Remove a shift by id, return whether it existed."""
        async with self._lock:
            self._require_loaded()
            remaining = tuple(s for s in self._shifts if s.id != shift_id)
            if len(remaining) == len(self._shifts):
                return False
            await self._commit(remaining)
        return True

    def _require_loaded(self):
        # Saving before the first load would overwrite stored data.
        if not self._loaded:
            raise RuntimeError("ShiftStore.load() must complete before modifying shifts")

    async def _commit(self, shifts: tuple[Shift, ...]) -> bool:
        self._shifts = shifts
        return await self.gateway.save(self.key, [s.to_record() for s in shifts])

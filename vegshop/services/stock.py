"""Daily stock records: merge-or-create, replace, removal and carry forward.

A record is keyed by its date string. Writes for one date are serialized by a
per-date :class:`asyncio.Lock`, so a read-modify-write merge cannot lose an
overlapping update made in the same process.
"""

import asyncio
import logging
import weakref
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional, Tuple

from vegshop.db import DAILY_STOCK, VEGETABLES
from vegshop.models.stock import StockEntry
from vegshop.services.dates import previous_day
from vegshop.services.validation import validate_daily_stock_vegetables

logger = logging.getLogger(__name__)


class StockError(Exception):
    """Base class for daily stock failures carrying a user-facing message."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class StockValidationError(StockError):
    pass


class StockNotFound(StockError):
    pass


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def parse_stock_entries(vegetables: Iterable[Any]) -> List[StockEntry]:
    return [StockEntry.model_validate(veg) for veg in vegetables]


class StockBook:
    """Entries of one record, indexed by vegetable id.

    The index maps an id to the position of its first entry, so merging an
    incoming entry is a dict lookup. Order is that of first appearance.
    """

    def __init__(self, entries: Iterable[StockEntry] = ()):
        self._entries: List[StockEntry] = []
        self._index: Dict[str, int] = {}
        for entry in entries:
            self._append(entry)

    def _append(self, entry: StockEntry) -> None:
        self._index.setdefault(entry.id, len(self._entries))
        self._entries.append(entry)

    def merge(self, entry: StockEntry) -> None:
        pos = self._index.get(entry.id)
        if pos is None:
            self._append(entry.model_copy())
            return
        current = self._entries[pos]
        self._entries[pos] = current.model_copy(
            update={"quantity": current.quantity + entry.quantity, "photo": entry.photo}
        )

    def remove(self, vegetable_id: str) -> bool:
        """Drop every entry for ``vegetable_id``; False if there was none."""
        if vegetable_id not in self._index:
            return False
        kept = [e for e in self._entries if e.id != vegetable_id]
        self._entries = []
        self._index = {}
        for entry in kept:
            self._append(entry)
        return True

    def entries(self) -> List[StockEntry]:
        return list(self._entries)

    def to_documents(self) -> List[dict]:
        return [entry.model_dump() for entry in self._entries]

    def __contains__(self, vegetable_id: object) -> bool:
        return vegetable_id in self._index

    def __len__(self) -> int:
        return len(self._entries)


class StockLocks:
    """Registry of one lock per date.

    Locks are held weakly, so a date's lock goes away once no request is
    holding or waiting on it.
    """

    def __init__(self):
        self._locks: "weakref.WeakValueDictionary[str, asyncio.Lock]" = weakref.WeakValueDictionary()

    def for_date(self, day: str) -> asyncio.Lock:
        lock = self._locks.get(day)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[day] = lock
        return lock

    def __len__(self) -> int:
        return len(self._locks)


class DailyStockService:
    def __init__(self, db, locks: StockLocks):
        self.records = db[DAILY_STOCK]
        self.catalog = db[VEGETABLES]
        self.locks = locks

    async def validate(self, vegetables: Any) -> List[StockEntry]:
        """Validate raw entries against the catalog and parse them.

        Raises StockValidationError before anything is written.
        """
        result = await validate_daily_stock_vegetables(vegetables, self.catalog)
        if not result.is_valid:
            logger.info(f"Daily stock validation failed: {result.error}")
            raise StockValidationError(result.error)
        return parse_stock_entries(vegetables)

    async def list_all(self) -> List[dict]:
        return [doc async for doc in self.records.find(sort=[("_id", 1)])]

    async def get(self, day: str) -> Optional[dict]:
        return await self.records.find_one({"_id": day})

    async def merge(self, day: str, entries: List[StockEntry]) -> bool:
        """Merge ``entries`` into the record for ``day``; True if it was created."""
        async with self.locks.for_date(day):
            existing = await self.records.find_one({"_id": day})
            now = utcnow()
            if existing is None:
                await self.records.insert_one(
                    {
                        "_id": day,
                        "vegetables": [e.model_dump() for e in entries],
                        "createdAt": now,
                        "updatedAt": now,
                    }
                )
                logger.info(f"Created daily stock for {day} with {len(entries)} entries")
                return True

            book = StockBook(parse_stock_entries(existing.get("vegetables", [])))
            for entry in entries:
                book.merge(entry)
            await self.records.update_one(
                {"_id": day},
                {"$set": {"vegetables": book.to_documents(), "updatedAt": now}},
            )
            logger.info(f"Merged {len(entries)} entries into daily stock for {day}")
            return False

    async def replace(self, day: str, entries: List[StockEntry]) -> bool:
        """Overwrite the entries for ``day``; True if the record was created."""
        async with self.locks.for_date(day):
            now = utcnow()
            result = await self.records.update_one(
                {"_id": day},
                {
                    "$set": {"vegetables": [e.model_dump() for e in entries], "updatedAt": now},
                    "$setOnInsert": {"createdAt": now},
                },
                upsert=True,
            )
        created = result.upserted_id is not None
        logger.info(f"{'Created' if created else 'Replaced'} daily stock for {day}")
        return created

    async def delete(self, day: str) -> bool:
        async with self.locks.for_date(day):
            result = await self.records.delete_one({"_id": day})
        return result.deleted_count > 0

    async def remove_entry(self, day: str, vegetable_id: str) -> None:
        async with self.locks.for_date(day):
            existing = await self.records.find_one({"_id": day})
            if existing is None:
                raise StockNotFound("Daily stock not found for this date")
            book = StockBook(parse_stock_entries(existing.get("vegetables", [])))
            if not book.remove(vegetable_id):
                raise StockNotFound("Vegetable not found in daily stock")
            await self.records.update_one(
                {"_id": day},
                {"$set": {"vegetables": book.to_documents(), "updatedAt": utcnow()}},
            )
        logger.info(f"Removed vegetable {vegetable_id} from daily stock for {day}")

    async def carry_forward(
        self, day: str, vegetable_ids: Optional[List[str]] = None
    ) -> Tuple[bool, List[StockEntry]]:
        """Merge the previous day's leftover stock into ``day``.

        Only entries with a positive quantity are carried; ``vegetable_ids``
        narrows the selection further. Returns (created, carried entries).
        """
        source_day = previous_day(day)
        source = await self.records.find_one({"_id": source_day})
        if source is None:
            raise StockNotFound("Daily stock not found for previous day")

        leftovers = [veg for veg in source.get("vegetables", []) if veg.get("quantity", 0) > 0]
        if vegetable_ids is not None:
            wanted = set(vegetable_ids)
            leftovers = [veg for veg in leftovers if veg.get("id") in wanted]
        if not leftovers:
            raise StockValidationError("No remaining stock to carry forward")

        carried = [{"id": v.get("id"), "quantity": v.get("quantity"), "photo": v.get("photo")} for v in leftovers]
        entries = await self.validate(carried)
        created = await self.merge(day, entries)
        logger.info(f"Carried {len(entries)} entries from {source_day} to {day}")
        return created, entries

"""HTTP client for the vegetable shop API.

Catalog reads are retried a fixed number of times with a fixed delay and fall
back to the last copy cached on disk.
"""

import json
import logging
import time
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

import httpx

logger = logging.getLogger(__name__)


class VegshopClientError(Exception):
    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class VegshopClient:
    def __init__(
        self,
        base_url: str,
        retries: int = 3,
        delay: float = 1.0,
        cache_path: Optional[Path] = None,
        timeout: float = 10.0,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.retries = max(1, retries)
        self.delay = delay
        self.cache_path = Path(cache_path) if cache_path else None
        self._client = httpx.Client(base_url=base_url, timeout=timeout, transport=transport)

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "VegshopClient":
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    def _request(self, method: str, url: str, **kwargs) -> Any:
        try:
            response = self._client.request(method, url, **kwargs)
        except httpx.HTTPError as e:
            raise VegshopClientError(f"Request to {url} failed: {e}") from e
        if response.is_error:
            try:
                body = response.json()
            except ValueError:
                body = None
            message = body.get("error") if isinstance(body, dict) else None
            raise VegshopClientError(
                message or f"Server error: {response.status_code} {response.reason_phrase}",
                status_code=response.status_code,
            )
        return response.json()

    def _read_cache(self) -> Optional[List[dict]]:
        if self.cache_path is None or not self.cache_path.exists():
            return None
        try:
            cached = json.loads(self.cache_path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.warning(f"Ignoring unreadable vegetable cache {self.cache_path}: {e}")
            return None
        if not isinstance(cached, list):
            logger.warning(f"Ignoring malformed vegetable cache {self.cache_path}")
            return None
        return cached

    def _write_cache(self, vegetables: List[dict]) -> None:
        if self.cache_path is None:
            return
        try:
            self.cache_path.write_text(json.dumps(vegetables), encoding="utf-8")
        except OSError as e:
            logger.warning(f"Could not write vegetable cache {self.cache_path}: {e}")

    def list_vegetables(self) -> List[dict]:
        last_error: Optional[VegshopClientError] = None
        for attempt in range(1, self.retries + 1):
            try:
                vegetables = self._request("GET", "/vegetables")
            except VegshopClientError as e:
                last_error = e
                logger.warning(f"Fetch attempt {attempt} failed: {e.message}")
                if attempt < self.retries:
                    time.sleep(self.delay)
                continue
            self._write_cache(vegetables)
            return vegetables

        cached = self._read_cache()
        if cached is not None:
            logger.warning("Failed to fetch vegetables from server. Using cached data.")
            return cached
        raise last_error

    def get_vegetable(self, vegetable_id: str) -> dict:
        return self._request("GET", f"/vegetables/{vegetable_id}")

    def create_vegetable(self, name: str, price: float, category: str, photo: str = "") -> str:
        payload = {"name": name, "price": price, "category": category, "photo": photo}
        return self._request("POST", "/vegetables", json=payload)["id"]

    def get_daily_stock(self, date: str = "previous-day") -> dict:
        return self._request("GET", f"/daily-stock/{date}")

    def add_daily_stock(self, vegetables: List[dict], date: Optional[str] = None) -> dict:
        payload: Dict[str, Any] = {"vegetables": vegetables}
        if date is not None:
            payload["date"] = date
        return self._request("POST", "/daily-stock", json=payload)

    def carry_forward(self, date: Optional[str] = None, vegetable_ids: Optional[Iterable[str]] = None) -> dict:
        """Copy yesterday's leftovers (quantity > 0) into ``date``'s record."""
        previous = self.get_daily_stock("previous-day")
        leftovers = [veg for veg in previous.get("vegetables", []) if veg["quantity"] > 0]
        if vegetable_ids is not None:
            wanted = set(vegetable_ids)
            leftovers = [veg for veg in leftovers if veg["id"] in wanted]
        if not leftovers:
            raise VegshopClientError("No remaining stock from the previous day.")
        carried = [{"id": v["id"], "quantity": v["quantity"], "photo": v["photo"]} for v in leftovers]
        return self.add_daily_stock(carried, date=date)

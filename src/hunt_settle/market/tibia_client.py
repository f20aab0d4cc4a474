"""Tibia Market API client.

Reads item metadata, market values and order-book depth for one game
world from https://api.tibiamarket.top. The API is strictly rate
limited, so every request goes through the shared HTTPClient, which
serializes calls and retries transient failures.

Endpoints:
    /item_metadata                          id, name, NPC buyers
    /market_values?server=&item_ids=1,2     top-of-book offers (batched)
    /market_board?server=&item_id=          full order book
"""

from __future__ import annotations

import logging
import time
from datetime import datetime, timezone
from typing import Any

import requests

from ..common.config import Config
from ..common.http_client import HTTPClient
from ..errors import MarketDataUnavailableError
from .base import MarketDataSource, market_key
from .models import ItemMetadata, MarketOffer, MarketSnapshot, NpcBuyer, OrderLevel

logger = logging.getLogger(__name__)


def _non_negative_int(value: Any) -> int | None:
    """API uses -1 / null for "no offer"."""
    try:
        n = int(value)
    except (TypeError, ValueError):
        return None
    return n if n >= 0 else None


class TibiaMarketClient(MarketDataSource):
    """Market data source backed by the Tibia Market API.

    Item metadata is loaded once and cached for ``metadata_ttl_seconds``;
    market values and order books are always fetched fresh.

    Usage:
        with TibiaMarketClient(Config(world="Secura")) as client:
            item_id = client.resolve_identity("dragon shield")
            depth = client.get_order_book_depth(item_id)
    """

    # Metadata field listing NPCs that buy the item from players
    NPC_BUYERS_FIELD = "npc_buy"

    def __init__(
        self,
        config: Config | None = None,
        http_client: HTTPClient | None = None,
    ) -> None:
        self.config = config or Config()
        self._client = http_client or HTTPClient(self.config)
        self._metadata: dict[int, ItemMetadata] = {}
        self._name_to_id: dict[str, int] = {}
        self._metadata_loaded_at: float | None = None

    # --- transport ---

    def _fetch(self, path: str, params: dict[str, Any] | None = None) -> Any:
        url = f"{self.config.market_base_url}{path}"
        try:
            return self._client.get_json(url, params=params)
        except (requests.RequestException, ValueError) as exc:
            raise MarketDataUnavailableError(f"Market API call {path} failed: {exc}") from exc

    # --- metadata ---

    def _metadata_expired(self) -> bool:
        if self._metadata_loaded_at is None:
            return True
        age = time.monotonic() - self._metadata_loaded_at
        return age >= self.config.metadata_ttl_seconds

    def _load_metadata(self) -> None:
        if not self._metadata_expired():
            return

        data = self._fetch("/item_metadata")
        if not isinstance(data, list):
            raise MarketDataUnavailableError("item_metadata response is not a list")

        metadata: dict[int, ItemMetadata] = {}
        name_to_id: dict[str, int] = {}
        for row in data:
            if not isinstance(row, dict):
                continue
            item_id = row.get("id")
            name = row.get("name")
            if not isinstance(item_id, int) or not name:
                continue

            buyers = []
            for npc in row.get(self.NPC_BUYERS_FIELD) or []:
                price = _non_negative_int(npc.get("price")) if isinstance(npc, dict) else None
                if price is None:
                    continue
                buyers.append(NpcBuyer(
                    name=str(npc.get("name", "")),
                    price=price,
                    location=str(npc.get("location", "")),
                ))
            buyers.sort(key=lambda b: b.price, reverse=True)

            key = market_key(name)
            metadata[item_id] = ItemMetadata(item_id=item_id, name=key, npc_buyers=buyers)
            name_to_id.setdefault(key, item_id)

        if not name_to_id:
            raise MarketDataUnavailableError("Failed to load item metadata")

        self._metadata = metadata
        self._name_to_id = name_to_id
        self._metadata_loaded_at = time.monotonic()
        logger.info("Loaded metadata for %d items", len(metadata))

    def resolve_identity(self, name: str) -> int | None:
        self._load_metadata()
        return self._name_to_id.get(market_key(name))

    def get_npc_buyers(self, item_id: int) -> list[NpcBuyer]:
        self._load_metadata()
        meta = self._metadata.get(item_id)
        return list(meta.npc_buyers) if meta else []

    # --- market ---

    def get_market_snapshot(self, item_ids: list[int]) -> MarketSnapshot:
        ids = sorted({i for i in item_ids if isinstance(i, int)})
        if not ids:
            return MarketSnapshot(as_of=datetime.now(timezone.utc))

        rows = self._fetch(
            "/market_values",
            params={"server": self.config.world, "item_ids": ",".join(str(i) for i in ids)},
        )
        if not isinstance(rows, list):
            raise MarketDataUnavailableError("Unexpected /market_values response")

        offers: dict[int, MarketOffer] = {}
        max_time: float | None = None
        for row in rows:
            if not isinstance(row, dict):
                continue
            item_id = _non_negative_int(row.get("id"))
            if item_id is None:
                continue

            t = row.get("time")
            t = float(t) if isinstance(t, (int, float)) else None
            if t is not None and (max_time is None or t > max_time):
                max_time = t

            offers[item_id] = MarketOffer(
                item_id=item_id,
                buy_offer=_non_negative_int(row.get("buy_offer")),
                sell_offer=_non_negative_int(row.get("sell_offer")),
                month_average_buy=_non_negative_int(row.get("month_average_buy")),
                month_average_sell=_non_negative_int(row.get("month_average_sell")),
                time=t,
            )

        as_of = (
            datetime.fromtimestamp(int(max_time), tz=timezone.utc)
            if max_time is not None
            else datetime.now(timezone.utc)
        )
        logger.debug("Market snapshot for %d items as of %s", len(offers), as_of.isoformat())
        return MarketSnapshot(as_of=as_of, offers=offers)

    def get_order_book_depth(self, item_id: int) -> list[OrderLevel] | None:
        data = self._fetch(
            "/market_board",
            params={"server": self.config.world, "item_id": item_id},
        )
        if not isinstance(data, dict) or not isinstance(data.get("buyers"), list):
            return None

        levels: list[OrderLevel] = []
        for row in data["buyers"]:
            if not isinstance(row, dict):
                continue
            price = _non_negative_int(row.get("price"))
            amount = _non_negative_int(row.get("amount"))
            if price is None or not amount:
                continue
            t = row.get("time")
            levels.append(OrderLevel(
                price=price,
                quantity=amount,
                timestamp=float(t) if isinstance(t, (int, float)) else 0.0,
            ))
        return levels

    def close(self) -> None:
        self._client.close()

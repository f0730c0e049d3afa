"""
Horizon REST client (read-only).

Loads balances and offers of the trading account from a Horizon server
and maps them onto the traded pair. Signing and submitting transactions
is not done here.
"""

import logging
from typing import Optional

import orjson
import requests

from ..errors import LedgerError
from ..types import (
    Asset,
    Balances,
    MAX_NATIVE_TRUST,
    RestingOrder,
    Side,
    sort_best_first,
)
from .base import LedgerReader

logger = logging.getLogger(__name__)


class HorizonClient(LedgerReader):
    """
    Blocking Horizon client for one asset pair.

    Offers selling base for quote are the SELL side; offers selling quote
    for base are the BUY side. Anything else on the account is ignored.
    """

    DEFAULT_BASE_URL = "https://horizon.stellar.org"
    PAGE_LIMIT = 200

    def __init__(
        self,
        asset_base: Asset,
        asset_quote: Asset,
        base_url: str = DEFAULT_BASE_URL,
        timeout_s: float = 10.0,
        session: Optional[requests.Session] = None,
    ):
        """
        Args:
            asset_base: Base asset of the pair
            asset_quote: Quote asset of the pair
            base_url: Horizon server URL
            timeout_s: Per-request timeout
            session: Optional session (for connection reuse or testing)
        """
        self._asset_base = asset_base
        self._asset_quote = asset_quote
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout_s
        self._session = session or requests.Session()

    def close(self) -> None:
        self._session.close()

    def load_balances(self, account: str) -> Balances:
        data = self._get_json(f"{self._base_url}/accounts/{account}")

        max_base = max_quote = 0.0
        trust_base = trust_quote = 0.0
        found_base = found_quote = False

        for record in data.get("balances", []):
            asset = Asset.from_horizon(record)
            if asset == self._asset_base:
                max_base, trust_base = self._parse_balance(record, asset)
                found_base = True
            elif asset == self._asset_quote:
                max_quote, trust_quote = self._parse_balance(record, asset)
                found_quote = True

        if not found_base:
            logger.warning(f"account {account} holds no {self._asset_base}")
        if not found_quote:
            logger.warning(f"account {account} holds no {self._asset_quote}")

        logger.info(f"maxBase: {max_base:.7f}, trustBase: {trust_base:.7f}")
        logger.info(f"maxQuote: {max_quote:.7f}, trustQuote: {trust_quote:.7f}")
        return Balances(
            max_base=max_base,
            max_quote=max_quote,
            trust_base=trust_base,
            trust_quote=trust_quote,
        )

    def load_own_orders(self, account: str) -> tuple[list[RestingOrder], list[RestingOrder]]:
        offers = self._load_all_offers(account)
        buys, sells = self.filter_offers(offers)
        logger.debug(f"loaded {len(offers)} offer(s): {len(buys)} buy, {len(sells)} sell on pair")
        return buys, sells

    def filter_offers(self, offers: list[dict]) -> tuple[list[RestingOrder], list[RestingOrder]]:
        """
        Split raw Horizon offer records into canonical buy/sell orders.

        Returns:
            (buy orders, sell orders), each sorted best first
        """
        buys: list[RestingOrder] = []
        sells: list[RestingOrder] = []

        for offer in offers:
            selling = Asset.from_horizon(offer.get("selling", {}))
            buying = Asset.from_horizon(offer.get("buying", {}))

            if selling == self._asset_base and buying == self._asset_quote:
                side = Side.SELL
            elif selling == self._asset_quote and buying == self._asset_base:
                side = Side.BUY
            else:
                continue

            try:
                order = RestingOrder.from_offer(
                    order_id=str(offer["id"]),
                    side=side,
                    selling_amount=float(offer["amount"]),
                    selling_price=float(offer["price"]),
                )
            except (KeyError, ValueError, TypeError) as e:
                raise LedgerError(f"malformed offer record {offer.get('id')}: {e}") from e

            if side is Side.BUY:
                buys.append(order)
            else:
                sells.append(order)

        return sort_best_first(buys, Side.BUY), sort_best_first(sells, Side.SELL)

    def _load_all_offers(self, account: str) -> list[dict]:
        url = f"{self._base_url}/accounts/{account}/offers?limit={self.PAGE_LIMIT}"
        offers: list[dict] = []

        while url:
            page = self._get_json(url)
            records = page.get("_embedded", {}).get("records", [])
            if not records:
                break
            offers.extend(records)
            if len(records) < self.PAGE_LIMIT:
                break
            url = page.get("_links", {}).get("next", {}).get("href")

        return offers

    @staticmethod
    def _parse_balance(record: dict, asset: Asset) -> tuple[float, float]:
        try:
            balance = float(record["balance"])
            if asset.is_native:
                trust = MAX_NATIVE_TRUST
            else:
                trust = float(record["limit"])
        except (KeyError, ValueError, TypeError) as e:
            raise LedgerError(f"malformed balance record for {asset}: {e}") from e
        return balance, trust

    def _get_json(self, url: str) -> dict:
        try:
            resp = self._session.get(url, timeout=self._timeout)
        except requests.exceptions.RequestException as e:
            raise LedgerError(f"request to {url} failed: {e}") from e

        if resp.status_code == 404:
            raise LedgerError(f"not found: {url}")
        if resp.status_code != 200:
            raise LedgerError(f"Horizon request failed: {resp.status_code} - {resp.text}")

        try:
            return orjson.loads(resp.content)
        except orjson.JSONDecodeError as e:
            raise LedgerError(f"invalid JSON from {url}: {e}") from e

"""Economy API endpoints: balance, resale listings, sales, and trading actions."""

from __future__ import annotations

from typing import TYPE_CHECKING

import httpx
import structlog

from bloxtrade.economy.purchase import classify_purchase_failure
from bloxtrade.economy.types import (
    CurrencyResponse,
    Listing,
    PurchaseLimitedResponse,
    Reseller,
    ResellersResponse,
    UserSale,
    UserSalesResponse,
)
from bloxtrade.transport.classifier import parse_model
from bloxtrade.transport.headers import CONTENT_TYPE_JSON
from bloxtrade.transport.pagination import Limit, Page

if TYPE_CHECKING:
    from collections.abc import Callable

    from bloxtrade.transport.executor import RequestExecutor
    from bloxtrade.users.service import IdentityResolver

logger = structlog.get_logger()

USER_SALES_TRANSACTION_TYPE = "Sale"
# Currency id for Robux in purchase requests.
EXPECTED_CURRENCY_ROBUX = 1


class EconomyService:
    def __init__(self, executor: RequestExecutor, identity: IdentityResolver, economy_api_url: str) -> None:
        self._executor = executor
        self._identity = identity
        self._base_url = economy_api_url

    async def robux(self) -> int:
        """Return the authenticated user's Robux balance."""
        user_id = await self._identity.user_id()
        request = httpx.Request("GET", f"{self._base_url}/v1/users/{user_id}/currency")
        response = await self._executor.execute_readonly(request)
        return parse_model(response, CurrencyResponse).robux

    async def resellers(
        self,
        item_id: int,
        limit: Limit | int = Limit.TEN,
        cursor: str | None = None,
    ) -> Page[Listing]:
        """Return one page of resale listings for an item, cheapest first."""
        limit = Limit.parse(limit)
        request = httpx.Request(
            "GET",
            f"{self._base_url}/v1/assets/{item_id}/resellers",
            params={"cursor": cursor or "", "limit": limit.value},
        )
        response = await self._executor.execute_readonly(request)
        raw = parse_model(response, ResellersResponse)

        listings = [
            Listing(
                uaid=entry.user_asset_id,
                price=entry.price,
                reseller=Reseller(user_id=entry.seller.id, name=entry.seller.name),
                serial_number=entry.serial_number,
            )
            for entry in raw.data
        ]
        return Page(items=listings, next_cursor=raw.next_page_cursor)

    async def user_sales(self, limit: Limit | int = Limit.TEN, cursor: str | None = None) -> Page[UserSale]:
        """Return one page of the authenticated user's sales, newest first."""
        limit = Limit.parse(limit)
        user_id = await self._identity.user_id()
        request = httpx.Request(
            "GET",
            f"{self._base_url}/v2/users/{user_id}/transactions",
            params={
                "cursor": cursor or "",
                "limit": limit.value,
                "transactionType": USER_SALES_TRANSACTION_TYPE,
            },
        )
        response = await self._executor.execute_readonly(request)
        raw = parse_model(response, UserSalesResponse)

        sales = [
            UserSale(
                sale_id=entry.id,
                is_pending=entry.is_pending,
                user_id=entry.agent.id,
                user_display_name=entry.agent.name,
                robux_received=entry.currency.amount,
                asset_id=entry.details.id,
                asset_name=entry.details.name,
            )
            for entry in raw.data
        ]
        return Page(items=sales, next_cursor=raw.next_page_cursor)

    async def put_limited_on_sale(self, item_id: int, uaid: int, price: int) -> None:
        """List one owned copy (``uaid``) of a limited item for ``price`` Robux."""
        await self._executor.execute_with_retry(self._resellable_copy_request(item_id, uaid, {"price": price}))
        logger.info("limited put on sale", item_id=item_id, uaid=uaid, price=price)

    async def take_limited_off_sale(self, item_id: int, uaid: int) -> None:
        await self._executor.execute_with_retry(self._resellable_copy_request(item_id, uaid, {}))
        logger.info("limited taken off sale", item_id=item_id, uaid=uaid)

    async def purchase_limited(self, product_id: int, seller_id: int, uaid: int, price: int) -> None:
        """Buy a resale copy of a limited item.

        ``product_id`` is the item's product id, not its asset id. Returns
        None on success and raises PurchaseLimitedError when the service
        declines the purchase. Declines are never retried here.
        """
        body = {
            "expectedCurrency": EXPECTED_CURRENCY_ROBUX,
            "expectedPrice": price,
            "expectedSellerId": seller_id,
            "userAssetId": uaid,
        }

        def build_request() -> httpx.Request:
            return httpx.Request(
                "POST",
                f"{self._base_url}/v1/purchases/products/{product_id}",
                json=body,
                headers={"Content-Type": CONTENT_TYPE_JSON},
            )

        response = await self._executor.execute_with_retry(build_request)
        raw = parse_model(response, PurchaseLimitedResponse)
        if not raw.purchased:
            error = classify_purchase_failure(raw.error_msg)
            logger.info("purchase declined", product_id=product_id, uaid=uaid, reason=error.reason)
            raise error
        logger.info("limited purchased", product_id=product_id, uaid=uaid, price=price)

    def _resellable_copy_request(self, item_id: int, uaid: int, body: dict[str, int]) -> Callable[[], httpx.Request]:
        url = f"{self._base_url}/v1/assets/{item_id}/resellable-copies/{uaid}"

        def build_request() -> httpx.Request:
            return httpx.Request("PATCH", url, json=body)

        return build_request

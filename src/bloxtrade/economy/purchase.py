"""Map purchase rejection messages to a closed set of reasons.

The service reports a failed purchase as HTTP 200 with ``purchased: false``
and a free-text ``errorMsg``. Matching is exact; any message not listed
here becomes ``UNKNOWN`` with the text preserved, so a wording change
upstream shows up as UNKNOWN instead of a wrong reason.
"""

from enum import StrEnum

from bloxtrade.transport.errors import ClientError


class PurchaseFailureReason(StrEnum):
    # Also returned when the service has no better explanation; worth retrying.
    PENDING_TRANSACTION = "pending_transaction"
    ITEM_NOT_FOR_SALE = "item_not_for_sale"
    NOT_ENOUGH_ROBUX = "not_enough_robux"
    PRICE_CHANGED = "price_changed"
    CANNOT_BUY_OWN_ITEM = "cannot_buy_own_item"
    UNKNOWN = "unknown"


KNOWN_FAILURE_MESSAGES: dict[str, PurchaseFailureReason] = {
    "You have a pending transaction. Please wait 1 minute and try again.": PurchaseFailureReason.PENDING_TRANSACTION,
    "This item is not for sale.": PurchaseFailureReason.ITEM_NOT_FOR_SALE,
    "You do not have enough Robux to purchase this item.": PurchaseFailureReason.NOT_ENOUGH_ROBUX,
    "This item has changed price. Please try again.": PurchaseFailureReason.PRICE_CHANGED,
    "You already own this item.": PurchaseFailureReason.CANNOT_BUY_OWN_ITEM,
}


class PurchaseLimitedError(ClientError):
    """The service accepted the request but declined the purchase."""

    def __init__(self, reason: PurchaseFailureReason, message: str) -> None:
        super().__init__(f"Purchase failed ({reason}): {message}")
        self.reason = reason
        self.message = message


def classify_purchase_failure(message: str) -> PurchaseLimitedError:
    reason = KNOWN_FAILURE_MESSAGES.get(message, PurchaseFailureReason.UNKNOWN)
    return PurchaseLimitedError(reason, message)

"""Economy endpoints and their domain types."""

from bloxtrade.economy.purchase import PurchaseFailureReason, PurchaseLimitedError, classify_purchase_failure
from bloxtrade.economy.service import EconomyService
from bloxtrade.economy.types import Listing, Reseller, UserSale

__all__ = [
    "EconomyService",
    "Listing",
    "PurchaseFailureReason",
    "PurchaseLimitedError",
    "Reseller",
    "UserSale",
    "classify_purchase_failure",
]

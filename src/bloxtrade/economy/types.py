from pydantic import BaseModel, ConfigDict, Field


class Reseller(BaseModel, frozen=True):
    user_id: int
    name: str


class Listing(BaseModel, frozen=True):
    """A resale listing of a limited item."""

    uaid: int  # unique asset id of the copy being sold
    price: int
    reseller: Reseller
    serial_number: int | None = None  # only limited-unique items are serialized


class UserSale(BaseModel, frozen=True):
    """One sale from the authenticated user's transaction history.

    ``robux_received`` is the amount credited after the marketplace fee,
    left as reported.
    """

    sale_id: int
    is_pending: bool
    user_id: int  # buyer
    user_display_name: str
    robux_received: int
    asset_id: int
    asset_name: str


# -- wire shapes --


class _WireModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class CurrencyResponse(_WireModel):
    robux: int = Field(ge=0)


class SellerRaw(_WireModel):
    id: int = Field(ge=0)
    name: str


class ResellerListingRaw(_WireModel):
    user_asset_id: int = Field(ge=0, alias="userAssetId")
    seller: SellerRaw
    price: int = Field(ge=0)
    serial_number: int | None = Field(default=None, ge=0, alias="serialNumber")


class ResellersResponse(_WireModel):
    next_page_cursor: str | None = Field(default=None, alias="nextPageCursor")
    data: list[ResellerListingRaw]


class SaleAgentRaw(_WireModel):
    id: int = Field(ge=0)
    name: str


class SaleDetailsRaw(_WireModel):
    id: int = Field(ge=0)
    name: str


class SaleCurrencyRaw(_WireModel):
    amount: int = Field(ge=0)


class UserSaleRaw(_WireModel):
    id: int = Field(ge=0)
    is_pending: bool = Field(alias="isPending")
    agent: SaleAgentRaw
    details: SaleDetailsRaw
    currency: SaleCurrencyRaw


class UserSalesResponse(_WireModel):
    next_page_cursor: str | None = Field(default=None, alias="nextPageCursor")
    data: list[UserSaleRaw]


class PurchaseLimitedResponse(_WireModel):
    purchased: bool
    error_msg: str = Field(default="", alias="errorMsg")

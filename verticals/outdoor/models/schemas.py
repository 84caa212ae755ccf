"""Pydantic schemas for the domain objects and API request/response bodies."""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Literal, Optional

from pydantic import AliasChoices, BaseModel, Field, field_validator

from patterns.workflow_states import LaundryStatus, RentalStatus


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class TransactionType(str, Enum):
    RENTAL = "RENTAL"
    SALE = "SALE"
    LAUNDRY = "LAUNDRY"


class ServiceType(str, Enum):
    WASH_AND_FOLD = "Wash & Fold"
    DRY_CLEAN = "Dry Clean"
    WATERPROOF = "Waterproof Treatment"


LogoIcon = Literal["mountain", "tent", "compass"]


# ---------------------------------------------------------------------------
# Domain objects
# ---------------------------------------------------------------------------

class BrandTheme(BaseModel):
    primary: str
    secondary: str
    bg_gradient: str = Field(validation_alias=AliasChoices("bg_gradient", "bgGradient"))
    accent: str


class BrandProfile(BaseModel):
    """A tenant: one storefront with its own look, prices and domains."""

    id: str = Field(..., min_length=1)
    name: str
    short_name: str
    tagline: str = ""
    theme: BrandTheme
    logo_icon: LogoIcon = "mountain"
    domains: list[str] = Field(default_factory=list)


class Product(BaseModel):
    """A catalog item. Price and stock maps are keyed by brand id."""

    id: str
    name: str
    category: str
    image: Optional[str] = None
    price_sale: dict[str, float] = Field(default_factory=dict)
    price_rent_per_day: dict[str, float] = Field(default_factory=dict)
    stock: dict[str, int] = Field(default_factory=dict)

    def sale_price(self, branch: str) -> float:
        return self.price_sale.get(branch, 0)

    def rent_price(self, branch: str) -> float:
        return self.price_rent_per_day.get(branch, 0)

    def stock_at(self, branch: str) -> int:
        return self.stock.get(branch, 0)


class Transaction(BaseModel):
    id: str
    branch: str
    date: datetime
    type: TransactionType
    total_amount: float
    customer_name: str
    details: dict[str, Any] = Field(default_factory=dict)

    @field_validator("date")
    @classmethod
    def _aware(cls, value: datetime) -> datetime:
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value

    @property
    def status(self) -> Optional[str]:
        return self.details.get("status")

    @property
    def item_names(self) -> list[str]:
        items = self.details.get("items") or []
        return [i.get("name") or i.get("item_name") or "" for i in items]


# ---------------------------------------------------------------------------
# Transaction details (typed views over Transaction.details)
# ---------------------------------------------------------------------------

class RentalItem(BaseModel):
    product_id: str
    quantity: int = 1
    name: str


class RentalDetails(BaseModel):
    items: list[RentalItem]
    start_date: datetime
    end_date: datetime
    status: RentalStatus = RentalStatus.BOOKED


class SaleItem(BaseModel):
    product_id: str
    quantity: int
    price_at_sale: float
    name: str


class SaleDetails(BaseModel):
    items: list[SaleItem]


class LaundryItem(BaseModel):
    item_name: str = Field(..., min_length=1)
    quantity: int = Field(1, ge=1)
    service_type: ServiceType = ServiceType.WASH_AND_FOLD


class LaundryDetails(BaseModel):
    items: list[LaundryItem]
    status: LaundryStatus = LaundryStatus.RECEIVED
    estimated_ready: datetime


# ---------------------------------------------------------------------------
# Request models
# ---------------------------------------------------------------------------

class BookingRequest(BaseModel):
    """Customer booking from the storefront."""

    product_id: str
    customer_name: str
    duration_days: int = 3


class CartLine(BaseModel):
    product_id: str
    quantity: int = Field(1, ge=1)


class CheckoutRequest(BaseModel):
    items: list[CartLine]
    customer_name: Optional[str] = None


class QuickRentalRequest(BaseModel):
    """Counter booking from the rental board."""

    product_id: str
    days: Optional[int] = None
    customer_name: Optional[str] = None


class RentalStatusUpdate(BaseModel):
    status: RentalStatus


class LaundryIntakeRequest(BaseModel):
    customer_name: str = Field(..., min_length=1)
    items: list[LaundryItem] = Field(..., min_length=1)
    total_amount: float = Field(..., ge=0)
    estimated_ready: Optional[datetime] = None


class ProductUpsert(BaseModel):
    """Inventory editor form: global fields plus the admin branch's values."""

    id: Optional[str] = None
    name: str = Field(..., min_length=1)
    category: str = "Tent"
    image: Optional[str] = None
    stock: int = Field(0, ge=0)
    price_rent_per_day: float = Field(0, ge=0)
    price_sale: float = Field(0, ge=0)


class DomainBindingRequest(BaseModel):
    branch: str
    host: Optional[str] = None


class AdvisorRequest(BaseModel):
    query: str

    @field_validator("query")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("query must not be blank")
        return value


# ---------------------------------------------------------------------------
# Response models
# ---------------------------------------------------------------------------

class AdvisorResponse(BaseModel):
    response: str
    branch: str


class BookingConfirmation(BaseModel):
    transaction: Transaction
    message: str

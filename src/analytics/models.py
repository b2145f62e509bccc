"""
Analytics Data Models

Input records supplied by the data-access layer and the result types
returned to the presentation layer.

Input records are frozen pydantic models: the engine only reads them.
Results are frozen dataclasses.
"""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

RecordId = Union[int, str]

DEFAULT_CATEGORY = "Uncategorized"


class Record(BaseModel):
    """Base for immutable snapshot records"""

    model_config = ConfigDict(frozen=True, from_attributes=True)

    id: RecordId


class Product(Record):
    """Catalog product"""
    item_code: str
    description: str = ""
    category: str = DEFAULT_CATEGORY
    unit_price: Decimal = Field(ge=0)
    units_per_case: Optional[int] = Field(default=None, ge=0)
    case_price: Optional[Decimal] = Field(default=None, ge=0)

    @field_validator("category", mode="before")
    @classmethod
    def default_category(cls, v: Optional[str]) -> str:
        if v is None or not str(v).strip():
            return DEFAULT_CATEGORY
        return v


class Customer(Record):
    """Customer account"""
    customer_name: str
    email: Optional[str] = None
    phone: Optional[str] = None


class Order(Record):
    """Order header; order_date carries no time component"""
    customer_id: RecordId
    order_date: date


class OrderItem(Record):
    """Order line: a product and a quantity attached to one order"""
    order_id: RecordId
    product_id: RecordId
    quantity: int = Field(gt=0)


# =============================================================================
# RESULTS
# =============================================================================

@dataclass(frozen=True)
class CustomerTotals:
    """Lifetime totals over a customer's items"""
    total_amount: Decimal
    total_units: int
    order_count: int


@dataclass(frozen=True)
class ProductTotal:
    """Units and revenue for one product"""
    product: Product
    units: int
    revenue: Decimal


@dataclass(frozen=True)
class RankedProduct:
    """Product ranked by quantity ordered"""
    product: Product
    quantity: int


@dataclass(frozen=True)
class CustomerRevenue:
    """Revenue and units for one customer; customer is None when unknown"""
    customer_id: RecordId
    customer: Optional[Customer]
    revenue: Decimal
    units: int

    @property
    def customer_name(self) -> str:
        return self.customer.customer_name if self.customer else "Unknown"


@dataclass(frozen=True)
class BuyingPatterns:
    """Catalog partitioned by presence in the customer's latest orders"""
    always_buys: List[Product] = field(default_factory=list)
    sometimes_buys: List[Product] = field(default_factory=list)
    stopped_buying: List[Product] = field(default_factory=list)


@dataclass(frozen=True)
class DraftOrderLine:
    """One order-sheet row; quantity 0 when nothing is entered"""
    product: Product
    quantity: int
    amount: Decimal


@dataclass(frozen=True)
class DraftOrderTotals:
    """Running totals of an order being entered"""
    units: int
    amount: Decimal


@dataclass(frozen=True)
class RecentOrder:
    """Order with its revenue, units and customer; customer is None when unknown"""
    order: Order
    customer: Optional[Customer]
    revenue: Decimal
    units: int

    @property
    def customer_name(self) -> str:
        return self.customer.customer_name if self.customer else "Unknown"


@dataclass(frozen=True)
class CustomerInsights:
    """Everything the customer analytics page shows"""
    customer: Customer
    totals: CustomerTotals
    order_frequency_days: Optional[int]
    next_order_date: Optional[str]
    last_order_date: Optional[str]
    days_since_last_order: Optional[int]
    tenure_months: Optional[int]
    top_products: List[RankedProduct]
    monthly_revenue: Dict[str, Decimal]
    buying_patterns: BuyingPatterns


@dataclass(frozen=True)
class DashboardSummary:
    """Business-wide dashboard figures"""
    totals: CustomerTotals
    active_customers: List[Customer]
    customer_revenue: List[CustomerRevenue]
    monthly_revenue: Dict[str, Decimal]
    top_products: List[ProductTotal]
    recent_orders: List[RecentOrder]

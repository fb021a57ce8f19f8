"""Order cart, totals and submission models.

All monetary fields are integer amounts in euro cents. Display strings are
produced only through the formatting helpers, at the edge.
"""

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from catering_pricing_service.models.menu_models import Location
from catering_pricing_service.pricing.formatting import format_minor_units


class TotalsMode(str, Enum):
    """How VAT is treated when composing an order total.

    DELIVERY_FEE_ONLY: total is subtotal plus delivery fee; VAT is reported
        separately for information.
    VAT_INCLUSIVE: VAT on (subtotal + delivery fee) is added to the total.
    """

    DELIVERY_FEE_ONLY = "delivery_fee_only"
    VAT_INCLUSIVE = "vat_inclusive"


class OrderLineItem(BaseModel):
    """One cart entry.

    resolved_unit_price is derived by the totals calculator and is never
    taken from client input as ground truth.
    """

    model_config = ConfigDict(validate_assignment=True)

    menu_item_id: int = Field(..., description="Catalog id of the menu item")
    quantity: int = Field(..., description="Number of units ordered", ge=1)
    special_instructions: str | None = Field(None, description="Free-text kitchen instructions")
    resolved_unit_price: int | None = Field(
        None, description="Unit price in cents from the last recomputation", ge=0
    )


class PricedLineItem(BaseModel):
    """A line item with its authoritative price, as used on invoices."""

    model_config = ConfigDict(frozen=True)

    menu_item_id: int
    name: str
    quantity: int = Field(..., ge=1)
    unit_price_minor_units: int = Field(..., ge=0)
    line_total_minor_units: int = Field(..., ge=0)
    special_instructions: str | None = None

    def to_dynamodb_item(self) -> dict[str, Any]:
        """Convert to DynamoDB item format."""
        item: dict[str, Any] = {
            "menu_item_id": self.menu_item_id,
            "name": self.name,
            "quantity": self.quantity,
            "unit_price_minor_units": self.unit_price_minor_units,
            "line_total_minor_units": self.line_total_minor_units,
        }

        if self.special_instructions is not None:
            item["special_instructions"] = self.special_instructions

        return item

    @classmethod
    def from_dynamodb_item(cls, item: dict[str, Any]) -> "PricedLineItem":
        """Create PricedLineItem from DynamoDB item."""
        # DynamoDB returns numbers as Decimal
        return cls(
            menu_item_id=int(item["menu_item_id"]),
            name=item["name"],
            quantity=int(item["quantity"]),
            unit_price_minor_units=int(item["unit_price_minor_units"]),
            line_total_minor_units=int(item["line_total_minor_units"]),
            special_instructions=item.get("special_instructions"),
        )


class FormattedTotals(BaseModel):
    """Display strings for an OrderTotals record."""

    subtotal: str
    delivery_fee: str
    vat: str
    total: str


class OrderTotals(BaseModel):
    """Computed totals for a cart at one location.

    Derived from the line items that produced it; never persisted on its own.
    """

    model_config = ConfigDict(frozen=True)

    location: Location = Field(..., description="Kitchen location the prices were resolved for")
    mode: TotalsMode = Field(..., description="VAT rule the total was composed with")
    lines: list[PricedLineItem] = Field(default_factory=list)
    subtotal_minor_units: int = Field(..., ge=0)
    delivery_fee_minor_units: int = Field(..., ge=0)
    vat_rate: Decimal = Field(..., description="VAT rate as a fraction, e.g. 0.13", ge=0)
    vat_minor_units: int = Field(..., ge=0)
    vat_included: bool = Field(..., description="Whether vat_minor_units is part of the total")
    total_minor_units: int = Field(..., ge=0)

    def formatted(self) -> FormattedTotals:
        """Format every amount for display."""
        return FormattedTotals(
            subtotal=format_minor_units(self.subtotal_minor_units),
            delivery_fee=format_minor_units(self.delivery_fee_minor_units),
            vat=format_minor_units(self.vat_minor_units),
            total=format_minor_units(self.total_minor_units),
        )


class CartLine(BaseModel):
    """A cart line as submitted by the order form.

    Any price the client sends is ignored. Lines with a quantity of zero or
    less are dropped when the cart is loaded into a session.
    """

    menu_item_id: int
    quantity: int
    special_instructions: str | None = None


class CartRequest(BaseModel):
    """A cart to price at a kitchen location."""

    location: str = Field(..., description="Kitchen location name")
    items: list[CartLine] = Field(default_factory=list)
    mode: TotalsMode | None = Field(None, description="VAT rule; service default if omitted")


class CheckoutRequest(CartRequest):
    """A cart being submitted as an order."""

    customer_reference: str | None = Field(
        None, description="Client reference, e.g. the aircraft tail number"
    )


class OrderSubmission(BaseModel):
    """An order handed to persistence with its authoritative total.

    Stored in DynamoDB with order_number as partition key.
    """

    order_number: str = Field(..., description="Unique order number")
    created_at: datetime = Field(..., description="Submission timestamp")
    customer_reference: str | None = Field(None, description="Client reference")
    totals: OrderTotals = Field(..., description="Authoritative totals for the order")

    def to_dynamodb_item(self) -> dict[str, Any]:
        """Convert to DynamoDB item format.

        Returns:
            dict: DynamoDB-compatible representation
        """
        totals = self.totals
        item: dict[str, Any] = {
            "order_number": self.order_number,
            "created_at": self.created_at.isoformat(),
            "kitchen_location": totals.location.value,
            "totals_mode": totals.mode.value,
            "lines": [line.to_dynamodb_item() for line in totals.lines],
            "subtotal_minor_units": totals.subtotal_minor_units,
            "delivery_fee_minor_units": totals.delivery_fee_minor_units,
            "vat_rate": str(totals.vat_rate),
            "vat_minor_units": totals.vat_minor_units,
            "vat_included": totals.vat_included,
            "total_minor_units": totals.total_minor_units,
        }

        if self.customer_reference is not None:
            item["customer_reference"] = self.customer_reference

        return item

    @classmethod
    def from_dynamodb_item(cls, item: dict[str, Any]) -> "OrderSubmission":
        """Create OrderSubmission from DynamoDB item.

        Args:
            item: DynamoDB item dictionary

        Returns:
            OrderSubmission: Parsed model instance
        """
        totals = OrderTotals(
            location=Location(item["kitchen_location"]),
            mode=TotalsMode(item["totals_mode"]),
            lines=[PricedLineItem.from_dynamodb_item(line) for line in item.get("lines", [])],
            subtotal_minor_units=int(item["subtotal_minor_units"]),
            delivery_fee_minor_units=int(item["delivery_fee_minor_units"]),
            vat_rate=Decimal(item["vat_rate"]),
            vat_minor_units=int(item["vat_minor_units"]),
            vat_included=bool(item["vat_included"]),
            total_minor_units=int(item["total_minor_units"]),
        )

        return cls(
            order_number=item["order_number"],
            created_at=datetime.fromisoformat(item["created_at"]),
            customer_reference=item.get("customer_reference"),
            totals=totals,
        )

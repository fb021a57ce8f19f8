"""Order total computation.

Composes line-item totals, the delivery fee and VAT into a payable amount.
All arithmetic is integer cents; VAT is the only fractional step and is
rounded half up to a whole cent before it touches any other amount.
"""

import logging
from collections.abc import Sequence
from decimal import ROUND_HALF_UP, Decimal

from catering_pricing_service.models.menu_models import Location
from catering_pricing_service.models.order_models import (
    OrderLineItem,
    OrderTotals,
    PricedLineItem,
    TotalsMode,
)
from catering_pricing_service.observability.decorators import traced
from catering_pricing_service.observability.metrics import (
    record_pricing_failure,
    record_quote,
)
from catering_pricing_service.pricing.errors import InvalidQuantityError, PricingError
from catering_pricing_service.pricing.resolver import PricingResolver, parse_location
from catering_pricing_service.pricing.rules import PricingRules

logger = logging.getLogger(__name__)


def compute_vat(amount_minor_units: int, vat_rate: Decimal) -> int:
    """Compute VAT on an amount in cents, rounded half up to a whole cent."""
    vat = (Decimal(amount_minor_units) * vat_rate).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    return int(vat)


class OrderTotalCalculator:
    """Computes OrderTotals for a cart at a kitchen location."""

    def __init__(self, resolver: PricingResolver, rules: PricingRules | None = None) -> None:
        """Initialize the calculator.

        Args:
            resolver: Session price resolver
            rules: Delivery fee and VAT rules (defaults apply if omitted)
        """
        self.resolver = resolver
        self.rules = rules if rules is not None else PricingRules()

    @traced("calculate_order_totals", service_name="pricing-svc")
    def calculate(
        self,
        line_items: Sequence[OrderLineItem],
        location: Location | str,
        mode: TotalsMode | None = None,
    ) -> OrderTotals:
        """Compute totals for the given line items.

        Every line's unit price is re-resolved for the location and stored on
        the line item as resolved_unit_price.

        Args:
            line_items: Cart lines, each with quantity >= 1
            location: Kitchen location prices apply for
            mode: VAT rule to apply (rules.default_mode if omitted)

        Returns:
            OrderTotals with all amounts in cents

        Raises:
            UnsupportedLocationError: If location is not supported
            UnknownMenuItemError: If a line references a missing menu item
            MissingPriceError: If a menu item has no price for the location
            InvalidQuantityError: If a line has a quantity below one
        """
        mode = mode or self.rules.default_mode

        try:
            location = parse_location(location)
            priced_lines = self._price_lines(line_items, location)
        except PricingError as e:
            record_pricing_failure(type(e).__name__)
            raise

        # Compose the total in integer cents
        subtotal = sum(line.line_total_minor_units for line in priced_lines)
        delivery_fee = self.rules.delivery_fee_for(location)
        vat = compute_vat(subtotal + delivery_fee, self.rules.vat_rate)
        vat_included = mode == TotalsMode.VAT_INCLUSIVE

        total = subtotal + delivery_fee
        if vat_included:
            total += vat

        totals = OrderTotals(
            location=location,
            mode=mode,
            lines=priced_lines,
            subtotal_minor_units=subtotal,
            delivery_fee_minor_units=delivery_fee,
            vat_rate=self.rules.vat_rate,
            vat_minor_units=vat,
            vat_included=vat_included,
            total_minor_units=total,
        )

        # Record metrics
        record_quote(location.value, mode.value, total)
        logger.debug(
            f"Computed totals for {len(priced_lines)} lines at {location.value}: "
            f"subtotal={subtotal} delivery_fee={delivery_fee} vat={vat} total={total}"
        )
        return totals

    def _price_lines(
        self, line_items: Sequence[OrderLineItem], location: Location
    ) -> list[PricedLineItem]:
        """Resolve every line before updating any of them, so a failure leaves no partial state."""
        resolved: list[tuple[OrderLineItem, int, str]] = []
        for item in line_items:
            if item.quantity < 1:
                raise InvalidQuantityError(item.menu_item_id, item.quantity)

            price = self.resolver.resolve(item.menu_item_id, location)
            name = self.resolver.catalog.get(item.menu_item_id).name
            resolved.append((item, price, name))

        priced_lines = []
        for item, price, name in resolved:
            item.resolved_unit_price = price
            priced_lines.append(
                PricedLineItem(
                    menu_item_id=item.menu_item_id,
                    name=name,
                    quantity=item.quantity,
                    unit_price_minor_units=price,
                    line_total_minor_units=price * item.quantity,
                    special_instructions=item.special_instructions,
                )
            )

        return priced_lines

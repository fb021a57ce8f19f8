"""Business rules for composing order totals."""

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from catering_pricing_service.models.menu_models import Cents, Location
from catering_pricing_service.models.order_models import TotalsMode

DEFAULT_DELIVERY_FEE_MINOR_UNITS = 15000
DEFAULT_VAT_RATE = Decimal("0.13")


class PricingRules(BaseModel):
    """Delivery fee, VAT rate and default VAT rule in effect.

    The delivery fee is location-independent unless an override is configured
    for a location.
    """

    model_config = ConfigDict(frozen=True)

    delivery_fee_minor_units: Cents = Field(
        default=DEFAULT_DELIVERY_FEE_MINOR_UNITS, description="Flat delivery fee in cents"
    )
    delivery_fee_overrides: dict[Location, Cents] = Field(
        default_factory=dict, description="Per-location delivery fee in cents"
    )
    vat_rate: Decimal = Field(default=DEFAULT_VAT_RATE, description="VAT as a fraction", ge=0, lt=1)
    default_mode: TotalsMode = Field(default=TotalsMode.DELIVERY_FEE_ONLY)

    def delivery_fee_for(self, location: Location) -> int:
        """Return the delivery fee in cents for a kitchen location."""
        return self.delivery_fee_overrides.get(location, self.delivery_fee_minor_units)

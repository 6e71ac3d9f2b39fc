"""Business settings edited from the terminal."""

from decimal import Decimal

from pydantic import Field

from app.schemas.common import CamelModel, Money


class SystemSettings(CamelModel):
    restaurant_name: str = "Family World Restaurant"
    address: str = "123 Main Street, Accra, Ghana"
    phone: str = "+233 20 000 0000"
    email: str = "info@familyworld.com"
    currency: str = "₵"
    tax_rate: Money = Field(default=Decimal("10"), ge=0, le=100)  # percent
    receipt_footer: str = "Thank you for dining with us! See you soon."
    standby_minutes: int = Field(default=15, ge=0)  # 0 disables auto-logout


DEFAULT_SETTINGS = SystemSettings()

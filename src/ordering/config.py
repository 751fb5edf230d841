"""Runtime settings for the Ordering domain.

Values are read from the environment once and cached; tests and embedding
applications can swap them with ``set_settings()``.
"""

import os
from dataclasses import dataclass
from datetime import UTC, tzinfo
from decimal import Decimal, InvalidOperation
from zoneinfo import ZoneInfo


@dataclass(frozen=True)
class OrderingSettings:
    """Tunables for pricing, listing and presentation."""

    vat_rate: Decimal = Decimal("0.15")
    timezone: str = "UTC"
    default_page_size: int = 20
    max_page_size: int = 200
    unknown_customer_name: str = "Unknown"

    def __post_init__(self) -> None:
        if self.vat_rate < 0:
            raise ValueError(f"VAT rate must be non-negative, got {self.vat_rate}")
        if self.default_page_size < 1 or self.max_page_size < self.default_page_size:
            raise ValueError(
                f"Invalid page sizes: default={self.default_page_size}, max={self.max_page_size}"
            )

    @property
    def tz(self) -> tzinfo:
        """Reference time zone for calendar dates in filters and responses."""
        if self.timezone.upper() == "UTC":
            return UTC
        return ZoneInfo(self.timezone)

    @classmethod
    def from_env(cls) -> "OrderingSettings":
        raw_rate = os.getenv("ORDERING_VAT_RATE", "0.15")
        try:
            vat_rate = Decimal(raw_rate)
        except InvalidOperation as exc:
            raise ValueError(f"ORDERING_VAT_RATE is not a decimal: {raw_rate!r}") from exc

        return cls(
            vat_rate=vat_rate,
            timezone=os.getenv("ORDERING_TIMEZONE", "UTC"),
            default_page_size=int(os.getenv("ORDERING_DEFAULT_PAGE_SIZE", "20")),
            max_page_size=int(os.getenv("ORDERING_MAX_PAGE_SIZE", "200")),
            unknown_customer_name=os.getenv("ORDERING_UNKNOWN_CUSTOMER_NAME", "Unknown"),
        )


_current_settings: OrderingSettings | None = None


def get_settings() -> OrderingSettings:
    """Return the active settings, loading them from the environment on first use."""
    global _current_settings
    if _current_settings is None:
        _current_settings = OrderingSettings.from_env()
    return _current_settings


def set_settings(settings: OrderingSettings) -> None:
    """Override the active settings (useful for tests)."""
    global _current_settings
    _current_settings = settings


def reset_settings() -> None:
    """Drop overrides; the next ``get_settings()`` re-reads the environment."""
    global _current_settings
    _current_settings = None

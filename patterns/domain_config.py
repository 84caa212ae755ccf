"""Dataclass-based domain configuration pattern.

Business thresholds, limits and feature flags live in frozen dataclasses.
This gives you:
- Type safety (IDE autocompletion, mypy checking)
- Default values (sensible out-of-the-box)
- Immutability (frozen=True prevents accidental mutation)
- Easy overrides (from env vars)

Domain: outdoor-gear rental, retail and laundry across several brands.
"""

from dataclasses import dataclass, field


# ---------------------------------------------------------------------------
# Nested config sections
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class RentalConfig:
    """Rental booking rules."""

    default_days: int = 3
    min_days: int = 1
    max_days: int = 30


@dataclass(frozen=True)
class InventoryConfig:
    """Inventory thresholds."""

    low_stock_threshold: int = 5


@dataclass(frozen=True)
class LaundryConfig:
    """Laundry service defaults."""

    turnaround_days: int = 1


@dataclass(frozen=True)
class AdvisorConfig:
    """What the AI advisor gets to see."""

    recent_transactions: int = 10


# ---------------------------------------------------------------------------
# Top-level domain config
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class SummitBaseConfig:
    """Complete configuration for the outdoor vertical.

    Usage::

        config = SummitBaseConfig.default()
        if product.stock_at(branch) < config.inventory.low_stock_threshold:
            flag_low_stock(product)
    """

    rental: RentalConfig = field(default_factory=RentalConfig)
    inventory: InventoryConfig = field(default_factory=InventoryConfig)
    laundry: LaundryConfig = field(default_factory=LaundryConfig)
    advisor: AdvisorConfig = field(default_factory=AdvisorConfig)

    storefront_categories: tuple[str, ...] = (
        "All",
        "Tent",
        "Backpack",
        "Accessories",
        "Cooking",
    )
    walk_in_customer: str = "Walk-in Customer"

    @classmethod
    def default(cls) -> "SummitBaseConfig":
        """Create config with all defaults."""
        return cls()

    @classmethod
    def from_env(cls, prefix: str = "SUMMITBASE_") -> "SummitBaseConfig":
        """Create config from environment variables.

        Example: SUMMITBASE_LOW_STOCK_THRESHOLD=3
        """
        import os

        overrides = {}
        threshold = os.getenv(f"{prefix}LOW_STOCK_THRESHOLD")
        if threshold:
            overrides["inventory"] = InventoryConfig(low_stock_threshold=int(threshold))

        max_days = os.getenv(f"{prefix}MAX_RENTAL_DAYS")
        if max_days:
            overrides["rental"] = RentalConfig(max_days=int(max_days))

        return cls(**overrides)

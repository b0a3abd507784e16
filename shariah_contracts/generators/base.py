"""Base generator class for synthetic contract data."""

from __future__ import annotations

from abc import ABC
from decimal import Decimal

from faker import Faker


class BaseGenerator(ABC):
    """Base class for all data generators.

    Provides common initialization: Faker instance creation and
    seed-based reproducibility. All randomness goes through ``self.fake``
    so two generators with the same seed produce the same data.

    Parameters
    ----------
    seed : int | None
        Random seed for reproducibility.
    locale : str
        Faker locale (default ``en_US``).
    """

    def __init__(
        self,
        seed: int | None = None,
        locale: str = "en_US",
    ) -> None:
        self.fake = Faker(locale)
        if seed is not None:
            self.fake.seed_instance(seed)

    def amount(self, low: int, high: int, step: int = 1000) -> Decimal:
        """Random whole currency amount in [low, high], a multiple of ``step``."""
        return Decimal(self.fake.random_int(low // step, high // step) * step)

    def percent(self, low: int, high: int) -> Decimal:
        """Random percentage with two decimal places in [low, high]."""
        return Decimal(self.fake.random_int(low * 100, high * 100)) / 100

"""Base generator class for sample data."""

from __future__ import annotations

import random
from abc import ABC

from faker import Faker


class BaseGenerator(ABC):
    """Common setup for sample data generators.

    Parameters
    ----------
    seed : int | None
        Random seed for reproducibility. Seeds both the Faker instance and a
        private ``random.Random``.
    locale : str
        Faker locale.
    """

    def __init__(self, seed: int | None = None, locale: str = "en_US") -> None:
        self.fake = Faker(locale)
        self.rng = random.Random(seed)
        if seed is not None:
            self.fake.seed_instance(seed)

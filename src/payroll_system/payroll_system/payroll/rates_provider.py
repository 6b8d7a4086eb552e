from __future__ import annotations

import logging
import time
from datetime import date
from typing import Callable, Optional

from ..core.constants import RATES_CACHE_SECONDS
from .rates import PayrollRates
from .repository import LaborLawRepository

logger = logging.getLogger(__name__)


class LaborLawRatesProvider:
    """Active statutory rates, read from ``labor_law_versions`` and cached.

    Falls back to the configured defaults when no version is active.
    """

    def __init__(
        self,
        labor_laws: Optional[LaborLawRepository],
        *,
        defaults: Optional[PayrollRates] = None,
        cache_seconds: float = RATES_CACHE_SECONDS,
        clock: Callable[[], float] = time.monotonic,
        today: Callable[[], date] = date.today,
    ):
        self._labor_laws = labor_laws
        self._defaults = defaults or PayrollRates()
        self._cache_seconds = float(cache_seconds)
        self._clock = clock
        self._today = today
        self._cached: Optional[PayrollRates] = None
        self._cached_at = 0.0

    @property
    def defaults(self) -> PayrollRates:
        return self._defaults

    def invalidate(self) -> None:
        self._cached = None

    def get(self) -> PayrollRates:
        now = self._clock()
        if self._cached is not None and now - self._cached_at < self._cache_seconds:
            return self._cached

        if self._labor_laws is None:
            return self._defaults

        values = self._labor_laws.get_active_rate_values(as_of=self._today())
        if values:
            self._cached = PayrollRates.from_mapping(values, base=self._defaults)
        else:
            logger.info("no active labor law version, using configured rates")
            self._cached = self._defaults
        self._cached_at = now
        return self._cached

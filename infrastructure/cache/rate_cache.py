import asyncio
import logging
import math
import time
from collections.abc import Callable
from datetime import timedelta
from types import MappingProxyType
from typing import Protocol

from domain.currencies import BASE_CURRENCY, SUPPORTED_CURRENCIES
from domain.exceptions.currency import ProviderError, RateUnavailableError, UpstreamError
from domain.models.currency import CacheStatus, RateRefresh, RateSnapshot, RateTable

logger = logging.getLogger(__name__)


class RateSource(Protocol):
	@property
	def name(self) -> str: ...

	async def fetch_latest(self, base: str) -> dict[str, float]: ...


class RateCache:
	"""
	Holds the latest USD rate table as a single immutable snapshot.

	A refresh is attempted whenever the snapshot is empty or older than the
	TTL. When the refresh fails, a previously fetched table is served as-is
	and the failure is reported through ``RateRefresh.warning``.
	"""

	def __init__(
		self,
		source: RateSource,
		ttl: timedelta = timedelta(minutes=5),
		clock: Callable[[], float] = time.monotonic,
	):
		self.source = source
		self.ttl = ttl
		self._clock = clock
		self._snapshot = RateSnapshot()
		self._lock = asyncio.Lock()
		self.last_error: str | None = None

	def _age(self, snapshot: RateSnapshot) -> float | None:
		if snapshot.fetched_at is None:
			return None
		return self._clock() - snapshot.fetched_at

	def _is_fresh(self, snapshot: RateSnapshot) -> bool:
		age = self._age(snapshot)
		return not snapshot.is_empty and age is not None and age < self.ttl.total_seconds()

	def _filter_supported(self, rates: dict[str, float]) -> RateTable:
		table: dict[str, float] = {}
		for code in SUPPORTED_CURRENCIES:
			if code not in rates:
				continue
			value = rates[code]
			if not math.isfinite(value) or value <= 0:
				raise UpstreamError(f'Invalid rate for {code}: {value!r}')
			table[code] = value
		return MappingProxyType(table)

	async def get_rates(self) -> RateTable:
		refresh = await self.get_rates_with_status()
		return refresh.rates

	async def get_rates_with_status(self) -> RateRefresh:
		snapshot = self._snapshot
		if self._is_fresh(snapshot):
			logger.debug('Rate cache hit')
			return RateRefresh(rates=snapshot.rates)

		async with self._lock:
			# Another caller may have refreshed while we waited for the lock
			snapshot = self._snapshot
			if self._is_fresh(snapshot):
				return RateRefresh(rates=snapshot.rates)

			try:
				rates = await self.source.fetch_latest(BASE_CURRENCY)
				table = self._filter_supported(rates)
			except ProviderError as e:
				if snapshot.is_empty:
					logger.error(f'Rate refresh from {self.source.name} failed with no cached table: {e}')
					raise RateUnavailableError(f'Could not obtain exchange rates: {e}') from e

				self.last_error = str(e)
				logger.warning(f'Using cached rates after failed refresh: {e}')
				return RateRefresh(rates=snapshot.rates, stale=True, warning=str(e))

			self._snapshot = RateSnapshot(rates=table, fetched_at=self._clock())
			self.last_error = None
			logger.info(f'Rate cache refreshed with {len(table)} currencies')
			return RateRefresh(rates=table)

	def clear(self) -> None:
		self._snapshot = RateSnapshot()
		self.last_error = None
		logger.info('Rate cache cleared')

	def info(self) -> CacheStatus:
		snapshot = self._snapshot
		if snapshot.is_empty:
			return CacheStatus(is_empty=True)

		elapsed = int(self._age(snapshot) or 0)
		remaining = max(0, int(self.ttl.total_seconds()) - elapsed)
		return CacheStatus(
			is_empty=False,
			currency_count=len(snapshot.rates),
			seconds_remaining=remaining,
		)

import logging
import math
from collections.abc import Mapping
from datetime import datetime
from numbers import Real

from application.services.history_service import ConversionHistory
from domain.currencies import BASE_CURRENCY, SUPPORTED_CURRENCIES, normalize_code
from domain.exceptions.currency import (
	InvalidAmountError,
	RateUnavailableError,
	UnsupportedCurrencyError,
)
from domain.models.currency import CacheStatus, ConversionRecord, RateRefresh
from infrastructure.cache.rate_cache import RateCache

logger = logging.getLogger(__name__)


class ConversionService:
	def __init__(self, rate_cache: RateCache, history: ConversionHistory):
		self.rate_cache = rate_cache
		self.history = history

	@staticmethod
	def validate_currency(code: str | None) -> str:
		normalized = normalize_code(code)
		if normalized is None:
			raise UnsupportedCurrencyError(code)
		return normalized

	@staticmethod
	def validate_amount(amount: float) -> float:
		if isinstance(amount, bool) or not isinstance(amount, Real):
			raise InvalidAmountError(f'Amount must be a number, got {amount!r}')
		amount = float(amount)
		if not math.isfinite(amount):
			raise InvalidAmountError('Amount must be a finite number')
		if amount < 0:
			raise InvalidAmountError('Amount must not be negative')
		return amount

	async def get_rate(self, from_currency: str, to_currency: str) -> float:
		if from_currency == to_currency:
			return 1.0

		rates = await self.rate_cache.get_rates()
		for code in (from_currency, to_currency):
			if code not in rates:
				raise RateUnavailableError(f'No rate available for {code}')

		if from_currency == BASE_CURRENCY:
			return rates[to_currency]
		# Cross rates always pivot through the base currency
		return (1 / rates[from_currency]) * rates[to_currency]

	async def convert(
		self, from_currency: str, to_currency: str, amount: float
	) -> ConversionRecord:
		from_currency = self.validate_currency(from_currency)
		to_currency = self.validate_currency(to_currency)
		amount = self.validate_amount(amount)

		rate = await self.get_rate(from_currency, to_currency)

		record = ConversionRecord(
			from_currency=from_currency,
			to_currency=to_currency,
			amount=amount,
			converted_amount=amount * rate,
			rate=rate,
			timestamp=datetime.now(),
		)
		self.history.record(record)
		logger.info(f'Converted {record.summary()}')
		return record

	def supported_currencies(self) -> Mapping[str, str]:
		return SUPPORTED_CURRENCIES

	async def current_rates(self) -> RateRefresh:
		return await self.rate_cache.get_rates_with_status()

	def cache_info(self) -> CacheStatus:
		return self.rate_cache.info()

	def clear_cache(self) -> None:
		self.rate_cache.clear()

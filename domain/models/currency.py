from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from types import MappingProxyType

from domain.currencies import display_name

RateTable = Mapping[str, float]


@dataclass(frozen=True)
class RateSnapshot:
	"""A rate table together with the clock reading taken when it was fetched."""

	rates: RateTable = field(default_factory=lambda: MappingProxyType({}))
	fetched_at: float | None = None

	@property
	def is_empty(self) -> bool:
		return not self.rates


@dataclass(frozen=True)
class CacheStatus:
	is_empty: bool
	currency_count: int = 0
	seconds_remaining: int = 0

	def __str__(self) -> str:
		if self.is_empty:
			return 'empty'
		return (
			f'{self.currency_count} currencies cached, '
			f'valid for {self.seconds_remaining} more seconds'
		)


@dataclass(frozen=True)
class RateRefresh:
	rates: RateTable
	stale: bool = False
	warning: str | None = None


@dataclass(frozen=True)
class ConversionRecord:
	from_currency: str
	to_currency: str
	amount: float
	converted_amount: float
	rate: float
	timestamp: datetime

	@property
	def percentage_difference(self) -> float:
		if self.rate == 1.0:
			return 0.0
		return (self.rate - 1.0) * 100

	@property
	def is_favorable(self) -> bool:
		return self.rate > 1.0

	def summary(self) -> str:
		return (
			f'{self.amount:.2f} {self.from_currency} = '
			f'{self.converted_amount:.2f} {self.to_currency} '
			f'(rate: {self.rate:.6f}) at {self.timestamp:%d/%m/%Y %H:%M:%S}'
		)

	def detailed_summary(self) -> str:
		lines = [
			'=== CONVERSION RESULT ===',
			f'From: {self.from_currency} ({display_name(self.from_currency)})',
			f'To: {self.to_currency} ({display_name(self.to_currency)})',
			f'Original amount: {self.amount:.2f}',
			f'Converted amount: {self.converted_amount:.2f}',
			f'Exchange rate: {self.rate:.6f}',
			f'Date: {self.timestamp:%d/%m/%Y %H:%M:%S}',
		]
		if abs(self.percentage_difference) > 0.01:
			lines.append(f'Difference: {self.percentage_difference:.2f}%')
		lines.append('=' * 25)
		return '\n'.join(lines)

	def __str__(self) -> str:
		return self.summary()


@dataclass(frozen=True)
class ApiQuota:
	plan_quota: int
	requests_remaining: int
	refresh_day_of_month: int | None = None

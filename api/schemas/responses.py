from datetime import datetime

from pydantic import BaseModel, Field

from domain.models.currency import CacheStatus, ConversionRecord


class ConversionResponse(BaseModel):
	from_currency: str = Field(..., description='Source currency code')
	to_currency: str = Field(..., description='Target currency code')
	amount: float = Field(..., description='Original amount requested')
	converted_amount: float = Field(..., description='Converted amount, unrounded')
	exchange_rate: float = Field(..., description='Exchange rate used for conversion')
	percentage_difference: float = Field(..., description='Rate deviation from parity, in percent')
	timestamp: datetime = Field(..., description='When the conversion was made')

	model_config = {
		'json_schema_extra': {
			'example': {
				'from_currency': 'USD',
				'to_currency': 'EUR',
				'amount': 100.00,
				'converted_amount': 85.0,
				'exchange_rate': 0.85,
				'percentage_difference': -15.0,
				'timestamp': '2025-09-27T10:30:00',
			}
		}
	}

	@classmethod
	def from_record(cls, record: ConversionRecord) -> 'ConversionResponse':
		return cls(
			from_currency=record.from_currency,
			to_currency=record.to_currency,
			amount=record.amount,
			converted_amount=record.converted_amount,
			exchange_rate=record.rate,
			percentage_difference=record.percentage_difference,
			timestamp=record.timestamp,
		)


class SupportedCurrency(BaseModel):
	code: str
	name: str


class SupportedCurrenciesResponse(BaseModel):
	currencies: list[SupportedCurrency] = Field(description='Supported currencies in display order')


class RatesResponse(BaseModel):
	base: str = Field(..., description='Base currency of the table')
	rates: dict[str, float] = Field(..., description='Units of each currency per 1 base unit')
	stale: bool = Field(False, description='True when served from an expired cache')
	warning: str | None = Field(None, description='Reason the refresh failed, if it did')


class CacheStatusResponse(BaseModel):
	is_empty: bool
	currency_count: int
	seconds_remaining: int
	description: str

	@classmethod
	def from_status(cls, status: CacheStatus) -> 'CacheStatusResponse':
		return cls(
			is_empty=status.is_empty,
			currency_count=status.currency_count,
			seconds_remaining=status.seconds_remaining,
			description=str(status),
		)


class HistoryResponse(BaseModel):
	total: int
	conversions: list[ConversionResponse]


class QuotaResponse(BaseModel):
	plan_quota: int
	requests_remaining: int
	refresh_day_of_month: int | None = None


class HealthResponse(BaseModel):
	status: str
	upstream_reachable: bool
	cache: CacheStatusResponse
	quota: QuotaResponse | None = Field(None, description='API plan usage, when it can be read')

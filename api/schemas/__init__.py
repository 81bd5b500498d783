from .requests import ConversionRequest
from .responses import (
	CacheStatusResponse,
	ConversionResponse,
	HealthResponse,
	HistoryResponse,
	QuotaResponse,
	RatesResponse,
	SupportedCurrenciesResponse,
	SupportedCurrency,
)

__all__ = [
	'CacheStatusResponse',
	'ConversionRequest',
	'ConversionResponse',
	'HealthResponse',
	'HistoryResponse',
	'QuotaResponse',
	'RatesResponse',
	'SupportedCurrenciesResponse',
	'SupportedCurrency',
]

import logging

import httpx
from tenacity import (
	AsyncRetrying,
	before_sleep_log,
	retry_if_exception_type,
	stop_after_attempt,
	wait_exponential,
)

from domain.currencies import BASE_CURRENCY
from domain.exceptions.currency import ConnectivityError, ProviderError, UpstreamError
from domain.models.currency import ApiQuota

logger = logging.getLogger(__name__)


class ExchangeRateAPIProvider:
	"""Client for the ExchangeRate-API v6 ``latest`` endpoint."""

	BASE_URL = 'https://v6.exchangerate-api.com/v6'
	HEADERS = {'Accept': 'application/json', 'User-Agent': 'CurrencyConverter/1.0'}

	def __init__(
		self,
		api_key: str,
		client: httpx.AsyncClient | None = None,
		timeout: float = 10,
		max_attempts: int = 2,
		base_url: str | None = None,
	):
		self.api_key = api_key
		self.base_url = (base_url or self.BASE_URL).rstrip('/')
		self.max_attempts = max(1, max_attempts)
		self._client = client or httpx.AsyncClient(timeout=httpx.Timeout(timeout))

	@property
	def name(self) -> str:
		return 'exchangerate-api'

	async def _get(self, url: str) -> httpx.Response:
		# Only connection establishment failures are retried
		async for attempt in AsyncRetrying(
			stop=stop_after_attempt(self.max_attempts),
			wait=wait_exponential(multiplier=0.5, max=2),
			retry=retry_if_exception_type((httpx.ConnectError, httpx.ConnectTimeout)),
			before_sleep=before_sleep_log(logger, logging.WARNING),
			reraise=True,
		):
			with attempt:
				return await self._client.get(url, headers=self.HEADERS)

	async def _request(self, endpoint: str) -> dict:
		url = f'{self.base_url}/{self.api_key}/{endpoint}'

		try:
			response = await self._get(url)
			response.raise_for_status()
		except httpx.HTTPStatusError as e:
			raise UpstreamError(
				f'ExchangeRate-API HTTP error {e.response.status_code}: {e.response.text[:200]}'
			) from e
		except httpx.RequestError as e:
			raise ConnectivityError(
				f'ExchangeRate-API request failed: {e.__class__.__name__}'
			) from e

		try:
			data = response.json()
		except ValueError as e:
			raise UpstreamError(f'ExchangeRate-API response parsing error: {e}') from e

		if not isinstance(data, dict):
			raise UpstreamError('ExchangeRate-API response is not a JSON object')

		if data.get('result') != 'success':
			error_type = data.get('error-type', 'unknown-error')
			raise UpstreamError(f'ExchangeRate-API error: {error_type}')

		return data

	async def fetch_latest(self, base: str = BASE_CURRENCY) -> dict[str, float]:
		if not base or not base.strip():
			raise ValueError('Base currency must not be empty')
		base = base.strip().upper()

		logger.info(f'Fetching latest rates for base {base} from {self.name}')
		data = await self._request(f'latest/{base}')

		conversion_rates = data.get('conversion_rates')
		if not isinstance(conversion_rates, dict):
			raise UpstreamError('ExchangeRate-API response has no conversion_rates mapping')

		rates: dict[str, float] = {}
		for code, value in conversion_rates.items():
			if isinstance(value, bool) or not isinstance(value, int | float):
				raise UpstreamError(f'Non-numeric rate for {code}: {value!r}')
			try:
				rates[code] = float(value)
			except OverflowError as e:
				raise UpstreamError(f'Rate out of range for {code}') from e

		logger.info(f'Received {len(rates)} rates for base {base}')
		return rates

	async def fetch_quota(self) -> ApiQuota:
		data = await self._request('quota')
		try:
			return ApiQuota(
				plan_quota=int(data['plan_quota']),
				requests_remaining=int(data['requests_remaining']),
				refresh_day_of_month=data.get('refresh_day_of_month'),
			)
		except (KeyError, TypeError, ValueError) as e:
			raise UpstreamError(f'ExchangeRate-API quota response is malformed: {e}') from e

	async def check_connection(self) -> bool:
		try:
			await self.fetch_latest(BASE_CURRENCY)
		except ProviderError as e:
			logger.error(f'Connection check against {self.name} failed: {e}')
			return False
		return True

	async def close(self) -> None:
		await self._client.aclose()

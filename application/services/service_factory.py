import logging
from datetime import timedelta

from application.services.conversion_service import ConversionService
from application.services.history_service import ConversionHistory
from config.settings import Settings, get_settings
from infrastructure.cache.rate_cache import RateCache
from infrastructure.providers import ExchangeRateAPIProvider

logger = logging.getLogger(__name__)


class ServiceFactory:
	"""Creates and wires the provider, cache, history and conversion service."""

	def __init__(self, settings: Settings | None = None):
		self.settings = settings or get_settings()
		self.provider: ExchangeRateAPIProvider | None = None
		self.rate_cache: RateCache | None = None
		self.history: ConversionHistory | None = None
		self.conversion_service: ConversionService | None = None

	def create_conversion_service(self) -> ConversionService:
		if self.conversion_service is not None:
			return self.conversion_service

		if not self.settings.EXCHANGERATE_API_KEY:
			logger.warning('EXCHANGERATE_API_KEY is not set; rate requests will be rejected')

		self.provider = ExchangeRateAPIProvider(
			api_key=self.settings.EXCHANGERATE_API_KEY,
			base_url=self.settings.EXCHANGERATE_BASE_URL,
			timeout=self.settings.HTTP_TIMEOUT_SECONDS,
			max_attempts=self.settings.HTTP_MAX_ATTEMPTS,
		)
		self.rate_cache = RateCache(
			self.provider, ttl=timedelta(seconds=self.settings.RATE_CACHE_TTL_SECONDS)
		)
		self.history = ConversionHistory()
		self.conversion_service = ConversionService(self.rate_cache, self.history)
		logger.info('Services initialized')
		return self.conversion_service

	async def close(self) -> None:
		if self.provider is not None:
			await self.provider.close()
			self.provider = None
		self.conversion_service = None
		logger.info('Services closed')

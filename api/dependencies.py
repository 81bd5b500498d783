import logging

from application.services import ConversionService, ServiceFactory
from config.settings import get_settings
from infrastructure.providers import ExchangeRateAPIProvider

logger = logging.getLogger(__name__)


class AppDependencies:
	"""Container for application-wide singleton dependencies."""

	factory: ServiceFactory | None = None


deps = AppDependencies()


def init_dependencies() -> None:
	"""Initialize all singleton dependencies. Called at app startup."""
	logger.info('Initializing dependencies...')
	deps.factory = ServiceFactory(get_settings())
	deps.factory.create_conversion_service()
	logger.info('Dependencies initialized')


async def cleanup_dependencies() -> None:
	logger.info('Cleaning up dependencies...')
	if deps.factory:
		await deps.factory.close()
		deps.factory = None
	logger.info('Cleanup complete')


def get_conversion_service() -> ConversionService:
	if deps.factory is None or deps.factory.conversion_service is None:
		raise RuntimeError('Conversion service not initialized')
	return deps.factory.conversion_service


def get_provider() -> ExchangeRateAPIProvider:
	if deps.factory is None or deps.factory.provider is None:
		raise RuntimeError('Provider not initialized')
	return deps.factory.provider

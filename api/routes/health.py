import logging
from typing import Annotated

from fastapi import APIRouter, Depends

from api.dependencies import get_conversion_service, get_provider
from api.schemas import CacheStatusResponse, HealthResponse, QuotaResponse
from application.services import ConversionService
from domain.exceptions.currency import ProviderError
from infrastructure.providers import ExchangeRateAPIProvider

logger = logging.getLogger(__name__)

router = APIRouter(tags=['health'])


@router.get('/health', response_model=HealthResponse, summary='Upstream and cache health')
async def health_check(
	provider: Annotated[ExchangeRateAPIProvider, Depends(get_provider)],
	service: Annotated[ConversionService, Depends(get_conversion_service)],
) -> HealthResponse:
	reachable = await provider.check_connection()

	quota = None
	if reachable:
		try:
			usage = await provider.fetch_quota()
			quota = QuotaResponse(
				plan_quota=usage.plan_quota,
				requests_remaining=usage.requests_remaining,
				refresh_day_of_month=usage.refresh_day_of_month,
			)
		except ProviderError as e:
			logger.warning(f'Could not read API quota: {e}')

	return HealthResponse(
		status='healthy' if reachable else 'degraded',
		upstream_reachable=reachable,
		cache=CacheStatusResponse.from_status(service.cache_info()),
		quota=quota,
	)

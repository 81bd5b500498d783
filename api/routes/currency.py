from typing import Annotated

from fastapi import APIRouter, Depends, Path, Query, status

from api.dependencies import get_conversion_service
from api.schemas import (
	CacheStatusResponse,
	ConversionRequest,
	ConversionResponse,
	HistoryResponse,
	RatesResponse,
	SupportedCurrenciesResponse,
	SupportedCurrency,
)
from application.services import ConversionService
from domain.currencies import BASE_CURRENCY

router = APIRouter(prefix='/api', tags=['currency'])

Service = Annotated[ConversionService, Depends(get_conversion_service)]


@router.get(
	'/convert/{from_currency}/{to_currency}/{amount}',
	response_model=ConversionResponse,
	status_code=status.HTTP_200_OK,
	summary='Convert currency amount',
)
async def convert_currency(
	from_currency: Annotated[str, Path(min_length=3, max_length=3)],
	to_currency: Annotated[str, Path(min_length=3, max_length=3)],
	amount: float,
	service: Service,
) -> ConversionResponse:
	record = await service.convert(from_currency, to_currency, amount)
	return ConversionResponse.from_record(record)


@router.post(
	'/convert',
	response_model=ConversionResponse,
	status_code=status.HTTP_200_OK,
	summary='Convert currency amount',
)
async def convert_currency_body(request: ConversionRequest, service: Service) -> ConversionResponse:
	record = await service.convert(request.from_currency, request.to_currency, request.amount)
	return ConversionResponse.from_record(record)


@router.get(
	'/currencies',
	response_model=SupportedCurrenciesResponse,
	summary='List supported currencies',
)
async def get_supported_currencies(service: Service) -> SupportedCurrenciesResponse:
	return SupportedCurrenciesResponse(
		currencies=[
			SupportedCurrency(code=code, name=name)
			for code, name in service.supported_currencies().items()
		]
	)


@router.get('/rates', response_model=RatesResponse, summary='Current USD-based rates')
async def get_rates(service: Service) -> RatesResponse:
	refresh = await service.current_rates()
	return RatesResponse(
		base=BASE_CURRENCY,
		rates=dict(sorted(refresh.rates.items())),
		stale=refresh.stale,
		warning=refresh.warning,
	)


@router.get('/cache', response_model=CacheStatusResponse, summary='Rate cache status')
async def get_cache_status(service: Service) -> CacheStatusResponse:
	return CacheStatusResponse.from_status(service.cache_info())


@router.delete('/cache', status_code=status.HTTP_204_NO_CONTENT, summary='Clear the rate cache')
async def clear_cache(service: Service) -> None:
	service.clear_cache()


@router.get('/history', response_model=HistoryResponse, summary='Conversion history')
async def get_history(
	service: Service,
	limit: Annotated[int | None, Query(ge=1)] = None,
) -> HistoryResponse:
	total = len(service.history)
	records = service.history.latest(limit or total)
	return HistoryResponse(
		total=total,
		conversions=[ConversionResponse.from_record(record) for record in records],
	)


@router.delete('/history', status_code=status.HTTP_204_NO_CONTENT, summary='Clear history')
async def clear_history(service: Service) -> None:
	service.history.clear()

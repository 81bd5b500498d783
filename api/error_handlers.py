import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from domain.exceptions.currency import (
	InvalidAmountError,
	ProviderError,
	RateUnavailableError,
	UnsupportedCurrencyError,
)

logger = logging.getLogger(__name__)


def register_exception_handlers(app: FastAPI) -> None:
	@app.exception_handler(UnsupportedCurrencyError)
	async def unsupported_currency_handler(request: Request, exc: UnsupportedCurrencyError):
		return JSONResponse(status_code=400, content={'detail': str(exc), 'code': exc.code})

	@app.exception_handler(InvalidAmountError)
	async def invalid_amount_handler(request: Request, exc: InvalidAmountError):
		return JSONResponse(status_code=400, content={'detail': str(exc)})

	@app.exception_handler(RateUnavailableError)
	async def rate_unavailable_handler(request: Request, exc: RateUnavailableError):
		logger.error(f'Rates unavailable: {exc}')
		return JSONResponse(
			status_code=503, content={'detail': 'Exchange rate service unavailable'}
		)

	@app.exception_handler(ProviderError)
	async def provider_error_handler(request: Request, exc: ProviderError):
		logger.error(f'Provider error: {exc}')
		return JSONResponse(
			status_code=503, content={'detail': 'Exchange rate service unavailable'}
		)

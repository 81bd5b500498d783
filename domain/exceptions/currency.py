class CurrencyException(Exception):
	pass


class InvalidAmountError(CurrencyException):
	pass


class UnsupportedCurrencyError(CurrencyException):
	def __init__(self, code: str | None):
		self.code = code
		super().__init__(f'Currency {code!r} is not supported')


class RateUnavailableError(CurrencyException):
	pass


class ProviderError(CurrencyException):
	pass


class ConnectivityError(ProviderError):
	pass


class UpstreamError(ProviderError):
	pass

from .exchangerate_api import ExchangeRateAPIProvider

__all__ = ['ExchangeRateAPIProvider']

from types import MappingProxyType

BASE_CURRENCY = 'USD'

SUPPORTED_CURRENCIES = MappingProxyType(
	{
		'USD': 'US Dollar',
		'EUR': 'Euro',
		'BRL': 'Brazilian Real',
		'ARS': 'Argentine Peso',
		'COP': 'Colombian Peso',
		'MXN': 'Mexican Peso',
		'GBP': 'British Pound',
		'JPY': 'Japanese Yen',
		'CAD': 'Canadian Dollar',
		'CHF': 'Swiss Franc',
	}
)


def normalize_code(code: str | None) -> str | None:
	"""Strip and upper-case a currency code; return None when it is not supported."""
	if not isinstance(code, str):
		return None
	normalized = code.strip().upper()
	if normalized not in SUPPORTED_CURRENCIES:
		return None
	return normalized


def display_name(code: str) -> str:
	return SUPPORTED_CURRENCIES.get(code, code)

from pydantic import BaseModel, Field


class ConversionRequest(BaseModel):
	from_currency: str = Field(..., min_length=3, max_length=3)
	to_currency: str = Field(..., min_length=3, max_length=3)
	amount: float = Field(..., description='Amount in the source currency')

	model_config = {
		'json_schema_extra': {
			'example': {'from_currency': 'USD', 'to_currency': 'EUR', 'amount': 100.00}
		}
	}

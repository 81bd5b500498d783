from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
	EXCHANGERATE_API_KEY: str = ''
	EXCHANGERATE_BASE_URL: str = 'https://v6.exchangerate-api.com/v6'

	HTTP_TIMEOUT_SECONDS: float = 10.0
	HTTP_MAX_ATTEMPTS: int = 2

	# Cache
	RATE_CACHE_TTL_SECONDS: int = 300

	# Application
	APP_NAME: str = 'Currency Converter'
	HISTORY_DISPLAY_LIMIT: int = 10
	LOG_LEVEL: str = 'WARNING'
	DEBUG: bool = False

	# HTTP server
	HOST: str = '127.0.0.1'
	PORT: int = 8000

	model_config = SettingsConfigDict(env_file='.env', case_sensitive=False, extra='ignore')


@lru_cache
def get_settings() -> Settings:
	return Settings()

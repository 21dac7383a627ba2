from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import HttpUrl


def parse_comma_separated_origins(comma_list: str) -> list[HttpUrl]:
    """
    Parse a comma-separated string into a list of validated HttpUrl origins.

    Empty or falsy input returns an empty list. Each non-empty, comma-separated item is validated and converted to an HttpUrl.

    Parameters:
        comma_list (str): Comma-separated origins (may be empty or falsy).

    Returns:
        list[HttpUrl]: A list of parsed and validated HttpUrl objects.

    Raises:
        ValueError: If any origin cannot be parsed as an HttpUrl; the error message includes the invalid origin and the underlying reason.
    """
    if not comma_list:
        return []
    origins = []
    for origin in comma_list.split(","):
        origin = origin.strip()
        if origin:
            try:
                origins.append(HttpUrl(origin))
            except Exception as e:
                raise ValueError(f"Invalid CORS origin '{origin}': {e}") from e
    return origins


class Settings(BaseSettings):
    PROPCONNECT_API_BASE_URL: HttpUrl
    REQUEST_TIMEOUT_SECONDS: float = 15.0
    SESSION_STORAGE_PATH: str = ".propconnect_admin_storage.json"
    SESSION_STORAGE_KEY: str = "propconnect_admin_auth"
    # 0 disables the background refresh of dashboard statistics
    DASHBOARD_REFRESH_SECONDS: float = 30.0
    BACKEND_CORS_ORIGINS: str = ""
    ENVIRONMENT: str = "development"

    # Read the env file not present in the repo,
    # overrides the attributes above based on the env file content
    model_config = SettingsConfigDict(
        env_file_encoding="utf-8", env_file=".env", extra="ignore"
    )

    @property
    def api_base_url(self) -> str:
        """Base URL of the backend without a trailing slash."""
        return str(self.PROPCONNECT_API_BASE_URL).rstrip("/")


@lru_cache()
# get_settings.cache_clear() may be needed for tests that modify env vars
def get_settings():
    """
    Load application settings from environment variables and the configured .env file.

    This function is cached, so repeated calls return the same Settings instance until the cache is cleared.

    Returns:
        Settings: A Settings instance populated from environment variables and the `.env` file according to the model configuration.
    """
    return Settings()

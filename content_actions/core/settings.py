"""
Centralized defaults (environment variables / .env) for every action input
that has one. Actions read defaults from here instead of keeping their own
constant tables.
"""
# @file purpose: Centralized settings using Pydantic Settings.

from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="CA_", env_file=".env", extra="ignore")

    log_level: str = "INFO"

    # HTTP client defaults; 0 disables the timeout
    connect_timeout: int = 0
    socket_timeout: int = 0
    trust_all_roots: bool = False
    x509_hostname_verifier: Literal["strict", "browser_compatible", "allow_all"] = "strict"
    use_cookies: bool = True
    keep_alive: bool = True

    # date/time formatting
    locale_lang: str = "en"
    locale_country: str = "US"

    # Azure authentication
    azure_authority: str = "https://login.windows.net/common"
    azure_resource: str = "https://management.azure.com"
    azure_client_id: str = "9ba1a5c7-f17a-4de9-a1f1-6178c8d51223"


settings = Settings()

from typing import Annotated

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


class Settings(BaseSettings):
    NAME: str = "band-oracle-updater"
    VERSION: str = "1.0.0"
    PORT: int = 8080
    API_ENABLED: bool = True
    LOG_LEVEL: str = "INFO"

    # Required at startup; emptiness is reported by the startup validator
    RPC_URL: str = ""
    PRIVATE_KEY: SecretStr = SecretStr("")
    BAND_CONTRACT_ADDRESSES: Annotated[list[str], NoDecode] = []

    # Required; a missing or non-positive value fails settings loading
    UPDATE_INTERVAL_SECONDS: int = Field(gt=0)
    UPDATE_METHOD: str = "pullDataAndCache"

    model_config = SettingsConfigDict(case_sensitive=True, frozen=True)

    @field_validator("BAND_CONTRACT_ADDRESSES", mode="before")
    @classmethod
    def split_addresses(cls, value):
        """Accept a comma separated string as well as a list."""
        if isinstance(value, str):
            return [item.strip() for item in value.split(",") if item.strip()]
        return value

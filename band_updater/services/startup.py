"""
Startup validation: required configuration and signer construction.
"""
import logging
import sys

from pydantic import ValidationError

from ..core.blockchain import ChainClient
from ..core.config import Settings
from ..errors import StartupError

logger = logging.getLogger(__name__)


def check_required(settings: Settings) -> None:
    """Raise StartupError naming the first missing required variable."""
    if not settings.RPC_URL:
        raise StartupError("RPC_URL is empty, exit")

    if not settings.PRIVATE_KEY.get_secret_value():
        raise StartupError("PRIVATE_KEY is empty, exit")

    if len(settings.BAND_CONTRACT_ADDRESSES) == 0:
        raise StartupError("BAND_CONTRACT_ADDRESSES is empty, exit")


def build_client(settings: Settings) -> ChainClient:
    try:
        return ChainClient(
            settings.RPC_URL,
            settings.PRIVATE_KEY.get_secret_value(),
            method_name=settings.UPDATE_METHOD,
        )
    except Exception as e:
        raise StartupError(f"Failed to init wallet: {e}, exit") from e


def validate_startup(settings: Settings) -> ChainClient:
    """Check configuration, then construct the signer-bound chain client."""
    check_required(settings)
    client = build_client(settings)

    if not client.is_connected():
        logger.warning(f"RPC node at {settings.RPC_URL} is not reachable yet, updates will fail until it is")

    logger.info(f"Bot started with address {client.address}")
    return client


def bootstrap(settings: Settings) -> ChainClient:
    """Run startup validation once; terminate the process on failure."""
    try:
        return validate_startup(settings)
    except StartupError as e:
        logger.critical(str(e))
        sys.exit(1)


def load_settings() -> Settings:
    """Parse configuration from the environment; terminate on invalid values."""
    try:
        return Settings()
    except ValidationError as e:
        # Raw input is left out of the message; it holds the private key
        problems = "; ".join(
            f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}" for error in e.errors()
        )
        logger.critical(f"Invalid configuration: {problems}, exit")
        sys.exit(1)

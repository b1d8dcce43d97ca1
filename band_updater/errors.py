"""
Error classifications for the updater.

Startup errors stop the process. Update errors are raised by the chain
client for a single target and never escape the update cycle.
"""
from typing import Optional


class StartupError(Exception):
    """Operator misconfiguration detected before the update loop starts."""


class UpdateError(Exception):
    """A single contract update could not be broadcast."""

    def __init__(self, message: str, contract_address: Optional[str] = None):
        super().__init__(message)
        self.contract_address = contract_address


class InvalidTargetError(UpdateError):
    """The configured target is not a valid contract address."""


class ContractRevertError(UpdateError):
    """The contract call reverted."""


class InsufficientFundsError(UpdateError):
    """The signer cannot pay for the transaction."""


class NodeConnectionError(UpdateError):
    """The JSON-RPC endpoint could not be reached."""


class NodeRejectedError(UpdateError):
    """The node answered with an error response."""

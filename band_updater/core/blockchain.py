"""
Blockchain interaction utilities.
"""
import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import requests
from eth_account import Account
from eth_account.signers.local import LocalAccount
from web3 import Web3
from web3.exceptions import ContractLogicError, ProviderConnectionError, Web3RPCError

from ..errors import (
    ContractRevertError,
    InsufficientFundsError,
    InvalidTargetError,
    NodeConnectionError,
    NodeRejectedError,
    UpdateError,
)

logger = logging.getLogger(__name__)

ABI_DIR = Path(__file__).parent.parent / "abi"
ORACLE_READER_CONTRACT = "BandOracleReader"


@dataclass(frozen=True)
class TransactionHandle:
    """Acknowledgment of a broadcast transaction."""

    contract_address: str
    tx_hash: str


def load_contract_abi(contract_name: str) -> list:
    """Load contract ABI from the packaged artifacts."""
    abi_path = ABI_DIR / f"{contract_name}.json"
    if not abi_path.exists():
        raise FileNotFoundError(f"ABI not found for {contract_name} at {abi_path}")

    with open(abi_path) as f:
        artifact = json.load(f)
        return artifact.get("abi", [])


def get_web3(rpc_url: str) -> Web3:
    """Get Web3 instance for the node. Does not require the node to be up."""
    return Web3(Web3.HTTPProvider(rpc_url))


def get_account(private_key: str) -> LocalAccount:
    """Get account from private key."""
    return Account.from_key(private_key)


def classify_error(exc: Exception, contract_address: str) -> UpdateError:
    """Translate a web3/transport exception into an UpdateError."""
    message = str(exc) or exc.__class__.__name__

    if isinstance(exc, ContractLogicError):
        return ContractRevertError(message, contract_address)
    if isinstance(exc, (ProviderConnectionError, requests.exceptions.RequestException,
                        ConnectionError, TimeoutError)):
        return NodeConnectionError(message, contract_address)
    if isinstance(exc, Web3RPCError):
        lowered = message.lower()
        if "insufficient funds" in lowered:
            return InsufficientFundsError(message, contract_address)
        if "revert" in lowered:
            return ContractRevertError(message, contract_address)
        return NodeRejectedError(message, contract_address)
    return UpdateError(message, contract_address)


class ChainClient:
    """Sends the oracle update call to contracts on behalf of a single signer."""

    def __init__(
        self,
        rpc_url: str,
        private_key: str,
        method_name: str = "pullDataAndCache",
        abi: Optional[list] = None,
        w3: Optional[Web3] = None,
    ):
        self.rpc_url = rpc_url
        self.w3 = w3 if w3 is not None else get_web3(rpc_url)
        self.account = get_account(private_key)
        self.abi = abi if abi is not None else load_contract_abi(ORACLE_READER_CONTRACT)
        self.method_name = method_name

        functions = {entry.get("name") for entry in self.abi if entry.get("type") == "function"}
        if method_name not in functions:
            raise ValueError(f"Method {method_name} not found in {ORACLE_READER_CONTRACT} ABI")

    @property
    def address(self) -> str:
        return self.account.address

    def is_connected(self) -> bool:
        return self.w3.is_connected()

    def invoke_update(self, contract_address: str) -> TransactionHandle:
        """
        Broadcast the update call to one contract.

        Returns as soon as the node accepts the raw transaction; the receipt
        is not awaited. Raises an UpdateError subclass on any failure.
        """
        try:
            checksum_address = Web3.to_checksum_address(contract_address)
        except ValueError as e:
            raise InvalidTargetError(f"Invalid contract address: {e}", contract_address) from e

        try:
            tx_hash = self._send(checksum_address)
        except UpdateError:
            raise
        except Exception as e:
            raise classify_error(e, checksum_address) from e

        return TransactionHandle(contract_address=checksum_address, tx_hash=Web3.to_hex(tx_hash))

    def _send(self, checksum_address: str) -> bytes:
        contract = self.w3.eth.contract(address=checksum_address, abi=self.abi)
        contract_function = getattr(contract.functions, self.method_name)

        # Gas is left to the node's estimate, which also surfaces reverts
        tx = contract_function().build_transaction({
            "from": self.account.address,
            "nonce": self.w3.eth.get_transaction_count(self.account.address, "pending"),
            "gasPrice": self.w3.eth.gas_price,
        })

        signed_txn = self.account.sign_transaction(tx)
        return self.w3.eth.send_raw_transaction(signed_txn.raw_transaction)

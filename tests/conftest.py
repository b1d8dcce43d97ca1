import pytest

from band_updater.core.blockchain import TransactionHandle
from band_updater.core.config import Settings

# Well-known local development key (hardhat/anvil account #0)
TEST_PRIVATE_KEY = "0xac0974bec39a17e36ba4a6b4d238ff944bacb478cbed5efcae784d7bf4f2ff80"
TEST_SIGNER_ADDRESS = "0xf39Fd6e51aad88F6F4ce6aB8827279cffFb92266"

ENV_VARS = [
    "NAME",
    "VERSION",
    "PORT",
    "API_ENABLED",
    "LOG_LEVEL",
    "RPC_URL",
    "PRIVATE_KEY",
    "BAND_CONTRACT_ADDRESSES",
    "UPDATE_INTERVAL_SECONDS",
    "UPDATE_METHOD",
]


class FakeChainClient:
    """
    Records every update attempt in a shared event list.

    ``outcomes`` maps an address to either a tx hash or an exception; a list
    value is consumed one entry per attempt.
    """

    def __init__(self, outcomes=None, events=None, address=TEST_SIGNER_ADDRESS):
        self.address = address
        self.outcomes = outcomes or {}
        self.events = events if events is not None else []
        self.calls = []

    def invoke_update(self, contract_address):
        self.calls.append(contract_address)
        self.events.append(("call", contract_address))

        outcome = self.outcomes.get(contract_address, "0x" + "00" * 32)
        if isinstance(outcome, list):
            outcome = outcome.pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        return TransactionHandle(contract_address=contract_address, tx_hash=outcome)


class LoopStopped(BaseException):
    """Raised by the fake sleep to break out of run_forever."""


def recording_sleep(events, stop_after):
    """Sleep replacement that logs the wait and stops the loop after N waits."""

    async def sleep(seconds):
        events.append(("sleep", seconds))
        if sum(1 for kind, _ in events if kind == "sleep") >= stop_after:
            raise LoopStopped()

    return sleep


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def settings():
    return Settings(
        RPC_URL="http://localhost:8545",
        PRIVATE_KEY=TEST_PRIVATE_KEY,
        BAND_CONTRACT_ADDRESSES=["0xAAA", "0xBBB"],
        UPDATE_INTERVAL_SECONDS=60,
    )


@pytest.fixture
def events():
    return []

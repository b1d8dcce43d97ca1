"""
Update cycle executor and the update loop that drives it.
"""
import asyncio
import enum
import logging
from typing import Awaitable, Callable, Iterable, Protocol, Sequence, Tuple

from ..core.blockchain import TransactionHandle

logger = logging.getLogger(__name__)

TargetSet = Tuple[str, ...]


class UpdateClient(Protocol):
    address: str

    def invoke_update(self, contract_address: str) -> TransactionHandle:
        ...


class LoopState(str, enum.Enum):
    RUNNING = "running"
    IDLE = "idle"


def make_target_set(addresses: Iterable[str]) -> TargetSet:
    """Freeze configured addresses in their given order, duplicates included."""
    return tuple(addresses)


class UpdateCycleExecutor:
    """Runs one pass over the target set, one contract at a time."""

    def __init__(self, client: UpdateClient, method_name: str = "pullDataAndCache"):
        self.client = client
        self.method_name = method_name

    async def run_cycle(self, targets: Sequence[str]) -> None:
        logger.info(f"Executing {self.method_name}, contracts addresses count: {len(targets)}")

        for contract_address in targets:
            try:
                logger.info(
                    f"Updating BandOracleReader {contract_address}, "
                    f"signer address: {self.client.address}..."
                )
                handle = await asyncio.to_thread(self.client.invoke_update, contract_address)
                logger.info(f"{contract_address} successfully updated, txn hash: {handle.tx_hash}")
            except Exception as e:
                logger.error(f"Failed to update contract {contract_address}: {e}")


class UpdateLoop:
    """
    Runs update cycles forever.

    The interval is waited after each cycle completes, so cycles never
    overlap and the spacing between cycle starts is interval + cycle time.
    """

    def __init__(
        self,
        executor: UpdateCycleExecutor,
        targets: Callable[[], Sequence[str]],
        interval_seconds: int,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        if interval_seconds <= 0:
            raise ValueError("interval_seconds must be positive")
        self.executor = executor
        self.targets = targets
        self.interval_seconds = interval_seconds
        self._sleep = sleep
        self.state = LoopState.IDLE

    async def run_once(self) -> None:
        """Run a single cycle; cycle-level errors are logged, not raised."""
        self.state = LoopState.RUNNING
        try:
            await self.executor.run_cycle(self.targets())
        except Exception as e:
            logger.error(f"Failed to run update loop: {e}", exc_info=True)
        finally:
            self.state = LoopState.IDLE

    async def run_forever(self) -> None:
        while True:
            await self.run_once()
            await self._sleep(self.interval_seconds)

"""
Block runtime: orders calls into blocks and returns one receipt per call.

Each call runs against a working copy of the registry state that replaces
the live state only when the call succeeds. A failed call never unwinds or
blocks the calls after it, and a successful call is visible to every later
call in the same block.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, Tuple

from priority_credit.chain.contract import PriorityCreditContract
from priority_credit.config import Settings, get_settings
from priority_credit.kernel.events.event_types import RegistryEvent
from priority_credit.kernel.result import Err, ErrorKind, Result
from priority_credit.kernel.state import RegistryPolicy, RegistryState
from priority_credit.logging_config import block_context, get_logger, tx_context

logger = get_logger(__name__)


@dataclass(frozen=True)
class Tx:
    """A signed contract call as delivered by the environment."""

    contract: str
    function: str
    args: Tuple[Any, ...]
    sender: str

    @classmethod
    def contract_call(
        cls,
        contract: str,
        function: str,
        args: Sequence[Any],
        sender: str,
    ) -> "Tx":
        return cls(contract=contract, function=function, args=tuple(args), sender=sender)


@dataclass(frozen=True)
class Receipt:
    """Outcome of one call inside a block."""

    tx_index: int
    sender: str
    function: str
    result: Result[Any]
    events: List[RegistryEvent] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "tx_index": self.tx_index,
            "sender": self.sender,
            "function": self.function,
            **self.result.to_dict(),
            "events": [event.to_dict() for event in self.events],
        }


@dataclass(frozen=True)
class Block:
    """A mined block: its height and the receipts in submission order."""

    height: int
    receipts: List[Receipt]

    @property
    def events(self) -> List[Tuple[int, RegistryEvent]]:
        return [(r.tx_index, e) for r in self.receipts for e in r.events]


class Chain:
    """
    Serial, deterministic executor for the registry contract.

    Usage:
        chain = Chain()
        block = chain.mine_block([
            Tx.contract_call("priority-credit", "register-validator", [validator], deployer),
        ])
        block.receipts[0].result.expect_ok()
    """

    def __init__(
        self,
        state: Optional[RegistryState] = None,
        deployer: Optional[str] = None,
        block_height: int = 0,
        settings: Optional[Settings] = None,
    ):
        settings = settings or get_settings()
        if state is None:
            state = RegistryState.genesis(
                deployer or settings.deployer_principal,
                RegistryPolicy.from_settings(settings),
            )
        self.state = state
        self.contract = PriorityCreditContract(settings.contract_name)
        self.block_height = block_height

    def mine_block(self, txs: Sequence[Tx]) -> Block:
        """
        Apply the calls in order and return their receipts.

        Args:
            txs: Calls in submission order

        Returns:
            The mined block; ``len(block.receipts) == len(txs)``

        An unexpected exception aborts the whole block: state goes back to
        where it was before the first call and the height does not advance.
        """
        height = self.block_height + 1
        receipts: List[Receipt] = []
        # Calls replace self.state and never mutate it in place
        start_state = self.state
        with block_context(height):
            try:
                for index, tx in enumerate(txs):
                    with tx_context(index):
                        receipts.append(self._apply(index, tx))
            except Exception:
                self.state = start_state
                logger.exception("Block aborted", extra={"height": height})
                raise
        self.block_height = height

        logger.info(
            "Block mined",
            extra={
                "height": height,
                "tx_count": len(receipts),
                "ok_count": sum(1 for r in receipts if r.result.is_ok),
            },
        )
        return Block(height=height, receipts=receipts)

    def mine_empty_block(self, count: int = 1) -> int:
        """Advance the chain without calls; returns the new height."""
        for _ in range(count):
            self.mine_block([])
        return self.block_height

    def call_read_only(
        self,
        function: str,
        args: Sequence[Any],
        sender: str,
    ) -> Result[Any]:
        """Evaluate a call without committing any effect."""
        result, _ = self.contract.execute(self.state.snapshot(), function, args, sender)
        return result

    def _apply(self, index: int, tx: Tx) -> Receipt:
        if tx.contract != self.contract.name:
            logger.info("Call to unknown contract", extra={"contract": tx.contract})
            return Receipt(
                tx_index=index,
                sender=tx.sender,
                function=tx.function,
                result=Err(ErrorKind.NOT_FOUND),
            )

        working = self.state.snapshot()
        result, events = self.contract.execute(working, tx.function, tx.args, tx.sender)
        if result.is_ok:
            self.state = working

        return Receipt(
            tx_index=index,
            sender=tx.sender,
            function=tx.function,
            result=result,
            events=events,
        )

"""
Block processor: mines submitted calls against the persisted registry.

One block is one database transaction: the registry state, the block's
receipts and the audit events it emitted are written together.
"""

import asyncio
from typing import Optional, Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from priority_credit.chain.chain import Block, Chain, Tx
from priority_credit.config import Settings, get_settings
from priority_credit.kernel.events.event_store import EventStore
from priority_credit.kernel.events.event_types import RegistryInitializedEvent
from priority_credit.kernel.repository import RegistryRepository
from priority_credit.kernel.state import RegistryNotInitializedError, RegistryPolicy, RegistryState
from priority_credit.logging_config import get_logger

logger = get_logger(__name__)

# Blocks are applied strictly one at a time within the process
_block_lock = asyncio.Lock()

GENESIS_HEIGHT = 0


class BlockProcessor:
    """Service tying the chain runtime to persistence and the audit log."""

    def __init__(self, session: AsyncSession, settings: Optional[Settings] = None):
        self.session = session
        self.settings = settings or get_settings()
        self.repository = RegistryRepository(session)
        self.event_store = EventStore(session)

    @property
    def policy(self) -> RegistryPolicy:
        return RegistryPolicy.from_settings(self.settings)

    async def initialize(self) -> RegistryState:
        """
        Run genesis if it never ran. Safe to call on every startup.

        Genesis installs the configured deployer as administrator and logs
        a registry.initialized event at height 0.
        """
        async with _block_lock:
            return await self._load_or_genesis()

    async def load_state(self) -> RegistryState:
        """
        Load the persisted registry without writing anything.

        Raises:
            RegistryNotInitializedError: genesis has not run yet
        """
        state = await self.repository.load_state(self.policy)
        if state is None:
            raise RegistryNotInitializedError("Registry genesis has not run")
        return state

    async def _load_or_genesis(self) -> RegistryState:
        # Caller holds _block_lock
        state = await self.repository.load_state(self.policy)
        if state is not None:
            return state

        state = RegistryState.genesis(self.settings.deployer_principal, self.policy)
        await self.repository.save_state(state)
        await self.event_store.log(
            RegistryInitializedEvent(administrator=state.require_administrator()),
            block_height=GENESIS_HEIGHT,
        )
        logger.info(
            "Registry initialized",
            extra={"administrator": state.administrator},
        )
        return state

    async def submit_block(self, txs: Sequence[Tx]) -> Block:
        """
        Mine one block of calls and persist its effects.

        Args:
            txs: Calls in submission order

        Returns:
            The mined block with one receipt per call
        """
        async with _block_lock:
            state = await self._load_or_genesis()
            height = await self.repository.latest_block_height()

            chain = Chain(state=state, block_height=height, settings=self.settings)
            block = chain.mine_block(txs)

            await self.repository.save_state(chain.state)
            for tx_index, event in block.events:
                await self.event_store.log(event, block_height=block.height, tx_index=tx_index)
            await self.repository.save_block(
                block.height,
                [receipt.to_dict() for receipt in block.receipts],
            )
            await self.session.flush()
            return block

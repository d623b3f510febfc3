"""
Event Store service for append-only audit logging.

Registry mutations are logged here in the same transaction that persists
the new state, so the audit trail and the registry never disagree.
"""

from typing import List, Optional

from sqlalchemy import select, and_, func
from sqlalchemy.ext.asyncio import AsyncSession

from priority_credit.kernel.events.event_types import RegistryEvent
from priority_credit.kernel.models.event_log import EventLog, EventType


class EventStore:
    """
    Service for managing the immutable event log.

    Usage:
        event_store = EventStore(session)
        await event_store.log(event, block_height=7, tx_index=0)
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def log(
        self,
        event: RegistryEvent,
        block_height: int,
        tx_index: Optional[int] = None,
    ) -> EventLog:
        """
        Append an event to the audit log.

        Args:
            event: The emitted registry event
            block_height: Height of the block the event belongs to
            tx_index: Position of the emitting call in its block (None for genesis)

        Returns:
            The created EventLog record
        """
        record = EventLog(
            event_type=event.event_type.value,
            entity_type=event.entity_type,
            entity_id=event.entity_id,
            sender=event.sender,
            block_height=block_height,
            tx_index=tx_index,
            payload=event.payload(),
        )
        self.session.add(record)
        # Caller flushes/commits with the state change
        return record

    async def get_entity_history(
        self,
        entity_type: str,
        entity_id: str,
        event_types: Optional[List[EventType]] = None,
        limit: int = 100,
    ) -> List[EventLog]:
        """
        Get the event history for one principal, oldest first.

        Args:
            entity_type: administrator, validator or developer
            entity_id: The principal
            event_types: Optional filter for specific event types
            limit: Maximum number of events to return

        Returns:
            List of EventLog records in block order
        """
        query = select(EventLog).where(
            and_(
                EventLog.entity_type == entity_type,
                EventLog.entity_id == entity_id,
            )
        )
        if event_types:
            query = query.where(EventLog.event_type.in_([t.value for t in event_types]))

        query = query.order_by(EventLog.block_height, EventLog.tx_index).limit(limit)
        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def get_block_events(self, block_height: int) -> List[EventLog]:
        """All events emitted in one block, in call order."""
        query = (
            select(EventLog)
            .where(EventLog.block_height == block_height)
            .order_by(EventLog.tx_index)
        )
        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def count_events(
        self,
        event_type: Optional[EventType] = None,
        sender: Optional[str] = None,
    ) -> int:
        """Count events matching the given criteria."""
        query = select(func.count(EventLog.id))
        if event_type:
            query = query.where(EventLog.event_type == event_type.value)
        if sender:
            query = query.where(EventLog.sender == sender)

        result = await self.session.execute(query)
        return result.scalar() or 0

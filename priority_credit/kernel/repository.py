"""
Repository mapping RegistryState to and from the database.
"""

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from priority_credit.kernel.models.block import BlockRecord
from priority_credit.kernel.models.registry import (
    ADMINISTRATOR_SLOT_ID,
    AdministratorSlot,
    DeveloperRecord,
    ValidatorRecord,
)
from priority_credit.kernel.state import (
    DeveloperStatus,
    ProjectDeveloper,
    RegistryPolicy,
    RegistryState,
    Validator,
    ValidatorStatus,
)


class RegistryRepository:
    """
    Loads and stores the registry state and mined blocks.

    Saving is additive: records are inserted or updated, never deleted,
    matching the registry's no-removal rule.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def load_state(self, policy: Optional[RegistryPolicy] = None) -> Optional[RegistryState]:
        """
        Rebuild the registry state.

        Returns:
            The state, or None if genesis has not been persisted yet
        """
        slot = await self.session.get(AdministratorSlot, ADMINISTRATOR_SLOT_ID)
        if slot is None:
            return None

        state = RegistryState(administrator=slot.principal, policy=policy or RegistryPolicy())

        result = await self.session.execute(
            select(ValidatorRecord).order_by(ValidatorRecord.created_at, ValidatorRecord.principal)
        )
        for record in result.scalars().all():
            state.validators[record.principal] = Validator(
                principal=record.principal,
                appointed_by=record.appointed_by,
                status=ValidatorStatus(record.status),
            )

        result = await self.session.execute(
            select(DeveloperRecord).order_by(DeveloperRecord.sequence)
        )
        for record in result.scalars().all():
            state.developers[record.principal] = ProjectDeveloper(
                principal=record.principal,
                registered_by=record.registered_by,
                project_name=record.project_name,
                status=DeveloperStatus(record.status),
            )

        return state

    async def save_state(self, state: RegistryState) -> None:
        """Persist the administrator slot and every registry record."""
        administrator = state.require_administrator()

        slot = await self.session.get(AdministratorSlot, ADMINISTRATOR_SLOT_ID)
        if slot is None:
            self.session.add(AdministratorSlot(id=ADMINISTRATOR_SLOT_ID, principal=administrator))
        elif slot.principal != administrator:
            slot.principal = administrator

        for validator in state.validators.values():
            record = await self.session.get(ValidatorRecord, validator.principal)
            if record is None:
                self.session.add(ValidatorRecord(
                    principal=validator.principal,
                    appointed_by=validator.appointed_by,
                    status=validator.status.value,
                ))
            elif record.status != validator.status.value:
                record.status = validator.status.value
                if validator.status == ValidatorStatus.REVOKED:
                    record.revoked_at = datetime.now(timezone.utc)

        # Validators must exist before developers reference them
        await self.session.flush()

        sequence = await self._developer_count()
        for developer in state.developers.values():
            record = await self.session.get(DeveloperRecord, developer.principal)
            if record is None:
                self.session.add(DeveloperRecord(
                    principal=developer.principal,
                    registered_by=developer.registered_by,
                    project_name=developer.project_name,
                    status=developer.status.value,
                    sequence=sequence,
                ))
                sequence += 1

        await self.session.flush()

    async def latest_block_height(self) -> int:
        """Height of the most recent stored block, 0 when none."""
        result = await self.session.execute(select(func.max(BlockRecord.height)))
        return result.scalar() or 0

    async def save_block(self, height: int, receipts: List[Dict[str, Any]]) -> BlockRecord:
        record = BlockRecord(height=height, tx_count=len(receipts), receipts=receipts)
        self.session.add(record)
        await self.session.flush()
        return record

    async def get_block(self, height: int) -> Optional[BlockRecord]:
        return await self.session.get(BlockRecord, height)

    async def _developer_count(self) -> int:
        result = await self.session.execute(select(func.count(DeveloperRecord.principal)))
        return result.scalar() or 0

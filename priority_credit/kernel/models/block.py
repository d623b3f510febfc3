"""
Mined blocks and their receipts.
"""

from datetime import datetime
from typing import Any, List

from sqlalchemy import DateTime, Integer, JSON, func
from sqlalchemy.orm import Mapped, mapped_column

from priority_credit.kernel.models.base import Base


class BlockRecord(Base):
    """A mined block: height plus one receipt per submitted call, in order."""

    __tablename__ = "blocks"

    height: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=False,
    )
    tx_count: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
    )
    receipts: Mapped[List[Any]] = mapped_column(
        JSON,
        nullable=False,
        default=list,
    )
    mined_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<BlockRecord height={self.height} txs={self.tx_count}>"

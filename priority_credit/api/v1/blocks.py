"""
Block submission endpoints.
"""

from fastapi import APIRouter, HTTPException, status

from priority_credit.api.deps import DbSession, Processor
from priority_credit.chain.chain import Tx
from priority_credit.kernel.repository import RegistryRepository
from priority_credit.logging_config import get_logger
from priority_credit.schemas.chain import BlockResponse, BlockSubmitRequest
from priority_credit.schemas.common import ErrorResponse

logger = get_logger(__name__)

router = APIRouter(responses={404: {"model": ErrorResponse}})


@router.post("", response_model=BlockResponse, status_code=status.HTTP_201_CREATED)
async def submit_block(
    data: BlockSubmitRequest,
    processor: Processor,
):
    """
    Mine one block from the submitted calls.

    Calls run in order. Each receipt succeeds or fails on its own; a failed
    receipt does not fail the request.
    """
    contract_name = processor.settings.contract_name
    txs = [
        Tx.contract_call(
            contract=tx.contract or contract_name,
            function=tx.function,
            args=tx.args,
            sender=tx.sender,
        )
        for tx in data.transactions
    ]

    block = await processor.submit_block(txs)
    logger.info("Block submitted", extra={"height": block.height, "tx_count": len(txs)})

    return BlockResponse.from_receipts(
        block.height,
        [receipt.to_dict() for receipt in block.receipts],
    )


@router.get("/{height}", response_model=BlockResponse)
async def get_block(
    height: int,
    db: DbSession,
):
    """Receipts of a previously mined block."""
    record = await RegistryRepository(db).get_block(height)
    if not record:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Block not found",
        )
    return BlockResponse.from_receipts(record.height, record.receipts)

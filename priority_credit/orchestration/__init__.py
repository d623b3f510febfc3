"""
Block orchestration: persisted block submission.
"""

from priority_credit.orchestration.block_processor import BlockProcessor

__all__ = ["BlockProcessor"]

"""
Interaction Contracts

Responsibility:
Define valid user actions and their intent.
No execution logic - just pure intent modeling.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from catalog.contracts import ArtworkRecord


class ActionType(Enum):
    """Types of user interaction."""
    # Table
    PAGE_CHANGE = "page_change"
    SELECTION_CHANGE = "selection_change"

    # Selection panel
    REMOVE_SELECTED = "remove_selected"


@dataclass(frozen=True)
class InteractionRequest:
    """
    A specific user intent.

    PAYLOAD BY ACTION:
    ==================
    PAGE_CHANGE       -> page_index (0-based)
    SELECTION_CHANGE  -> records (full checked set of the visible rows)
    REMOVE_SELECTED   -> records (exactly one)
    """
    action: ActionType
    page_index: Optional[int] = None
    records: Tuple[ArtworkRecord, ...] = ()

    @classmethod
    def page_change(cls, page_index: int) -> 'InteractionRequest':
        return cls(action=ActionType.PAGE_CHANGE, page_index=page_index)

    @classmethod
    def selection_change(cls, records) -> 'InteractionRequest':
        return cls(action=ActionType.SELECTION_CHANGE, records=tuple(records))

    @classmethod
    def remove_selected(cls, record: ArtworkRecord) -> 'InteractionRequest':
        return cls(
            action=ActionType.REMOVE_SELECTED,
            records=(record,),
        )

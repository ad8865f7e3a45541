"""
Selection Accumulator

Cross-page selection of artworks, keyed by stable id.

LIFECYCLE:
==========
- Starts empty
- Grows only through merge()
- Shrinks only through remove() / discard()
- Page navigation never touches it

MERGE IS ADD-ONLY:
==================
merge() receives the full checked state of the visible page but never
deletes. A row unchecked on the current page stays selected until it is
removed from the selection panel.
"""

from __future__ import annotations
from typing import Dict, Iterable, List, Optional, Sequence

from catalog.contracts import ArtworkRecord


class SelectionAccumulator:
    """
    Insertion-ordered mapping of artwork id -> ArtworkRecord.

    INVARIANT: every key equals the id of the record it maps to.
    """

    def __init__(self):
        self._selected: Dict[int, ArtworkRecord] = {}

    def merge(self, changed_visible_records: Iterable[ArtworkRecord]) -> None:
        """Add every reported record, keyed by id."""
        for record in changed_visible_records:
            self._selected[record.id] = record

    def visible_selection(self, page_records: Sequence[ArtworkRecord]) -> List[ArtworkRecord]:
        """Records of the page whose id is selected, in page order."""
        return [record for record in page_records if record.id in self._selected]

    def remove(self, record: ArtworkRecord) -> None:
        """Drop the record's id. No-op if absent."""
        self.discard(record.id)

    def discard(self, artwork_id: int) -> None:
        self._selected.pop(artwork_id, None)

    def all(self) -> List[ArtworkRecord]:
        """Every selected record, in insertion order."""
        return list(self._selected.values())

    def get(self, artwork_id: int) -> Optional[ArtworkRecord]:
        return self._selected.get(artwork_id)

    def ids(self) -> List[int]:
        return list(self._selected)

    def __contains__(self, artwork_id: object) -> bool:
        return artwork_id in self._selected

    def __len__(self) -> int:
        return len(self._selected)

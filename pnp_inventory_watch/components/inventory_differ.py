"""
Novelty detection between two inventory snapshots.
"""

from typing import List

from ..models.inventory import InventoryItem


def diff(
    current: List[InventoryItem], previous: List[InventoryItem]
) -> List[InventoryItem]:
    """
    Return the items of ``current`` whose id is absent from ``previous``.

    Ids are compared as exact, case-sensitive strings. The result keeps the
    order of ``current``. An empty ``previous`` makes every current item new.
    """
    previous_ids = {item.id for item in previous}
    return [item for item in current if item.id not in previous_ids]

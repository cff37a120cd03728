"""
ChangeList container for ChangeOperation instances.
"""

from typing import List, Iterator, Optional, Callable, Any, Dict
from erd_compose_core.lib.descriptors.operations import ChangeOperation, ChangeCategory, ChangeKind


class ChangeList(list):
    """
    Ordered operations produced by the diff engine, with utilities for filtering and exporting to SQL.
    """
    def __init__(self, items: Optional[List[ChangeOperation]] = None):
        super().__init__(items or [])

    def __iter__(self) -> Iterator[ChangeOperation]:
        return super().__iter__()

    def __getitem__(self, item) -> Any:
        return super().__getitem__(item)

    def flatten(self) -> 'ChangeList':
        """Every operation with its chained operations expanded in place."""
        flat = []
        for op in self:
            flat.extend(op.flatten())
        return ChangeList(flat)

    def of_kind(self, kind: ChangeKind) -> 'ChangeList':
        return self.flatten().filter(lambda op: op.kind == kind)

    def by_category(self) -> Dict[ChangeCategory, 'ChangeList']:
        grouped = {category: ChangeList() for category in ChangeCategory}
        for op in self:
            grouped[op.category].append(op)
        return grouped

    def to_sql(self) -> str:
        # Import here to avoid circular dependency
        from erd_compose_core.lib.emitter import emit
        return emit(self)

    def to_dict_list(self) -> List[dict]:
        return [op.to_dict() for op in self]

    def __str__(self):
        return f"ChangeList({len(self)} operations)"

    def __repr__(self):
        return f"ChangeList(operations={list.__repr__(self)})"

    def filter(self, predicate: Callable[[ChangeOperation], bool]) -> 'ChangeList':
        return ChangeList([op for op in self if predicate(op)])

from typing import Dict, Iterator, List, Optional, Sequence, Union

import pandas as pd

from .models import FieldMapping, ReconciliationResult, Status
from .utils import as_text

STATUS_ORDER = [
    Status.MATCHED,
    Status.MISMATCHED,
    Status.MISSING_IN_A,
    Status.MISSING_IN_B,
    Status.DUPLICATE,
]


def _matches_search(result: ReconciliationResult, term: str) -> bool:
    for data in (result.data_a or {}, result.data_b or {}):
        if any(term in as_text(v).lower() for v in data.values()):
            return True
    return term in result.reason.lower()


class ResultSet:
    """
    Ordered, read-only view over one reconciliation run.

    Keeps the engine's ordering and adds the counting, filtering and tabular
    export that reporting needs.
    """

    def __init__(self, results: Sequence[ReconciliationResult]):
        self._results = tuple(results)

    def __len__(self) -> int:
        return len(self._results)

    def __iter__(self) -> Iterator[ReconciliationResult]:
        return iter(self._results)

    def __getitem__(self, i: Union[int, slice]):
        if isinstance(i, slice):
            return ResultSet(self._results[i])
        return self._results[i]

    def __eq__(self, other: object) -> bool:
        if isinstance(other, ResultSet):
            return self._results == other._results
        return NotImplemented

    def __repr__(self) -> str:
        return f"ResultSet({self.counts()})"

    def counts(self) -> Dict[str, int]:
        out = {s.value: 0 for s in STATUS_ORDER}
        for r in self._results:
            out[Status(r.status).value] += 1
        return out

    def by_status(self, status: Union[Status, str]) -> "ResultSet":
        wanted = Status(status)
        return ResultSet([r for r in self._results if r.status == wanted])

    def filter(self, status: Optional[Union[Status, str]] = None, search: str = "") -> "ResultSet":
        """
        status None or "all" keeps every status. search is a case-insensitive
        substring match over both rows' values and the reason.
        """
        out: List[ReconciliationResult] = list(self._results)
        if status is not None and status != "all":
            wanted = Status(status)
            out = [r for r in out if r.status == wanted]
        if search:
            term = search.lower()
            out = [r for r in out if _matches_search(r, term)]
        return ResultSet(out)

    def to_frame(self, mappings: Sequence[FieldMapping]) -> pd.DataFrame:
        """Export layout: status, key, reason, then A-side and B-side values in mapping order."""
        cols_a = [f"{m.file_a} (A)" for m in mappings]
        cols_b = [f"{m.file_b} (B)" for m in mappings]
        columns = ["Status", "Reference Key", "Reason"] + cols_a + cols_b

        records = []
        for r in self._results:
            data_a = r.data_a or {}
            data_b = r.data_b or {}
            records.append(
                [Status(r.status).value, r.reference_key, r.reason]
                + [as_text(data_a.get(m.file_a)) for m in mappings]
                + [as_text(data_b.get(m.file_b)) for m in mappings]
            )
        # duplicate header labels are allowed, so build positionally
        return pd.DataFrame(records, columns=columns, dtype=object)

    def summary(self) -> Dict[str, object]:
        return {
            "total_results": len(self._results),
            "status_counts": self.counts(),
        }

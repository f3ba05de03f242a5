import logging
from types import MappingProxyType
from typing import Dict, List, Mapping, Sequence, Tuple, Union

from .compare import values_equal
from .explain import explain_mismatch, join_reasons
from .mapping import find_reference_mapping, validate_mappings
from .models import Dataset, FieldMapping, ReconciliationResult, Status, ToleranceSetting
from .rules import find_tolerance

logger = logging.getLogger(__name__)

Row = Dict[str, str]
Rows = Union[Dataset, Sequence[Row]]


def _rows(data: Rows) -> Sequence[Row]:
    return data.rows if isinstance(data, Dataset) else data


def _snapshot(row: Row) -> Mapping[str, str]:
    # results hold a read-only copy, detached from the caller's row
    return MappingProxyType(dict(row))


def row_key(row: Mapping[str, str], field: str) -> str:
    return str(row.get(field) or "").strip()


def build_index(rows: Sequence[Row],
                field: str,
                side: str) -> Tuple[Dict[str, Mapping[str, str]], List[ReconciliationResult]]:
    """
    Keys rows by their trimmed reference value, keeping the first occurrence.
    Every later occurrence of a key becomes a duplicate result for this side.
    Rows with a blank key are left out entirely.
    """
    index: Dict[str, Mapping[str, str]] = {}
    duplicates: List[ReconciliationResult] = []
    blank = 0

    for row in rows:
        key = row_key(row, field)
        if not key:
            blank += 1
            continue
        row = _snapshot(row)
        if key in index:
            duplicates.append(ReconciliationResult(
                status=Status.DUPLICATE,
                reference_key=key,
                reason=f"Duplicate entry found in File {side}",
                data_a=row if side == "A" else None,
                data_b=row if side == "B" else None,
            ))
        else:
            index[key] = row

    if blank:
        logger.debug("File %s: %d rows with a blank '%s' skipped", side, blank, field)
    return index, duplicates


def compare_rows(row_a: Mapping[str, str],
                 row_b: Mapping[str, str],
                 mappings: Sequence[FieldMapping],
                 tolerances: Sequence[ToleranceSetting]) -> List[str]:
    """Mismatch reasons for one keyed pair, in mapping order."""
    reasons = []
    for m in mappings:
        if m.is_reference:
            continue
        value_a = row_a.get(m.file_a)
        value_b = row_b.get(m.file_b)
        tolerance = find_tolerance(tolerances, m.field_type)
        if not values_equal(value_a, value_b, m.field_type, tolerance):
            reasons.append(explain_mismatch(m.field_type, value_a, value_b, tolerance))
    return reasons


def reconcile(dataset_a: Rows,
              dataset_b: Rows,
              mappings: Sequence[FieldMapping],
              tolerances: Sequence[ToleranceSetting]) -> List[ReconciliationResult]:
    """
    Matches A and B on the reference mapping and classifies every keyed row.

    Output order: duplicates as met while indexing A then B, then one result per
    key of A in first-occurrence order, then keys found only in B.
    Without a reference mapping there is nothing to key on and the result is empty.
    """
    ref = find_reference_mapping(list(mappings))
    if ref is None:
        logger.warning("No reference mapping given; nothing to reconcile")
        return []

    index_a, dup_a = build_index(_rows(dataset_a), ref.file_a, "A")
    index_b, dup_b = build_index(_rows(dataset_b), ref.file_b, "B")
    results: List[ReconciliationResult] = dup_a + dup_b

    for key, row_a in index_a.items():
        row_b = index_b.get(key)
        if row_b is None:
            results.append(ReconciliationResult(
                status=Status.MISSING_IN_B,
                reference_key=key,
                reason="Record exists in File A but missing in File B",
                data_a=row_a,
            ))
            continue

        reasons = compare_rows(row_a, row_b, mappings, tolerances)
        if reasons:
            results.append(ReconciliationResult(
                status=Status.MISMATCHED,
                reference_key=key,
                reason=join_reasons(reasons),
                data_a=row_a,
                data_b=row_b,
            ))
        else:
            results.append(ReconciliationResult(
                status=Status.MATCHED,
                reference_key=key,
                reason="All fields match within tolerance",
                data_a=row_a,
                data_b=row_b,
            ))

    for key, row_b in index_b.items():
        if key not in index_a:
            results.append(ReconciliationResult(
                status=Status.MISSING_IN_A,
                reference_key=key,
                reason="Record exists in File B but missing in File A",
                data_b=row_b,
            ))

    logger.info(
        "Reconciled %d keys from A and %d keys from B into %d results",
        len(index_a), len(index_b), len(results),
    )
    return results


def reconcile_checked(dataset_a: Rows,
                      dataset_b: Rows,
                      mappings: Sequence[FieldMapping],
                      tolerances: Sequence[ToleranceSetting]) -> List[ReconciliationResult]:
    """Same as reconcile, but a missing or ambiguous reference mapping raises MappingError."""
    validate_mappings(list(mappings))
    return reconcile(dataset_a, dataset_b, mappings, tolerances)

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Mapping, Optional


class Status(str, Enum):
    MATCHED = "matched"
    MISMATCHED = "mismatched"
    MISSING_IN_A = "missing_in_a"
    MISSING_IN_B = "missing_in_b"
    DUPLICATE = "duplicate"


class ToleranceType(str, Enum):
    ABSOLUTE = "absolute"
    PERCENTAGE = "percentage"
    DAYS = "days"


@dataclass(frozen=True)
class Dataset:
    """One parsed input file: headers in file order, rows as header -> raw string."""
    name: str
    headers: List[str]
    rows: List[Dict[str, str]]
    recognized_fields: Dict[str, str] = field(default_factory=dict)

    def __len__(self) -> int:
        return len(self.rows)


@dataclass(frozen=True)
class FieldMapping:
    file_a: str
    file_b: str
    field_type: str
    is_reference: bool = False


@dataclass(frozen=True)
class ToleranceSetting:
    field_type: str
    tolerance_type: ToleranceType
    value: float


@dataclass(frozen=True)
class ReconciliationResult:
    status: Status
    reference_key: str
    reason: str
    data_a: Optional[Mapping[str, str]] = None
    data_b: Optional[Mapping[str, str]] = None

from .engine import reconcile, reconcile_checked
from .models import Dataset, FieldMapping, ReconciliationResult, Status, ToleranceSetting, ToleranceType
from .results import ResultSet

__all__ = [
    "Dataset",
    "FieldMapping",
    "ReconciliationResult",
    "ResultSet",
    "Status",
    "ToleranceSetting",
    "ToleranceType",
    "reconcile",
    "reconcile_checked",
]

from typing import Any, List, Optional

from .compare import DATE_FIELD
from .models import ToleranceSetting, ToleranceType
from .utils import as_text, coerce_amount, coerce_date, date_diff_days

REASON_SEPARATOR = "; "


def explain_mismatch(field_type: str,
                     value_a: Any,
                     value_b: Any,
                     tolerance: Optional[ToleranceSetting] = None) -> str:
    """Human-readable reason for a field pair already known to differ."""
    shown = f"({as_text(value_a)} vs {as_text(value_b)})"

    if tolerance is not None and field_type == DATE_FIELD:
        date_a, date_b = coerce_date(value_a), coerce_date(value_b)
        if date_a is not None and date_b is not None:
            return f"{field_type} differs by {date_diff_days(date_a, date_b):.1f} days {shown}"

    if tolerance is not None and field_type != DATE_FIELD:
        num_a, num_b = coerce_amount(value_a), coerce_amount(value_b)
        if num_a is not None and num_b is not None:
            diff = abs(num_a - num_b)
            if tolerance.tolerance_type == ToleranceType.PERCENTAGE:
                avg = (abs(num_a) + abs(num_b)) / 2
                pct = 0.0 if avg == 0 else (diff / avg) * 100
                return f"{field_type} differs by {pct:.2f}% {shown}"
            return f"{field_type} differs by {diff:.2f} {shown}"

    return f"{field_type} differs {shown}"


def join_reasons(reasons: List[str]) -> str:
    return REASON_SEPARATOR.join(reasons)

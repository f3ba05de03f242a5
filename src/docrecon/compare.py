from typing import Any, Optional

from .models import ToleranceSetting, ToleranceType
from .utils import as_text, coerce_amount, coerce_date, date_diff_days, is_blank

DATE_FIELD = "Date"


def _exact(value_a: Any, value_b: Any) -> bool:
    return as_text(value_a).strip() == as_text(value_b).strip()


def values_equal(value_a: Any,
                 value_b: Any,
                 field_type: str,
                 tolerance: Optional[ToleranceSetting] = None) -> bool:
    """
    Type-aware comparison of one mapped field pair.

    Without a tolerance the values are compared as trimmed, case-insensitive text.
    Date fields are compared by day distance; every other tolerant field is read
    as a number. Values that do not parse fall back to trimmed exact text.
    """
    blank_a, blank_b = is_blank(value_a), is_blank(value_b)
    if blank_a and blank_b:
        return True
    if blank_a or blank_b:
        return False

    if tolerance is None:
        return str(value_a).strip().lower() == str(value_b).strip().lower()

    if field_type == DATE_FIELD:
        date_a, date_b = coerce_date(value_a), coerce_date(value_b)
        if date_a is None or date_b is None:
            return _exact(value_a, value_b)
        return date_diff_days(date_a, date_b) <= tolerance.value

    num_a, num_b = coerce_amount(value_a), coerce_amount(value_b)
    if num_a is None or num_b is None:
        return _exact(value_a, value_b)

    diff = abs(num_a - num_b)
    if tolerance.tolerance_type == ToleranceType.PERCENTAGE:
        avg = (abs(num_a) + abs(num_b)) / 2
        if avg == 0:
            return diff == 0
        return (diff / avg) * 100 <= tolerance.value

    # absolute, and days on a non-date field
    return diff <= tolerance.value

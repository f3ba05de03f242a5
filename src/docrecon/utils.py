import math
import re
from typing import Any, Optional

import pandas as pd

_NON_NUMERIC = re.compile(r"[^0-9.\-]")
_LEADING_FLOAT = re.compile(r"-?(?:\d+(?:\.\d*)?|\.\d+)")
_NON_ALNUM = re.compile(r"[^a-z0-9]")

SECONDS_PER_DAY = 60 * 60 * 24


def is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, float) and math.isnan(value):
        return True
    return isinstance(value, str) and value == ""


def as_text(value: Any) -> str:
    return "" if is_blank(value) else str(value)


def normalize_header(s: str) -> str:
    return _NON_ALNUM.sub("_", str(s).lower())


def coerce_amount(value: Any) -> Optional[float]:
    """
    Strips currency symbols, thousands separators and whitespace, then reads the
    leading number. Returns None when nothing numeric is left.
    """
    if is_blank(value):
        return None
    cleaned = _NON_NUMERIC.sub("", str(value))
    m = _LEADING_FLOAT.match(cleaned)
    if not m:
        return None
    return float(m.group(0))


def coerce_date(value: Any) -> Optional[pd.Timestamp]:
    if is_blank(value):
        return None
    ts = pd.to_datetime(str(value).strip(), errors="coerce")
    if pd.isna(ts):
        return None
    # mixed aware/naive values must stay comparable
    if ts.tzinfo is not None:
        ts = ts.tz_convert("UTC").tz_localize(None)
    return ts


def date_diff_days(a: pd.Timestamp, b: pd.Timestamp) -> float:
    return abs((a - b).total_seconds()) / SECONDS_PER_DAY

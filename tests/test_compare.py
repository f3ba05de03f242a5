from docrecon.compare import values_equal
from docrecon.models import ToleranceSetting, ToleranceType

ABS_CENT = ToleranceSetting("Amount", ToleranceType.ABSOLUTE, 0.01)
ONE_DAY = ToleranceSetting("Date", ToleranceType.DAYS, 1)


def test_blank_values():
    assert values_equal("", None, "Amount", ABS_CENT)
    assert values_equal(None, None, "Supplier")
    assert not values_equal("", "1", "Amount", ABS_CENT)
    assert not values_equal("Acme", None, "Supplier")


def test_whitespace_only_is_not_blank():
    assert not values_equal("  ", "", "Supplier")


def test_no_tolerance_is_trimmed_case_insensitive():
    assert values_equal(" ACME Ltd ", "acme ltd", "Supplier")
    assert not values_equal("Acme", "Acme Ltd", "Supplier")
    # numbers are text without a tolerance
    assert not values_equal("100", "100.00", "Amount")


def test_absolute_tolerance_is_inclusive():
    tol = ToleranceSetting("Amount", ToleranceType.ABSOLUTE, 1.5)
    assert values_equal("100", "101.5", "Amount", tol)
    assert not values_equal("100", "101.51", "Amount", tol)


def test_numeric_sanitization():
    tol = ToleranceSetting("Amount", ToleranceType.ABSOLUTE, 0)
    assert values_equal("$1,234.50", " 1234.5 ", "Amount", tol)
    assert values_equal("EUR -10", "-10.00", "Amount", tol)
    assert values_equal("12abc", "12", "Amount", tol)


def test_unparseable_numbers_fall_back_to_exact_text():
    assert values_equal("N/A", " N/A", "Amount", ABS_CENT)
    assert not values_equal("N/A", "n/a", "Amount", ABS_CENT)
    assert not values_equal("N/A", "5", "Amount", ABS_CENT)


def test_percentage_tolerance():
    pct = ToleranceSetting("Amount", ToleranceType.PERCENTAGE, 1)
    assert values_equal("100", "101", "Amount", pct)
    tight = ToleranceSetting("Amount", ToleranceType.PERCENTAGE, 0.5)
    assert not values_equal("100", "101", "Amount", tight)


def test_percentage_both_zero():
    zero = ToleranceSetting("Tax", ToleranceType.PERCENTAGE, 0)
    assert values_equal("0", "0.00", "Tax", zero)
    wide = ToleranceSetting("Tax", ToleranceType.PERCENTAGE, 100)
    assert not values_equal("0", "1", "Tax", wide)


def test_date_tolerance_in_days():
    assert values_equal("2024-01-01", "2024-01-02", "Date", ONE_DAY)
    assert not values_equal("2024-01-01", "2024-01-03", "Date", ONE_DAY)
    # fractional days count
    assert not values_equal("2024-01-01", "2024-01-02 12:00", "Date", ONE_DAY)
    wider = ToleranceSetting("Date", ToleranceType.DAYS, 1.5)
    assert values_equal("2024-01-01", "2024-01-02 12:00", "Date", wider)


def test_unparseable_dates_fall_back_to_exact_text():
    assert values_equal("soon", "soon ", "Date", ONE_DAY)
    assert not values_equal("Soon", "soon", "Date", ONE_DAY)


def test_percentage_tolerance_is_inclusive():
    # 100 vs 102 differs by 2 / 101 = ~1.98%
    pct = ToleranceSetting("Amount", ToleranceType.PERCENTAGE, 2)
    assert values_equal("100", "102", "Amount", pct)
    # 100 vs 102.1: ~2.08%
    assert not values_equal("100", "102.1", "Amount", pct)
    # exactly 2%: diff 2, average 100
    assert values_equal("99", "101", "Amount", pct)
    assert not values_equal("99", "101.01", "Amount", pct)

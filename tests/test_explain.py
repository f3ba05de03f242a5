from docrecon.explain import explain_mismatch, join_reasons
from docrecon.models import ToleranceSetting, ToleranceType


def test_absolute_amount_reason():
    tol = ToleranceSetting("Amount", ToleranceType.ABSOLUTE, 0.01)
    assert explain_mismatch("Amount", "100.00", "100.02", tol) == "Amount differs by 0.02 (100.00 vs 100.02)"


def test_percentage_reason():
    tol = ToleranceSetting("Amount", ToleranceType.PERCENTAGE, 1)
    assert explain_mismatch("Amount", "100", "110", tol) == "Amount differs by 9.52% (100 vs 110)"


def test_date_reason():
    tol = ToleranceSetting("Date", ToleranceType.DAYS, 1)
    assert explain_mismatch("Date", "2024-01-01", "2024-01-04", tol) == "Date differs by 3.0 days (2024-01-01 vs 2024-01-04)"


def test_numeric_reason_follows_tolerance_not_field_name():
    tol = ToleranceSetting("Weight", ToleranceType.ABSOLUTE, 0.5)
    assert explain_mismatch("Weight", "10kg", "12kg", tol) == "Weight differs by 2.00 (10kg vs 12kg)"


def test_generic_reasons():
    assert explain_mismatch("Supplier", "Acme", "Globex") == "Supplier differs (Acme vs Globex)"
    tol = ToleranceSetting("Date", ToleranceType.DAYS, 1)
    assert explain_mismatch("Date", "soon", "later", tol) == "Date differs (soon vs later)"
    amt = ToleranceSetting("Amount", ToleranceType.ABSOLUTE, 0.01)
    assert explain_mismatch("Amount", "", "5", amt) == "Amount differs ( vs 5)"


def test_join_reasons():
    assert join_reasons(["a", "b"]) == "a; b"
    assert join_reasons([]) == ""

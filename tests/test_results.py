from docrecon.engine import reconcile
from docrecon.models import FieldMapping, Status, ToleranceSetting, ToleranceType
from docrecon.results import ResultSet

MAPPINGS = [
    FieldMapping("Invoice No", "inv_number", "Invoice Number", is_reference=True),
    FieldMapping("Total", "amount", "Amount"),
]
TOLERANCES = [ToleranceSetting("Amount", ToleranceType.ABSOLUTE, 0.01)]

FILE_A = [
    {"Invoice No": "INV-1", "Total": "10.00"},
    {"Invoice No": "INV-2", "Total": "20.00"},
    {"Invoice No": "INV-2", "Total": "21.00"},
    {"Invoice No": "INV-3", "Total": "30.00"},
]
FILE_B = [
    {"inv_number": "INV-1", "amount": "10.00"},
    {"inv_number": "INV-2", "amount": "25.00"},
    {"inv_number": "INV-9", "amount": "Acme refund"},
]


def _results() -> ResultSet:
    return ResultSet(reconcile(FILE_A, FILE_B, MAPPINGS, TOLERANCES))


def test_counts_cover_every_status():
    counts = _results().counts()
    assert counts == {
        "matched": 1,
        "mismatched": 1,
        "missing_in_a": 1,
        "missing_in_b": 1,
        "duplicate": 1,
    }
    assert ResultSet([]).counts() == dict.fromkeys(counts, 0)


def test_sequence_behaviour():
    rs = _results()
    assert len(rs) == 5
    assert rs[0].status == Status.DUPLICATE
    assert isinstance(rs[1:3], ResultSet)
    assert len(rs[1:3]) == 2
    assert [r.reference_key for r in rs] == ["INV-2", "INV-1", "INV-2", "INV-3", "INV-9"]


def test_filter_by_status():
    rs = _results()
    assert [r.reference_key for r in rs.filter(status="mismatched")] == ["INV-2"]
    assert len(rs.filter(status="all")) == 5
    assert len(rs.filter()) == 5
    assert [r.reference_key for r in rs.by_status(Status.MISSING_IN_A)] == ["INV-9"]


def test_filter_by_search():
    rs = _results()
    # B-side value
    assert [r.reference_key for r in rs.filter(search="acme")] == ["INV-9"]
    # reason text
    assert [r.status for r in rs.filter(search="DIFFERS BY 5.00")] == [Status.MISMATCHED]
    # combined with status
    assert len(rs.filter(status="matched", search="inv-2")) == 0


def test_to_frame_layout():
    df = _results().to_frame(MAPPINGS)
    assert list(df.columns) == [
        "Status", "Reference Key", "Reason",
        "Invoice No (A)", "Total (A)",
        "inv_number (B)", "amount (B)",
    ]
    missing_a = df.iloc[-1].tolist()
    assert missing_a == [
        "missing_in_a", "INV-9", "Record exists in File B but missing in File A",
        "", "", "INV-9", "Acme refund",
    ]
    dup = df.iloc[0].tolist()
    assert dup[3:] == ["INV-2", "21.00", "", ""]


def test_to_frame_empty():
    df = ResultSet([]).to_frame(MAPPINGS)
    assert len(df) == 0
    assert len(df.columns) == 7


def test_summary():
    summary = _results().summary()
    assert summary["total_results"] == 5
    assert summary["status_counts"]["duplicate"] == 1

from typing import Dict, List

from .utils import normalize_header

# field type -> header synonyms, in lookup priority order
FIELD_SYNONYMS: Dict[str, List[str]] = {
    "Invoice Number": [
        "invoice_no", "inv_no", "invoice_number", "inv_number", "bill_no", "bill_number",
        "invoice id", "inv id", "document_no", "doc_no", "reference", "ref_no",
    ],
    "Date": [
        "date", "invoice_date", "inv_date", "transaction_date", "txn_date", "posted_date",
        "created_date", "due_date", "issue_date", "billing_date",
    ],
    "Amount": [
        "amount", "total", "total_amount", "invoice_amount", "inv_amount", "net_amount",
        "gross_amount", "subtotal", "value", "price", "cost",
    ],
    "Tax": [
        "tax", "vat", "tax_amount", "vat_amount", "sales_tax", "gst", "tax_value",
    ],
    "Quantity": [
        "quantity", "qty", "units", "count", "number_of_items", "items",
    ],
    "Description": [
        "description", "desc", "item_description", "product_description", "details",
        "item_name", "product_name", "service_description",
    ],
    "Supplier": [
        "supplier", "vendor", "supplier_name", "vendor_name", "company", "company_name",
    ],
    "Customer": [
        "customer", "client", "customer_name", "client_name", "buyer",
    ],
}

FIELD_TYPES: List[str] = list(FIELD_SYNONYMS)


def recognize_field(header: str) -> str:
    """Returns the first field type with a synonym overlapping the header, or ""."""
    norm = normalize_header(header)
    for field_type, synonyms in FIELD_SYNONYMS.items():
        if any(syn in norm or norm in syn for syn in synonyms):
            return field_type
    return ""


def recognize_fields(headers: List[str]) -> Dict[str, str]:
    recognized = {}
    for h in headers:
        field_type = recognize_field(h)
        if field_type:
            recognized[h] = field_type
    return recognized

import logging
import os
import zipfile
from typing import Optional

import pandas as pd
from openpyxl.utils.exceptions import InvalidFileException
from xlrd import XLRDError

from .errors import IngestError
from .models import Dataset
from .recognize import recognize_fields

logger = logging.getLogger(__name__)

CSV_EXTENSIONS = (".csv",)
EXCEL_ENGINES = {
    ".xlsx": "openpyxl",
    ".xlsm": "openpyxl",
    ".xls": "xlrd",
}
SUPPORTED_EXTENSIONS = CSV_EXTENSIONS + tuple(EXCEL_ENGINES)

WORKBOOK_ERRORS = (zipfile.BadZipFile, InvalidFileException, XLRDError)


def _read_frame(path: str, ext: str) -> pd.DataFrame:
    # every cell stays a string; typing happens per field at comparison time
    if ext in CSV_EXTENSIONS:
        return pd.read_csv(
            path,
            dtype=str,
            keep_default_na=False,
            skip_blank_lines=True,
            skipinitialspace=True,
            encoding="utf-8-sig",
        )
    return pd.read_excel(path, dtype=str, engine=EXCEL_ENGINES[ext]).fillna("")


def load_dataset(path: str, name: Optional[str] = None) -> Dataset:
    """
    Reads a CSV or Excel export into a Dataset of string cells.

    Any problem that would leave the engine without usable rows (missing or empty
    file, no header row, bad encoding, unreadable workbook, unsupported format)
    raises IngestError.
    """
    name = name or os.path.basename(path)
    ext = os.path.splitext(path)[1].lower()
    if ext not in SUPPORTED_EXTENSIONS:
        raise IngestError(
            f"Unsupported file type '{ext or path}' for {name}. "
            f"Supported: {', '.join(SUPPORTED_EXTENSIONS)}"
        )
    if not os.path.exists(path):
        raise IngestError(f"File not found: {path}")
    if os.path.getsize(path) == 0:
        raise IngestError(f"File is empty: {name}")

    try:
        df = _read_frame(path, ext)
    except pd.errors.EmptyDataError as e:
        raise IngestError(f"File is empty: {name}") from e
    except UnicodeDecodeError as e:
        raise IngestError(f"Could not decode {name} as UTF-8 text: {e.reason}") from e
    except pd.errors.ParserError as e:
        raise IngestError(f"Could not parse {name}: {e}") from e
    except WORKBOOK_ERRORS as e:
        raise IngestError(f"Could not read workbook {name}: {e}") from e
    except (ValueError, OSError) as e:
        raise IngestError(f"Could not read {name}: {e}") from e

    headers = [str(c).strip() for c in df.columns]
    if not headers or all(not h or h.startswith("Unnamed:") for h in headers):
        raise IngestError(f"No header row found in {name}")
    df.columns = headers

    rows = [{h: str(v) for h, v in rec.items()} for rec in df.to_dict(orient="records")]
    recognized = recognize_fields(headers)

    logger.info("Loaded %s: %d rows, %d columns, %d recognized fields",
                name, len(rows), len(headers), len(recognized))
    return Dataset(name=name, headers=headers, rows=rows, recognized_fields=recognized)

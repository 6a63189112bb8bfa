# app/screens/evaluations/importer.py
# -------------------------------------------------------------------
# Bulk evaluation import
# - First sheet of an .xlsx workbook (or a .csv file)
# - Fixed header -> field mapping, marks always 0
# - Whole batch goes out in one POST /api/evaluations/bulk
# -------------------------------------------------------------------
from __future__ import annotations

import io
import logging
from datetime import date, datetime
from pathlib import Path
from typing import Any, Dict, List, Optional

import pandas as pd

from core.api import ApiError
from core.crud import CrudController

log = logging.getLogger(__name__)

# Spreadsheet header -> evaluation field
IMPORT_COLUMNS: Dict[str, str] = {
    "Candidate Name": "candidateName",
    "Course Name": "courseName",
    "Course Type": "courseType",
    "Location": "location",
    "Duration": "duration",
    "Date": "date",
    "Status": "status",
    "Remark": "remark",
}

BULK_IMPORT_ERROR = "Failed to process the uploaded file. Please check the file format and try again."


class EvaluationImportError(Exception):
    pass


def _cell(value: Any) -> str:
    """Normalize a spreadsheet cell to the string the API expects."""
    if value is None:
        return ""
    if isinstance(value, float) and pd.isna(value):
        return ""
    if value is pd.NaT:
        return ""
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, float) and value.is_integer():
        # 12.0 -> "12"
        return str(int(value))
    return str(value).strip()


def _read_first_sheet(data: bytes, filename: str) -> pd.DataFrame:
    ext = Path(filename or "").suffix.lower()
    buf = io.BytesIO(data)
    if ext == ".xlsx":
        return pd.read_excel(buf, sheet_name=0, engine="openpyxl", dtype=object)
    if ext == ".csv":
        return pd.read_csv(buf, dtype=object)
    raise EvaluationImportError(f"Unsupported file type: {ext or filename!r}")


def parse_evaluation_sheet(data: bytes, filename: str) -> List[Dict[str, Any]]:
    """
    Parse an uploaded evaluations sheet into evaluation-shaped records.
    Any "Marks" column is ignored; imported evaluations start at 0 marks.
    """
    try:
        df = _read_first_sheet(data, filename)
    except EvaluationImportError:
        raise
    except Exception as e:  # noqa: BLE001
        raise EvaluationImportError(f"Could not read {filename}: {e}") from e

    df.columns = [str(c).strip() for c in df.columns]
    if not any(header in df.columns for header in IMPORT_COLUMNS):
        raise EvaluationImportError(
            f"No recognised columns in {filename}; expected {', '.join(IMPORT_COLUMNS)}"
        )

    df = df.dropna(axis=0, how="all")
    if df.empty:
        raise EvaluationImportError(f"{filename} has no data rows")

    records: List[Dict[str, Any]] = []
    for _, row in df.iterrows():
        rec = {field: _cell(row.get(header)) for header, field in IMPORT_COLUMNS.items()}
        rec["marks"] = 0
        records.append(rec)
    return records


def import_evaluations(ctrl: CrudController, data: bytes, filename: str) -> Optional[int]:
    """Parse and submit one batch; returns the row count, or None on failure."""
    ctrl.set_error(None)
    try:
        records = parse_evaluation_sheet(data, filename)
        ctrl.gateway.bulk_create(records)
    except (EvaluationImportError, ApiError) as e:
        log.error(f"Error processing file {filename}: {e}", exc_info=True)
        ctrl.set_error(BULK_IMPORT_ERROR, e)
        return None

    log.info(f"Imported {len(records)} evaluations from {filename}")
    ctrl.refresh()
    return len(records)


def template_workbook() -> bytes:
    buf = io.BytesIO()
    pd.DataFrame(columns=list(IMPORT_COLUMNS)).to_excel(buf, index=False, engine="openpyxl")
    return buf.getvalue()

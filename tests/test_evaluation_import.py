"""
Bulk evaluation import from spreadsheets.
"""
import io
from datetime import datetime

import pandas as pd
import pytest

from core.crud import CrudController
from core.entities import EVALUATIONS
from screens.evaluations.importer import (
    BULK_IMPORT_ERROR, IMPORT_COLUMNS, EvaluationImportError, import_evaluations,
    parse_evaluation_sheet, template_workbook,
)

HEADERS = ["Candidate Name", "Course Name", "Course Type", "Location", "Duration", "Date", "Status"]


def _xlsx(rows, columns, extra_sheet=None) -> bytes:
    buf = io.BytesIO()
    with pd.ExcelWriter(buf, engine="openpyxl") as writer:
        pd.DataFrame(rows, columns=columns).to_excel(writer, sheet_name="Evaluations", index=False)
        if extra_sheet is not None:
            extra_sheet.to_excel(writer, sheet_name="Other", index=False)
    return buf.getvalue()


def _rows(n):
    return [
        [f"Candidate {i}", "Python", "Basic", "HQ", "2 weeks", "2024-05-0%d" % (i + 1), "Completed"]
        for i in range(n)
    ]


def test_n_rows_produce_n_records_with_zero_marks():
    records = parse_evaluation_sheet(_xlsx(_rows(3), HEADERS), "scores.xlsx")
    assert len(records) == 3
    assert all(r["marks"] == 0 for r in records)
    assert records[0] == {
        "candidateName": "Candidate 0", "courseName": "Python", "courseType": "Basic",
        "location": "HQ", "duration": "2 weeks", "date": "2024-05-01",
        "status": "Completed", "remark": "", "marks": 0,
    }


def test_marks_column_is_ignored():
    data = _xlsx([["Ana", "Python", 95]], ["Candidate Name", "Course Name", "Marks"])
    (record,) = parse_evaluation_sheet(data, "scores.xlsx")
    assert record["marks"] == 0
    assert record["candidateName"] == "Ana"


def test_only_first_sheet_is_read():
    other = pd.DataFrame([["Zed", "Rust"]], columns=["Candidate Name", "Course Name"])
    records = parse_evaluation_sheet(_xlsx(_rows(2), HEADERS, extra_sheet=other), "scores.xlsx")
    assert [r["candidateName"] for r in records] == ["Candidate 0", "Candidate 1"]


def test_cells_are_normalized():
    data = _xlsx(
        [["Ana", "Python", None, "HQ", 12, datetime(2024, 3, 5), "Passed", "  good  "]],
        HEADERS + ["Remark"],
    )
    (record,) = parse_evaluation_sheet(data, "scores.xlsx")
    assert record["courseType"] == ""
    assert record["duration"] == "12"
    assert record["date"] == "2024-03-05"
    assert record["remark"] == "good"


def test_blank_rows_are_dropped():
    rows = _rows(2) + [[None] * len(HEADERS)]
    assert len(parse_evaluation_sheet(_xlsx(rows, HEADERS), "scores.xlsx")) == 2


def test_csv_upload_is_accepted():
    csv = "Candidate Name,Course Name,Duration\nAna,Python,3.0\n".encode("utf-8")
    (record,) = parse_evaluation_sheet(csv, "scores.csv")
    assert record["candidateName"] == "Ana"
    assert record["duration"] == "3.0"


@pytest.mark.parametrize("data,name", [
    (b"not a workbook", "scores.xlsx"),
    (b"whatever", "scores.pdf"),
])
def test_unreadable_files_raise(data, name):
    with pytest.raises(EvaluationImportError):
        parse_evaluation_sheet(data, name)


def test_sheet_without_known_headers_raises():
    with pytest.raises(EvaluationImportError):
        parse_evaluation_sheet(_xlsx([["x", "y"]], ["Foo", "Bar"]), "scores.xlsx")


def test_import_submits_one_batch_then_refetches(fake_gateway, state):
    gw = fake_gateway()
    ctrl = CrudController(EVALUATIONS, gw, state)

    count = import_evaluations(ctrl, _xlsx(_rows(4), HEADERS), "scores.xlsx")

    assert count == 4
    assert gw.methods() == ["bulk_create", "list"]
    assert len(gw.calls[0][1]) == 4
    assert len(ctrl.records) == 4
    assert ctrl.error is None


def test_import_submit_failure_sets_bulk_message(fake_gateway, state):
    gw = fake_gateway()
    gw.fail.add("bulk_create")
    ctrl = CrudController(EVALUATIONS, gw, state)
    assert import_evaluations(ctrl, _xlsx(_rows(1), HEADERS), "scores.xlsx") is None
    assert ctrl.error == BULK_IMPORT_ERROR
    assert "list" not in gw.methods()


def test_import_parse_failure_never_calls_api(fake_gateway, state):
    gw = fake_gateway()
    ctrl = CrudController(EVALUATIONS, gw, state)
    assert import_evaluations(ctrl, b"garbage", "scores.xlsx") is None
    assert ctrl.error == BULK_IMPORT_ERROR
    assert gw.calls == []


def test_bulk_message_differs_from_single_save_message():
    assert BULK_IMPORT_ERROR != "Failed to save evaluation. Please try again."


def test_template_has_import_headers():
    df = pd.read_excel(io.BytesIO(template_workbook()), engine="openpyxl")
    assert list(df.columns) == list(IMPORT_COLUMNS)
    assert df.empty

from __future__ import annotations

import io
from pathlib import Path

import pandas as pd

from src.ingestion import load_records, records_from_frame


def test_load_records_reads_header_csv_as_text(tmp_path: Path) -> None:
    export = tmp_path / "sales.csv"
    export.write_text(
        "created,short_desc,total_sold\n"
        "2024-01-10 08:00:00,Widget,5\n"
        "\n"
        "2024-02-11 09:30:00,Gadget,\n",
        encoding="utf-8",
    )

    records = load_records(export)

    assert records == [
        {"created": "2024-01-10 08:00:00", "short_desc": "Widget", "total_sold": "5"},
        {"created": "2024-02-11 09:30:00", "short_desc": "Gadget", "total_sold": ""},
    ]


def test_load_records_accepts_text_stream() -> None:
    stream = io.StringIO("created, short_desc ,total_sold\n2024-03-01,Widget,007\n")

    records = load_records(stream)

    assert records == [
        {"created": "2024-03-01", "short_desc": "Widget", "total_sold": "007"}
    ]


def test_load_records_raises_for_missing_file(tmp_path: Path) -> None:
    try:
        load_records(tmp_path / "missing.csv")
    except FileNotFoundError as exc:
        assert "missing.csv" in str(exc)
    else:
        raise AssertionError("Expected FileNotFoundError for a missing export.")


def test_records_from_frame_blanks_missing_values() -> None:
    frame = pd.DataFrame({"created": ["2024-01-10", None], "total_sold": [5, None]})

    records = records_from_frame(frame)

    assert records[1] == {"created": "", "total_sold": ""}
    assert records[0]["created"] == "2024-01-10"

from __future__ import annotations

import json
from pathlib import Path

import pytest

from payslip.errors import RecordFormatError
from payslip.pipeline.ingest import load_batch, load_records


def _write(path: Path, payload) -> Path:
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


def test_single_record(tmp_path: Path, acme_dict: dict) -> None:
    records = load_records(_write(tmp_path / "one.json", acme_dict))
    assert [r.id for r in records] == [acme_dict["id"]]


def test_record_list(tmp_path: Path, acme_dict: dict) -> None:
    second = {**acme_dict, "id": "rec-2"}
    records = load_records(_write(tmp_path / "many.json", [acme_dict, second]))
    assert [r.id for r in records] == [acme_dict["id"], "rec-2"]


def test_wrapped_batch_carries_organization(tmp_path: Path, acme_dict: dict) -> None:
    batch = load_batch(
        _write(tmp_path / "batch.json", {"organizationName": "Acme Corp", "records": [acme_dict]})
    )
    assert batch.organization_name == "Acme Corp"
    assert len(batch.records) == 1


def test_missing_file(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_records(tmp_path / "absent.json")


def test_invalid_json(tmp_path: Path) -> None:
    path = tmp_path / "broken.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(RecordFormatError, match="not valid JSON"):
        load_records(path)


def test_empty_list(tmp_path: Path) -> None:
    with pytest.raises(RecordFormatError, match="no records"):
        load_records(_write(tmp_path / "empty.json", []))


def test_bad_entry_names_its_position(tmp_path: Path, acme_dict: dict) -> None:
    with pytest.raises(RecordFormatError, match=r"bad.json\[1\]"):
        load_records(_write(tmp_path / "bad.json", [acme_dict, {"id": "x"}]))


def test_duplicate_ids(tmp_path: Path, acme_dict: dict) -> None:
    with pytest.raises(RecordFormatError, match="duplicate record id"):
        load_records(_write(tmp_path / "dupes.json", [acme_dict, acme_dict]))

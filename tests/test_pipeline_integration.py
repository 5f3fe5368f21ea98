from __future__ import annotations

import json
from pathlib import Path

from sqlmodel import select
from typer.testing import CliRunner

from payslip import notifications
from payslip.errors import RenderBackendError
from payslip.main import app
from payslip.models import Artifact, DocumentStatus, GeneratedPayslip, get_session
from payslip.pipeline.run import run_batch
from payslip.records import PayrollRecord


def test_batch_outputs_expected_artifacts(out_dir: Path, acme_dict: dict) -> None:
    second = {**acme_dict, "id": "f0f0f0f0-rec-2", "employee": {"user": {"name": "Sam Lee"}}}
    records = [PayrollRecord.from_dict(acme_dict), PayrollRecord.from_dict(second)]

    results = run_batch(records, organization_name="Acme Corp")
    assert results["FAILED"] == []
    assert results["READY"] == ["jane-doe-2024-06-a1b2c3d4", "sam-lee-2024-06-f0f0f0f0"]
    for slug in results["READY"]:
        assert (out_dir / slug / "payslip.pdf").read_bytes().startswith(b"%PDF")
        assert (out_dir / slug / "preview.png").exists()
        assert not (out_dir / f"{slug}.tmp").exists()

    with get_session() as session:
        rows = list(session.exec(select(GeneratedPayslip)))
        artifacts = list(session.exec(select(Artifact)))
    assert {row.status for row in rows} == {DocumentStatus.READY}
    assert len(artifacts) == 4

    # only the employee with a user account is notified
    inbox = notifications.get_for_user("user-42")
    assert [row.title for row in inbox] == ["Payslip Generated"]


def test_batch_without_notify_or_preview(out_dir: Path, acme_dict: dict) -> None:
    results = run_batch([PayrollRecord.from_dict(acme_dict)], notify=False, preview=False)
    slug = results["READY"][0]
    assert (out_dir / slug / "payslip.pdf").exists()
    assert not (out_dir / slug / "preview.png").exists()
    assert notifications.get_for_user("user-42") == []


def test_batch_records_render_failure(out_dir: Path, acme_dict: dict, monkeypatch) -> None:
    class ExplodingPDF:
        def compose(self, record, organization_name=None):
            raise RenderBackendError(record.id, "out of memory")

    monkeypatch.setattr("payslip.pipeline.run.PayslipPDF", ExplodingPDF)
    results = run_batch([PayrollRecord.from_dict(acme_dict)])
    assert results["READY"] == []
    slug = results["FAILED"][0]
    assert "out of memory" in (out_dir / slug / "error.log").read_text(encoding="utf-8")
    assert not (out_dir / slug / "payslip.pdf").exists()

    with get_session() as session:
        row = session.exec(select(GeneratedPayslip)).one()
    assert row.status == DocumentStatus.FAILED
    assert row.fail_code == "RENDER_BACKEND_ERROR"
    assert notifications.get_for_user("user-42") == []


def test_cli_render_and_batch(out_dir: Path, tmp_path: Path, acme_dict: dict) -> None:
    runner = CliRunner()
    record_path = tmp_path / "record.json"
    record_path.write_text(json.dumps(acme_dict), encoding="utf-8")

    pdf_path = tmp_path / "acme.pdf"
    result = runner.invoke(app, ["render", str(record_path), "--org", "Acme Corp", "--out", str(pdf_path)])
    assert result.exit_code == 0, result.output
    assert pdf_path.read_bytes().startswith(b"%PDF")

    result = runner.invoke(app, ["render", str(record_path), "--data-uri"])
    assert result.exit_code == 0, result.output
    assert result.output.startswith("data:application/pdf;base64,")

    result = runner.invoke(app, ["batch", str(record_path), "--out", str(out_dir), "--no-preview"])
    assert result.exit_code == 0, result.output
    assert "READY: 1" in result.output

    result = runner.invoke(app, ["notifications", "user-42", "--out", str(out_dir)])
    assert result.exit_code == 0, result.output
    assert "Payslip Generated" in result.output

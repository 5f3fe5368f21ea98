from __future__ import annotations

import logging
import shutil
from pathlib import Path
from typing import Iterable, List, Optional

from .. import config
from .. import notifications
from ..errors import PayslipError
from ..models import DocumentStatus, GeneratedPayslip, get_session, init_db
from ..records import PayrollRecord
from ..storage import artifact_path, payslip_slug, record_artifacts
from .render_pdf import PayslipPDF
from .render_preview import render_preview


logger = logging.getLogger(__name__)


def _write_error(slug: str, message: str) -> None:
    error_path = artifact_path(slug, "error", base_dir=config.OUT_DIR)
    error_path.write_text(message, encoding="utf-8")


def _prepare_temp_dir(slug: str) -> Path:
    temp_dir = config.OUT_DIR / f"{slug}.tmp"
    if temp_dir.exists():
        shutil.rmtree(temp_dir)
    temp_dir.mkdir(parents=True, exist_ok=True)
    return temp_dir


def _finalize_artifacts(
    temp_dir: Path,
    final_dir: Path,
    artifacts: List[tuple[str, Path]],
) -> List[tuple[str, Path]]:
    if final_dir.exists():
        shutil.rmtree(final_dir)
    temp_dir.replace(final_dir)
    finalized: List[tuple[str, Path]] = []
    for artifact_type, path in artifacts:
        finalized.append((artifact_type, final_dir / path.relative_to(temp_dir)))
    return finalized


def process_record(
    record: PayrollRecord,
    organization_name: Optional[str] = None,
    preview: bool = True,
) -> List[tuple[str, Path]]:
    """Render one payslip into OUT_DIR/<slug>/ and return its artifacts."""
    slug = payslip_slug(record)
    temp_dir = _prepare_temp_dir(slug)
    try:
        document = PayslipPDF().compose(record, organization_name)
        pdf_path = document.save(artifact_path(slug, "pdf", base_dir=temp_dir, include_slug=False))
        artifacts: List[tuple[str, Path]] = [("pdf", pdf_path)]
        if preview:
            preview_path = artifact_path(slug, "preview", base_dir=temp_dir, include_slug=False)
            artifacts.append(("preview", render_preview(document.to_bytes(), preview_path)))
    except Exception:
        shutil.rmtree(temp_dir, ignore_errors=True)
        raise
    return _finalize_artifacts(temp_dir, config.OUT_DIR / slug, artifacts)


def _notify(record: PayrollRecord) -> None:
    user_id = record.employee_user_id
    if not user_id:
        logger.info("Payslip %s has no employee user; skipping notification", record.id)
        return
    notifications.notify_payroll_generated(
        employee_user_id=user_id,
        payroll_month=record.payroll_month,
        net_pay=record.net_pay,
        currency=record.currency,
    )


def run_batch(
    records: Iterable[PayrollRecord],
    organization_name: Optional[str] = None,
    notify: bool = True,
    preview: bool = True,
) -> dict[str, list[str]]:
    init_db()
    results: dict[str, list[str]] = {"READY": [], "FAILED": []}
    with get_session() as session:
        for record in records:
            slug = payslip_slug(record)
            try:
                artifacts = process_record(record, organization_name, preview=preview)
                status = DocumentStatus.READY
                fail_code = fail_detail = None
            except PayslipError as exc:
                logger.exception("Payslip generation failed for %s", record.id)
                status, artifacts = DocumentStatus.FAILED, []
                fail_code, fail_detail = exc.code, str(exc)
            except Exception as exc:
                logger.exception("Pipeline error for %s", record.id)
                status, artifacts = DocumentStatus.FAILED, []
                fail_code, fail_detail = "PIPELINE_ERROR", str(exc) or type(exc).__name__

            payslip = GeneratedPayslip(
                record_id=record.id,
                employee_id=record.employee_id,
                payroll_month=record.payroll_month,
                slug=slug,
                status=status,
                fail_code=fail_code,
                fail_detail=fail_detail,
            )
            session.add(payslip)
            session.commit()
            session.refresh(payslip)

            if status == DocumentStatus.READY:
                record_artifacts(payslip, artifacts)
                logger.info("Payslip %s ready at %s", record.id, slug)
                if notify:
                    _notify(record)
                results["READY"].append(slug)
            else:
                _write_error(slug, fail_detail or "Unknown error")
                results["FAILED"].append(slug)
    return results

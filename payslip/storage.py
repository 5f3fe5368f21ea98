from __future__ import annotations

from pathlib import Path
from typing import Iterable

from slugify import slugify

from . import config
from .models import Artifact, GeneratedPayslip, get_session
from .records import PayrollRecord


ARTIFACT_NAMES = {
    "pdf": "payslip.pdf",
    "preview": "preview.png",
    "error": "error.log",
}


def payslip_slug(record: PayrollRecord) -> str:
    name = record.employee_name or record.employee_id
    slug = slugify(f"{name}-{record.payroll_month or 'undated'}-{record.id[:8]}")
    if not slug or ".." in slug or "/" in slug or "\\" in slug:
        raise ValueError(f"Invalid slug generated for payslip {record.id}")
    return slug


def payslip_dir(slug: str, base_dir: Path | None = None, include_slug: bool = True) -> Path:
    root = base_dir or config.OUT_DIR
    path = root / slug if include_slug else root
    path.mkdir(parents=True, exist_ok=True)
    return path


def artifact_path(
    slug: str,
    artifact_type: str,
    base_dir: Path | None = None,
    include_slug: bool = True,
) -> Path:
    filename = ARTIFACT_NAMES[artifact_type]
    return payslip_dir(slug, base_dir=base_dir, include_slug=include_slug) / filename


def record_artifacts(payslip: GeneratedPayslip, artifacts: Iterable[tuple[str, Path]]) -> None:
    with get_session() as session:
        for artifact_type, path in artifacts:
            session.add(
                Artifact(
                    payslip_id=payslip.id,
                    type=artifact_type,
                    path=str(path.relative_to(config.OUT_DIR)),
                )
            )
        session.commit()

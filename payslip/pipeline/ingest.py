from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from ..errors import RecordFormatError
from ..records import PayrollRecord


@dataclass(frozen=True)
class RecordBatch:
    records: List[PayrollRecord]
    organization_name: Optional[str] = None


def load_batch(json_path: Path) -> RecordBatch:
    """
    Read payroll records from a JSON file.

    Accepted shapes: a single record object, a list of records, or
    ``{"organizationName": ..., "records": [...]}``.
    """
    if not json_path.exists():
        raise FileNotFoundError(f"Records file not found: {json_path}")
    try:
        data = json.loads(json_path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise RecordFormatError(f"not valid JSON ({exc.msg})", str(json_path)) from exc

    organization_name = None
    if isinstance(data, dict) and "records" in data:
        organization_name = data.get("organizationName") or data.get("organization_name")
        data = data["records"]
    items = data if isinstance(data, list) else [data]
    if not items:
        raise RecordFormatError("file has no records", str(json_path))

    records = [
        PayrollRecord.from_dict(item, source=f"{json_path.name}[{index}]")
        for index, item in enumerate(items)
    ]
    seen = set()
    for record in records:
        if record.id in seen:
            raise RecordFormatError(f"duplicate record id {record.id}", str(json_path))
        seen.add(record.id)
    return RecordBatch(records=records, organization_name=organization_name)


def load_records(json_path: Path) -> List[PayrollRecord]:
    return load_batch(json_path).records

"""
Typed exceptions for payslip generation.

Every class carries a ``code`` attribute so callers (the batch pipeline, the
CLI) can record a machine-readable failure reason without parsing messages.

    PayslipError
    |
    +-- DocumentStateError
    |   +-- AlreadyComposedError
    |   +-- NotComposedError
    |
    +-- RenderBackendError
    |
    +-- RecordFormatError

Malformed values inside a payroll record are not errors: they render as
documented defaults.
"""

from __future__ import annotations


class PayslipError(Exception):
    """Base exception for all payslip errors."""

    code: str = "PAYSLIP_ERROR"


class DocumentStateError(PayslipError):
    """A document engine was used out of order."""

    code: str = "DOCUMENT_STATE_ERROR"


class AlreadyComposedError(DocumentStateError):
    code: str = "ALREADY_COMPOSED"

    def __init__(self) -> None:
        super().__init__("compose() may only be called once per document")


class NotComposedError(DocumentStateError):
    code: str = "NOT_COMPOSED"

    def __init__(self, accessor: str):
        self.accessor = accessor
        super().__init__(f"{accessor}() called before compose()")


class RenderBackendError(PayslipError):
    """The drawing or PDF serialisation layer failed. No output is kept."""

    code: str = "RENDER_BACKEND_ERROR"

    def __init__(self, record_id: str, detail: str):
        self.record_id = record_id
        self.detail = detail
        super().__init__(f"Rendering payslip {record_id} failed: {detail}")


class RecordFormatError(PayslipError):
    """Input document is not a payroll record at all."""

    code: str = "RECORD_FORMAT_ERROR"

    def __init__(self, detail: str, source: str | None = None):
        self.detail = detail
        self.source = source
        where = f" ({source})" if source else ""
        super().__init__(f"Invalid payroll record{where}: {detail}")

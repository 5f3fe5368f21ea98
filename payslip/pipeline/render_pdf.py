from __future__ import annotations

import base64
import io
import logging
from pathlib import Path
from typing import List, Optional, Tuple

from reportlab.lib.units import mm
from reportlab.pdfgen import canvas

from ..config import BRAND_NAME, DEFAULT_LAYOUT, DEFAULT_ORGANIZATION, LayoutConfig
from ..errors import AlreadyComposedError, NotComposedError, PayslipError, RenderBackendError
from ..records import PayrollRecord
from .formatting import or_default
from .page import Page
from .sections import SECTIONS, Composer, LayoutState, SectionContext

logger = logging.getLogger(__name__)

PDF_MIME = "application/pdf"


class PayslipPDF:
    """
    Single-use payslip document.

    Create one per record, call ``compose`` once, then read the output with
    ``to_bytes``, ``to_stream`` or ``to_data_uri`` as often as needed.
    """

    def __init__(
        self,
        layout: LayoutConfig = DEFAULT_LAYOUT,
        sections: Optional[List[Tuple[str, Composer]]] = None,
    ) -> None:
        self.layout = layout
        self.sections = list(sections if sections is not None else SECTIONS)
        self.state = LayoutState()
        self._composed = False
        self._pdf: Optional[bytes] = None

    @property
    def page_size(self) -> Tuple[float, float]:
        return self.layout.page_width * mm, self.layout.page_height * mm

    def compose(self, record: PayrollRecord, organization_name: Optional[str] = None) -> "PayslipPDF":
        if self._composed:
            raise AlreadyComposedError()
        self._composed = True

        ctx = SectionContext(
            record=record,
            organization_name=or_default(organization_name, DEFAULT_ORGANIZATION),
            layout=self.layout,
        )
        buffer = io.BytesIO()
        try:
            # invariant=1 pins creation date and document id, so equal input gives equal bytes
            canv = canvas.Canvas(buffer, pagesize=self.page_size, invariant=1)
            canv.setTitle(f"Payslip - {ctx.period}")
            canv.setAuthor(ctx.organization_name)
            canv.setSubject(f"Payslip {record.id}")
            canv.setCreator(BRAND_NAME)

            page = Page(canv, self.layout)
            state = LayoutState()
            for name, composer in self.sections:
                state = composer(page, ctx, state)
                logger.debug("Composed %s for payslip %s (table_end_y=%s)", name, record.id, state.table_end_y)

            canv.showPage()
            canv.save()
        except PayslipError:
            raise
        except Exception as exc:
            raise RenderBackendError(record.id, str(exc) or type(exc).__name__) from exc

        self.state = state
        self._pdf = buffer.getvalue()
        return self

    def _output(self, accessor: str) -> bytes:
        if self._pdf is None:
            raise NotComposedError(accessor)
        return self._pdf

    def to_bytes(self) -> bytes:
        return self._output("to_bytes")

    def to_stream(self) -> io.BytesIO:
        """A fresh readable stream over the PDF, positioned at the start."""
        return io.BytesIO(self._output("to_stream"))

    def to_data_uri(self) -> str:
        encoded = base64.b64encode(self._output("to_data_uri")).decode("ascii")
        return f"data:{PDF_MIME};base64,{encoded}"

    def save(self, output_path: Path) -> Path:
        data = self._output("save")
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_bytes(data)
        return output_path


def render_payslip(
    record: PayrollRecord,
    organization_name: Optional[str] = None,
    layout: LayoutConfig = DEFAULT_LAYOUT,
) -> bytes:
    return PayslipPDF(layout).compose(record, organization_name).to_bytes()

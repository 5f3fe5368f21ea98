from __future__ import annotations

from pathlib import Path

import fitz  # PyMuPDF


def render_preview(pdf_bytes: bytes, out_path: Path, min_px: int = 1200) -> Path:
    """Rasterise the first page of a payslip to PNG."""
    with fitz.open(stream=pdf_bytes, filetype="pdf") as doc:
        page = doc.load_page(0)

        # scale so the short side comes out at least min_px wide
        rect = page.rect
        short_side = min(rect.width, rect.height)
        zoom = max(1.0, min_px / float(short_side))
        mat = fitz.Matrix(zoom, zoom)

        pix = page.get_pixmap(matrix=mat, alpha=False)
        out_path.parent.mkdir(parents=True, exist_ok=True)
        pix.save(str(out_path))
    return out_path

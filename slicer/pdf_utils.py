import io
import os
import logging
import tempfile
from typing import List, Sequence

import img2pdf
from PIL import Image

from .config import A4_WIDTH_MM, A4_HEIGHT_MM, JPEG_QUALITY
from .errors import DocumentWriteFailure

logger = logging.getLogger(__name__)

A4_PAGE_SIZE = (img2pdf.mm_to_pt(A4_WIDTH_MM), img2pdf.mm_to_pt(A4_HEIGHT_MM))

# Every page is exactly A4, image stretched to the page edges, no border
a4_layout = img2pdf.get_layout_fun(A4_PAGE_SIZE, fit=img2pdf.FitMode.exact)


def page_to_bytes(page: Image.Image, quality: int = JPEG_QUALITY) -> bytes:
    buf = io.BytesIO()
    page.save(buf, format="JPEG", quality=quality)
    return buf.getvalue()


def assemble_document(pages: Sequence[Image.Image]) -> bytes:
    """Build a PDF with one full-bleed A4 page per raster page, in order."""
    if not pages:
        raise ValueError("Cannot assemble a document without pages")
    encoded: List[bytes] = [page_to_bytes(page) for page in pages]
    return img2pdf.convert(encoded, layout_fun=a4_layout, engine=img2pdf.Engine.internal)


def write_atomic(data: bytes, output_path: str):
    """Write ``data`` through a temp file in the same directory, then rename into place."""
    directory = os.path.dirname(os.path.abspath(output_path))
    fd, tmp_path = tempfile.mkstemp(dir=directory, prefix=".", suffix=".part")
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(data)
        os.replace(tmp_path, output_path)
    except BaseException:
        if os.path.exists(tmp_path):
            os.remove(tmp_path)
        raise


def generate_pdf_from_pages(pages, output_path):
    try:
        pdf = assemble_document(pages)
        write_atomic(pdf, output_path)
    except OSError as e:
        raise DocumentWriteFailure(f"Could not write {output_path}: {e}") from e
    logger.info(f"PDF saved to {output_path} ({len(pages)} pages)")
    return output_path

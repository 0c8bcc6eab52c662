"""
Batch conversion of images into A4 PDF documents.

Each item goes through validate -> decode -> paginate -> rasterize -> assemble
-> write, one item at a time in input order. A failing item is recorded on its
BatchItem and the batch moves on to the next one.
"""

import os
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, List, Optional

from PIL import Image

from .config import PANORAMA_RATIO
from .errors import ErrorKind, SlicerError
from .image_utils import ImageSource, base_name, check_file_name, load_image, validate_source
from .output_dir import resolve_output_dir
from .paginator import paginate
from .pdf_utils import generate_pdf_from_pages
from .rasterizer import rasterize_pages
from .slice_utils import save_slices

logger = logging.getLogger(__name__)

OUTPUT_FORMATS = ("pdf", "png")


class BatchStatus(str, Enum):
    PENDING = "Pending"
    SUCCEEDED = "Succeeded"
    FAILED = "Failed"


@dataclass
class BatchItem:
    """A single image in a batch and what became of it."""

    name: str
    source: ImageSource
    content_type: Optional[str] = None
    status: BatchStatus = BatchStatus.PENDING
    error: Optional[ErrorKind] = None
    output_paths: List[str] = field(default_factory=list)
    page_count: int = 0

    def succeed(self, output_paths: List[str], page_count: int):
        self._leave_pending()
        self.status = BatchStatus.SUCCEEDED
        self.output_paths = list(output_paths)
        self.page_count = page_count

    def fail(self, kind: ErrorKind):
        self._leave_pending()
        self.status = BatchStatus.FAILED
        self.error = kind

    def _leave_pending(self):
        if self.status is not BatchStatus.PENDING:
            raise RuntimeError(f"Batch item {self.name} already {self.status.value}")

    def to_dict(self):
        return {
            "name": self.name,
            "status": self.status.value,
            "error": self.error.value if self.error else None,
            "output_paths": self.output_paths,
            "page_count": self.page_count,
        }


@dataclass
class BatchResult:
    items: List[BatchItem]

    @property
    def succeeded(self) -> List[BatchItem]:
        return [i for i in self.items if i.status is BatchStatus.SUCCEEDED]

    @property
    def failed(self) -> List[BatchItem]:
        return [i for i in self.items if i.status is BatchStatus.FAILED]

    @property
    def documents(self) -> List[str]:
        return [path for item in self.succeeded for path in item.output_paths]

    def summary(self):
        return {
            "succeeded": len(self.succeeded),
            "failed": len(self.failed),
            "documents": self.documents,
        }


def render_pages(img: Image.Image, panorama_ratio: float = PANORAMA_RATIO) -> List[Image.Image]:
    specs = paginate(img.width, img.height, panorama_ratio)
    return rasterize_pages(img, specs)


def convert_image(img: Image.Image, output_path: str, panorama_ratio: float = PANORAMA_RATIO) -> int:
    """Slice one decoded image into A4 pages and write them as a PDF. Returns the page count."""
    pages = render_pages(img, panorama_ratio)
    try:
        generate_pdf_from_pages(pages, output_path)
    finally:
        for page in pages:
            page.close()
    return len(pages)


def _as_item(source) -> BatchItem:
    if isinstance(source, BatchItem):
        return source
    name, data = source
    return BatchItem(name=name, source=data)


def process_item(item: BatchItem, output_dir: str, output_format: str = "pdf",
                 panorama_ratio: float = PANORAMA_RATIO):
    if isinstance(item.source, Image.Image):
        check_file_name(item.name)
    else:
        validate_source(item.name, item.source, item.content_type)

    img = load_image(item.source)
    try:
        if output_format == "png":
            pages = render_pages(img, panorama_ratio)
            paths = save_slices(pages, item.name, output_dir)
            item.succeed(paths, len(pages))
        else:
            pdf_path = os.path.join(output_dir, f"{base_name(item.name)}.pdf")
            page_count = convert_image(img, pdf_path, panorama_ratio)
            item.succeed([pdf_path], page_count)
    finally:
        if img is not item.source:
            img.close()


def run_batch(sources: Iterable, output_dir, output_format: str = "pdf",
              panorama_ratio: float = PANORAMA_RATIO) -> BatchResult:
    """
    Convert every source into its own document under ``output_dir``.

    Args:
        sources: BatchItems or ``(name, source)`` pairs; a source is a path,
            raw bytes or a decoded PIL image
        output_dir: Directory chosen for the output; empty means the choice was cancelled
        output_format: "pdf" (one document per image) or "png" (one file per page)
        panorama_ratio: Width/height ratio that triggers narrower pages

    Returns:
        BatchResult holding every item with its final status

    Raises:
        ValueError: If there are no sources or the format is unknown
        NoOutputDirectory: If no output directory was chosen; nothing is processed
    """
    items = [_as_item(s) for s in sources]
    if not items:
        raise ValueError("No images to convert")
    if output_format not in OUTPUT_FORMATS:
        raise ValueError(f"Unknown output format: {output_format}")
    output_dir = resolve_output_dir(output_dir)

    logger.info(f"Converting {len(items)} images to {output_format.upper()} in {output_dir}")

    for item in items:
        logger.info(f"Processing {item.name}")
        try:
            process_item(item, output_dir, output_format, panorama_ratio)
        except SlicerError as e:
            logger.error(f"Failed to convert {item.name}: {e}")
            item.fail(e.kind)
        except Exception as e:
            logger.exception(f"Unexpected error converting {item.name}: {e}")
            item.fail(ErrorKind.UNEXPECTED)

    result = BatchResult(items)
    logger.info(f"Batch finished: {len(result.succeeded)} succeeded, {len(result.failed)} failed")
    return result

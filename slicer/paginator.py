import math
import logging
from dataclasses import dataclass
from typing import List, Tuple

from .config import A4_RATIO, PANORAMA_RATIO
from .errors import InvalidImageDimensions

logger = logging.getLogger(__name__)


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


@dataclass(frozen=True)
class PageSpec:
    """
    One output page: which source rows it shows and the size of its canvas.

    Geometry is kept as the exact floats the pagination computes; integer
    pixel boundaries are derived with round-half-up so consecutive pages
    share their boundary row.
    """
    index: int
    source_y_offset: float
    source_height: float
    target_width: float
    target_height: float

    def row_range(self, image_height: int) -> Tuple[int, int]:
        top = round_half_up(self.source_y_offset)
        bottom = round_half_up(self.source_y_offset + self.source_height)
        return top, min(bottom, image_height)

    @property
    def target_size(self) -> Tuple[int, int]:
        return max(1, round_half_up(self.target_width)), max(1, round_half_up(self.target_height))


def page_width_for(width: float, height: float, panorama_ratio: float = PANORAMA_RATIO) -> float:
    # Very wide images would otherwise give pages far shorter than the image
    if width / height > panorama_ratio:
        return height / 2
    return width


def paginate(width: float, height: float, panorama_ratio: float = PANORAMA_RATIO) -> List[PageSpec]:
    """
    Split an image of ``width`` x ``height`` pixels into A4-proportioned pages,
    top to bottom.

    Args:
        width: Source image width in pixels
        height: Source image height in pixels
        panorama_ratio: Width/height ratio above which the page width falls
            back to ``height / 2``

    Returns:
        Non-empty list of PageSpec ordered by index

    Raises:
        InvalidImageDimensions: If either dimension is not a positive number
    """
    try:
        valid = width > 0 and height > 0
    except TypeError:
        valid = False
    if not valid:
        raise InvalidImageDimensions(f"Invalid image dimensions: {width}x{height}")

    page_width = page_width_for(width, height, panorama_ratio)
    page_height = page_width * A4_RATIO
    # Tolerance keeps float noise from adding an empty trailing page
    page_count = max(1, math.ceil(height / page_height - 1e-9))

    logger.debug(
        f"Image {width}x{height} -> page {page_width:.2f}x{page_height:.2f}, {page_count} pages"
    )

    pages = []
    for i in range(page_count):
        y_offset = i * page_height
        pages.append(PageSpec(
            index=i,
            source_y_offset=y_offset,
            source_height=min(page_height, height - y_offset),
            target_width=page_width,
            target_height=page_height,
        ))
    return pages

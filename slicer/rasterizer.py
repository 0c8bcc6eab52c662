import logging
from typing import Iterable, List

from PIL import Image

from .config import A4_BG_COLOR
from .paginator import PageSpec

logger = logging.getLogger(__name__)


def has_alpha(img: Image.Image) -> bool:
    return img.mode in ("RGBA", "LA", "PA") or "transparency" in img.info


def rasterize_page(img: Image.Image, spec: PageSpec, bg_color=A4_BG_COLOR) -> Image.Image:
    """
    Render one page of ``img`` onto a background-filled canvas.

    The source rows are copied 1:1 to the top-left corner. Short final pages
    keep the background below the copied rows; transparent pixels are
    composited over the background.
    """
    width, height = spec.target_size
    page = Image.new("RGB", (width, height), bg_color)

    top, bottom = spec.row_range(img.height)
    if bottom <= top:
        return page

    crop = img.crop((0, top, min(width, img.width), bottom))
    if has_alpha(crop):
        crop = crop.convert("RGBA")
        page.paste(crop, (0, 0), crop)
    else:
        page.paste(crop.convert("RGB"), (0, 0))
    return page


def rasterize_pages(img: Image.Image, specs: Iterable[PageSpec], bg_color=A4_BG_COLOR) -> List[Image.Image]:
    pages = [rasterize_page(img, spec, bg_color) for spec in specs]
    logger.debug(f"Rasterized {len(pages)} pages from {img.width}x{img.height} image")
    return pages

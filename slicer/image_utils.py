import io
import os
import re
import logging
import mimetypes
from typing import Optional, Union

from PIL import Image, ImageOps, UnidentifiedImageError

from .config import SUPPORTED_IMAGE_TYPES, MAX_FILE_SIZE, MAX_FILE_NAME_LENGTH
from .errors import InvalidFileName, UnsupportedFileType, FileTooLarge, ImageDecodeFailure
from .rasterizer import has_alpha

logger = logging.getLogger(__name__)

INVALID_NAME_CHARS = re.compile(r'[\\/:*?"<>|]')
HIGH_BIT_DEPTH_MODES = ("I", "F", "I;16", "I;16L", "I;16B", "I;16N")

ImageSource = Union[str, bytes, os.PathLike, Image.Image]


def file_name(name: str) -> str:
    return re.split(r"[\\/]", str(name))[-1]


def base_name(name: str) -> str:
    """'shots/long page.final.png' -> 'long page.final'"""
    return re.sub(r"\.[^/.]+$", "", file_name(name))


def is_valid_file_name(name: str) -> bool:
    if not name or not name.strip():
        return False
    if len(name) > MAX_FILE_NAME_LENGTH:
        return False
    return not INVALID_NAME_CHARS.search(name)


def guess_content_type(name: str) -> Optional[str]:
    content_type, _ = mimetypes.guess_type(name)
    return content_type


def check_file_name(name: str):
    # Paths are allowed, only the last component becomes an output name
    filename = file_name(name) if name else ""
    if not is_valid_file_name(filename) or not base_name(filename).strip():
        logger.warning(f"Invalid file name: {name!r}")
        raise InvalidFileName(f"Invalid file name: {name!r}")


def check_file_type(name: str, content_type: Optional[str] = None):
    content_type = content_type or guess_content_type(name)
    if content_type not in SUPPORTED_IMAGE_TYPES:
        logger.warning(f"Unsupported file type for {name}: {content_type}")
        raise UnsupportedFileType(f"Unsupported file type: {content_type}")


def check_file_size(name: str, size: Optional[int]):
    if size is not None and size > MAX_FILE_SIZE:
        logger.warning(f"File too large: {name}, {size} bytes")
        raise FileTooLarge(f"File too large: {size} bytes (max {MAX_FILE_SIZE})")


def validate_upload(name: str, size: Optional[int] = None, content_type: Optional[str] = None):
    """
    Reject files the converter should never try to decode.

    Raises:
        InvalidFileName: The file name is empty or has characters not allowed in an output name
        UnsupportedFileType: Content type (given, or guessed from the name) is not a supported image type
        FileTooLarge: ``size`` exceeds MAX_FILE_SIZE
    """
    check_file_name(name)
    check_file_type(name, content_type)
    check_file_size(name, size)


def validate_source(name: str, source: ImageSource, content_type: Optional[str] = None):
    """Same checks as validate_upload; the file is only stat'ed once name and type pass."""
    check_file_name(name)
    check_file_type(name, content_type)
    check_file_size(name, source_size(source))


def source_size(source: ImageSource) -> Optional[int]:
    if isinstance(source, (bytes, bytearray)):
        return len(source)
    if isinstance(source, (str, os.PathLike)):
        try:
            return os.path.getsize(source)
        except OSError as e:
            raise ImageDecodeFailure(f"Could not read {source}: {e}") from e
    return None


def to_eight_bit(img: Image.Image) -> Image.Image:
    """Scale 16/32-bit integer and float images down to 8-bit grayscale instead of clipping."""
    if img.mode not in HIGH_BIT_DEPTH_MODES:
        return img
    wide = img.convert("F" if img.mode == "F" else "I")
    _, high = wide.getextrema()
    if img.mode == "F" and high <= 1.0:
        scale = 255.0
    elif high > 255:
        scale = 1 / 256.0
    else:
        scale = 1.0
    scaled = wide.point(lambda v: v * scale)
    wide.close()
    eight_bit = scaled.convert("L")
    scaled.close()
    return eight_bit


def to_rgb(img: Image.Image) -> Image.Image:
    mode = "RGBA" if has_alpha(img) else "RGB"
    if img.mode == mode:
        return img
    return img.convert(mode)


def normalize_image(img: Image.Image) -> Image.Image:
    """
    Turn a decoded image upright (EXIF orientation) and into 8-bit RGB/RGBA.

    May return ``img`` itself; intermediate copies are closed.
    """
    current = img
    for step in (ImageOps.exif_transpose, to_eight_bit, to_rgb):
        result = step(current)
        if result is not current and current is not img:
            current.close()
        current = result
    return current


def load_image(source: ImageSource) -> Image.Image:
    """
    Decode ``source`` (path, raw bytes or an open PIL image) into an upright RGB/RGBA image.

    Only the first frame of multi-frame formats is kept.
    """
    if isinstance(source, Image.Image):
        return normalize_image(source)

    fp = io.BytesIO(source) if isinstance(source, (bytes, bytearray)) else source
    img = None
    try:
        img = Image.open(fp)
        img.load()
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError) as e:
        if img is not None:
            img.close()
        raise ImageDecodeFailure(f"Could not decode image: {e}") from e

    normalized = normalize_image(img)
    if normalized is not img:
        img.close()
    return normalized

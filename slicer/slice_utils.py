import io
import os
import logging

from .errors import DocumentWriteFailure
from .image_utils import base_name
from .pdf_utils import write_atomic

logger = logging.getLogger(__name__)


def slice_file_name(name, index):
    return f"{base_name(name)}_s{index + 1:02d}.png"


def save_slices(pages, name, output_dir):
    """Save each raster page as ``{base}_sNN.png`` and return the written paths."""
    paths = []
    for i, page in enumerate(pages):
        path = os.path.join(output_dir, slice_file_name(name, i))
        buf = io.BytesIO()
        page.save(buf, format="PNG")
        try:
            write_atomic(buf.getvalue(), path)
        except OSError as e:
            raise DocumentWriteFailure(f"Could not write {path}: {e}") from e
        paths.append(path)
    logger.info(f"Saved {len(paths)} slices for {name} to {output_dir}")
    return paths

import os

# A4 dimensions in millimetres
A4_WIDTH_MM = 210
A4_HEIGHT_MM = 297
A4_RATIO = A4_HEIGHT_MM / A4_WIDTH_MM
A4_BG_COLOR = os.getenv("A4_BG_COLOR", "white")

# Images wider than PANORAMA_RATIO x their height get narrower pages (height / 2)
PANORAMA_RATIO = float(os.getenv("PANORAMA_RATIO", "4"))
JPEG_QUALITY = int(os.getenv("JPEG_QUALITY", "95"))

SUPPORTED_IMAGE_TYPES = [
    "image/jpeg",
    "image/jpg",
    "image/png",
    "image/gif",
    "image/bmp",
    "image/webp",
    "image/tiff",
]
MAX_FILE_SIZE = int(os.getenv("SLICER_MAX_FILE_SIZE", str(20 * 1024 * 1024)))
MAX_FILE_NAME_LENGTH = 255

STATE_FILE = os.getenv(
    "SLICER_STATE_FILE",
    os.path.join(os.path.expanduser("~"), ".config", "image-a4-slicer", "state.json"),
)
ROOT_PATH = os.getenv("ROOT_PATH", "/slicer")

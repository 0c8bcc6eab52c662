from enum import Enum


class ErrorKind(str, Enum):
    INVALID_IMAGE_DIMENSIONS = "InvalidImageDimensions"
    INVALID_FILE_NAME = "InvalidFileName"
    UNSUPPORTED_FILE_TYPE = "UnsupportedFileType"
    FILE_TOO_LARGE = "FileTooLarge"
    IMAGE_DECODE_FAILURE = "ImageDecodeFailure"
    NO_OUTPUT_DIRECTORY = "NoOutputDirectory"
    DOCUMENT_WRITE_FAILURE = "DocumentWriteFailure"
    UNEXPECTED = "Unexpected"


class SlicerError(Exception):
    """Base class for conversion errors. ``kind`` is what gets recorded on a batch item."""
    kind = ErrorKind.UNEXPECTED


class InvalidImageDimensions(SlicerError):
    kind = ErrorKind.INVALID_IMAGE_DIMENSIONS


class InvalidFileName(SlicerError):
    kind = ErrorKind.INVALID_FILE_NAME


class UnsupportedFileType(SlicerError):
    kind = ErrorKind.UNSUPPORTED_FILE_TYPE


class FileTooLarge(SlicerError):
    kind = ErrorKind.FILE_TOO_LARGE


class ImageDecodeFailure(SlicerError):
    kind = ErrorKind.IMAGE_DECODE_FAILURE


class NoOutputDirectory(SlicerError):
    kind = ErrorKind.NO_OUTPUT_DIRECTORY


class DocumentWriteFailure(SlicerError):
    kind = ErrorKind.DOCUMENT_WRITE_FAILURE

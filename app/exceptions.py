"""Error kinds raised by the upload service.

Each kind carries the status code and machine-readable code the HTTP layer
reports; the service itself only classifies the failure.
"""

from typing import Optional


class UploadServiceError(Exception):
    """Base exception for upload service failures."""

    status_code: int = 500
    code: str = "UPLOAD_SERVICE_ERROR"
    default_message: str = "Upload service error"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidInput(UploadServiceError):
    """Raised when a file name carries no extension."""

    status_code = 400
    code = "INVALID_INPUT"
    default_message = "Invalid file name"


class NeedImage(UploadServiceError):
    """Raised when the uploaded file stream cannot be read."""

    status_code = 400
    code = "NEED_IMAGE"
    default_message = "An image file is required"


class FileUploadFailed(UploadServiceError):
    status_code = 500
    code = "FILEUPLOAD_FAILED"
    default_message = "File upload failed"


class ImageProcessingFailed(UploadServiceError):
    status_code = 500
    code = "IMAGE_PROCESSING_FAILED"
    default_message = "Failed to resize image"

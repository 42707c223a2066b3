from fastapi import APIRouter, Depends, File, HTTPException, UploadFile
from typing import List
from app.exceptions import UploadServiceError
from app.schemas.upload import DeleteResponse, UploadListResponse, UploadResponse
from app.services.s3_service import S3UploadService
import structlog

logger = structlog.get_logger()
router = APIRouter(prefix="/images", tags=["images"])


def get_upload_service() -> S3UploadService:
    return S3UploadService.from_settings()


@router.post("", response_model=UploadResponse)
def upload_image(
    file: UploadFile = File(...),
    upload_service: S3UploadService = Depends(get_upload_service)
):
    """
    Upload a single file without resizing.

    Args:
        file: Multipart file field

    Returns:
        Public URL of the stored file
    """
    try:
        url = upload_service.upload_single(file)
        logger.info("Uploaded image", filename=file.filename, url=url)
        return UploadResponse(url=url)

    except UploadServiceError:
        raise
    except Exception as e:
        logger.error("Failed to upload image", error=str(e), filename=file.filename)
        raise HTTPException(
            status_code=500,
            detail=f"Failed to upload image: {str(e)}"
        )


@router.post("/batch", response_model=UploadListResponse)
def upload_images(
    files: List[UploadFile] = File(...),
    upload_service: S3UploadService = Depends(get_upload_service)
):
    """
    Resize and upload a batch of images.

    Non-image files are skipped; the returned URLs follow the input order.
    """
    try:
        urls = upload_service.upload_many(files)
        logger.info("Uploaded images", received=len(files), uploaded=len(urls))
        return UploadListResponse(urls=urls)

    except UploadServiceError:
        raise
    except Exception as e:
        logger.error("Failed to upload images", error=str(e), received=len(files))
        raise HTTPException(
            status_code=500,
            detail=f"Failed to upload images: {str(e)}"
        )


@router.delete("/{key}", response_model=DeleteResponse)
def delete_image(
    key: str,
    upload_service: S3UploadService = Depends(get_upload_service)
):
    try:
        upload_service.delete_file(key)
        return DeleteResponse(key=key)

    except Exception as e:
        logger.error("Failed to delete image", error=str(e), key=key)
        raise HTTPException(
            status_code=500,
            detail=f"Failed to delete image: {str(e)}"
        )

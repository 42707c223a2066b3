import boto3
from contextlib import closing
from botocore.exceptions import BotoCoreError, ClientError
from typing import Any, BinaryIO, Iterable, List, Optional, Protocol
from app.config import settings
from app.exceptions import FileUploadFailed, ImageProcessingFailed, NeedImage
from app.services.image_resizer import DEFAULT_TARGET_WIDTH, resize_image
from app.services.storage_keys import create_file_name
import structlog

logger = structlog.get_logger()


class UploadedFile(Protocol):
    """Anything shaped like a multipart upload (e.g. fastapi.UploadFile)."""
    filename: Optional[str]
    content_type: Optional[str]
    file: BinaryIO


class S3UploadService:
    def __init__(
        self,
        s3_client: Any,
        bucket_name: str,
        region: str = "us-east-1",
        endpoint_url: Optional[str] = None,
        resize_width: int = DEFAULT_TARGET_WIDTH,
    ):
        self.s3_client = s3_client
        self.bucket_name = bucket_name
        self.region = region
        self.endpoint_url = endpoint_url.rstrip('/') if endpoint_url else None
        self.resize_width = resize_width

    @classmethod
    def from_settings(cls) -> "S3UploadService":
        """Build a service backed by a boto3 client configured from settings."""
        s3_client = boto3.client(
            's3',
            aws_access_key_id=settings.aws_access_key_id,
            aws_secret_access_key=settings.aws_secret_access_key,
            region_name=settings.aws_region,
            endpoint_url=settings.s3_endpoint_url
        )
        return cls(
            s3_client,
            bucket_name=settings.s3_bucket_name,
            region=settings.aws_region,
            endpoint_url=settings.s3_endpoint_url,
            resize_width=settings.image_resize_width
        )

    def get_url(self, key: str) -> str:
        """Public URL of an object in the configured bucket."""
        if self.endpoint_url:
            return f"{self.endpoint_url}/{self.bucket_name}/{key}"
        return f"https://{self.bucket_name}.s3.{self.region}.amazonaws.com/{key}"

    def upload_single(self, file: UploadedFile) -> str:
        """
        Upload one file as-is.

        Args:
            file: The uploaded file

        Returns:
            Public URL of the stored object

        Raises:
            InvalidInput: If the file name has no extension
            NeedImage: If the file stream cannot be read
        """
        logger.info("upload_single start", filename=file.filename)

        with closing(file.file) as stream:
            key = create_file_name(file.filename)
            try:
                data = stream.read()
            except (OSError, ValueError) as e:
                logger.error("Failed to read uploaded file", error=str(e), filename=file.filename)
                raise NeedImage() from e

        self.s3_client.put_object(
            Bucket=self.bucket_name,
            Key=key,
            Body=data,
            ContentLength=len(data)
        )

        logger.info("upload_single end", bucket=self.bucket_name, key=key, size=len(data))
        return self.get_url(key)

    def upload_many(self, files: Iterable[UploadedFile]) -> List[str]:
        """
        Resize and upload every image in a batch, publicly readable.

        Files whose content type is not an image are skipped. Objects stored
        before a failure are left in place.

        Args:
            files: The uploaded files, in order

        Returns:
            Public URLs of the stored images, in input order

        Raises:
            InvalidInput: If an image's file name has no extension
            FileUploadFailed: If reading, resizing or storing an image fails
        """
        logger.info("upload_many start")
        urls: List[str] = []

        for file in files:
            content_type = file.content_type or ""
            if "image" not in content_type:
                logger.info("Skipping non-image file", filename=file.filename, content_type=content_type)
                continue

            file_format = content_type[content_type.rfind('/') + 1:]

            with closing(file.file) as stream:
                key = create_file_name(file.filename)
                try:
                    payload = resize_image(
                        stream.read(), file_format, content_type, self.resize_width
                    )
                    self.s3_client.put_object(
                        Bucket=self.bucket_name,
                        Key=key,
                        Body=payload.data,
                        ContentLength=payload.size,
                        ContentType=payload.content_type,
                        ACL='public-read'
                    )
                except (OSError, ValueError, ImageProcessingFailed, BotoCoreError, ClientError) as e:
                    logger.error(
                        "Failed to upload file",
                        error=str(e),
                        filename=file.filename,
                        uploaded=len(urls)
                    )
                    raise FileUploadFailed() from e

            urls.append(self.get_url(key))

        logger.info("upload_many end", bucket=self.bucket_name, count=len(urls))
        return urls

    def delete_file(self, key: str) -> None:
        """Delete an object; missing keys are not an error."""
        logger.info("delete_file start", bucket=self.bucket_name, key=key)
        self.s3_client.delete_object(Bucket=self.bucket_name, Key=key)
        logger.info("delete_file end", bucket=self.bucket_name, key=key)

from pydantic_settings import BaseSettings
from typing import Optional


class Settings(BaseSettings):
    aws_access_key_id: str = "placeholder"
    aws_secret_access_key: str = "placeholder"
    aws_region: str = "us-east-1"
    s3_bucket_name: str = "placeholder-bucket"
    # Set for S3-compatible backends (MinIO, LocalStack)
    s3_endpoint_url: Optional[str] = None
    image_resize_width: int = 400
    environment: str = "development"

    class Config:
        env_file = ".env"


settings = Settings()

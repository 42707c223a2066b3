import io
import cv2
import numpy as np
import pytest
from dataclasses import dataclass
from fastapi.testclient import TestClient
from unittest.mock import MagicMock
from app.main import app
from app.routers.upload import get_upload_service
from app.services.s3_service import S3UploadService


@dataclass
class FakeUpload:
    filename: str
    content_type: str
    file: io.BytesIO


@pytest.fixture
def make_image():
    """Encode a solid-colour test image of the given size."""
    def _make_image(width: int, height: int, file_format: str = "png") -> bytes:
        frame = np.full((height, width, 3), (30, 120, 200), dtype=np.uint8)
        ok, buffer = cv2.imencode(f".{file_format}", frame)
        assert ok
        return buffer.tobytes()
    return _make_image


@pytest.fixture
def image_size():
    """Return (width, height) of encoded image bytes."""
    def _image_size(data: bytes):
        frame = cv2.imdecode(np.frombuffer(data, dtype=np.uint8), cv2.IMREAD_COLOR)
        return frame.shape[1], frame.shape[0]
    return _image_size


@pytest.fixture
def fake_upload():
    def _fake_upload(filename: str, content_type: str, data: bytes) -> FakeUpload:
        return FakeUpload(filename=filename, content_type=content_type, file=io.BytesIO(data))
    return _fake_upload


@pytest.fixture
def s3_client():
    return MagicMock()


@pytest.fixture
def upload_service(s3_client):
    return S3UploadService(s3_client, bucket_name="test-bucket", region="us-east-1")


@pytest.fixture
def client(upload_service):
    app.dependency_overrides[get_upload_service] = lambda: upload_service
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def sample_png(make_image):
    return make_image(800, 600, "png")

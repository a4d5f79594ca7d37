"""
Pytest configuration for API integration tests
"""

import io

import numpy as np
import pytest
from fastapi.testclient import TestClient
from PIL import Image


@pytest.fixture(scope="function")
def client():
    """
    Create a test client with properly initialized app state.
    Each test gets a fresh client to avoid state contamination.
    """
    from config import get_settings
    from core.operation_log import OperationLog
    from main import app

    app.state.operation_log = OperationLog(max_size=50)
    app.state.config = get_settings().to_dict()

    # No context manager: lifespan would replace the state set above
    test_client = TestClient(app, raise_server_exceptions=False)

    yield test_client


@pytest.fixture
def png_upload():
    """Small opaque PNG (40x30, two color halves) as a multipart file tuple"""
    array = np.zeros((30, 40, 4), dtype=np.uint8)
    array[:, :20] = (220, 40, 40, 255)
    array[:, 20:] = (30, 60, 200, 255)
    buffer = io.BytesIO()
    Image.fromarray(array).save(buffer, format="PNG")
    return {"file": ("test.png", buffer.getvalue(), "image/png")}


@pytest.fixture
def jpeg_upload():
    """Opaque 40x30 JPEG upload"""
    buffer = io.BytesIO()
    Image.new("RGB", (40, 30), (10, 200, 120)).save(buffer, format="JPEG")
    return {"file": ("test.jpg", buffer.getvalue(), "image/jpeg")}

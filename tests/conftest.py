import os
from io import BytesIO

import pytest
from PIL import Image

from tryiton.main import app
from tryiton.services.store import WidgetStore, get_store


def make_image(width: int = 640, height: int = 480, fmt: str = "JPEG", mode: str = "RGB", color=(120, 80, 200), noise: bool = False) -> bytes:
    if noise:
        img = Image.frombytes(mode, (width, height), os.urandom(width * height * len(mode)))
    else:
        img = Image.new(mode, (width, height), color=color if mode == "RGB" else color + (128,))
    buf = BytesIO()
    img.save(buf, format=fmt, **({"quality": 95} if fmt == "JPEG" else {}))
    return buf.getvalue()


@pytest.fixture
def image_factory():
    return make_image


@pytest.fixture
def store(tmp_path):
    s = WidgetStore(storage_dir=str(tmp_path))
    app.dependency_overrides[get_store] = lambda: s
    yield s
    app.dependency_overrides.pop(get_store, None)

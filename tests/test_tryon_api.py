import base64
import re
from io import BytesIO
from types import SimpleNamespace

import httpx
import pytest
import respx
from fastapi.testclient import TestClient
from google.genai import types
from PIL import Image

from tryiton.config import settings
from tryiton.main import app
from tryiton.routers.tryon import get_generator
from tryiton.services.providers import gemini as gemini_module


client = TestClient(app)

PRODUCT_URL = "https://cdn.example.com/products/dress.jpg"
GENERATED = b"generated-jpeg-bytes"


class FakeGenerator:
    def __init__(self, response=None):
        self.response = response if response is not None else types.GenerateContentResponse(candidates=[
            types.Candidate(content=types.Content(role="model", parts=[
                types.Part(text="Here is the try-on."),
                types.Part.from_bytes(data=GENERATED, mime_type="image/jpeg"),
            ]))
        ])
        self.calls = []

    async def generate(self, prompt, images):
        self.calls.append((prompt, images))
        return self.response


@pytest.fixture
def generator():
    fake = FakeGenerator()
    app.dependency_overrides[get_generator] = lambda: fake
    yield fake
    app.dependency_overrides.pop(get_generator, None)


def _post(photo=None, content_type="image/jpeg", url=PRODUCT_URL, product_type=None, title=None):
    files = {"userPhoto": ("me.jpg", photo, content_type)} if photo is not None else None
    data = {}
    if url is not None:
        data["productImageUrl"] = url
    if product_type is not None:
        data["productType"] = product_type
    if title is not None:
        data["productTitle"] = title
    return client.post("/api/tryon", files=files, data=data)


@respx.mock
def test_successful_try_on(generator, image_factory):
    photo = image_factory(1000, 1000, noise=True)
    assert 1024 * 1024 < len(photo) <= 5 * 1024 * 1024
    respx.get(PRODUCT_URL).mock(return_value=httpx.Response(200, content=image_factory(1600, 2400)))

    r = _post(photo, product_type="dress", title="Summer Dress")

    assert r.status_code == 200, r.text
    body = r.json()
    assert body["success"] is True
    assert body["resultImageUrl"] == "data:image/jpeg;base64," + base64.b64encode(GENERATED).decode()
    assert re.fullmatch(r"\d+\.\ds", body["processingTime"])
    assert body["message"] == "Virtual try-on completed successfully!"

    prompt, images = generator.calls[0]
    assert "full body clothing" in prompt
    assert '"Summer Dress"' in prompt
    assert [mime for _, mime in images] == ["image/jpeg", "image/jpeg"]
    sizes = [Image.open(BytesIO(data)).size for data, _ in images]
    assert sizes == [(1000, 1000), (683, 1024)]


@respx.mock
def test_jacket_prompt_and_scarf_fallback(generator, image_factory):
    respx.get(PRODUCT_URL).mock(return_value=httpx.Response(200, content=image_factory()))
    assert _post(image_factory(), product_type="Jacket").status_code == 200
    assert _post(image_factory(), product_type="scarf").status_code == 200
    assert "outer layer - wear over existing clothing" in generator.calls[0][0]
    assert 'clothing item labeled as "scarf"' in generator.calls[1][0]


def test_missing_photo(generator):
    r = _post(None)
    assert r.status_code == 400
    assert r.json() == {"success": False, "error": "Missing required parameters"}
    assert generator.calls == []


def test_missing_product_url(generator, image_factory):
    r = _post(image_factory(), url=None)
    assert r.status_code == 400
    assert r.json() == {"success": False, "error": "Missing required parameters"}


@respx.mock(assert_all_called=False)
def test_oversize_photo_rejected_before_network(generator):
    route = respx.get(PRODUCT_URL).mock(return_value=httpx.Response(200))
    r = _post(b"\xff" * (5 * 1024 * 1024 + 1))
    assert r.status_code == 400
    assert r.json() == {"success": False, "error": "File size too large. Maximum 5MB allowed."}
    assert not route.called
    assert generator.calls == []


@respx.mock(assert_all_called=False)
def test_unsupported_type(generator, image_factory):
    route = respx.get(PRODUCT_URL).mock(return_value=httpx.Response(200))
    r = _post(image_factory(fmt="GIF"), content_type="image/gif")
    assert r.status_code == 400
    assert r.json()["error"] == "Invalid file type. Only JPEG, PNG and WebP are allowed."
    assert not route.called


@respx.mock
def test_product_image_404(generator, image_factory):
    respx.get(PRODUCT_URL).mock(return_value=httpx.Response(404))
    r = _post(image_factory(), product_type="dress")
    assert r.status_code == 500
    body = r.json()
    assert body["success"] is False
    assert "Failed to download product image" in body["error"]
    assert generator.calls == []


@respx.mock
def test_no_image_generated(image_factory):
    fake = FakeGenerator(response=types.GenerateContentResponse(candidates=[
        types.Candidate(content=types.Content(role="model", parts=[types.Part(text="Sorry, no image.")]))
    ]))
    app.dependency_overrides[get_generator] = lambda: fake
    try:
        respx.get(PRODUCT_URL).mock(return_value=httpx.Response(200, content=image_factory()))
        r = _post(image_factory())
    finally:
        app.dependency_overrides.pop(get_generator, None)
    assert r.status_code == 500
    assert r.json() == {"success": False, "error": "No image generated by AI"}


@respx.mock(assert_all_called=False)
def test_undecodable_photo(generator):
    respx.get(PRODUCT_URL).mock(return_value=httpx.Response(200, content=b"whatever"))
    r = _post(b"not really a jpeg")
    assert r.status_code == 500
    assert r.json()["success"] is False
    assert generator.calls == []


@respx.mock
def test_missing_gemini_key(monkeypatch, image_factory):
    monkeypatch.setattr(settings, "tryon_provider", "gemini")
    monkeypatch.setattr(settings, "gemini_api_key", None)
    respx.get(PRODUCT_URL).mock(return_value=httpx.Response(200, content=image_factory()))
    r = _post(image_factory())
    assert r.status_code == 500
    assert r.json() == {"success": False, "error": "GEMINI_API_KEY not configured"}


@respx.mock
def test_gemini_failure_message_surfaces(monkeypatch, image_factory):
    class Boom:
        async def generate_content(self, **kwargs):
            raise RuntimeError("model overloaded")

    monkeypatch.setattr(settings, "tryon_provider", "gemini")
    monkeypatch.setattr(settings, "gemini_api_key", "test-key")
    monkeypatch.setattr(gemini_module, "_clients", {})
    monkeypatch.setattr(gemini_module.genai, "Client", lambda **kw: SimpleNamespace(aio=SimpleNamespace(models=Boom())))
    respx.get(PRODUCT_URL).mock(return_value=httpx.Response(200, content=image_factory()))
    r = _post(image_factory())
    assert r.status_code == 500
    assert r.json() == {"success": False, "error": "model overloaded"}


@respx.mock
def test_mock_provider_end_to_end(monkeypatch, image_factory):
    monkeypatch.setattr(settings, "tryon_provider", "mock")
    respx.get(PRODUCT_URL).mock(return_value=httpx.Response(200, content=image_factory(300, 300)))
    r = _post(image_factory(400, 300), product_type="shirt")
    assert r.status_code == 200
    assert r.json()["resultImageUrl"].startswith("data:image/jpeg;base64,")

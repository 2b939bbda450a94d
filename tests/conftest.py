import json
from collections.abc import AsyncIterator
from dataclasses import dataclass, field
from io import BytesIO
from pathlib import Path

import pytest
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, Response
from httpx import ASGITransport
from PIL import Image

from way2enjoy.client import Way2enjoyClient

API_KEY = "lolwat"
COMPRESS_PATH = "/modules/compress-png/way2enjoy-cli2.php"
API_URL = f"https://way2enjoy.test{COMPRESS_PATH}"
OUTPUT_URL = "https://way2enjoy.test/output/cat"

COMPRESSED_SIZE = 16646
RESIZED_SIZE = 5970


def _fake_jpeg(size: int) -> bytes:
    return b"\xff\xd8\xff\xe0" + b"\x00" * (size - 4)


@dataclass
class RecordedRequest:
    method: str
    path: str
    body: bytes
    authorization: str | None


@dataclass
class FakeApiState:
    compression_count: str | None = "99"
    output_type: str = "image/jpeg"
    output_url: str | None = OUTPUT_URL
    failures: set[str] = field(default_factory=set)
    requests: list[RecordedRequest] = field(default_factory=list)

    @property
    def request_count(self) -> int:
        return len(self.requests)


def _error(status_code: int, title: str, message: str) -> JSONResponse:
    return JSONResponse({"error": title, "message": message}, status_code=status_code)


def create_fake_api(state: FakeApiState) -> FastAPI:
    app = FastAPI()

    async def _record(request: Request) -> bytes:
        body = await request.body()
        state.requests.append(
            RecordedRequest(request.method, request.url.path, body, request.headers.get("authorization"))
        )
        return body

    @app.post(COMPRESS_PATH)
    async def compress(request: Request) -> Response:
        await _record(request)
        if "compress" in state.failures:
            return _error(400, "BadRequest", "The image could not be compressed")

        headers = {"Location": OUTPUT_URL}
        if state.compression_count is not None:
            headers["Compression-Count"] = state.compression_count
        output = {
            "size": COMPRESSED_SIZE,
            "type": state.output_type,
            "width": 400,
            "height": 400,
            "ratio": 0.9232,
        }
        if state.output_url:
            output["url"] = state.output_url
        content = {"input": {"size": 18031, "type": "image/jpeg"}, "output": output}
        return JSONResponse(content, status_code=201, headers=headers)

    @app.get("/output/{image_id}")
    async def download(image_id: str, request: Request) -> Response:
        await _record(request)
        if "download" in state.failures:
            return _error(500, "Stuff's on fire yo!", "This is the error message")
        return Response(content=_fake_jpeg(COMPRESSED_SIZE), media_type=state.output_type)

    @app.post("/output/{image_id}")
    async def transform(image_id: str, request: Request) -> Response:
        body = await _record(request)
        payload = json.loads(body or b"{}")

        if "store" in payload:
            if "store" in state.failures:
                return _error(400, "Stuff's on fire yo!", "This is the error message")
            store = payload["store"]
            location = f"https://s3-{store['region']}.amazonaws.com/{store['path']}"
            if "no_location" in state.failures:
                return Response(status_code=200)
            return Response(status_code=200, headers={"Location": location})

        if "resize" in state.failures:
            return _error(415, "Unsupported", "Resize failed")
        resize = payload["resize"]
        headers = {"Image-Width": str(resize.get("width", 150)), "Image-Height": str(resize.get("height", 150))}
        return Response(content=_fake_jpeg(RESIZED_SIZE), media_type=state.output_type, headers=headers)

    return app


@pytest.fixture
def api_state() -> FakeApiState:
    return FakeApiState()


@pytest.fixture
async def client(api_state: FakeApiState) -> AsyncIterator[Way2enjoyClient]:
    transport = ASGITransport(app=create_fake_api(api_state))
    async with Way2enjoyClient(API_KEY, api_url=API_URL, transport=transport) as c:
        yield c


@pytest.fixture
def cat_path(tmp_path: Path) -> Path:
    img = Image.new("RGB", (400, 400), color="orange")
    buffer = BytesIO()
    img.save(buffer, format="JPEG")
    path = tmp_path / "cat.jpg"
    path.write_bytes(buffer.getvalue())
    return path

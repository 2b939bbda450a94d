import asyncio
import enum
import inspect
from collections.abc import Awaitable
from dataclasses import dataclass
from typing import TypeAlias

import httpx
from pydantic import ValidationError

from way2enjoy.core.exceptions import ArgumentValidationError, Way2enjoyError
from way2enjoy.schemas.images import ApiInput, ApiOutput, CompressResult

COMPRESSION_COUNT_HEADER = "Compression-Count"
IMAGE_WIDTH_HEADER = "Image-Width"
IMAGE_HEIGHT_HEADER = "Image-Height"


class ResponseKind(str, enum.Enum):
    COMPRESS = "compress"
    IMAGE = "image"
    RESIZE = "resize"


def parse_header_int(headers: httpx.Headers, name: str) -> int | None:
    raw = headers.get(name)
    if raw is None:
        return None
    try:
        value = int(raw.strip())
    except ValueError:
        return None
    return value if value >= 0 else None


@dataclass(frozen=True, slots=True)
class Way2enjoyResponse:
    kind: ResponseKind
    http_response: httpx.Response
    compression_count: int = 0
    result: CompressResult | None = None
    http_client: httpx.AsyncClient | None = None

    @property
    def input(self) -> ApiInput:
        return self._compress_result().input

    @property
    def output(self) -> ApiOutput:
        return self._compress_result().output

    @property
    def image_width(self) -> int | None:
        return parse_header_int(self.http_response.headers, IMAGE_WIDTH_HEADER)

    @property
    def image_height(self) -> int | None:
        return parse_header_int(self.http_response.headers, IMAGE_HEIGHT_HEADER)

    def _compress_result(self) -> CompressResult:
        if self.result is None:
            raise AttributeError(f"a {self.kind.value} response carries no compression result")
        return self.result


MaybePending: TypeAlias = Way2enjoyResponse | Awaitable[Way2enjoyResponse]


async def create_from_response(
    response: httpx.Response,
    kind: ResponseKind,
    http_client: httpx.AsyncClient | None = None,
) -> Way2enjoyResponse:
    compression_count = parse_header_int(response.headers, COMPRESSION_COUNT_HEADER) or 0
    if kind is not ResponseKind.COMPRESS:
        return Way2enjoyResponse(kind=kind, http_response=response, compression_count=compression_count)

    await response.aread()
    try:
        data = response.json()
    except ValueError as e:
        raise Way2enjoyError("Malformed compress response") from e
    output = data.get("output") if isinstance(data, dict) else None
    if isinstance(output, dict) and not output.get("url") and response.headers.get("Location"):
        output["url"] = response.headers["Location"]
    try:
        result = CompressResult.model_validate(data)
    except ValidationError as e:
        raise Way2enjoyError("Malformed compress response") from e
    return Way2enjoyResponse(
        kind=kind,
        http_response=response,
        compression_count=compression_count,
        result=result,
        http_client=http_client,
    )


def discard(prior: object) -> None:
    """Stop a pending prior that will never be awaited."""
    if inspect.iscoroutine(prior):
        prior.close()
    elif asyncio.isfuture(prior):
        prior.cancel()


async def resolve(prior: MaybePending | None, name: str, *kinds: ResponseKind) -> Way2enjoyResponse:
    if prior is None:
        raise ArgumentValidationError(f"{name} is required")
    response = await prior if inspect.isawaitable(prior) else prior
    if response is None:
        raise ArgumentValidationError(f"{name} is required")
    if kinds and response.kind not in kinds:
        expected = ", ".join(k.value for k in kinds)
        raise ArgumentValidationError(f"{name} must be a {expected} response, got {response.kind.value}")
    return response

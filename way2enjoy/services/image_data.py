import os
from collections.abc import AsyncIterator

import httpx
import structlog

from way2enjoy.core.exceptions import ArgumentValidationError
from way2enjoy.schemas.responses import MaybePending, ResponseKind, discard, resolve

logger = structlog.get_logger()

_IMAGE_KINDS = (ResponseKind.IMAGE, ResponseKind.RESIZE)


async def get_image_bytes(image_response: MaybePending | None) -> bytes:
    image = await resolve(image_response, "image_response", *_IMAGE_KINDS)
    return await image.http_response.aread()


async def _iter_body(response: httpx.Response, chunk_size: int | None) -> AsyncIterator[bytes]:
    try:
        async for chunk in response.aiter_bytes(chunk_size):
            yield chunk
    finally:
        await response.aclose()


async def get_image_stream(image_response: MaybePending | None, chunk_size: int | None = None) -> AsyncIterator[bytes]:
    """Stream the image body in chunks.

    Call ``await stream.aclose()`` when stopping before the end; that closes
    the response.
    """
    image = await resolve(image_response, "image_response", *_IMAGE_KINDS)
    return _iter_body(image.http_response, chunk_size)


async def save_image_to_disk(image_response: MaybePending | None, file_path: str | os.PathLike[str]) -> None:
    if not file_path:
        discard(image_response)
        raise ArgumentValidationError("file_path is required")
    data = await get_image_bytes(image_response)
    with open(file_path, "wb") as f:
        f.write(data)
    logger.info("image_saved", path=str(file_path), size=len(data))

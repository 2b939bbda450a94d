import structlog

from way2enjoy.core.exceptions import ArgumentValidationError, raise_for_api_error
from way2enjoy.schemas.images import JPEG_TYPE, PreserveMetadata
from way2enjoy.schemas.responses import (
    MaybePending,
    ResponseKind,
    Way2enjoyResponse,
    create_from_response,
    resolve,
)

logger = structlog.get_logger()


def validate_preserve_metadata(metadata: PreserveMetadata | None, image_type: str) -> None:
    if metadata is None or image_type == JPEG_TYPE:
        return
    if metadata.creation:
        raise ArgumentValidationError(f"Creation metadata can only be preserved with type {JPEG_TYPE}")
    if metadata.location:
        raise ArgumentValidationError(f"Location metadata can only be preserved with type {JPEG_TYPE}")


def _preserve_body(metadata: PreserveMetadata | None) -> dict[str, list[str]] | None:
    if metadata is None or metadata.is_empty:
        return None
    return {"preserve": metadata.as_list()}


async def download(
    compress_response: MaybePending | None,
    metadata: PreserveMetadata | None = None,
) -> Way2enjoyResponse:
    compressed = await resolve(compress_response, "compress_response", ResponseKind.COMPRESS)
    validate_preserve_metadata(metadata, compressed.output.type)

    client = compressed.http_client
    if client is None:
        raise ArgumentValidationError("compress_response has no http client attached")

    request = client.build_request("GET", compressed.output.url, json=_preserve_body(metadata))
    response = await client.send(request, stream=True)
    await raise_for_api_error(response)

    logger.info("image_downloaded", url=compressed.output.url, preserve=metadata.as_list() if metadata else [])
    return await create_from_response(response, ResponseKind.IMAGE)

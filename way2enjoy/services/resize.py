import structlog

from way2enjoy.core.exceptions import ArgumentValidationError, raise_for_api_error
from way2enjoy.schemas.resize import ResizeOperation, ResizeType
from way2enjoy.schemas.responses import (
    MaybePending,
    ResponseKind,
    Way2enjoyResponse,
    create_from_response,
    discard,
    resolve,
)

logger = structlog.get_logger()


async def resize(compress_response: MaybePending | None, operation: ResizeOperation | None) -> Way2enjoyResponse:
    if operation is None:
        discard(compress_response)
        raise ArgumentValidationError("operation is required")

    compressed = await resolve(compress_response, "compress_response", ResponseKind.COMPRESS)
    client = compressed.http_client
    if client is None:
        raise ArgumentValidationError("compress_response has no http client attached")

    request = client.build_request("POST", compressed.output.url, json={"resize": operation.to_payload()})
    response = await client.send(request, stream=True)
    await raise_for_api_error(response)

    result = await create_from_response(response, ResponseKind.RESIZE)
    logger.info(
        "image_resized",
        method=operation.type.value,
        width=result.image_width or operation.width,
        height=result.image_height or operation.height,
    )
    return result


async def resize_to(
    compress_response: MaybePending | None,
    width: int,
    height: int,
    resize_type: ResizeType = ResizeType.FIT,
) -> Way2enjoyResponse:
    if compress_response is None:
        raise ArgumentValidationError("compress_response is required")
    if width == 0:
        discard(compress_response)
        raise ArgumentValidationError("width must not be zero")
    if height == 0:
        discard(compress_response)
        raise ArgumentValidationError("height must not be zero")

    return await resize(compress_response, ResizeOperation(type=resize_type, width=width, height=height))

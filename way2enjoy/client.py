import os
from pathlib import Path
from types import TracebackType
from typing import BinaryIO, TypeAlias

import httpx
import structlog

from way2enjoy.config import settings
from way2enjoy.core.exceptions import (
    ArgumentValidationError,
    NotConfiguredError,
    Way2enjoyError,
    raise_for_api_error,
)
from way2enjoy.schemas.images import AmazonS3Configuration
from way2enjoy.schemas.responses import (
    MaybePending,
    ResponseKind,
    Way2enjoyResponse,
    create_from_response,
    discard,
    resolve,
)

logger = structlog.get_logger()

ImageSource: TypeAlias = str | os.PathLike[str] | bytes | bytearray | memoryview | BinaryIO


def _read_source(source: ImageSource | None) -> bytes:
    if source is None:
        raise ArgumentValidationError("source is required")
    if isinstance(source, (bytes, bytearray, memoryview)):
        data = bytes(source)
    elif isinstance(source, (str, os.PathLike)):
        if not os.fspath(source):
            raise ArgumentValidationError("path to the image is required")
        data = Path(source).read_bytes()
    elif hasattr(source, "read"):
        data = source.read()
    else:
        raise ArgumentValidationError(f"Unsupported image source type '{type(source).__name__}'")

    if not data:
        raise ArgumentValidationError("image data is empty")
    return data


class Way2enjoyClient:
    def __init__(
        self,
        api_key: str | None = None,
        s3_configuration: AmazonS3Configuration | None = None,
        *,
        api_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        api_key = api_key or settings.api_key
        if not api_key:
            raise ArgumentValidationError("api_key is required")

        self.api_url = api_url or settings.api_url
        self.s3_configuration = s3_configuration
        self._http_client = httpx.AsyncClient(
            auth=("api", api_key),
            timeout=timeout if timeout is not None else settings.timeout,
            headers={"User-Agent": settings.user_agent},
            transport=transport,
        )

    @property
    def http_client(self) -> httpx.AsyncClient:
        return self._http_client

    async def compress(self, source: ImageSource | None) -> Way2enjoyResponse:
        data = _read_source(source)
        response = await self._http_client.post(self.api_url, content=data)
        await raise_for_api_error(response)

        result = await create_from_response(response, ResponseKind.COMPRESS, self._http_client)
        logger.info(
            "image_compressed",
            input_size=result.input.size,
            output_size=result.output.size,
            ratio=result.output.ratio,
            compression_count=result.compression_count,
        )
        return result

    async def save_to_cloud_storage(
        self,
        compress_response: MaybePending | None,
        path: str | None,
        s3_configuration: AmazonS3Configuration | None = None,
    ) -> str:
        if compress_response is None:
            raise ArgumentValidationError("compress_response is required")

        s3 = s3_configuration or self.s3_configuration
        if s3 is None:
            discard(compress_response)
            raise NotConfiguredError("Amazon S3 has not been configured")
        if not path:
            discard(compress_response)
            raise ArgumentValidationError("path is required")

        compressed = await resolve(compress_response, "compress_response", ResponseKind.COMPRESS)
        body = {
            "store": {
                "service": "s3",
                "aws_access_key_id": s3.aws_access_key_id,
                "aws_secret_access_key": s3.aws_secret_access_key,
                "region": s3.default_region,
                "path": f"{s3.default_bucket}/{path}",
            }
        }
        response = await self._http_client.post(compressed.output.url, json=body)
        await raise_for_api_error(response)

        location = response.headers.get("Location")
        if not location:
            raise Way2enjoyError("Storage response did not include a Location header")
        logger.info("image_stored", bucket=s3.default_bucket, path=path, location=location)
        return location

    async def aclose(self) -> None:
        await self._http_client.aclose()

    async def __aenter__(self) -> "Way2enjoyClient":
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        await self.aclose()

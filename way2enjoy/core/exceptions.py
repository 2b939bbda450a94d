import httpx
import structlog
from pydantic import ValidationError

from way2enjoy.schemas.images import ApiErrorResponse

logger = structlog.get_logger()


class Way2enjoyError(Exception):
    """Base class for every error raised by the client."""


class ArgumentValidationError(Way2enjoyError, ValueError):
    """An argument was missing or out of range. Raised before any I/O."""


class NotConfiguredError(Way2enjoyError):
    """An operation needs credentials that were never supplied."""


class ApiError(Way2enjoyError):
    def __init__(self, status_code: int, reason_phrase: str, error_title: str, error_message: str) -> None:
        self.status_code = status_code
        self.reason_phrase = reason_phrase
        self.error_title = error_title
        self.error_message = error_message
        super().__init__(
            "Api Service returned a non-success status code when attempting an operation on an image: "
            f"{status_code} - {reason_phrase}. {error_title}, {error_message}"
        )


def _parse_error_body(response: httpx.Response) -> ApiErrorResponse:
    try:
        return ApiErrorResponse.model_validate_json(response.content)
    except ValidationError:
        return ApiErrorResponse(error=response.reason_phrase, message=response.text)


async def raise_for_api_error(response: httpx.Response) -> None:
    """Read, close and raise ApiError for a non-success response."""
    if response.is_success:
        return

    try:
        await response.aread()
    finally:
        await response.aclose()

    body = _parse_error_body(response)
    logger.warning(
        "api_request_failed",
        url=str(response.request.url),
        status_code=response.status_code,
        error=body.error,
    )
    raise ApiError(response.status_code, response.reason_phrase, body.error, body.message)

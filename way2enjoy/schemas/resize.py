import enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from way2enjoy.core.exceptions import ArgumentValidationError


class ResizeType(str, enum.Enum):
    FIT = "fit"
    COVER = "cover"
    SCALE = "scale"
    THUMB = "thumb"


def _require_dimension(value: int | None, name: str) -> int:
    if value is None or value <= 0:
        raise ArgumentValidationError(f"You must specify a {name}")
    return value


class ResizeOperation(BaseModel):
    """How the compressed image should be resized.

    Serialized as ``{"method": ..., "width": ..., "height": ...}``; unset
    dimensions are left out.
    """

    model_config = ConfigDict(frozen=True)

    type: ResizeType = Field(serialization_alias="method")
    width: int | None = None
    height: int | None = None

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class FitResizeOperation(ResizeOperation):
    def __init__(self, width: int, height: int) -> None:
        super().__init__(
            type=ResizeType.FIT,
            width=_require_dimension(width, "width"),
            height=_require_dimension(height, "height"),
        )


class CoverResizeOperation(ResizeOperation):
    def __init__(self, width: int, height: int) -> None:
        super().__init__(
            type=ResizeType.COVER,
            width=_require_dimension(width, "width"),
            height=_require_dimension(height, "height"),
        )


class ThumbResizeOperation(ResizeOperation):
    def __init__(self, width: int, height: int) -> None:
        super().__init__(
            type=ResizeType.THUMB,
            width=_require_dimension(width, "width"),
            height=_require_dimension(height, "height"),
        )


class ScaleWidthResizeOperation(ResizeOperation):
    def __init__(self, width: int) -> None:
        super().__init__(type=ResizeType.SCALE, width=_require_dimension(width, "width"))


class ScaleHeightResizeOperation(ResizeOperation):
    def __init__(self, height: int) -> None:
        super().__init__(type=ResizeType.SCALE, height=_require_dimension(height, "height"))

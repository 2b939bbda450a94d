from pydantic import BaseModel, ConfigDict, field_validator

JPEG_TYPE = "image/jpeg"


class ApiErrorResponse(BaseModel):
    error: str = ""
    message: str = ""


class ApiInput(BaseModel):
    model_config = ConfigDict(frozen=True)

    size: int
    type: str


class ApiOutput(BaseModel):
    model_config = ConfigDict(frozen=True)

    size: int
    type: str
    width: int
    height: int
    ratio: float
    url: str

    @field_validator("url")
    @classmethod
    def _url_not_empty(cls, value: str) -> str:
        if not value:
            raise ValueError("output url must not be empty")
        return value


class CompressResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    input: ApiInput
    output: ApiOutput


class PreserveMetadata(BaseModel):
    model_config = ConfigDict(frozen=True)

    copyright: bool = False
    creation: bool = False
    location: bool = False

    @property
    def is_empty(self) -> bool:
        return not (self.copyright or self.creation or self.location)

    def as_list(self) -> list[str]:
        return [name for name in ("copyright", "creation", "location") if getattr(self, name)]


class AmazonS3Configuration(BaseModel):
    model_config = ConfigDict(frozen=True)

    aws_access_key_id: str
    aws_secret_access_key: str
    default_bucket: str
    default_region: str

    @field_validator("aws_access_key_id", "aws_secret_access_key", "default_bucket", "default_region")
    @classmethod
    def _not_empty(cls, value: str) -> str:
        if not value:
            raise ValueError("value must not be empty")
        return value

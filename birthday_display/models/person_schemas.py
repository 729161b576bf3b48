import re
from datetime import date, datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic_core import PydanticCustomError

DATE_FORMAT = "%d.%m.%Y"
# strptime alone would also accept "1.3.1990"
DATE_PATTERN = re.compile(r"^[0-9]{2}\.[0-9]{2}\.[0-9]{4}$")
IMAGE_URL_SCHEMES = ("http://", "https://")


class ErrorKind(str, Enum):
    """
    Reasons a single line of the birthday file is rejected
    """
    MISSING_NAME = "missing_name"
    INVALID_DATE = "invalid_date"
    INVALID_GENDER = "invalid_gender"
    INVALID_IMAGE_URL = "invalid_image_url"
    MALFORMED_LINE = "malformed_line"


class Person(BaseModel):
    """
    Person schema, one validated line of the birthday file
    """
    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    last_name: str
    first_name: str
    birthday: date
    gender: str
    image_url: str | None = None

    @field_validator("last_name", "first_name")
    @classmethod
    def validate_name(cls, value: str) -> str:
        if not value:
            raise PydanticCustomError(ErrorKind.MISSING_NAME.value, "Name must not be empty")
        return value

    @field_validator("birthday", mode="before")
    @classmethod
    def parse_birthday(cls, value):
        if isinstance(value, date):
            return value
        if not isinstance(value, str) or not DATE_PATTERN.match(value.strip()):
            raise PydanticCustomError(
                ErrorKind.INVALID_DATE.value,
                "Birthday must have the format dd.mm.YYYY, got '{value}'",
                {"value": value},
            )
        try:
            return datetime.strptime(value.strip(), DATE_FORMAT).date()
        except ValueError as e:
            raise PydanticCustomError(
                ErrorKind.INVALID_DATE.value,
                "Birthday is not a calendar date: {reason}",
                {"reason": str(e)},
            ) from e

    @field_validator("gender")
    @classmethod
    def validate_gender(cls, value: str) -> str:
        if len(value) != 1:
            raise PydanticCustomError(
                ErrorKind.INVALID_GENDER.value,
                "Gender must be a single character, got '{value}'",
                {"value": value},
            )
        return value

    @field_validator("image_url", mode="before")
    @classmethod
    def empty_image_url_to_none(cls, value):
        # a trailing comma leaves an empty fifth field
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("image_url")
    @classmethod
    def validate_image_url(cls, value: str | None) -> str | None:
        if value is not None and not value.startswith(IMAGE_URL_SCHEMES):
            raise PydanticCustomError(
                ErrorKind.INVALID_IMAGE_URL.value,
                "Image url must start with http:// or https://, got '{value}'",
                {"value": value},
            )
        return value

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"


class LineError(BaseModel):
    """
    A rejected line of the birthday file
    """
    model_config = ConfigDict(frozen=True)

    line_number: int
    kind: ErrorKind
    message: str


class LoadResult(BaseModel):
    """
    Result of loading a birthday file, both in file order
    """
    model_config = ConfigDict(frozen=True)

    persons: tuple[Person, ...] = ()
    errors: tuple[LineError, ...] = ()

from enum import Enum

from pydantic import BaseModel, ConfigDict

from birthday_display.models.person_schemas import Person


class ViewState(str, Enum):
    """
    Loading until every image of today's matches is resolved, Ready afterwards
    """
    LOADING = "loading"
    READY = "ready"


class ImageStatus(str, Enum):
    NONE = "none"
    PENDING = "pending"
    LOADED = "loaded"
    FAILED = "failed"


class BirthdayEntry(BaseModel):
    """
    One matching person as handed to the renderer
    """
    model_config = ConfigDict(frozen=True)

    person: Person
    greeting: str
    image_status: ImageStatus = ImageStatus.NONE
    image_data: bytes | None = None

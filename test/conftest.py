import pytest
from datetime import date
from unittest.mock import AsyncMock, MagicMock
from birthday_display.core.config import Settings
from birthday_display.models.person_schemas import Person
from birthday_display.services.birthday_service import BirthdayService
from birthday_display.services.image_service import ImageService
from birthday_display.services.record_loader import RecordLoader

@pytest.fixture
def config():
    return Settings(_env_file=None)

@pytest.fixture
def record_loader():
    return RecordLoader()

@pytest.fixture
def birthday_service():
    return BirthdayService()

@pytest.fixture
def write_csv(tmp_path):
    def _write(content: str, name: str = "birthdays.csv"):
        path = tmp_path / name
        path.write_text(content, encoding="utf-8")
        return str(path)
    return _write

@pytest.fixture
def make_person():
    def _make(first_name="Jane", last_name="Doe", birthday=date(1990, 3, 15), gender="f", image_url=None):
        return Person(
            last_name=last_name,
            first_name=first_name,
            birthday=birthday,
            gender=gender,
            image_url=image_url
        )
    return _make

class FakeStream:
    """Stands in for aiohttp's StreamReader, counting the chunks handed out"""
    def __init__(self, chunks=(b"image-bytes",), error=None):
        self.chunks = list(chunks)
        self.error = error
        self.consumed = 0

    def iter_chunked(self, size):
        return self._iterate()

    async def _iterate(self):
        for chunk in self.chunks:
            self.consumed += 1
            yield chunk
        if self.error is not None:
            raise self.error

@pytest.fixture
def mock_response():
    response = MagicMock()
    response.raise_for_status = MagicMock()
    response.content_length = None
    response.content = FakeStream()
    return response

@pytest.fixture
def mock_http_client(mock_response):
    client = MagicMock()
    client.session.get.return_value.__aenter__.return_value = mock_response
    client.session.get.return_value.__aexit__.return_value = False
    client.start = AsyncMock()
    client.close = AsyncMock()
    return client

@pytest.fixture
def image_service(config, mock_http_client):
    return ImageService(config, client=mock_http_client)

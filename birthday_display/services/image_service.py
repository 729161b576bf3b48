from aiohttp import ClientError, ClientSession
from birthday_display.core.config import Settings
from birthday_display.exception.exceptions import ImageFetchError
from birthday_display.models.person_schemas import IMAGE_URL_SCHEMES
from birthday_display.utils.http_client import HTTPClient
import asyncio
import logging

logger = logging.getLogger(__name__)

CHUNK_SIZE = 64 * 1024

class ImageService:
    """
    This service downloads portrait images. It only hands back raw bytes, decoding is left to the window.
    """
    def __init__(self, config: Settings, client: HTTPClient | None = None):
        self.config = config
        self.client = client if client is not None else HTTPClient(config)

    @property
    def session(self) -> ClientSession:
        """Access the shared session"""
        return self.client.session

    async def fetch_image(self, url: str) -> bytes:
        """
        Fetch a single image

        :param url: http or https url of the image

        Raises ImageFetchError for every failure, including timeouts and non 2xx responses.
        """
        if not url or not url.startswith(IMAGE_URL_SCHEMES):
            raise ImageFetchError(url, "only http and https urls are supported")

        try:
            async with self.session.get(url) as response:
                response.raise_for_status()

                if response.content_length is not None and response.content_length > self.config.IMAGE_MAX_BYTES:
                    raise ImageFetchError(url, f"image is larger than {self.config.IMAGE_MAX_BYTES} bytes")

                # Content-Length may be absent, so the cap is also enforced while reading
                data = bytearray()
                async for chunk in response.content.iter_chunked(CHUNK_SIZE):
                    data.extend(chunk)
                    if len(data) > self.config.IMAGE_MAX_BYTES:
                        raise ImageFetchError(url, f"image is larger than {self.config.IMAGE_MAX_BYTES} bytes")

            if not data:
                raise ImageFetchError(url, "empty response body")

            logger.debug(f"Fetched {len(data)} bytes from {url}")
            return bytes(data)

        except ImageFetchError:
            raise
        except asyncio.TimeoutError as e:
            raise ImageFetchError(url, "request timed out") from e
        except ClientError as e:
            raise ImageFetchError(url, str(e) or e.__class__.__name__) from e
        except Exception as e:
            logger.error(f"Unexpected error fetching image {url}: {e}")
            raise ImageFetchError(url, "an unexpected error occurred") from e

    async def fetch_image_or_none(self, url: str) -> bytes | None:
        """Same as fetch_image but a failure is logged and turned into None"""
        try:
            return await self.fetch_image(url)
        except ImageFetchError as e:
            logger.warning(str(e))
            return None

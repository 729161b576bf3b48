from aiohttp import ClientSession, ClientTimeout, TCPConnector
from typing import Optional
from birthday_display.core.config import Settings

class HTTPClient:
    """
    Owns the aiohttp session used for image downloads.
    The session is bound to the event loop it is created on, so start() and close()
    must run on the fetch worker's loop.
    """

    def __init__(self, config: Settings):
        self.config = config
        self._session: Optional[ClientSession] = None
        self.timeout = ClientTimeout(
            total=config.HTTP_TIMEOUT_TOTAL,
            connect=config.HTTP_TIMEOUT_CONNECT,
            sock_connect=config.HTTP_TIMEOUT_SOCK_CONNECT,
            sock_read=config.HTTP_TIMEOUT_SOCK_READ
        )

    async def start(self):
        if self._session is None or self._session.closed:
            connector = TCPConnector(
                limit=self.config.HTTP_POOL_SIZE,
                limit_per_host=self.config.HTTP_POOL_SIZE_PER_HOST,
                ttl_dns_cache=self.config.HTTP_TTL_DNS_CACHE,
                enable_cleanup_closed=True
            )
            self._session = ClientSession(timeout=self.timeout, connector=connector)

    async def close(self):
        if self._session and not self._session.closed:
            await self._session.close()
        self._session = None

    @property
    def session(self) -> ClientSession:
        if self._session is None or self._session.closed:
            raise RuntimeError("HTTP client not initialized")
        return self._session

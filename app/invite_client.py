import logging

import httpx

from app.schemas import InviteRequest

logger = logging.getLogger(__name__)

INVITE_PATH = "/api/invite"


class InviteClientError(Exception):
    pass


class ServerRejected(InviteClientError):
    """The invite API answered with a non-2xx status."""

    def __init__(self, status_code: int, text: str):
        self.status_code = status_code
        self.text = text
        super().__init__(f"{status_code}: {text}")


class TransportFailed(InviteClientError):
    """The request never produced a response (DNS, connection, ...)."""

    def __init__(self, cause: httpx.HTTPError):
        self.cause = cause
        super().__init__(str(cause) or cause.__class__.__name__)


class InviteClient:
    """
    Posts invites to the fixed `/api/invite` endpoint of the invite API.
    One request per call, no retries. `timeout=None` waits as long as the
    transport allows.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.transport = transport

    @property
    def invite_url(self) -> str:
        return f"{self.base_url}{INVITE_PATH}"

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=httpx.Timeout(self.timeout), transport=self.transport)

    async def send_invite(self, invite: InviteRequest) -> httpx.Response:
        try:
            async with self._client() as client:
                r = await client.post(
                    self.invite_url,
                    json=invite.model_dump(),
                    headers={"Content-Type": "application/json"},
                )
        except httpx.HTTPError as e:
            logger.warning("Invite request to %s failed: %s", self.invite_url, e)
            raise TransportFailed(e) from e

        if not r.is_success:
            raise ServerRejected(r.status_code, r.text)
        return r

    async def ping(self) -> bool:
        """True when the invite API answers anything at all on its base URL."""
        try:
            async with httpx.AsyncClient(timeout=httpx.Timeout(5.0, connect=3.0), transport=self.transport) as client:
                await client.get(self.base_url)
            return True
        except httpx.HTTPError:
            return False

"""Identity service client for verifying caller bearer tokens"""

import httpx

from credit_check_gateway.config import settings
from credit_check_gateway.domain.exceptions import AuthenticationError
from credit_check_gateway.domain.models import CallerIdentity


class IdentityClient:
    """Client for the external token verification service"""

    def __init__(
        self,
        verify_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.verify_url = verify_url or settings.identity_verify_url
        self.timeout = timeout or settings.http_timeout_seconds
        self.transport = transport

    async def verify_token(self, token: str) -> CallerIdentity:
        """
        Resolve an ID token to the caller identity.

        Raises:
            AuthenticationError: Token rejected, service unreachable or payload invalid
        """
        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            try:
                response = await client.post(self.verify_url, json={"id_token": token})
                response.raise_for_status()
                data = response.json()
            except httpx.HTTPStatusError as e:
                raise AuthenticationError(f"Token rejected: {e.response.status_code}") from e
            except httpx.RequestError as e:
                raise AuthenticationError(f"Identity service unreachable: {e}") from e
            except ValueError as e:
                raise AuthenticationError(f"Invalid identity payload: {e}") from e

        uid = data.get("uid") if isinstance(data, dict) else None
        if not uid:
            raise AuthenticationError("Identity payload has no uid")

        return CallerIdentity(uid=str(uid), email=data.get("email"))

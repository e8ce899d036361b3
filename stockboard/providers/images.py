"""Company logo proxy.

Finnhub profile payloads carry logo URLs on its static hosts. Browsers fetch
them through this proxy to avoid mixed-origin issues. The proxy only fetches
from hosts on the configured allow-list, so it cannot be used to reach
arbitrary hosts (including ones on the server's private network).
"""
import asyncio
import logging
from collections.abc import AsyncIterator

import httpx

from stockboard.core.exceptions import InvalidParameter, UpstreamError
from stockboard.providers.base import DEFAULT_DEADLINE_SECONDS
from stockboard.utils.validation import is_allowed_url

logger = logging.getLogger(__name__)


class LogoProxy:
    """Opens streaming GETs against allow-listed image hosts.

    ``deadline`` bounds opening the stream and, separately, relaying its body.
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        allowed_hosts: list[str],
        deadline: float = DEFAULT_DEADLINE_SECONDS,
    ) -> None:
        self._client = client
        self._allowed_hosts = allowed_hosts
        self._deadline = deadline

    def is_allowed(self, url: str) -> bool:
        return is_allowed_url(url, self._allowed_hosts)

    async def open(self, url: str) -> httpx.Response:
        """Start a streaming fetch of ``url``.

        The caller owns the returned response and must ``aclose()`` it once
        the body has been relayed.

        Raises:
            InvalidParameter: If the URL is not http(s) or its host is not allowed
            UpstreamError: On transport failure, timeout or a non-2xx upstream status
        """
        if not self.is_allowed(url):
            logger.warning(f"Rejected logo URL outside allow-list: {url}")
            raise InvalidParameter("URL host is not allowed.")

        request = self._client.build_request("GET", url)
        try:
            async with asyncio.timeout(self._deadline):
                response = await self._client.send(request, stream=True)
        except (httpx.TimeoutException, TimeoutError) as e:
            raise UpstreamError("Image request timed out") from e
        except httpx.RequestError as e:
            raise UpstreamError(f"Image request failed: {e}") from e

        if not response.is_success:
            await response.aclose()
            raise UpstreamError(
                f"Failed to fetch image: {response.reason_phrase}",
                upstream_status=response.status_code,
            )
        return response

    async def iter_body(self, response: httpx.Response) -> AsyncIterator[bytes]:
        """Yield the body of an opened response until it ends or the deadline passes.

        Headers have already been sent when this runs, so a body that overruns
        the deadline or fails mid-transfer is truncated and logged.
        """
        deadline = asyncio.get_running_loop().time() + self._deadline
        chunks = response.aiter_bytes()
        try:
            while True:
                try:
                    async with asyncio.timeout_at(deadline):
                        chunk = await anext(chunks)
                except StopAsyncIteration:
                    return
                except TimeoutError:
                    logger.warning(f"Logo body exceeded {self._deadline}s deadline: {response.url}")
                    return
                except httpx.HTTPError as e:
                    logger.warning(f"Logo body transfer failed: {response.url}: {e}")
                    return
                yield chunk
        finally:
            await response.aclose()

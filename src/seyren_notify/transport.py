from __future__ import annotations

import asyncio
import smtplib
from email.message import EmailMessage

import httpx

from seyren_notify.errors import ConfigurationError, DeliveryFailed

JSON_HEADERS = {
    "Accept": "application/json",
    "Content-Type": "application/json",
}


async def post_json(
    url: str,
    body: bytes,
    timeout_seconds: float = 10.0,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.Response:
    """POST an already-serialized JSON body exactly once.

    Network errors and non-2xx responses both raise ``DeliveryFailed``; a URL httpx
    refuses to send to raises ``ConfigurationError``.
    """
    async with httpx.AsyncClient(timeout=timeout_seconds, transport=transport) as client:
        try:
            response = await client.post(url, content=body, headers=JSON_HEADERS)
        except httpx.InvalidURL as exc:
            raise ConfigurationError(f"Cannot POST to invalid URL {url!r}: {exc}") from exc
        except httpx.HTTPError as exc:
            raise DeliveryFailed(f"POST {url} failed: {exc}") from exc
    if not 200 <= response.status_code < 300:
        raise DeliveryFailed(f"HTTP status {response.status_code} for {url}", status_code=response.status_code)
    return response


class SmtpSender:
    def __init__(
        self,
        host: str,
        port: int,
        username: str | None = None,
        password: str | None = None,
        use_tls: bool = False,
        timeout_seconds: float = 10.0,
    ) -> None:
        self.host = host
        self.port = port
        self.username = username
        self.password = password
        self.use_tls = use_tls
        self.timeout_seconds = timeout_seconds

    async def send(self, message: EmailMessage) -> None:
        try:
            await asyncio.to_thread(self._send, message)
        except (smtplib.SMTPException, OSError) as exc:
            raise DeliveryFailed(f"SMTP delivery via {self.host}:{self.port} failed: {exc}") from exc

    def _send(self, message: EmailMessage) -> None:
        with smtplib.SMTP(self.host, self.port, timeout=self.timeout_seconds) as smtp:
            if self.use_tls:
                smtp.starttls()
            if self.username:
                smtp.login(self.username, self.password or "")
            smtp.send_message(message)

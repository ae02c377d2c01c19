import logging
import platform
import socket
from typing import Optional
from urllib.parse import quote

import httpx

from hostwatch.config import DEFAULT_PUSHPLUS_ENDPOINT
from hostwatch.models.alert import UNKNOWN_HOSTNAME, UNKNOWN_OS, HostIdentity

logger = logging.getLogger(__name__)


class AlertDispatchError(RuntimeError):
    """Raised when an alert could not be delivered to the webhook."""


def _os_name() -> str:
    try:
        name = platform.freedesktop_os_release().get("NAME", "")
    except (AttributeError, OSError):
        # kein os-release (macOS, Windows, ältere Python-Versionen)
        name = ""
    return name.strip() or platform.system().strip() or UNKNOWN_OS


def _hostname() -> str:
    try:
        return socket.gethostname().strip() or UNKNOWN_HOSTNAME
    except OSError:
        return UNKNOWN_HOSTNAME


def get_host_identity() -> HostIdentity:
    """
    Resolve the local OS name and hostname.

    The OS name is the distribution NAME from os-release where available,
    otherwise platform.system(). Missing values fall back to "Unknown OS"
    and "Unknown Hostname".
    """
    return HostIdentity(os_name=_os_name(), hostname=_hostname())


class PushPlusNotifier:
    """
    Send alert messages to the PushPlus webhook with a single GET request.

    The response is not inspected: an alert counts as delivered as soon as
    the HTTP exchange completes. Transport failures are raised as
    AlertDispatchError and never retried.
    """

    def __init__(
        self,
        token: str,
        endpoint: str = DEFAULT_PUSHPLUS_ENDPOINT,
        client: Optional[httpx.Client] = None,
        identity: Optional[HostIdentity] = None,
    ):
        self.token = token
        self.endpoint = endpoint
        self._client = client or httpx.Client()
        self._identity = identity

    def build_url(self, content: str) -> str:
        identity = self._identity or get_host_identity()
        full_content = identity.compose(content)
        encoded = quote(full_content, safe="")
        return f"{self.endpoint}?token={self.token}&content={encoded}"

    def send(self, content: str) -> None:
        url = self.build_url(content)
        try:
            response = self._client.get(url)
        except httpx.HTTPError as exc:
            raise AlertDispatchError(f"{type(exc).__name__}: {exc}") from exc

        logger.debug("PushPlus answered with HTTP %s", response.status_code)

    def close(self) -> None:
        self._client.close()

# output_target/capabilities.py

"""
Client Capability Providers

Mobile detection is delegated to an external "browser capabilities" service
(browscap or an equivalent). The classifier only needs one answer from it, so
providers expose a single ``is_mobile()`` method and are injected into the
request context explicitly.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, Optional

logger = logging.getLogger(__name__)


class CapabilityProvider(ABC):
    """Reports device capabilities for the current client."""

    @abstractmethod
    def is_mobile(self) -> bool:
        """Return True when the client is a mobile device."""


class NoCapabilityProvider(CapabilityProvider):
    """Used when no capability service is installed. Never reports mobile."""

    def is_mobile(self) -> bool:
        return False

    def __repr__(self):
        return 'NoCapabilityProvider()'


class StaticCapabilityProvider(CapabilityProvider):
    """Fixed answer, for hosts that already know the device class."""

    def __init__(self, mobile: bool = False):
        self.mobile = bool(mobile)

    def is_mobile(self) -> bool:
        return self.mobile

    def __repr__(self):
        return f'StaticCapabilityProvider(mobile={self.mobile})'


def _flag(value: Any) -> bool:
    # browscap style data stores flags as bools, ints or "true"/"1" strings
    if isinstance(value, str):
        return value.strip().lower() in ('1', 'true', 'yes', 'on')
    try:
        return bool(int(value))
    except (TypeError, ValueError):
        return bool(value)


class BrowserCapabilitiesProvider(CapabilityProvider):
    """
    Adapts a ``get_browser_capabilities()`` callable to the provider interface.

    The callable returns a dict of capabilities in browscap format (or None
    when the client is unknown). Only the ``ismobiledevice`` key is used;
    ``isMobileDevice`` is accepted as well.
    """

    def __init__(self, get_browser_capabilities: Callable[[], Optional[Dict[str, Any]]]):
        self.get_browser_capabilities = get_browser_capabilities

    def is_mobile(self) -> bool:
        capabilities = self.get_browser_capabilities()
        if not capabilities:
            return False

        value = capabilities.get('ismobiledevice', capabilities.get('isMobileDevice'))
        if value is None:
            logger.debug("[OutputTarget] Browser capabilities have no mobile flag")
            return False

        return _flag(value)

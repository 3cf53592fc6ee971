# output_target/__init__.py

"""
Output Target Package

Detects where a response is going (console, Ajax, browser or mobile) and
negotiates gzip compression of the response body.
"""

from .capabilities import (
    BrowserCapabilitiesProvider,
    CapabilityProvider,
    NoCapabilityProvider,
    StaticCapabilityProvider,
)
from .compression import (
    Compress,
    CompressedOutput,
    PassThrough,
    can_compress,
    compress_output,
)
from .exceptions import InvalidBufferError, OutputTargetError
from .messages import Messages, get_messages
from .middleware import init_output_target
from .targets import (
    RequestContext,
    Target,
    bind_context,
    current_context,
    detect_output_target,
    is_ajax,
    is_browser,
    is_console,
    is_mobile,
    reset_context,
)

__all__ = [
    'BrowserCapabilitiesProvider',
    'CapabilityProvider',
    'Compress',
    'CompressedOutput',
    'InvalidBufferError',
    'Messages',
    'NoCapabilityProvider',
    'OutputTargetError',
    'PassThrough',
    'RequestContext',
    'StaticCapabilityProvider',
    'Target',
    'bind_context',
    'can_compress',
    'compress_output',
    'current_context',
    'detect_output_target',
    'get_messages',
    'init_output_target',
    'is_ajax',
    'is_browser',
    'is_console',
    'is_mobile',
    'reset_context',
]

# output_target/targets.py

"""
Output Target Classification

Works out where the output of the current request is going:

1. A console (the code runs from a terminal with a real stdout handle)
2. An Ajax call (X-Requested-With: XMLHttpRequest)
3. A mobile device (reported by an injected capability provider)
4. A regular browser (default)

The result is memoized on the RequestContext, and every request gets its own
context (stored in flask.g), so one request's classification never leaks into
another.
"""

import logging
import sys
from contextvars import ContextVar
from enum import Enum
from typing import Optional

from flask import current_app, g, has_app_context, has_request_context, request
from werkzeug.datastructures import Headers

from .capabilities import CapabilityProvider, NoCapabilityProvider

logger = logging.getLogger(__name__)

XHR_HEADER = 'X-Requested-With'
XHR_VALUE = 'xmlhttprequest'

# Key used for the per-request context in flask.g
G_CONTEXT_KEY = 'output_target_context'

_console_context: ContextVar[Optional['RequestContext']] = ContextVar(
    'output_target_console_context', default=None
)


class Target(Enum):
    """Where the response is delivered."""
    CONSOLE = 'console'
    AJAX = 'ajax'
    BROWSER = 'browser'
    MOBILE = 'mobile'

    def __str__(self):
        return self.value


class RequestContext:
    """
    Signals the classifier looks at, plus the memoized target.

    Args:
        headers: Request headers (any mapping or werkzeug Headers)
        console_stream: Stream standing in for the console stdout, if any
        capabilities: Capability provider used for mobile detection
    """

    def __init__(self, headers=None, console_stream=None,
                 capabilities: Optional[CapabilityProvider] = None):
        if not isinstance(headers, Headers):
            headers = Headers(headers or {})
        self.headers = headers
        self.console_stream = console_stream
        self.capabilities = capabilities if capabilities is not None else NoCapabilityProvider()
        self._target: Optional[Target] = None

    @classmethod
    def from_request(cls, req=None, capabilities: Optional[CapabilityProvider] = None) -> 'RequestContext':
        """Build a context for an HTTP request. Web requests never have a console."""
        req = req if req is not None else request
        return cls(headers=req.headers, console_stream=None, capabilities=capabilities)

    @classmethod
    def from_console(cls, stream=None, capabilities: Optional[CapabilityProvider] = None) -> 'RequestContext':
        """Build a context for command-line execution, defaulting to sys.stdout."""
        stream = stream if stream is not None else sys.stdout
        return cls(headers=None, console_stream=stream, capabilities=capabilities)

    @property
    def classified(self) -> bool:
        return self._target is not None

    @property
    def target(self) -> Target:
        return detect_output_target(self)

    def __repr__(self):
        target = self._target.value if self._target else 'unclassified'
        return f'<RequestContext {target}>'


def is_stream_handle(stream) -> bool:
    """True when ``stream`` is an open stream backed by a real file descriptor."""
    if stream is None or getattr(stream, 'closed', False):
        return False

    fileno = getattr(stream, 'fileno', None)
    if not callable(fileno):
        return False

    try:
        return isinstance(fileno(), int)
    except (OSError, ValueError):
        # io.UnsupportedOperation for in-memory streams, ValueError once closed
        return False


def is_xhr_request(headers) -> bool:
    value = headers.get(XHR_HEADER) or ''
    return value.strip().lower() == XHR_VALUE


def detect_output_target(context: Optional[RequestContext] = None) -> Target:
    """
    Classify the context and memoize the result on it.

    Detection runs at most once per context; later calls return the stored
    target. Browser is the fallback when no stronger signal is found.
    """
    if context is None:
        context = current_context()

    if context._target is not None:
        return context._target

    if is_stream_handle(context.console_stream):
        target = Target.CONSOLE
    elif is_xhr_request(context.headers):
        target = Target.AJAX
    elif context.capabilities.is_mobile():
        target = Target.MOBILE
    else:
        target = Target.BROWSER

    context._target = target
    logger.debug(f"[OutputTarget] Classified output target as '{target.value}'")
    return target


def is_console(context: Optional[RequestContext] = None) -> bool:
    return detect_output_target(context) is Target.CONSOLE


def is_ajax(context: Optional[RequestContext] = None) -> bool:
    return detect_output_target(context) is Target.AJAX


def is_browser(context: Optional[RequestContext] = None) -> bool:
    return detect_output_target(context) is Target.BROWSER


def is_mobile(context: Optional[RequestContext] = None) -> bool:
    return detect_output_target(context) is Target.MOBILE


def _app_capabilities() -> Optional[CapabilityProvider]:
    if not has_app_context():
        return None
    state = current_app.extensions.get('output_target')
    return state.capabilities if state is not None else None


def current_context() -> RequestContext:
    """
    Return the context for the code that is running right now.

    Inside a Flask request the context lives in ``flask.g`` and is created
    from ``flask.request`` on first use. Outside a request it is a console
    context held in a ContextVar.
    """
    if has_request_context():
        context = g.get(G_CONTEXT_KEY)
        if context is None:
            context = RequestContext.from_request(request, capabilities=_app_capabilities())
            setattr(g, G_CONTEXT_KEY, context)
        return context

    context = _console_context.get()
    if context is None:
        context = RequestContext.from_console(capabilities=_app_capabilities())
        _console_context.set(context)
    return context


def bind_context(context: RequestContext) -> RequestContext:
    """Install ``context`` as the current one (per request, or per execution context)."""
    if has_request_context():
        setattr(g, G_CONTEXT_KEY, context)
    else:
        _console_context.set(context)
    return context


def reset_context():
    """Drop the current binding so the next query classifies again."""
    if has_request_context():
        g.pop(G_CONTEXT_KEY, None)
    _console_context.set(None)

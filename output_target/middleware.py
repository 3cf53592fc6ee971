# output_target/middleware.py

"""
Output Target Middleware

Wires classification and compression into a Flask application:
- Binds a fresh RequestContext to every request (stored in flask.g)
- Exposes the target predicates to Jinja templates
- Compresses eligible responses after the view has rendered
"""

import logging

from flask import current_app, request

from .capabilities import CapabilityProvider, NoCapabilityProvider
from .compression import COMPRESSIBLE_TARGETS, compress_output
from .config import Config, apply_config
from .messages import get_messages
from .targets import (
    RequestContext,
    bind_context,
    current_context,
    detect_output_target,
    is_ajax,
    is_browser,
    is_console,
    is_mobile,
)

logger = logging.getLogger(__name__)

# Responses that must not carry a body, and so are never encoded
BODYLESS_STATUS_CODES = (204, 304)


class OutputTargetState:
    """Per-application state, kept in ``app.extensions['output_target']``."""

    def __init__(self, capabilities: CapabilityProvider):
        self.capabilities = capabilities

    def __repr__(self):
        return f'<OutputTargetState capabilities={self.capabilities!r}>'


def _should_skip(response) -> bool:
    if response.status_code >= 400 and not response.direct_passthrough:
        # Error pages from abort() arrive unbuffered; buffer them so they are encoded too
        response.get_data()
    if response.direct_passthrough or response.is_streamed:
        logger.debug(f"[OutputTarget] Skipping streamed response for {request.path}")
        return True
    if response.status_code < 200 or response.status_code in BODYLESS_STATUS_CODES:
        return True
    if 'Content-Encoding' in response.headers:
        logger.debug(f"[OutputTarget] Response for {request.path} is already encoded")
        return True
    return False


def init_output_target(app, capabilities: CapabilityProvider = None, config_class=Config):
    """
    Initialize output target detection and response compression.

    Args:
        app: Flask application instance
        capabilities: Provider used for mobile detection (none by default)
        config_class: Class holding the default settings
    """
    apply_config(app, config_class)

    state = OutputTargetState(capabilities if capabilities is not None else NoCapabilityProvider())
    app.extensions['output_target'] = state

    @app.before_request
    def bind_output_target():
        """Give each request its own, not yet classified, context."""
        bind_context(RequestContext.from_request(request, capabilities=state.capabilities))

    @app.after_request
    def compress_response(response):
        """Compress the response body when the client and target allow it."""
        if not current_app.config.get('OUTPUT_TARGET_COMPRESSION_ENABLED'):
            return response

        if _should_skip(response):
            return response

        context = current_context()
        messages = get_messages(
            current_app.config.get('OUTPUT_TARGET_LANGUAGE'),
            current_app.config.get('OUTPUT_TARGET_REGION'),
        )

        result = compress_output(
            response.get_data(),
            context,
            header_sink=response.headers.__setitem__,
            messages=messages,
            compresslevel=current_app.config.get('OUTPUT_TARGET_COMPRESS_LEVEL'),
        )
        response.set_data(result.body)

        if detect_output_target(context) in COMPRESSIBLE_TARGETS:
            response.vary.add('Accept-Encoding')

        return response

    @app.context_processor
    def inject_output_target():
        """Make the output target available to templates."""
        return {
            'output_target': detect_output_target(),
            'is_console': is_console,
            'is_ajax': is_ajax,
            'is_browser': is_browser,
            'is_mobile': is_mobile,
        }

    logger.info(f"[OutputTarget] Initialized: capabilities={state.capabilities!r}, "
                f"compression={app.config['OUTPUT_TARGET_COMPRESSION_ENABLED']}")

    return state

# output_target/compression.py

"""
Response Compression Negotiation

Decides whether a response body can be sent gzip-compressed and, if so,
compresses it. Only browser and Ajax targets are compressed; console output
and mobile clients always get the raw body.

Every call reports the headers the host has to write. ``Content-Length``
always matches the byte length of the body that is handed back.
"""

import importlib.util
import logging
from dataclasses import dataclass
from typing import Callable, List, Optional, Set, Tuple, Union

from .exceptions import InvalidBufferError
from .messages import Messages, get_messages
from .targets import RequestContext, Target, current_context, detect_output_target

logger = logging.getLogger(__name__)

GZIP = 'gzip'
DEFAULT_COMPRESS_LEVEL = 9

# Mobile is left out on purpose: mobile clients are always sent the raw body
COMPRESSIBLE_TARGETS = frozenset({Target.BROWSER, Target.AJAX})

HeaderSink = Callable[[str, str], None]


@dataclass(frozen=True)
class Compress:
    """The body was compressed with ``algorithm``."""
    algorithm: str
    encoded_length: int

    @property
    def headers(self) -> List[Tuple[str, str]]:
        return [
            ('Content-Encoding', self.algorithm),
            ('Content-Length', str(self.encoded_length)),
        ]


@dataclass(frozen=True)
class PassThrough:
    """The body is sent unchanged."""
    raw_length: int

    @property
    def headers(self) -> List[Tuple[str, str]]:
        return [('Content-Length', str(self.raw_length))]


CompressionDecision = Union[Compress, PassThrough]


@dataclass(frozen=True)
class CompressedOutput:
    body: bytes
    decision: CompressionDecision

    @property
    def compressed(self) -> bool:
        return isinstance(self.decision, Compress)

    @property
    def headers(self) -> List[Tuple[str, str]]:
        return self.decision.headers


def gzip_available() -> bool:
    """Whether the interpreter was built with zlib, which gzip needs."""
    return importlib.util.find_spec('zlib') is not None


def _quality_is_zero(params: str) -> bool:
    for param in params.split(';'):
        name, _, value = param.partition('=')
        if name.strip().lower() != 'q':
            continue
        try:
            return float(value) == 0
        except ValueError:
            return False
    return False


def accepted_encodings(header_value: Optional[str]) -> Set[str]:
    """
    Parse an Accept-Encoding value into the set of codings the client accepts.

    Codings are lower-cased; those sent with ``q=0`` are refused and left out.
    """
    encodings = set()
    for token in (header_value or '').split(','):
        coding, _, params = token.partition(';')
        coding = coding.strip().lower()
        if coding and not _quality_is_zero(params):
            encodings.add(coding)
    return encodings


def can_compress(context: Optional[RequestContext] = None) -> Optional[str]:
    """
    Check if the output can be sent compressed.

    Returns:
        'gzip' when the target is a browser or Ajax call, the client accepts
        gzip and gzip is available; None otherwise.
    """
    if context is None:
        context = current_context()

    if detect_output_target(context) not in COMPRESSIBLE_TARGETS:
        return None

    if GZIP in accepted_encodings(context.headers.get('Accept-Encoding')) and gzip_available():
        return GZIP
    return None


def _as_bytes(buffer) -> bytes:
    if isinstance(buffer, bytes):
        return buffer
    if isinstance(buffer, (bytearray, memoryview)):
        return bytes(buffer)
    if isinstance(buffer, str):
        return buffer.encode('utf-8')
    raise InvalidBufferError(
        f"Response body must be bytes, bytearray, memoryview or str, not {type(buffer).__name__}",
        error_code='invalid_buffer',
    )


def compress_output(buffer, context: Optional[RequestContext] = None,
                    header_sink: Optional[HeaderSink] = None,
                    messages: Optional[Messages] = None,
                    compresslevel: int = DEFAULT_COMPRESS_LEVEL) -> CompressedOutput:
    """
    Compress the output buffer when the client supports it.

    Headers are written to ``header_sink`` once per call before the body is
    returned: ``Content-Encoding`` and ``Content-Length`` when compressed,
    ``Content-Length`` alone otherwise.

    Args:
        buffer: Full response body (bytes, bytearray or memoryview; str is encoded as UTF-8)
        context: Request context; defaults to the current one
        header_sink: Called as ``header_sink(name, value)`` for each header
        messages: Message catalog used for the diagnostic notice
        compresslevel: gzip compression level

    Returns:
        CompressedOutput: the body to send and the decision taken
    """
    body = _as_bytes(buffer)
    messages = messages or get_messages()

    if can_compress(context) == GZIP:
        import gzip

        output = gzip.compress(body, compresslevel=compresslevel)
        decision = Compress(GZIP, len(output))
        notice = messages.compressed_with_gzip
    else:
        output = body
        decision = PassThrough(len(body))
        notice = messages.cant_compress

    if header_sink is not None:
        for name, value in decision.headers:
            header_sink(name, value)

    logger.info(f"[OutputTarget] {notice}")
    return CompressedOutput(output, decision)

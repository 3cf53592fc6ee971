# output_target/exceptions.py

"""
Exceptions raised by the output target package.

Classification and compression negotiation never fail on request data;
these are only raised when the package is called with the wrong kind of input.
"""


class OutputTargetError(Exception):
    """Base exception for output target errors."""

    def __init__(self, message: str, error_code: str = None):
        super().__init__(message)
        self.message = message
        self.error_code = error_code


class InvalidBufferError(OutputTargetError):
    """Raised when a response body is not bytes or text."""
    pass

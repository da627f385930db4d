"""Error taxonomy shared by the gateway, decoder and selection client."""


class OptionsViewerError(Exception):
    """Base class for all option contract pipeline errors."""
    pass


class MissingParameterError(OptionsViewerError):
    """Raised when a required query parameter is missing or empty."""

    def __init__(self, parameter: str):
        self.parameter = parameter
        super().__init__(f"{parameter} is required")


class InvalidParameterError(OptionsViewerError):
    """Raised when a query parameter has an unsupported value."""
    pass


class UpstreamTransportError(OptionsViewerError):
    """Raised when the upstream call fails before a usable response arrives.

    Covers connection failures, timeouts and non-JSON upstream bodies.
    """
    pass


class DecodeError(OptionsViewerError):
    """Raised when either layer of the response envelope cannot be decoded."""

    def __init__(self, message: str, stage: str = "envelope"):
        self.stage = stage
        super().__init__(message)


# Name used in the error taxonomy of the HTTP surface
EnvelopeDecodeError = DecodeError


class UpstreamBusinessError(OptionsViewerError):
    """Raised when the gateway returns a non-2xx status with its own body."""

    def __init__(self, status_code: int, body=None):
        self.status_code = status_code
        self.body = body
        super().__init__(f"Option contracts request failed with status {status_code}")

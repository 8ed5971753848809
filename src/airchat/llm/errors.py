"""Error taxonomy shared by all providers.

Every failure of a provider call surfaces as a ``ProviderError`` subclass.
Transport exceptions are chained as ``__cause__``.
"""


class ProviderError(Exception):
    """Base class for provider failures."""


class HttpError(ProviderError):
    """The backend answered with a non-success HTTP status."""

    def __init__(self, status_code: int):
        self.status_code = status_code
        super().__init__(f"Backend returned HTTP {status_code}")


class ParsingError(ProviderError):
    """The response body did not match the expected schema."""

    def __init__(self, detail: str):
        self.detail = detail
        super().__init__(f"Could not parse backend response: {detail}")


class EmptyResponse(ProviderError):
    """The backend answered successfully but with nothing to say."""

    def __init__(self, detail: str = "no completion returned"):
        super().__init__(f"Empty response from backend: {detail}")


class UnknownError(ProviderError):
    """Transport failure without an HTTP status (DNS, refused, timeout)."""


class UnsupportedOperation(ProviderError):
    """The provider does not offer the requested capability."""

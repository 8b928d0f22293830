"""Exception hierarchy for raginfo."""


class RaginfoError(Exception):
    """Base class for all raginfo errors."""


class InvalidChunkParameters(RaginfoError, ValueError):
    """Raised when chunk size and overlap cannot produce forward progress."""


class StateImportError(RaginfoError):
    """Raised when externally supplied state JSON is malformed."""


class ExtractionError(RaginfoError):
    """Raised when no text can be extracted from a source."""


class GenerationError(RaginfoError):
    """Raised when the generative model fails to produce an answer."""


class MissingApiKeyError(RaginfoError):
    """Raised when a query is attempted without a configured API key."""

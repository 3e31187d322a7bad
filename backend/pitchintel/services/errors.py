from __future__ import annotations


class BriefValidationError(ValueError):
    """Request is missing a required field. Raised before any I/O."""


class PersistenceError(RuntimeError):
    """The brief store rejected a read or write."""


class DraftConfigurationError(RuntimeError):
    """Draft generation is not configured (no provider key)."""


class DraftGenerationError(RuntimeError):
    """The draft provider failed or returned nothing usable."""


class BriefNotFound(LookupError):
    """No brief with this id is visible to the caller."""

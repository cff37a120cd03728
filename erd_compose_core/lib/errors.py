"""
Error kinds raised while reconciling a design document against a catalog.

Every error here aborts the whole comparison; no partial script is produced.
"""


class ErdComposeError(Exception):
    """Base class for reconciliation failures."""


class InputReadFailure(ErdComposeError):
    """The design document is missing, unreadable, not valid JSON, or names a table twice."""


class CatalogQueryFailure(ErdComposeError, RuntimeError):
    """The catalog introspection call failed."""


class ReferentialIntegrityViolation(ErdComposeError, LookupError):
    """A foreign key or relationship points at something that does not exist."""


__all__ = [
    "ErdComposeError",
    "InputReadFailure",
    "CatalogQueryFailure",
    "ReferentialIntegrityViolation",
]

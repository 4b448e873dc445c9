"""
Domain exceptions.

``InvalidInputError`` marks a caller bug (bad set count, unknown muscle id
passed directly) and is raised rather than silently coerced.  Insufficient
training history is *not* an error: the balance classifier returns the
``data_insufficient`` archetype instead.
"""


class InvalidInputError(ValueError):
    """An argument is outside the domain the engine accepts."""


class NotFoundError(LookupError):
    """A referenced workout session does not exist."""


class SessionClosedError(RuntimeError):
    """Stimulation events can only be merged while a session is open."""

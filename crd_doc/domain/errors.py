"""Error taxonomy for CRD documentation requests.

Every failure a request can hit maps to exactly one of these types, and
each type maps to exactly one user-facing message in ``USER_MESSAGES``.
The tree builder has no entry here: depth overflow is reported through
``DocNode.truncated`` instead.
"""


class CRDDocError(Exception):
    """Base class for documentation request failures."""

    kind = 'CRDDocError'


class InvalidPath(CRDDocError):
    """Request path does not name a repository document."""

    kind = 'InvalidPath'


class LookupMiss(CRDDocError):
    """No cached entry exists for the requested key."""

    kind = 'LookupMiss'

    def __init__(self, key: str):
        super().__init__(f"No entry for {key}")
        self.key = key


class DecodeError(CRDDocError):
    """Cached bytes do not decode to a CRD manifest."""

    kind = 'DecodeError'


class ResolutionError(CRDDocError):
    """No single documentable schema could be selected."""

    kind = 'ResolutionError'


class NoStorageVersion(ResolutionError):
    kind = 'NoStorageVersion'


class MissingStorageSchema(ResolutionError):
    kind = 'MissingStorageSchema'


class SchemaNotFound(ResolutionError):
    kind = 'SchemaNotFound'


USER_MESSAGES: dict[type[CRDDocError], str] = {
    InvalidPath: 'Invalid URL.',
    LookupMiss: 'This repository has not been documented yet.',
    DecodeError: 'Supplied file is not a valid CRD.',
    NoStorageVersion: 'CRD declares multiple versions but none is marked for storage.',
    MissingStorageSchema: 'Specified storage version does not have a schema.',
    SchemaNotFound: 'Supplied CRD has no schema.',
}


def user_message(error: CRDDocError) -> str:
    """Return the user-facing message for a documentation error."""
    for cls in type(error).__mro__:
        if cls in USER_MESSAGES:
            return USER_MESSAGES[cls]
    return 'Unable to render documentation.'

"""Exception types raised by ugit."""

from typing import Optional


class UgitError(Exception):
    """Base class for all ugit errors."""


class RepositoryNotFound(UgitError):
    """No .ugit directory was found."""


class RepositoryExists(UgitError):
    """A repository already exists at the target path."""


class ObjectNotFound(UgitError):
    """Requested OID is not in the object store."""

    def __init__(self, oid: str):
        super().__init__(f"Object {oid} not found")
        self.oid = oid


class WrongObjectKind(UgitError):
    """Object exists but is of a different kind than requested."""

    def __init__(self, oid: str, expected: str, actual: str):
        super().__init__(f"Object {oid} is a {actual}, expected {expected}")
        self.oid = oid
        self.expected = expected
        self.actual = actual


class CorruptObject(UgitError):
    """Stored bytes cannot be decoded as the claimed kind."""


class InvalidTree(UgitError):
    """Tree entries contain a duplicate or illegal name."""


class UnsupportedEntry(UgitError):
    """Working directory holds something that cannot be snapshotted (symlink, device, ...)."""


class NameNotFound(UgitError):
    """A name or hash prefix did not resolve to anything."""

    def __init__(self, name: str):
        super().__init__(f"Unknown revision or ref: {name!r}")
        self.name = name


class AmbiguousIdentifier(UgitError):
    """A hash prefix matched more than one object."""

    def __init__(self, prefix: str, candidates):
        self.prefix = prefix
        self.candidates = sorted(candidates)
        listing = ', '.join(self.candidates)
        super().__init__(f"Short hash {prefix!r} is ambiguous; candidates: {listing}")


class RefAlreadyExists(UgitError):
    """Attempted to create a branch or tag whose name is already bound.

    ``conflict`` names the existing ref when it is a different one, e.g.
    refs/heads/a blocking refs/heads/a/b.
    """

    def __init__(self, ref: str, conflict: Optional[str] = None):
        if conflict and conflict != ref:
            message = f"Ref '{ref}' conflicts with existing ref '{conflict}'"
        else:
            message = f"Ref '{ref}' already exists"
        super().__init__(message)
        self.ref = ref
        self.conflict = conflict or ref


class InvalidRefName(UgitError):
    """Branch or tag name is not a legal ref name."""

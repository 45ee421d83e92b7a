class DomainModelError(Exception):
    """Base class for errors raised by the domain model generator."""


class MalformedTypeError(DomainModelError, ValueError):
    """A type descriptor is structurally invalid (e.g. a cyclic base chain)."""


class TypeLoadError(DomainModelError):
    """Type descriptors could not be loaded from a module or descriptor file."""


class UnsupportedOptionError(DomainModelError, ValueError):
    """An unknown diagram type or output format was requested."""

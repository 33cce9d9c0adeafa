"""Contract violations raised by the masonry and lightbox logic."""


class GalleriaError(Exception):
    """Base class for all galleria contract violations."""


class InvalidArgument(GalleriaError, ValueError):
    """An argument is outside its allowed domain (e.g. bucket count <= 0)."""


class IndexOutOfRange(GalleriaError, IndexError):
    """An image index does not address an item of the collection."""


class PreconditionViolation(GalleriaError, ValueError):
    """The navigator was configured inconsistently (e.g. thumbnail list)."""

from __future__ import annotations


class PjsketchError(Exception):
    """Base class for errors raised by the sketch engine."""


class ShapeAssemblyError(PjsketchError):
    """``end_shape`` could not resolve the buffered vertices into geometry."""


class UnsupportedOperationError(PjsketchError, NotImplementedError):
    """The operation exists in the vocabulary but no backend supports it."""


class ConfigError(PjsketchError, ValueError):
    pass


class ResourceNotFoundWarning(UserWarning):
    """An image, sound or font could not be located; the operation draws nothing."""

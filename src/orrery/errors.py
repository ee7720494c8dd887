"""Error taxonomy for sprite generation."""


class OrreryError(Exception):
    """Base class for every error raised by orrery."""


class ConfigurationError(OrreryError, ValueError):
    """A body specification or batch request is invalid.

    Raised before any pixel work happens, so no partial output exists.
    """


class InvalidDimensionError(ConfigurationError):
    """A frame count, frame size or pixel size is not a positive integer."""


class UnknownBodyTypeError(ConfigurationError):
    """The requested body kind is not one orrery can render."""

"""Exceptions raised by the conversion pipeline."""


class AsciiArtError(ValueError):
    """Base class for all pipeline errors."""


class InvalidDimensionsError(AsciiArtError):
    """Pixel buffer size or contents do not fit its declared width and height."""


class EmptyCharsetError(AsciiArtError):
    """The resolved character ramp has no glyphs."""


class ConfigError(AsciiArtError):
    """A configuration value names an unknown option or is out of range."""


class RasterizeError(AsciiArtError):
    """The source image could not be loaded or drawn."""

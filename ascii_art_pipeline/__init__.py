"""
Image to ASCII Art Pipeline
===========================
Turn RGBA pixel buffers into character grids that encode luminance,
Sobel edges or Difference-of-Gaussians contours.
"""

from ascii_art_pipeline.config import AsciiArtResult, ConversionConfig, PixelBuffer, Presets
from ascii_art_pipeline.constants import CharacterSet, DitherAlgorithm, EdgeMethod
from ascii_art_pipeline.errors import (
    AsciiArtError,
    ConfigError,
    EmptyCharsetError,
    InvalidDimensionsError,
    RasterizeError,
)
from ascii_art_pipeline.generator import (
    AsciiArtGenerator,
    GlyphMapper,
    convert_to_ascii,
    image_to_ascii,
    resolve_charset,
    text_to_ascii,
)

__version__ = '0.1.0'

__all__ = [
    # Main classes
    'AsciiArtGenerator',
    'ConversionConfig',
    'AsciiArtResult',
    'PixelBuffer',
    'GlyphMapper',
    'Presets',

    # Enums and character sets
    'EdgeMethod',
    'DitherAlgorithm',
    'CharacterSet',

    # Errors
    'AsciiArtError',
    'ConfigError',
    'EmptyCharsetError',
    'InvalidDimensionsError',
    'RasterizeError',

    # Convenience functions
    'convert_to_ascii',
    'image_to_ascii',
    'text_to_ascii',
    'resolve_charset',
]

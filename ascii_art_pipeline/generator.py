#!/usr/bin/env python3
"""
Image to ASCII Art Pipeline - Generator
=======================================
Glyph mapping and the pipeline that ties the stages together:

    tone map -> [contour -> text]
             -> [sobel threshold] -> [dither] -> glyph map -> text

Every call works on fresh arrays; the input buffer is never modified.
"""

import logging
import time
from typing import List, Optional, Union

import numpy as np
from PIL import Image

from ascii_art_pipeline import rasterize, tone
from ascii_art_pipeline.config import AsciiArtResult, ConversionConfig, PixelBuffer
from ascii_art_pipeline.constants import BLANK_CHAR, CharacterSet, EdgeMethod
from ascii_art_pipeline.dithering import Ditherer, quantize_levels
from ascii_art_pipeline.edge_detection import EdgeProcessor
from ascii_art_pipeline.errors import ConfigError, EmptyCharsetError

logger = logging.getLogger(__name__)


def resolve_charset(config: ConversionConfig) -> str:
    """Character ramp named by the config, or its manual characters."""
    if config.charset == CharacterSet.MANUAL:
        ramp = config.manual_chars
    else:
        try:
            ramp = CharacterSet.get_preset(config.charset)
        except KeyError:
            raise ConfigError(f"Unknown charset: {config.charset!r}") from None

    if not ramp:
        raise EmptyCharsetError("Character ramp is empty")
    return ramp


# =============================================================================
# GLYPH MAPPING
# =============================================================================

class GlyphMapper:
    """Map a leveled grayscale field onto a character ramp."""

    def __init__(self, ramp: str):
        if not ramp:
            raise EmptyCharsetError("Character ramp is empty")
        self.ramp = ramp
        self.n_levels = len(ramp)
        self._glyphs = np.array(list(ramp))

    def map_levels(self, field: np.ndarray,
                   white_mask: Optional[np.ndarray] = None) -> List[str]:
        """
        Convert a field to rows of characters.

        Args:
            field: (H, W) values in [0, 255]
            white_mask: Pixels to render as blank regardless of level

        Returns:
            One string per row, without newlines
        """
        arr = np.asarray(field, dtype=np.float64)

        if self.n_levels == 1:
            chars = np.full(arr.shape, self.ramp, dtype=self._glyphs.dtype)
        else:
            levels = np.clip(quantize_levels(arr, self.n_levels), 0, self.n_levels - 1)
            chars = self._glyphs[levels.astype(np.intp)]

        if white_mask is not None:
            chars = np.where(white_mask, BLANK_CHAR, chars)

        return [''.join(row) for row in chars.tolist()]


# =============================================================================
# MAIN ASCII ART GENERATOR
# =============================================================================

class AsciiArtGenerator:
    """Main class for turning pixel buffers into ASCII art."""

    def __init__(self, config: Optional[ConversionConfig] = None,
                 rng: Optional[np.random.Generator] = None):
        """
        Initialize with optional configuration.

        Args:
            config: Conversion settings, defaults to ConversionConfig()
            rng: Random source for noise dithering. When omitted one is
                created from ``config.seed``.
        """
        self.config = config or ConversionConfig()
        self.ramp = resolve_charset(self.config)
        self.glyph_mapper = GlyphMapper(self.ramp)

        if self.glyph_mapper.n_levels == 1:
            logger.warning("Single glyph ramp %r, every pixel renders the same", self.ramp)

        if rng is None:
            rng = np.random.default_rng(self.config.seed)
        self.rng = rng

        self.ditherer = None
        if self.config.dithering_active:
            self.ditherer = Ditherer(self.config.dither_algorithm,
                                     self.glyph_mapper.n_levels, rng=self.rng)

    def _tone_map(self, buffer: PixelBuffer) -> tone.ToneMap:
        return tone.tone_map(buffer,
                             brightness=self.config.brightness,
                             contrast=self.config.contrast,
                             invert=self.config.invert)

    def _white_mask(self, toned: tone.ToneMap) -> Optional[np.ndarray]:
        return toned.white_mask() if self.config.ignore_white else None

    def _generate_contour(self, toned: tone.ToneMap) -> List[str]:
        return EdgeProcessor.contour(toned.field, self.config.dog_threshold,
                                     self._white_mask(toned))

    def _generate_levels(self, toned: tone.ToneMap) -> List[str]:
        field = toned.field
        if self.config.edge_method is EdgeMethod.SOBEL:
            field = EdgeProcessor.sobel_threshold(field, self.config.edge_threshold)

        if self.ditherer is not None:
            field = self.ditherer.apply(field)

        return self.glyph_mapper.map_levels(field, self._white_mask(toned))

    def generate(self, buffer: Optional[PixelBuffer]) -> AsciiArtResult:
        """
        Generate ASCII art from a pixel buffer.

        Args:
            buffer: RGBA pixels. ``None`` or an empty buffer yields empty text.

        Returns:
            AsciiArtResult whose text holds one line per pixel row,
            each terminated by a newline
        """
        edge_method = self.config.edge_method

        if buffer is None or buffer.is_empty:
            logger.warning("No pixel data to convert, returning empty output")
            return AsciiArtResult(text='', lines=[], edge_method=edge_method)

        buffer.validate()
        start = time.perf_counter()

        toned = self._tone_map(buffer)
        if edge_method is EdgeMethod.DOG_CONTOUR:
            lines = self._generate_contour(toned)
        else:
            lines = self._generate_levels(toned)

        elapsed = (time.perf_counter() - start) * 1000
        logger.debug("Converted %dx%d buffer (%s) in %.1fms",
                     buffer.width, buffer.height, edge_method.value, elapsed)

        return AsciiArtResult(
            text=''.join(line + '\n' for line in lines),
            lines=lines,
            width=buffer.width,
            height=buffer.height,
            edge_method=edge_method,
        )


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================

def convert_to_ascii(buffer: Optional[PixelBuffer],
                     config: Optional[ConversionConfig] = None,
                     **kwargs) -> str:
    """
    Convert a pixel buffer to ASCII art text.

    Args:
        buffer: RGBA pixel buffer
        config: Conversion settings
        **kwargs: Config fields, used when ``config`` is not given

    Returns:
        The rendered text
    """
    if config is None:
        config = ConversionConfig(**kwargs)
    elif kwargs:
        raise ConfigError("Pass either a config or keyword settings, not both")
    return AsciiArtGenerator(config).generate(buffer).text


def image_to_ascii(image: Union[str, Image.Image],
                   config: Optional[ConversionConfig] = None,
                   **kwargs) -> AsciiArtResult:
    """Rasterize an image (or image path) at ``config.width`` columns and convert it."""
    if config is None:
        config = ConversionConfig(**kwargs)
    buffer = rasterize.image_to_buffer(image, config.width, blur=config.blur)
    return AsciiArtGenerator(config).generate(buffer)


def text_to_ascii(text: str,
                  config: Optional[ConversionConfig] = None,
                  **kwargs) -> AsciiArtResult:
    """Render ``text`` in a monospace font and convert it. Blank text gives empty output."""
    if config is None:
        config = ConversionConfig(**kwargs)
    buffer = rasterize.text_to_buffer(text, config.width, blur=config.blur)
    return AsciiArtGenerator(config).generate(buffer)

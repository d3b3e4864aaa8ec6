#!/usr/bin/env python3
"""
Image to ASCII Art Pipeline - Command Line
==========================================
Convert an image file, or a line of text, to ASCII art.
"""

import argparse
import logging
import sys
from typing import List, Optional

from ascii_art_pipeline.config import ConversionConfig, Presets
from ascii_art_pipeline.constants import CharacterSet, DitherAlgorithm, EdgeMethod
from ascii_art_pipeline.errors import AsciiArtError
from ascii_art_pipeline.generator import image_to_ascii, text_to_ascii

logger = logging.getLogger(__name__)


def create_argument_parser() -> argparse.ArgumentParser:
    """Create command line argument parser."""
    parser = argparse.ArgumentParser(
        prog='ascii-art-pipeline',
        description='Convert images or text to ASCII art',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s image.png                          # Basic conversion
  %(prog)s image.png -w 80                    # Set width to 80 columns
  %(prog)s image.png --edge dog-contour       # Directional contour drawing
  %(prog)s image.png --dither ordered         # Bayer dithering
  %(prog)s "HELLO" --text -o hello.txt        # Render text to a file
        """
    )

    # Input/Output
    parser.add_argument('input', help='Input image file, or text with --text')
    parser.add_argument('--text', action='store_true', help='Treat input as text to render')
    parser.add_argument('-o', '--output', help='Output text file (default: stdout)')
    parser.add_argument('--preset', choices=Presets.names(), help='Start from a preset')

    # Size and tone
    parser.add_argument('-w', '--width', type=int, help='Output width in characters')
    parser.add_argument('--brightness', type=float, help='Brightness offset (-100..100)')
    parser.add_argument('--contrast', type=float, help='Contrast (-100..100)')
    parser.add_argument('--blur', type=float, help='Blur radius applied when rasterizing')
    parser.add_argument('-i', '--invert', action='store_true', default=None,
                        help='Invert brightness')
    parser.add_argument('--keep-white', dest='ignore_white', action='store_false', default=None,
                        help='Render pure white pixels with the ramp instead of blanks')

    # Character set options
    parser.add_argument('--charset',
                        choices=sorted(CharacterSet.presets()) + [CharacterSet.MANUAL],
                        help='Character ramp')
    parser.add_argument('--manual-chars', help='Custom ramp (implies --charset manual)')

    # Dithering options
    parser.add_argument('--dither', choices=[d.value for d in DitherAlgorithm],
                        help='Dithering algorithm')
    parser.add_argument('--no-dither', dest='dithering', action='store_false', default=None,
                        help='Disable dithering')
    parser.add_argument('--seed', type=int, help='Random seed for noise dithering')

    # Edge detection options
    parser.add_argument('--edge', choices=[e.value for e in EdgeMethod],
                        help='Edge detection method')
    parser.add_argument('--edge-threshold', type=float, help='Sobel edge threshold (0-255)')
    parser.add_argument('--dog-threshold', type=float, help='Contour threshold')

    parser.add_argument('-v', '--verbose', action='store_true', help='Verbose logging')

    return parser


def build_config(args: argparse.Namespace) -> ConversionConfig:
    """Map parsed arguments onto a ConversionConfig."""
    overrides = {
        'width': args.width,
        'brightness': args.brightness,
        'contrast': args.contrast,
        'blur': args.blur,
        'invert': args.invert,
        'ignore_white': args.ignore_white,
        'charset': args.charset,
        'manual_chars': args.manual_chars,
        'dithering': args.dithering,
        'dither_algorithm': args.dither,
        'seed': args.seed,
        'edge_method': args.edge,
        'edge_threshold': args.edge_threshold,
        'dog_threshold': args.dog_threshold,
    }
    overrides = {key: value for key, value in overrides.items() if value is not None}
    if args.manual_chars is not None:
        overrides['charset'] = CharacterSet.MANUAL

    if args.preset:
        return Presets.get(args.preset, **overrides)
    return ConversionConfig(**overrides)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for command line usage."""
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(levelname)s %(name)s: %(message)s',
    )

    try:
        config = build_config(args)
        if args.text:
            result = text_to_ascii(args.input, config)
        else:
            result = image_to_ascii(args.input, config)
    except AsciiArtError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    logger.info("Output size: %dx%d", result.width, result.height)

    if args.output:
        with open(args.output, 'w', encoding='utf-8') as f:
            f.write(result.text)
        print(f"Saved to {args.output}")
    else:
        sys.stdout.write(result.text)

    return 0


if __name__ == '__main__':
    sys.exit(main())

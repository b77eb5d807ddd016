"""
Photo Canvas Editing Package

This package wraps ImageMagick to add borders, pad photographs to a target
aspect ratio and append an EXIF-derived caption below the image.
"""

__version__ = "1.0.0"

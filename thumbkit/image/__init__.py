"""
Image module for thumbkit.
"""
from .info import probe_source
from .processor import ImageProcessor, ConversionResult

__all__ = [
    'probe_source',
    'ImageProcessor',
    'ConversionResult',
]

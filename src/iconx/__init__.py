"""iconx - extract one representative SVG icon per technology from an icon repository"""

from iconx.__version__ import __version__


__all__ = ['__version__']

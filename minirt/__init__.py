"""A small ray tracer that parses .rt scene files and renders them to PPM images."""

__version__ = "0.1.0"
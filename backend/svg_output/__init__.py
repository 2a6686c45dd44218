"""
SVG output service: renders themed SVG templates with conditional-GET and caching
"""
__version__ = "0.1.0"

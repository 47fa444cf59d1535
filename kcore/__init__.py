"""Touch tracking core: grayscale filter chain, size templates, touch events and headless control widgets."""

__version__ = "0.1.0"
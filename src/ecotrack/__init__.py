"""EcoTrack: product eco scores, sustainability articles and nearby recycling centers."""

__version__ = "0.1.0"

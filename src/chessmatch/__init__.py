"""chessmatch — rules engine and front-ends for a BLACK vs RED chess variant."""

__version__ = "0.1.0"

"""Food calorie API: identify food in a photo and report calories."""

__version__ = "1.0.0"

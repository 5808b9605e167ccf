"""lift-rotation: strength-training log with push/pull/legs rotation."""

__version__ = "0.1.0"

"""Five ways to bound (or not bound) an outbound HTTP request, run side by side."""

__version__ = "0.1.0"

"""Line-oriented append/delete/print/undo text editor."""

__all__ = [
    "adapters",
    "buffer",
    "commands",
    "config",
    "errors",
    "interpreter",
    "runner",
    "runtime",
]

__version__ = "0.1.0"

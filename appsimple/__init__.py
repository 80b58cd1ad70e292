"""AppSimple: user management around a shared security core."""

__version__ = "0.1.0"

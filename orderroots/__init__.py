"""orderroots — owner-scoped ordered dependency entries."""

__version__ = "0.1.0"

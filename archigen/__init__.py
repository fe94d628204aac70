"""ArchiGen Transform: architectural photo transformation studio."""

__version__ = "1.0.0"

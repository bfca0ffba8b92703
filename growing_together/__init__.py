"""Growing Together — parenting simulation backend."""
__version__ = "0.1.0"

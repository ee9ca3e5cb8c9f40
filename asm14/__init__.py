"""Two-pass assembler for a 14-bit teaching machine, with macro expansion."""

__version__ = "0.1.0"
__all__ = ["__version__"]
"""Human-resources employee records: TCP server, console client and shared data types."""

__version__ = "1.0.0"

__all__ = ["__version__"]
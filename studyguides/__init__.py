"""Chat tool definitions, tag and user models and formatting, operation handlers and routing."""

__version__ = "0.1.0"

__all__ = ["formatting", "handlers", "models", "router", "tools"]
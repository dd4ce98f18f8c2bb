"""Agent market: wallet-identified users creating, listing and purchasing AI agents."""

__version__ = "1.0.0"

"""Transport-independent HTTP server parts: parsing, request building, send-state tracking, logging, tasks and configuration."""

__version__ = "0.1.0"
"""Static documentation extraction for React component sources."""

__version__ = "0.1.0"

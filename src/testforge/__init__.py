"""testforge: source analysis core for LLM-driven test generation."""

__version__ = "0.1.0"

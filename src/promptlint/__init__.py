"""Check natural-language prompts against style rules using a remote LLM."""

__version__ = "0.1.0"

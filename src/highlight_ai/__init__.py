"""highlight-ai: ask a local LLM about the text you have selected."""

__version__ = "0.1.0"

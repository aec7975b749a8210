"""Model provider identifiers."""

from enum import Enum


class ModelProviderName(str, Enum):
    """Model providers a character may select."""

    OPENAI = "openai"
    OPENROUTER = "openrouter"
    ANTHROPIC = "anthropic"
    OLLAMA = "ollama"
    LLAMA_LOCAL = "llama_local"

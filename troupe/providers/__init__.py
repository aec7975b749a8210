"""Model provider identifiers and credential resolution."""

from troupe.providers.models import ModelProviderName

__all__ = ["ModelProviderName"]

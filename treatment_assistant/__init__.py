"""Clinical intake analysis: enrichment, prompt composition and model validation."""

__version__ = "1.0.0"

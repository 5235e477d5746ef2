"""Intent-routed support chat for a technology store."""

__version__ = "0.1.0"

"""Glance error types."""


class GlanceError(Exception):
    """Base error for all glance failures."""


class GlanceProtocolError(GlanceError):
    """Request payload does not match the wire protocol."""


class GlanceConfigError(GlanceError, ValueError):
    """Invalid engine configuration."""

"""Profile section extraction, completeness scoring and cache-first AI quality analysis."""

from profilescope.version import __version__

__all__ = ["__version__"]

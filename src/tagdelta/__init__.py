"""tagdelta - commit deltas between consecutive Git tags, grouped by tag prefix."""

__version__ = "0.1.0"

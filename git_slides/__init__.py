"""Turn git commits and their unified diffs into reveal.js markdown slides."""

__version__ = "0.1.0"

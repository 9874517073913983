"""FlatWiki: a personal wiki of plain-text pages stored as flat files."""

__version__ = "0.1.0"

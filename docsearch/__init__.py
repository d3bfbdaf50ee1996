"""Documentation search engine for markdown/MDX content trees."""

__version__ = "1.0.0"

"""Member/team search service with composable filters and offset pagination."""

__version__ = "0.1.0"

"""Label CMS - content management API for a music label."""

__version__ = "0.1.0"

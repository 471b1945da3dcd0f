"""now-sc -- bootstrap and work with presales projects for solution consultants."""

__version__ = "1.0.0"

"""Home Run Bot: watches for new home run highlights and posts them to a webhook."""

__version__ = "1.0.0"

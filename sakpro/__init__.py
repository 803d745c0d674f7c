from sakpro.normalize import normalize_markup
from sakpro.sanitize import SanitizeError, clean_attributes, clean_html, clean_html_string

__version__ = "0.1.0"

__all__ = [
    "SanitizeError",
    "clean_attributes",
    "clean_html",
    "clean_html_string",
    "normalize_markup",
]

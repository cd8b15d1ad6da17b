"""File I/O related utilities.

Small modules that deal with reading/writing files and locating
file-backed diagnostics.
"""

from .source_location import SourceLocation, lookup_source
from .template_renderer import TemplateRenderer

__all__ = [
    "SourceLocation",
    "lookup_source",
    "TemplateRenderer",
]

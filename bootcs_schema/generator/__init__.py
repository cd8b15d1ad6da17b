"""README generation for course directories."""

from .readme_generator import ReadmeGenerator

__all__ = ["ReadmeGenerator"]

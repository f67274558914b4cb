"""
Story data model consumed by the PDF exporter.
"""

from .models import ImageSource, Story, StoryPage

__all__ = ["ImageSource", "Story", "StoryPage"]

"""Action collection service - draft/published action groupings on pages."""

__version__ = "0.1.0"

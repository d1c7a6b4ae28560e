"""Text-mode view components for an async task console: styled text, palettes, controls, table state, task lints and histograms."""

__version__ = "0.1.0"
__all__ = ["controls", "docs_images", "histogram", "styles", "table", "text", "warnings"]
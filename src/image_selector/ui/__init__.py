"""User interface components (terminal viewer)."""

from image_selector.ui.viewer import ImageMetadata, TriageUI

__all__ = ["ImageMetadata", "TriageUI"]

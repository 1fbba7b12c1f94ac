from .books import DESCRIPTION_PREVIEW_LENGTH, truncate_description

__all__ = ["truncate_description", "DESCRIPTION_PREVIEW_LENGTH"]

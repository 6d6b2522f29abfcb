"""Modal dialogs for gridbrowser."""

from .delete_modal import DeleteModal

__all__ = ["DeleteModal"]

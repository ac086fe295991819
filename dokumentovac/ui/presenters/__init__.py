"""
Presenters for UI components.

Presenters contain the business logic that turns document service
results into ViewModels for display. They decouple the Textual widgets
from the HTTP client and the credential provider.
"""

from .document_list_presenter import DocumentListPresenter, FormSession
from .tag_catalog import TagCatalogLoader

__all__ = [
    "DocumentListPresenter",
    "FormSession",
    "TagCatalogLoader",
]

from .viewmodels import (
    ArtworkRowViewModel,
    CatalogTableViewModel,
    CatalogViewModel,
    LoadingStateViewModel,
    SelectionPanelItemViewModel,
    SelectionPanelViewModel,
    NO_SELECTION_MESSAGE,
)

__all__ = [
    'ArtworkRowViewModel',
    'CatalogTableViewModel',
    'CatalogViewModel',
    'LoadingStateViewModel',
    'SelectionPanelItemViewModel',
    'SelectionPanelViewModel',
    'NO_SELECTION_MESSAGE',
]

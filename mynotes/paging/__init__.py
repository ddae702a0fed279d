from mynotes.paging.source import PagedSource, SourceState
from mynotes.paging.factory import SourceFactory
from mynotes.paging.paged_list import ObservablePagedList, PagedList

__all__ = [
    "PagedSource",
    "SourceState",
    "SourceFactory",
    "ObservablePagedList",
    "PagedList"
]

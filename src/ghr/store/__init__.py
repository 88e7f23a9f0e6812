from .store import ReportSource, ReportStore, StoreChange, StoreState

__all__ = [
    "ReportSource",
    "ReportStore",
    "StoreChange",
    "StoreState",
]

from .schema import History, QuoteRecord, empty_history, make_record
from .store import HistoryStore

__all__ = [
    "History",
    "QuoteRecord",
    "empty_history",
    "make_record",
    "HistoryStore",
]

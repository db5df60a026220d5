from .search import JournalSearch
from .storage import JournalStorage

__all__ = ["JournalStorage", "JournalSearch"]

"""Runtime state: the thread-safe language store and its lock.

Python 3.13+.
"""

from .rwlock import RWLock
from .store import LanguageEntry, LanguageStore

__all__ = ["LanguageEntry", "LanguageStore", "RWLock"]

"""Filesystem watching with write stabilization.

Submodules:
    stabilizer - WriteStabilizer, FileChange (pure bookkeeping, no threads)
    watcher    - DirectoryWatcher (watchfiles on a background thread)

Python 3.13+.
"""

from .stabilizer import FileChange, WriteStabilizer
from .watcher import DirectoryWatcher, LanguageFileFilter

__all__ = [
    "DirectoryWatcher",
    "FileChange",
    "LanguageFileFilter",
    "WriteStabilizer",
]

from ._history import ProgressHistory
from ._observers import CompositeObserver, LoggingObserver, RecordingObserver

__all__ = [
    ProgressHistory.__name__,
    CompositeObserver.__name__,
    LoggingObserver.__name__,
    RecordingObserver.__name__,
]

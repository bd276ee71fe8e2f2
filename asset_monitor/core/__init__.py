# Core business logic
from .detector import diff
from .fetcher import StatusFetcher
from .poll_loop import LoopState, PollLoop

__all__ = [
    "diff",
    "StatusFetcher",
    "LoopState",
    "PollLoop",
]

from .engine import DrawEngine, DrawHandle, DrawPhase, EmptyPoolError
from .scheduler import LoopScheduler, TkScheduler

__all__ = [
    "DrawEngine",
    "DrawHandle",
    "DrawPhase",
    "EmptyPoolError",
    "LoopScheduler",
    "TkScheduler",
]

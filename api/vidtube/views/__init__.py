"""View-aggregation engine: declarative read pipelines over the data store."""

from .derive import CALLER, Derived, ViewContext
from .pipeline import Join, Sort, ViewPipeline, ViewSpec
from .thread import RootTarget, ThreadResolver

__all__ = [
    "CALLER",
    "Derived",
    "Join",
    "RootTarget",
    "Sort",
    "ThreadResolver",
    "ViewContext",
    "ViewPipeline",
    "ViewSpec",
]

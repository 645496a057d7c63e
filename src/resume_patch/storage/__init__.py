from .base import (
    ResumeConflictError,
    ResumeNotFoundError,
    ResumeStore,
    StoredResume,
)
from .factory import StorageType, create_store
from .local import LocalResumeStore
from .memory import InMemoryResumeStore

__all__ = [
    "InMemoryResumeStore",
    "LocalResumeStore",
    "ResumeConflictError",
    "ResumeNotFoundError",
    "ResumeStore",
    "StorageType",
    "StoredResume",
    "create_store",
]

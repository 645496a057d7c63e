"""Resume store factory.

Selects the backend from ``Settings.STORAGE_BACKEND`` unless one is given.
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Optional, Union

from resume_patch.settings import get_settings

if TYPE_CHECKING:
    from .base import ResumeStore


class StorageType(Enum):
    """Available resume store backends."""

    MEMORY = "memory"
    LOCAL = "local"


def create_store(backend: Optional[Union[StorageType, str]] = None, **kwargs) -> ResumeStore:
    """Create a resume store.

    Args:
        backend: Explicit backend, or None to use the configured one.
        **kwargs: Backend-specific options (``root_dir`` for local).

    Returns:
        A ready-to-use ``ResumeStore``.
    """
    if backend is None:
        backend = get_settings().STORAGE_BACKEND
    storage_type = StorageType(backend) if isinstance(backend, str) else backend

    if storage_type == StorageType.MEMORY:
        from .memory import InMemoryResumeStore

        return InMemoryResumeStore()

    from .local import LocalResumeStore

    return LocalResumeStore(root_dir=kwargs.get("root_dir"))

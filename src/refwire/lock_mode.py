from __future__ import annotations

from enum import Enum


class LockMode(Enum):
    """Select locking behavior for the first construction of cached types.

    Use ``THREAD`` whenever ``Container.get`` may run on several threads once
    registration is finished; the constructor of a cached type then runs
    exactly once even under concurrent first access.
    """

    THREAD = "thread"
    """Construct cached types under one re-entrant ``threading.RLock`` per container.

    Recursive retrieval on the owning thread re-enters the lock and still
    reaches the resolution chain check, so threads that enter one reference
    cycle through different ids each fail with a cycle error.
    """

    NONE = "none"
    """Disable locking; only safe for single-threaded retrieval."""

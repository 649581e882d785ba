from __future__ import annotations


class InvalidActionError(RuntimeError):
    """Raised when a caller asks the engine for a move the rules do not allow.

    The check always happens before any state is touched.
    """

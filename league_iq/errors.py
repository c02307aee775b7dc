# league_iq/errors.py
from __future__ import annotations


class AdapterUnavailable(RuntimeError):
    """
    The raw data source (cache store or upstream feed) failed or timed out.
    Never retried inside the analytics core; callers decide retry policy.
    """

    def __init__(self, message: str, *, league_id: int | None = None, gw: int | None = None):
        super().__init__(message)
        self.league_id = league_id
        self.gw = gw

"""Deterministic identities for markets and their pool custody account.

A market is identified by its authority and project name, so one authority
cannot open two markets for the same project.
"""

import hashlib

from config.settings import settings


def _digest(*parts: str) -> str:
    h = hashlib.sha256()
    for part in parts:
        raw = part.encode("utf-8")
        # length prefix keeps ("ab", "c") and ("a", "bc") apart
        h.update(len(raw).to_bytes(4, "big"))
        h.update(raw)
    return h.hexdigest()


def derive_market_id(authority: str, project_name: str) -> str:
    return _digest(settings.MARKET_SEED, authority, project_name)


def derive_pool_account(market_id: str) -> str:
    return _digest(settings.POOL_SEED, market_id, "reference")

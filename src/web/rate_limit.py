"""Per-owner rate limiting for journal writes.

In-memory sliding window; resets on deploy.
"""

import time
from collections import defaultdict

from fastapi import Depends, HTTPException

from cli.config_models import MoodlogConfig
from web.auth import get_current_user
from web.deps import get_config

# owner id -> list of write timestamps
_write_log: dict[str, list[float]] = defaultdict(list)


def _prune(owner: str, now: float, window_seconds: int) -> list[float]:
    """Remove timestamps older than the window; forget owners with none left."""
    cutoff = now - window_seconds
    log = [t for t in _write_log.get(owner, ()) if t > cutoff]
    if log:
        _write_log[owner] = log
    else:
        _write_log.pop(owner, None)
    return log


def _drop_idle(now: float, window_seconds: int) -> None:
    """Forget owners whose newest write has left the window."""
    cutoff = now - window_seconds
    for owner in [o for o, log in _write_log.items() if not log or log[-1] <= cutoff]:
        del _write_log[owner]


def check_write_rate_limit(owner: str, max_writes: int, window_seconds: int) -> None:
    """Raise 429 if the owner already made ``max_writes`` writes in the window."""
    now = time.time()
    _drop_idle(now, window_seconds)
    log = _prune(owner, now, window_seconds)

    if len(log) >= max_writes:
        retry_after = int(log[0] + window_seconds - now) + 1
        raise HTTPException(
            status_code=429,
            detail="Too many journal operations, please slow down.",
            headers={"Retry-After": str(retry_after)},
        )

    _write_log[owner].append(now)


async def enforce_write_limit(
    user: dict = Depends(get_current_user),
    config: MoodlogConfig = Depends(get_config),
) -> dict:
    """Route dependency: authenticate, then count the write against the owner."""
    cfg = config.rate_limit
    check_write_rate_limit(user["id"], cfg.max_writes, cfg.window_seconds)
    return user


def reset_rate_limits() -> None:
    """Clear all rate limit state. Used in tests."""
    _write_log.clear()

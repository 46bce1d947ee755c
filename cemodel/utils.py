# MIT License
from __future__ import annotations
import hashlib, json, math
import numpy as np
from .params import Scenario


def scenario_hash(scn: Scenario) -> str:
    """Compute a stable hash for a Scenario.

    Serialises the scenario to JSON (with sorted keys) and computes a
    SHA256 hash.  Used by the dashboard as a cache key for grid results.

    Parameters
    ----------
    scn:
        Scenario instance.

    Returns
    -------
    str
        Hexadecimal string representation of the hash.
    """
    scn_json = scn.model_dump(mode="json", exclude_none=True)
    # ensure deterministic key ordering
    payload = json.dumps(scn_json, sort_keys=True).encode("utf-8")
    return hashlib.sha256(payload).hexdigest()


def check_resolution(n: int, name: str = "resolution") -> int:
    """Return ``n`` as an int, raising if it cannot span a lattice."""
    if isinstance(n, bool) or int(n) != n:
        raise ValueError(f"{name} must be an integer, got {n!r}")
    if n < 2:
        raise ValueError(f"{name} must be at least 2 to form a lattice, got {n}")
    return int(n)


def check_finite(**values: float) -> None:
    """Raise ``ValueError`` naming the first non-finite keyword argument."""
    for name, v in values.items():
        if not math.isfinite(v):
            raise ValueError(f"{name} must be finite, got {v!r}")


def axis(lo: float, hi: float, n: int) -> np.ndarray:
    """Evenly spaced axis with ``n`` points over [lo, hi], endpoints included."""
    n = check_resolution(n)
    check_finite(lo=lo, hi=hi)
    return lo + (hi - lo) * (np.arange(n) / (n - 1))


def unit_lattice(n: int) -> np.ndarray:
    """The points i/(n-1) for i in 0..n-1."""
    n = check_resolution(n)
    return np.arange(n) / (n - 1)

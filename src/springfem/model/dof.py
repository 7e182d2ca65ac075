from __future__ import annotations

from typing import Iterable, Optional, Tuple

DOF_ORDER: Tuple[str, ...] = ("DX", "DY", "DZ", "RX", "RY", "RZ")
LOAD_ORDER: Tuple[str, ...] = ("FX", "FY", "FZ", "MX", "MY", "MZ")

RestraintMask6 = Tuple[bool, bool, bool, bool, bool, bool]
Values6 = Tuple[float, float, float, float, float, float]
OptionalValues6 = Tuple[
    Optional[float], Optional[float], Optional[float], Optional[float], Optional[float], Optional[float]
]

DOF_PER_NODE = 6


def dof_index(label: str) -> int:
    """Local index (0-5) of a displacement label ("DX") or its load counterpart ("FX")."""
    key = label.upper()
    if key in DOF_ORDER:
        return DOF_ORDER.index(key)
    if key in LOAD_ORDER:
        return LOAD_ORDER.index(key)
    raise ValueError(f"unknown degree of freedom '{label}', expected one of {DOF_ORDER + LOAD_ORDER}")


def make_restraint_mask(mask: Iterable[bool]) -> RestraintMask6:
    values = tuple(bool(value) for value in mask)
    _ensure_len(values, "restraint mask")
    return values  # type: ignore[return-value]


def make_values6(values: Iterable[float]) -> Values6:
    coerced = tuple(float(value) for value in values)
    _ensure_len(coerced, "value vector")
    return coerced  # type: ignore[return-value]


def _ensure_len(values: Tuple[object, ...], label: str) -> None:
    if len(values) != 6:
        raise ValueError(f"{label} must contain 6 entries")

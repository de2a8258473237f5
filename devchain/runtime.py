from __future__ import annotations
import sys
from typing import List, Optional, Sequence, Tuple

SUPPORTED_MIN: Tuple[int, int] = (3, 9)
SUPPORTED_MAX: Tuple[int, int] = (3, 14)
RECOMMENDED: Tuple[Tuple[int, int], ...] = ((3, 11), (3, 12), (3, 13))


def _major_minor(version_info: Optional[Sequence[int]] = None) -> Tuple[int, int]:
    v = version_info if version_info is not None else sys.version_info
    return int(v[0]), int(v[1])


def is_supported(version_info: Optional[Sequence[int]] = None) -> bool:
    return SUPPORTED_MIN <= _major_minor(version_info) <= SUPPORTED_MAX


def version_report(version_info: Optional[Sequence[int]] = None) -> Tuple[bool, List[str]]:
    """Return (supported, lines to print) for the running or given interpreter."""
    mm = _major_minor(version_info)
    label = f"{mm[0]}.{mm[1]}"
    span = f"{SUPPORTED_MIN[0]}.{SUPPORTED_MIN[1]}-{SUPPORTED_MAX[0]}.{SUPPORTED_MAX[1]}"
    lines = [
        "Checking Python interpreter compatibility...",
        f"current: {label}",
        f"supported: {span}",
    ]
    if SUPPORTED_MIN <= mm <= SUPPORTED_MAX:
        lines.append("OK: interpreter is supported")
        if mm in RECOMMENDED:
            lines.append("recommended release in use")
        return True, lines

    lines.append("interpreter is outside the supported range")
    if mm > SUPPORTED_MAX:
        lines.append(f"too new: install {SUPPORTED_MAX[0]}.{SUPPORTED_MAX[1]} (pyenv install / uv python install)")
    else:
        lines.append("too old: upgrade to one of the recommended releases")
    lines.append("recommended: " + ", ".join(f"{a}.{b}" for a, b in RECOMMENDED))
    return False, lines

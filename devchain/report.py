from __future__ import annotations
from dataclasses import dataclass, asdict, field
from enum import Enum
from typing import Any, Dict, Iterator, List, Optional, Tuple

from web3 import Web3


class Outcome(Enum):
    PASS = "PASS"
    FAIL = "FAIL"
    SKIPPED = "SKIPPED"   # not applicable in this mode; never counts against the run


@dataclass(frozen=True)
class CheckResult:
    check_name: str
    outcome: Outcome
    detail: str = ""


@dataclass(frozen=True)
class AccountView:
    address: str
    balance: int   # wei

    def balance_ether(self) -> str:
        return f"{Web3.from_wei(self.balance, 'ether')}"


@dataclass
class DiagnosticReport:
    """Ordered, append-only list of check results for one run."""
    title: str = "diagnostics"
    mode: Optional[str] = None
    _entries: List[CheckResult] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    accounts: List[AccountView] = field(default_factory=list)

    def add(self, check_name: str, outcome: Outcome, detail: str = "") -> CheckResult:
        entry = CheckResult(check_name=check_name, outcome=outcome, detail=detail)
        self._entries.append(entry)
        return entry

    def warn(self, message: str) -> None:
        self.warnings.append(message)

    @property
    def entries(self) -> Tuple[CheckResult, ...]:
        return tuple(self._entries)

    def __iter__(self) -> Iterator[CheckResult]:
        return iter(tuple(self._entries))

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, check_name: str) -> Optional[CheckResult]:
        for e in self._entries:
            if e.check_name == check_name:
                return e
        return None

    def count(self, outcome: Outcome) -> int:
        return sum(1 for e in self._entries if e.outcome is outcome)

    @property
    def ok(self) -> bool:
        return all(e.outcome is not Outcome.FAIL for e in self._entries)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "title": self.title,
            "mode": self.mode,
            "ok": self.ok,
            "warnings": list(self.warnings),
            "accounts": [asdict(a) for a in self.accounts],
            "checks": [
                {"check": e.check_name, "outcome": e.outcome.value, "detail": e.detail}
                for e in self._entries
            ],
        }

    def render(self) -> str:
        lines = [f"== {self.title} ({self.mode or 'unresolved'}) =="]
        for w in self.warnings:
            lines.append(f"[WARN] {w}")
        width = max((len(e.check_name) for e in self._entries), default=0)
        for e in self._entries:
            suffix = f"  {e.detail}" if e.detail else ""
            lines.append(f"[{e.outcome.value:<7}] {e.check_name:<{width}}{suffix}")
        for i, a in enumerate(self.accounts):
            lines.append(f"  account {i}: {a.address} ({a.balance_ether()} ETH)")
        lines.append(
            f"passed={self.count(Outcome.PASS)} failed={self.count(Outcome.FAIL)} "
            f"skipped={self.count(Outcome.SKIPPED)}"
        )
        return "\n".join(lines)


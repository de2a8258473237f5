from __future__ import annotations
from dataclasses import dataclass


class HarnessError(Exception): ...
class ConfigurationError(HarnessError): ...
class ProbeError(HarnessError): ...
class ProbeTimeout(ProbeError): ...
class ProbeUnreachable(ProbeError): ...


@dataclass(frozen=True)
class ClassifiedError:
    status: str
    message: str

    def detail(self) -> str:
        return f"{self.status}: {self.message}" if self.message else self.status


def classify_exception(e: BaseException) -> ClassifiedError:
    # Types before message text; ProbeTimeout is also a ProbeError
    if isinstance(e, AssertionError):
        return ClassifiedError("assertion-failed", str(e))
    if isinstance(e, ConfigurationError):
        return ClassifiedError("configuration-error", str(e))
    if isinstance(e, ProbeTimeout) or isinstance(e, TimeoutError):
        return ClassifiedError("probe-timeout", str(e))
    if isinstance(e, ProbeUnreachable) or isinstance(e, ConnectionError):
        return ClassifiedError("probe-unreachable", str(e))
    if isinstance(e, ProbeError):
        return ClassifiedError("probe-error", str(e))
    if "timed out" in str(e).lower():
        return ClassifiedError("probe-timeout", str(e))
    # Default
    return ClassifiedError("unknown-error", f"{e.__class__.__name__}: {e}")

from extdata.infrastructure.impls.system import SystemClock

__all__ = ["SystemClock"]

from extdata.infrastructure.ports.system import IClock

__all__ = ["IClock"]

from .runtime import RuntimeDeps
from .session import Session, RelayState
from .settings import AppSettings

__all__ = ["AppSettings", "RelayState", "RuntimeDeps", "Session"]

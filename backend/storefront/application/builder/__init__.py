from .session import BuilderSession
from .registry import SessionRegistry

__all__ = ["BuilderSession", "SessionRegistry"]

import logging
import threading
from collections import OrderedDict
from typing import Callable, Tuple

from storefront.gateways.base import PersistenceGateway, SessionContext
from .session import BuilderSession

logger = logging.getLogger(__name__)

GatewayFactory = Callable[[SessionContext], PersistenceGateway]

DEFAULT_MAX_SESSIONS = 500


class SessionRegistry:
    """
    Process-local builder sessions keyed by (tenant, actor).

    Holds at most `max_sessions` sessions; the least recently used one is
    evicted first, dropping its unsaved edits and history. The lock only
    guards the map, so loading from storage never blocks other requests.
    """

    def __init__(self, max_sessions: int = DEFAULT_MAX_SESSIONS):
        if max_sessions < 1:
            raise ValueError("max_sessions must be at least 1")

        self.max_sessions = max_sessions
        self._sessions: "OrderedDict[Tuple[str, str], BuilderSession]" = OrderedDict()
        self._lock = threading.Lock()

    @staticmethod
    def _key(context: SessionContext) -> Tuple[str, str]:
        return context.tenant_id, context.actor_id

    def get(self, context: SessionContext):
        key = self._key(context)
        with self._lock:
            session = self._sessions.get(key)
            if session is not None:
                self._sessions.move_to_end(key)
            return session

    def get_or_load(self, context: SessionContext, gateway_factory: GatewayFactory) -> BuilderSession:
        session = self.get(context)
        if session is not None:
            return session

        loaded = BuilderSession(context, gateway_factory(context))
        loaded.load()

        key = self._key(context)
        with self._lock:
            # A concurrent request may have loaded the same session first
            session = self._sessions.setdefault(key, loaded)
            self._sessions.move_to_end(key)
            self._evict()
        return session

    def _evict(self) -> None:
        while len(self._sessions) > self.max_sessions:
            (tenant_id, actor_id), _ = self._sessions.popitem(last=False)
            logger.info("Evicted builder session for tenant %s actor %s", tenant_id, actor_id)

    def discard(self, context: SessionContext) -> None:
        with self._lock:
            self._sessions.pop(self._key(context), None)

    def __contains__(self, context: SessionContext) -> bool:
        return self._key(context) in self._sessions

    def __len__(self) -> int:
        return len(self._sessions)

"""The single interception point every proxy call goes through."""

from __future__ import annotations

import logging
import threading
import typing as t

from .behaviors import DEFAULT
from .journal import InvocationLog
from .registry import BehaviorRegistry
from .verifiers import CountVerifier

if t.TYPE_CHECKING:  # pragma: no cover - used only for typing
    from .behaviors import Behavior
    from .descriptors import CallDescriptor
    from .times import Times

logger = logging.getLogger(__name__)


class CallInterceptor:
    """Record calls, resolve setups and run their behaviours.

    One re-entrant lock guards the journal and the registry. Behaviours,
    including user callbacks, run while the lock is held; a callback that
    calls back into the same mock on the same thread is served normally and
    is journalled after the call that triggered it.
    """

    def __init__(self, *, log_calls: bool = False) -> None:
        """Create an interceptor with an empty journal and registry.

        Parameters
        ----------
        log_calls:
            Log every intercepted call at ``INFO`` instead of ``DEBUG``.
        """
        self._lock = threading.RLock()
        self._journal = InvocationLog()
        self._registry = BehaviorRegistry()
        self._log_level = logging.INFO if log_calls else logging.DEBUG

    @property
    def invocations(self) -> tuple[CallDescriptor, ...]:
        """Return every call recorded so far, oldest first."""
        with self._lock:
            return self._journal.entries()

    @property
    def setup_count(self) -> int:
        """Return the number of distinct configured call shapes."""
        with self._lock:
            return len(self._registry)

    def intercept(self, call: CallDescriptor, args: t.Sequence[object]) -> object:
        """Journal *call* and return the result of the matching behaviour.

        Calls without a matching setup, and behaviours that have nothing to
        answer, return the default value of the operation's return shape.
        """
        with self._lock:
            self._journal.append(call)
            entry = self._registry.lookup(call)
            if entry is None:
                logger.log(self._log_level, "%s: no setup, returning default", call.describe())
                return self._default_for(call)
            logger.log(
                self._log_level,
                "%s: matched setup %s",
                call.describe(),
                entry.descriptor.describe(),
            )
            result = entry.behavior.execute(args)
            if result is DEFAULT:
                return self._default_for(call)
            return result

    def register(self, descriptor: CallDescriptor, behavior: Behavior) -> None:
        """Configure *behavior* for calls matching *descriptor*."""
        with self._lock:
            self._registry.register(descriptor, behavior)

    def verify(self, query: CallDescriptor, times: Times) -> int:
        """Count journal entries matching *query* and check them against *times*.

        Raises
        ------
        VerificationError
            If the count lies outside ``[times.min, times.max]``.
        """
        with self._lock:
            return CountVerifier().verify(self._journal, query, times)

    @staticmethod
    def _default_for(call: CallDescriptor) -> object:
        returns = call.operation.returns
        return None if returns is None else returns.default()


__all__ = ["CallInterceptor"]

"""Application scope – TransactionScope and AsyncTransactionScope.

A scope runs one unit of work under a declared :class:`TransactionPolicy`
and resolves only the boundary it opened:

* ``REQUIRES_NEW`` always owns a new boundary (a savepoint when a
  transaction is already open).
* ``REQUIRED`` owns a boundary only when the resource has no open
  transaction; otherwise it joins the ambient one.

Both call ``resource.begin()``. An owning scope commits or rolls back every
level above the depth it observed on entry, including levels left open by
joining descendants. A joining scope makes no resolution call at all, so a
failure inside a joined scope that the caller swallows is never rolled back.
"""
from __future__ import annotations

import collections
import dataclasses
from datetime import UTC, datetime
from enum import Enum
from typing import Any, Awaitable, Callable, Generic, TypeVar

from txscope.config import get_settings
from txscope.kernel.errors import RollbackOnlyError, TransactionMisuseError
from txscope.kernel.transactions import AsyncTransactionalResource, TransactionalResource, TransactionPolicy
from txscope.kernel.types import Err, Ok, acapture, capture
from txscope.observability.logging import get_logger

T = TypeVar("T")
R = TypeVar("R", TransactionalResource, AsyncTransactionalResource)

_log = get_logger(__name__)


class ScopeState(str, Enum):
    CREATED = "created"
    OWNING = "owning"
    JOINING = "joining"
    RUNNING = "running"
    COMMITTED = "committed"
    ROLLED_BACK = "rolled_back"
    DELEGATED = "delegated"


TERMINAL_STATES = frozenset({ScopeState.COMMITTED, ScopeState.ROLLED_BACK, ScopeState.DELEGATED})


@dataclasses.dataclass
class ScopeAttempt:
    """One ``run_into`` invocation: its ownership decision and progress.

    ``owning`` is decided before the work runs and never changes. An attempt
    whose resolution call failed stays ``RUNNING`` and keeps the failure in
    ``resolution_error``.
    """

    policy: TransactionPolicy
    depth_before: int
    owning: bool
    state: ScopeState = ScopeState.CREATED
    started_at: datetime = dataclasses.field(default_factory=lambda: datetime.now(UTC))
    finished_at: datetime | None = None
    resolution_error: BaseException | None = None

    @property
    def finished(self) -> bool:
        return self.state in TERMINAL_STATES

    def to_dict(self) -> dict[str, Any]:
        return {
            "policy": self.policy.name,
            "depth_before": self.depth_before,
            "owning": self.owning,
            "state": self.state.value,
            "started_at": self.started_at.isoformat(),
            "finished_at": self.finished_at.isoformat() if self.finished_at else None,
        }


class _ScopeBase(Generic[R]):
    """Ownership decision, history and logging shared by both scope flavours."""

    def __init__(
        self,
        resource: R,
        policy: TransactionPolicy | str | None,
        *,
        history_size: int | None = None,
    ) -> None:
        if resource is None:
            raise TransactionMisuseError("A transaction scope needs a resource", operation="scope")
        if history_size is None:
            history_size = get_settings().history_size
        elif history_size <= 0:
            raise TransactionMisuseError(
                "history_size must be positive",
                operation="scope",
                detail={"history_size": history_size},
            )
        self._resource = resource
        self._policy = TransactionPolicy.parse(policy)
        self._history: collections.deque[ScopeAttempt] = collections.deque(maxlen=history_size)

    @classmethod
    def for_resource(cls, resource: R, policy: TransactionPolicy | str | None, **kwargs: Any) -> Any:
        """Build a scope, fixing savepoint nesting from *policy* if nothing is open yet."""
        policy = TransactionPolicy.parse(policy)
        if not resource.in_transaction():
            resource.configure(policy.forces_new_boundary)
        return cls(resource, policy, **kwargs)

    @property
    def resource(self) -> R:
        return self._resource

    @property
    def policy(self) -> TransactionPolicy:
        return self._policy

    @property
    def history(self) -> list[ScopeAttempt]:
        """Finished attempts, oldest first."""
        return list(self._history)

    def depth(self) -> int:
        return self._resource.depth()

    def in_transaction(self) -> bool:
        return self._resource.in_transaction()

    def _decide(self) -> ScopeAttempt:
        depth_before = self._resource.depth()
        owning = self._policy.forces_new_boundary or depth_before == 0
        return ScopeAttempt(policy=self._policy, depth_before=depth_before, owning=owning)

    def _started(self, attempt: ScopeAttempt) -> None:
        attempt.state = ScopeState.OWNING if attempt.owning else ScopeState.JOINING
        _log.debug("scope.begin", **attempt.to_dict())
        attempt.state = ScopeState.RUNNING

    def _pending_levels(self, attempt: ScopeAttempt) -> int:
        pending = self._resource.depth() - attempt.depth_before
        if pending <= 0:
            # the work committed or rolled back the boundary this scope owns
            raise TransactionMisuseError(
                "The scope's boundary was resolved by its own work",
                operation="resolve",
                detail={"depth_before": attempt.depth_before, "depth": self._resource.depth()},
            )
        if pending > 1:
            _log.debug("scope.unwind_joined", joined=pending - 1, **attempt.to_dict())
        return pending

    def _delegate(self, attempt: ScopeAttempt, outcome: Ok[Any] | Err[BaseException]) -> None:
        attempt.state = ScopeState.DELEGATED
        _log.debug("scope.delegate", failed=outcome.is_err(), **attempt.to_dict())

    def _resolved(self, attempt: ScopeAttempt, state: ScopeState) -> None:
        attempt.state = state
        event = "scope.commit" if state is ScopeState.COMMITTED else "scope.rollback"
        _log.debug(event, **attempt.to_dict())

    def _resolution_failed(
        self, attempt: ScopeAttempt, exc: BaseException, outcome: Ok[Any] | Err[BaseException]
    ) -> None:
        if isinstance(exc, RollbackOnlyError):
            attempt.state = ScopeState.ROLLED_BACK
        attempt.resolution_error = exc
        if isinstance(outcome, Err) and exc is not outcome.error:
            exc.__context__ = outcome.error
        _log.error("scope.resolution_failed", error=repr(exc), **attempt.to_dict())

    def _finish(self, attempt: ScopeAttempt) -> None:
        attempt.finished_at = datetime.now(UTC)
        self._history.append(attempt)


class TransactionScope(_ScopeBase[TransactionalResource]):
    """Runs synchronous work under a transactional boundary.

    The same scope may be invoked again, also from inside its own work; each
    invocation is an independent :class:`ScopeAttempt`.
    """

    def run_into(self, work: Callable[[], T]) -> T:
        """Run *work* under this scope and return its result unchanged.

        Failures raised by *work* (any ``BaseException``) propagate as the
        same object after the owning scope rolls back.
        """
        attempt = self._decide()
        self._resource.begin()
        self._started(attempt)

        outcome = capture(work)
        try:
            if attempt.owning:
                self._resolve(attempt, outcome)
            else:
                self._delegate(attempt, outcome)
        finally:
            self._finish(attempt)
        return outcome.unwrap()

    def _resolve(self, attempt: ScopeAttempt, outcome: Ok[Any] | Err[BaseException]) -> None:
        resolve = self._resource.commit if outcome.is_ok() else self._resource.rollback
        try:
            for _ in range(self._pending_levels(attempt)):
                resolve()
        except BaseException as exc:
            self._resolution_failed(attempt, exc, outcome)
            raise
        self._resolved(attempt, ScopeState.COMMITTED if outcome.is_ok() else ScopeState.ROLLED_BACK)


class AsyncTransactionScope(_ScopeBase[AsyncTransactionalResource]):
    """Runs coroutine work under a transactional boundary.

    Cancellation of the running task reaches the scope as
    :class:`asyncio.CancelledError` and takes the rollback path.
    """

    async def run_into(self, work: Callable[[], Awaitable[T]]) -> T:
        """Await *work* under this scope and return its result unchanged."""
        attempt = self._decide()
        await self._resource.begin()
        self._started(attempt)

        outcome = await acapture(work)
        try:
            if attempt.owning:
                await self._resolve(attempt, outcome)
            else:
                self._delegate(attempt, outcome)
        finally:
            self._finish(attempt)
        return outcome.unwrap()

    async def _resolve(self, attempt: ScopeAttempt, outcome: Ok[Any] | Err[BaseException]) -> None:
        resolve = self._resource.commit if outcome.is_ok() else self._resource.rollback
        try:
            for _ in range(self._pending_levels(attempt)):
                await resolve()
        except BaseException as exc:
            self._resolution_failed(attempt, exc, outcome)
            raise
        self._resolved(attempt, ScopeState.COMMITTED if outcome.is_ok() else ScopeState.ROLLED_BACK)


__all__ = [
    "AsyncTransactionScope",
    "ScopeAttempt",
    "ScopeState",
    "TERMINAL_STATES",
    "TransactionScope",
]

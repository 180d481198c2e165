"""Application scope – ``@transactional`` decorator and policy extraction."""
from __future__ import annotations

import functools
import inspect
from typing import Any, Callable, TypeVar

from txscope.application.scope.factory import open_async_scope, open_scope
from txscope.config import get_settings
from txscope.kernel.errors import TransactionMisuseError
from txscope.kernel.transactions import TransactionPolicy

F = TypeVar("F", bound=Callable[..., Any])

POLICY_ATTRIBUTE = "__txscope_policy__"


def get_transactional_policy(func: Callable[..., Any]) -> TransactionPolicy:
    """Return the policy declared on *func* by :func:`transactional`.

    A method marked without a policy resolves to ``TXSCOPE_DEFAULT_POLICY``
    each time it is asked, so the environment is read at call time.

    Raises:
        TransactionMisuseError: *func* was never marked transactional.
    """
    target = inspect.unwrap(func, stop=lambda f: hasattr(f, POLICY_ATTRIBUTE))
    if not hasattr(target, POLICY_ATTRIBUTE):
        name = getattr(func, "__qualname__", repr(func))
        raise TransactionMisuseError(f"{name} is not marked @transactional", operation="policy")
    declared = getattr(target, POLICY_ATTRIBUTE)
    if declared is None:
        return get_settings().policy
    return declared


def transactional(
    policy: TransactionPolicy | str | None = None,
    *,
    connection_attribute: str = "_connection",
) -> Callable[[F], F]:
    """Run a method under a transaction scope built from ``self.<connection_attribute>``.

    *policy* defaults to ``TXSCOPE_DEFAULT_POLICY``, read when the method is
    called rather than when it is decorated. The attribute may hold
    a SQLAlchemy ``Connection`` / ``AsyncConnection`` or an already built
    transactional resource; coroutine functions run under an async scope.
    """
    declared = None if policy is None else TransactionPolicy.parse(policy)

    def decorator(func: F) -> F:
        if inspect.iscoroutinefunction(func):

            @functools.wraps(func)
            async def async_wrapper(self: Any, *args: Any, **kwargs: Any) -> Any:
                connection = _connection_of(self, connection_attribute)
                scope = open_async_scope(connection, get_transactional_policy(async_wrapper))
                return await scope.run_into(lambda: func(self, *args, **kwargs))

            setattr(async_wrapper, POLICY_ATTRIBUTE, declared)
            return async_wrapper  # type: ignore[return-value]

        @functools.wraps(func)
        def wrapper(self: Any, *args: Any, **kwargs: Any) -> Any:
            connection = _connection_of(self, connection_attribute)
            scope = open_scope(connection, get_transactional_policy(wrapper))
            return scope.run_into(lambda: func(self, *args, **kwargs))

        setattr(wrapper, POLICY_ATTRIBUTE, declared)
        return wrapper  # type: ignore[return-value]

    return decorator


def _connection_of(instance: Any, attribute: str) -> Any:
    connection = getattr(instance, attribute, None)
    if connection is None:
        raise TransactionMisuseError(
            f"{type(instance).__name__}.{attribute} is not set; cannot open a transaction scope",
            operation="scope",
        )
    return connection


__all__ = ["POLICY_ATTRIBUTE", "get_transactional_policy", "transactional"]

"""Application scope – transaction scopes, factories and the ``@transactional`` decorator."""
from txscope.application.scope.decorators import POLICY_ATTRIBUTE, get_transactional_policy, transactional
from txscope.application.scope.factory import open_async_scope, open_scope
from txscope.application.scope.scope import (
    TERMINAL_STATES,
    AsyncTransactionScope,
    ScopeAttempt,
    ScopeState,
    TransactionScope,
)

__all__ = [
    "POLICY_ATTRIBUTE",
    "TERMINAL_STATES",
    "AsyncTransactionScope",
    "ScopeAttempt",
    "ScopeState",
    "TransactionScope",
    "get_transactional_policy",
    "open_async_scope",
    "open_scope",
    "transactional",
]

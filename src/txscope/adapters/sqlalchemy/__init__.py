"""SQLAlchemy adapter – transactional resources over ``Connection`` / ``AsyncConnection``."""
from txscope.adapters.sqlalchemy.resource import (
    NESTING_INFO_KEY,
    AsyncSqlAlchemyTransactionalResource,
    SqlAlchemyTransactionalResource,
    nesting_state_of,
)
from txscope.application.scope.factory import open_async_scope, open_scope

__all__ = [
    "NESTING_INFO_KEY",
    "AsyncSqlAlchemyTransactionalResource",
    "SqlAlchemyTransactionalResource",
    "nesting_state_of",
    "open_async_scope",
    "open_scope",
]

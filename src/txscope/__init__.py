"""
txscope – declarative, nestable transaction scopes.

Import path convention::

    from txscope.kernel.transactions import TransactionPolicy
    from txscope.application.scope import TransactionScope, transactional
    from txscope.adapters.sqlalchemy import open_scope
"""

__version__ = "0.1.0"
__all__ = ["__version__"]

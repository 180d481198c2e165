"""Testing support – in-memory doubles for the transactional resource ports.

Import in your tests::

    from txscope.testing import InMemoryTransactionalResource
"""

from txscope.testing.fakes import AsyncInMemoryTransactionalResource, InMemoryTransactionalResource

__all__ = ["AsyncInMemoryTransactionalResource", "InMemoryTransactionalResource"]

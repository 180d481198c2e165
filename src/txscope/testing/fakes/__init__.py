"""Testing fakes – in-memory transactional resources."""
from txscope.testing.fakes.resource import AsyncInMemoryTransactionalResource, InMemoryTransactionalResource

__all__ = ["AsyncInMemoryTransactionalResource", "InMemoryTransactionalResource"]

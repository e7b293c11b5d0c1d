"""
Entity Store — keyed persistence on top of the Django ORM.

The repositories never touch model managers directly; every read and write
goes through this adapter so each store access is a single awaited step.

Guarantees:

- Reads use Django's async queryset API and hold no state between calls.
- Each write runs inside its own transaction.atomic() block and is
  committed (or released as a savepoint) before the call returns.
- A constraint violation raises django.db.IntegrityError after the
  atomic block has rolled back, leaving the connection usable. Callers
  decide what the violation means.
"""

import logging

from asgiref.sync import sync_to_async
from django.db import DEFAULT_DB_ALIAS, transaction

logger = logging.getLogger(__name__)


class EntityStore:
    """Find, query, insert, replace and remove model instances by primary key."""

    def __init__(self, using=DEFAULT_DB_ALIAS):
        self.using = using

    def _objects(self, model):
        return model._default_manager.using(self.using)

    async def find_by_key(self, model, key):
        """Return the record stored under key, or None."""
        return await self._objects(model).filter(pk=key).afirst()

    async def query_all(self, model):
        return [record async for record in self._objects(model).all()]

    async def query_where(self, model, predicate):
        """Return every record matching a Q predicate."""
        return [record async for record in self._objects(model).filter(predicate)]

    async def any_matching(self, model, predicate):
        return await self._objects(model).filter(predicate).aexists()

    async def insert(self, record):
        """Persist a new record and return the key the database assigned."""
        return await sync_to_async(self._insert)(record)

    async def replace(self, record):
        """
        Overwrite every column of the row keyed by record.pk.

        Returns False when no row has that key; nothing is written then.
        """
        return await sync_to_async(self._replace)(record)

    async def remove(self, model, key):
        """Delete the row keyed by key. Returns whether a row was removed."""
        deleted, _ = await self._objects(model).filter(pk=key).adelete()
        return deleted > 0

    def _insert(self, record):
        with transaction.atomic(using=self.using):
            record.save(force_insert=True, using=self.using)
        logger.debug("Inserted %s key=%s", type(record).__name__, record.pk)
        return record.pk

    def _replace(self, record):
        model = type(record)
        values = {
            field.attname: getattr(record, field.attname)
            for field in model._meta.concrete_fields
            if not field.primary_key
        }
        with transaction.atomic(using=self.using):
            updated = self._objects(model).filter(pk=record.pk).update(**values)
        return updated > 0

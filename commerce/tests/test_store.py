from decimal import Decimal

from django.db import IntegrityError
from django.db.models import Q
from django.test import TestCase

from commerce.infrastructure.store import EntityStore
from commerce.models import Account, Order


class EntityStoreTest(TestCase):
    def setUp(self):
        self.store = EntityStore()
        self.account = Account.objects.create(first_name="A", last_name="B", email="a@x.com")

    async def test_insert_assigns_fresh_key(self):
        account = Account(first_name="C", last_name="D", email="c@x.com")

        key = await self.store.insert(account)

        self.assertEqual(key, account.pk)
        self.assertNotEqual(key, self.account.pk)
        self.assertEqual((await self.store.find_by_key(Account, key)).email, "c@x.com")

    async def test_unique_violation_rolls_back_only_that_write(self):
        with self.assertRaises(IntegrityError):
            await self.store.insert(Account(first_name="C", last_name="D", email="a@x.com"))

        # The connection is still usable after the failed write.
        await self.store.insert(Account(first_name="E", last_name="F", email="e@x.com"))
        self.assertEqual(len(await self.store.query_all(Account)), 2)

    async def test_find_by_key_missing_returns_none(self):
        self.assertIsNone(await self.store.find_by_key(Account, 99999))

    async def test_query_where_and_any_matching(self):
        order = await self.store.insert(
            Order(account_id=self.account.pk, product="Laptop", quantity=1, price=Decimal("1200.00"))
        )

        matches = await self.store.query_where(Order, Q(account_id=self.account.pk))

        self.assertEqual([o.pk for o in matches], [order])
        self.assertTrue(await self.store.any_matching(Account, Q(email="a@x.com")))
        self.assertFalse(await self.store.any_matching(Account, Q(email="A@X.COM")))

    async def test_replace_overwrites_every_column(self):
        await self.store.replace(Account(pk=self.account.pk, first_name="Z", last_name="Y", email="z@x.com"))

        stored = await Account.objects.aget(pk=self.account.pk)
        self.assertEqual((stored.first_name, stored.last_name, stored.email), ("Z", "Y", "z@x.com"))

    async def test_replace_missing_key_returns_false(self):
        replaced = await self.store.replace(Account(pk=99999, first_name="Z", last_name="Y", email="z@x.com"))

        self.assertFalse(replaced)
        self.assertFalse(await Account.objects.filter(email="z@x.com").aexists())

    async def test_remove(self):
        self.assertTrue(await self.store.remove(Account, self.account.pk))
        self.assertFalse(await self.store.remove(Account, self.account.pk))

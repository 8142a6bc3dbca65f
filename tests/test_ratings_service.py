"""Service-level tests for rating upsert, ownership and cascading deletes."""

from unittest.mock import patch

from app.core.errors import NotFound
from app.models import Rating, Store, User
from app.services import ratings as ratings_service
from app.services.ratings import submit_or_update_rating, update_rating_by_id
from app.services.stores import store_rating_summary
from tests.support import ApiTestCase


class TestUpsert(ApiTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.user_id = self.add_user("member@storerating.io")
        self.store_id = self.add_store("Corner Bakery", "bakery@storerating.io")

    def test_insert_then_update(self) -> None:
        with self.session() as db:
            first, created = submit_or_update_rating(db, self.user_id, self.store_id, 2)
            self.assertTrue(created)
            second, created = submit_or_update_rating(db, self.user_id, self.store_id, 4)
            self.assertFalse(created)
            self.assertEqual(first.id, second.id)
            self.assertEqual(db.query(Rating).count(), 1)
            self.assertEqual(db.query(Rating).one().rating, 4)

    def test_concurrent_insert_retried_as_update(self) -> None:
        """Another request inserted between our existence check and our insert."""
        self.add_rating(self.user_id, self.store_id, 1)
        real_find = ratings_service._find_rating
        calls: list[int] = []

        def stale_find(db, user_id, store_id):
            calls.append(1)
            if len(calls) == 1:
                return None
            return real_find(db, user_id, store_id)

        with self.session() as db, patch.object(ratings_service, "_find_rating", stale_find):
            rating, created = submit_or_update_rating(db, self.user_id, self.store_id, 5)
            self.assertFalse(created)
            self.assertEqual(rating.rating, 5)
            self.assertEqual(db.query(Rating).count(), 1)
        self.assertEqual(len(calls), 2)

    def test_unknown_store(self) -> None:
        with self.session() as db, self.assertRaises(NotFound):
            submit_or_update_rating(db, self.user_id, 999, 3)

    def test_update_by_id_checks_owner(self) -> None:
        other = self.add_user("other@storerating.io")
        rating_id = self.add_rating(other, self.store_id, 2)
        with self.session() as db:
            with self.assertRaises(NotFound):
                update_rating_by_id(db, rating_id, self.user_id, 5)
            self.assertEqual(update_rating_by_id(db, rating_id, other, 5).rating, 5)


class TestAverages(ApiTestCase):
    def test_three_and_five_average_four(self) -> None:
        store_id = self.add_store("Corner Bakery", "bakery@storerating.io")
        self.add_rating(self.add_user("a@storerating.io"), store_id, 3)
        self.add_rating(self.add_user("b@storerating.io"), store_id, 5)
        with self.session() as db:
            self.assertEqual(store_rating_summary(db, store_id), ("4.00", 2))

    def test_no_ratings_is_zero(self) -> None:
        store_id = self.add_store("Corner Bakery", "bakery@storerating.io")
        with self.session() as db:
            self.assertEqual(store_rating_summary(db, store_id), ("0.00", 0))


class TestCascades(ApiTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.user_id = self.add_user("member@storerating.io")
        self.other_id = self.add_user("other@storerating.io")
        self.store_id = self.add_store("Corner Bakery", "bakery@storerating.io")
        self.other_store = self.add_store("Book Nook", "books@storerating.io")
        self.add_rating(self.user_id, self.store_id, 4)
        self.add_rating(self.other_id, self.store_id, 2)
        self.add_rating(self.user_id, self.other_store, 5)

    def test_deleting_store_removes_its_ratings(self) -> None:
        with self.session() as db:
            db.delete(db.get(Store, self.store_id))
            db.commit()
            remaining = db.query(Rating.store_id).all()
            self.assertEqual([r.store_id for r in remaining], [self.other_store])

    def test_deleting_user_removes_their_ratings(self) -> None:
        with self.session() as db:
            db.delete(db.get(User, self.user_id))
            db.commit()
            remaining = db.query(Rating.user_id).all()
            self.assertEqual([r.user_id for r in remaining], [self.other_id])

    def test_deleting_store_unlinks_owner(self) -> None:
        owner_id = self.add_user("owner@storerating.io", store_id=self.other_store)
        with self.session() as db:
            db.delete(db.get(Store, self.other_store))
            db.commit()
            self.assertIsNone(db.get(User, owner_id).store_id)

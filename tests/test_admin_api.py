"""API tests for /api/admin: dashboard, store and user management."""

from app.models import Role
from tests.support import DEFAULT_PASSWORD, ApiTestCase


class AdminTestCase(ApiTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.admin_id = self.add_user(
            "admin@storerating.io", role=Role.SYSTEM_ADMINISTRATOR, name="Platform Administrator One"
        )
        self.headers = self.auth_headers(self.admin_id, Role.SYSTEM_ADMINISTRATOR)


class TestDashboard(AdminTestCase):
    def test_counts(self) -> None:
        user_id = self.add_user("member@storerating.io")
        store_id = self.add_store("Corner Bakery", "bakery@storerating.io")
        self.add_store("Book Nook", "books@storerating.io")
        self.add_rating(user_id, store_id, 4)

        resp = self.client.get("/api/admin/dashboard", headers=self.headers)
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json(), {"totalUsers": 2, "totalStores": 2, "totalRatings": 1})


class TestCreateStore(AdminTestCase):
    def test_creates_store(self) -> None:
        resp = self.client.post(
            "/api/admin/stores",
            json={"name": "Corner Bakery", "email": "Bakery@StoreRating.io", "address": ""},
            headers=self.headers,
        )
        self.assertEqual(resp.status_code, 201)
        body = resp.json()
        self.assertEqual(body["message"], "Store added successfully")
        self.assertEqual(body["store"]["email"], "bakery@storerating.io")
        self.assertIsNone(body["store"]["address"])

    def test_duplicate_email(self) -> None:
        self.add_store("Corner Bakery", "bakery@storerating.io")
        resp = self.client.post(
            "/api/admin/stores",
            json={"name": "Another Bakery", "email": "bakery@storerating.io"},
            headers=self.headers,
        )
        self.assertEqual(resp.status_code, 409)
        self.assertEqual(resp.json()["message"], "Store already exists with this email")

    def test_validation(self) -> None:
        resp = self.client.post(
            "/api/admin/stores", json={"name": "", "email": "bad"}, headers=self.headers
        )
        self.assertEqual(resp.status_code, 400)
        self.assertEqual({e["field"] for e in resp.json()["errors"]}, {"name", "email"})

    def test_name_length_capped_at_column_size(self) -> None:
        resp = self.client.post(
            "/api/admin/stores",
            json={"name": "S" * 256, "email": "long@storerating.io"},
            headers=self.headers,
        )
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(
            resp.json()["errors"],
            [{"field": "name", "message": "Store name must not exceed 255 characters"}],
        )

        resp = self.client.post(
            "/api/admin/stores",
            json={"name": "S" * 255, "email": "long@storerating.io"},
            headers=self.headers,
        )
        self.assertEqual(resp.status_code, 201)


class TestListStores(AdminTestCase):
    def setUp(self) -> None:
        super().setUp()
        rater_a = self.add_user("a@storerating.io")
        rater_b = self.add_user("b@storerating.io")
        self.bakery = self.add_store("Corner Bakery", "bakery@storerating.io", "1 Oak Lane")
        self.books = self.add_store("Book Nook", "books@storerating.io", "9 Elm Road")
        self.cafe = self.add_store("Airport Cafe", "cafe@storerating.io", "Terminal 2")
        self.add_rating(rater_a, self.bakery, 3)
        self.add_rating(rater_b, self.bakery, 5)
        self.add_rating(rater_a, self.books, 2)

    def _list(self, **params: str) -> list[dict]:
        resp = self.client.get("/api/admin/stores", params=params, headers=self.headers)
        self.assertEqual(resp.status_code, 200)
        return resp.json()["stores"]

    def test_average_and_zero_for_unrated(self) -> None:
        ratings = {s["id"]: s["rating"] for s in self._list()}
        self.assertEqual(ratings[self.bakery], "4.00")
        self.assertEqual(ratings[self.books], "2.00")
        self.assertEqual(ratings[self.cafe], "0.00")

    def test_default_sort_is_name_ascending(self) -> None:
        self.assertEqual(
            [s["name"] for s in self._list()], ["Airport Cafe", "Book Nook", "Corner Bakery"]
        )

    def test_bogus_sort_falls_back_to_name(self) -> None:
        stores = self._list(sortBy="bogus", sortOrder="sideways")
        self.assertEqual([s["name"] for s in stores], ["Airport Cafe", "Book Nook", "Corner Bakery"])

    def test_sort_by_rating_desc(self) -> None:
        stores = self._list(sortBy="rating", sortOrder="desc")
        self.assertEqual([s["id"] for s in stores], [self.bakery, self.books, self.cafe])

    def test_filters_are_case_insensitive_substrings(self) -> None:
        self.assertEqual([s["id"] for s in self._list(name="BAK")], [self.bakery])
        self.assertEqual([s["id"] for s in self._list(address="elm")], [self.books])
        self.assertEqual([s["id"] for s in self._list(email="cafe@")], [self.cafe])
        self.assertEqual(self._list(name="bakery", address="elm"), [])

    def test_like_wildcards_match_literally(self) -> None:
        underscored = self.add_store("Corner_Deli", "deli@storerating.io", "100% Main Street")
        self.assertEqual([s["id"] for s in self._list(name="_")], [underscored])
        self.assertEqual([s["id"] for s in self._list(address="%")], [underscored])
        self.assertEqual(self._list(name="Corner%Bakery"), [])


class TestCreateUser(AdminTestCase):
    def _payload(self, **overrides: object) -> dict:
        payload = {
            "name": "Created By Administrator",
            "email": "created@storerating.io",
            "password": DEFAULT_PASSWORD,
            "address": "44 River Road",
        }
        payload.update(overrides)
        return payload

    def test_creates_store_owner_for_existing_store(self) -> None:
        store_id = self.add_store("Corner Bakery", "bakery@storerating.io")
        resp = self.client.post(
            "/api/admin/users",
            json=self._payload(role="store_owner", store_id=store_id),
            headers=self.headers,
        )
        self.assertEqual(resp.status_code, 201)
        user = resp.json()["user"]
        self.assertEqual(user["role"], "store_owner")
        self.assertEqual(user["store_id"], store_id)
        self.assertNotIn("password_hash", user)

    def test_missing_store_is_not_found(self) -> None:
        resp = self.client.post(
            "/api/admin/users",
            json=self._payload(role="store_owner", store_id=404),
            headers=self.headers,
        )
        self.assertEqual(resp.status_code, 404)
        self.assertEqual(resp.json()["message"], "Store not found")

    def test_unknown_role_becomes_normal_user(self) -> None:
        resp = self.client.post(
            "/api/admin/users", json=self._payload(role="wizard"), headers=self.headers
        )
        self.assertEqual(resp.status_code, 201)
        self.assertEqual(resp.json()["user"]["role"], "normal_user")

    def test_store_id_dropped_for_non_owner(self) -> None:
        store_id = self.add_store("Corner Bakery", "bakery@storerating.io")
        resp = self.client.post(
            "/api/admin/users",
            json=self._payload(role="normal_user", store_id=store_id),
            headers=self.headers,
        )
        self.assertEqual(resp.status_code, 201)
        self.assertIsNone(resp.json()["user"]["store_id"])

    def test_can_create_administrator(self) -> None:
        resp = self.client.post(
            "/api/admin/users",
            json=self._payload(role="system_administrator"),
            headers=self.headers,
        )
        self.assertEqual(resp.json()["user"]["role"], "system_administrator")

    def test_duplicate_email(self) -> None:
        resp = self.client.post(
            "/api/admin/users",
            json=self._payload(email="admin@storerating.io"),
            headers=self.headers,
        )
        self.assertEqual(resp.status_code, 409)


class TestListAndGetUsers(AdminTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.store_id = self.add_store("Corner Bakery", "bakery@storerating.io")
        self.owner_id = self.add_user(
            "owner@storerating.io",
            role=Role.STORE_OWNER,
            name="Bakery Owner Person Name",
            store_id=self.store_id,
        )
        self.member_id = self.add_user(
            "member@storerating.io", name="Zed Member Of The Platform", address="5 Hill St"
        )

    def test_lists_with_store_name(self) -> None:
        resp = self.client.get("/api/admin/users", headers=self.headers)
        self.assertEqual(resp.status_code, 200)
        users = {u["id"]: u for u in resp.json()["users"]}
        self.assertEqual(len(users), 3)
        self.assertEqual(users[self.owner_id]["store_name"], "Corner Bakery")
        self.assertIsNone(users[self.member_id]["store_name"])

    def test_role_filter_and_sort(self) -> None:
        resp = self.client.get(
            "/api/admin/users", params={"role": "store_owner"}, headers=self.headers
        )
        self.assertEqual([u["id"] for u in resp.json()["users"]], [self.owner_id])

        resp = self.client.get(
            "/api/admin/users", params={"sortBy": "name", "sortOrder": "DESC"}, headers=self.headers
        )
        self.assertEqual(resp.json()["users"][0]["id"], self.member_id)

    def test_address_filter(self) -> None:
        resp = self.client.get("/api/admin/users", params={"address": "HILL"}, headers=self.headers)
        self.assertEqual([u["id"] for u in resp.json()["users"]], [self.member_id])

    def test_owner_detail_includes_store_rating(self) -> None:
        self.add_rating(self.member_id, self.store_id, 3)
        resp = self.client.get(f"/api/admin/users/{self.owner_id}", headers=self.headers)
        self.assertEqual(resp.status_code, 200)
        user = resp.json()["user"]
        self.assertEqual(user["rating"], "3.00")
        self.assertEqual(user["total_ratings"], 1)
        self.assertEqual(user["store_name"], "Corner Bakery")

    def test_owner_detail_without_ratings(self) -> None:
        user = self.client.get(f"/api/admin/users/{self.owner_id}", headers=self.headers).json()["user"]
        self.assertEqual(user["rating"], "0.00")
        self.assertEqual(user["total_ratings"], 0)

    def test_member_detail_has_no_rating(self) -> None:
        user = self.client.get(f"/api/admin/users/{self.member_id}", headers=self.headers).json()["user"]
        self.assertIsNone(user["rating"])

    def test_unknown_user(self) -> None:
        resp = self.client.get("/api/admin/users/999", headers=self.headers)
        self.assertEqual(resp.status_code, 404)
        self.assertEqual(resp.json()["message"], "User not found")

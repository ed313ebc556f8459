"""HTTP tests for the v1 API: auth endpoints, guard wiring on product routes, error bodies."""

import unittest
from collections.abc import Generator

from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from storefront.api.deps import get_password_hasher, get_token_issuer
from storefront.core.database import get_db
from storefront.core.security import PasswordHasher, TokenIssuer
from storefront.main import create_app
from storefront.models import Base
from storefront.schemas.auth import Role

PREFIX = "/api/v1"


class ApiTestCase(unittest.TestCase):
    """Fresh app and in-memory database per test."""

    def setUp(self) -> None:
        engine = create_engine(
            "sqlite://",
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
        Base.metadata.create_all(engine)
        TestingSession = sessionmaker(bind=engine, autocommit=False, autoflush=False)

        def override_get_db() -> Generator[Session, None, None]:
            db = TestingSession()
            try:
                yield db
            finally:
                db.close()

        self.issuer = TokenIssuer("api-test-secret")
        self.app = create_app()
        self.app.dependency_overrides[get_db] = override_get_db
        self.app.dependency_overrides[get_token_issuer] = lambda: self.issuer
        self.app.dependency_overrides[get_password_hasher] = lambda: PasswordHasher(rounds=4)
        self.client = TestClient(self.app)

    def tearDown(self) -> None:
        self.client.close()

    def register(self, email: str, password: str = "p1", role: str | None = None):
        body = {"email": email, "password": password}
        if role is not None:
            body["role"] = role
        return self.client.post(f"{PREFIX}/auth/register", json=body)

    def token_for(self, email: str, role: str = "user") -> str:
        self.register(email, "p1", role)
        resp = self.client.post(f"{PREFIX}/auth/login", json={"email": email, "password": "p1"})
        self.assertEqual(resp.status_code, 200, resp.text)
        return resp.json()["access_token"]

    @staticmethod
    def bearer(token: str) -> dict[str, str]:
        return {"Authorization": f"Bearer {token}"}


class TestAuthEndpoints(ApiTestCase):
    def test_register_returns_user_without_password(self) -> None:
        resp = self.register("a@x.com")
        self.assertEqual(resp.status_code, 201, resp.text)
        body = resp.json()
        self.assertIsInstance(body["id"], int)
        self.assertEqual(body["email"], "a@x.com")
        self.assertEqual(body["role"], "user")
        self.assertNotIn("password", body)

    def test_duplicate_registration_is_conflict(self) -> None:
        self.register("a@x.com")
        resp = self.register("a@x.com", "other")
        self.assertEqual(resp.status_code, 409)
        self.assertEqual(resp.json()["error"], "duplicate_email")

    def test_register_rejects_unknown_role(self) -> None:
        resp = self.register("a@x.com", role="owner")
        self.assertEqual(resp.status_code, 422)

    def test_login_returns_bearer_token_with_user_claims(self) -> None:
        user_id = self.register("a@x.com").json()["id"]
        resp = self.client.post(f"{PREFIX}/auth/login", json={"email": "a@x.com", "password": "p1"})
        self.assertEqual(resp.status_code, 200)
        body = resp.json()
        self.assertEqual(body["token_type"], "bearer")
        claims = self.issuer.verify(body["access_token"])
        self.assertEqual(claims.sub, str(user_id))
        self.assertEqual(claims.email, "a@x.com")
        self.assertEqual(claims.role, Role.USER)

    def test_mixed_case_domain_logs_in_with_the_registered_text(self) -> None:
        reg = self.register("Alice@Example.COM")
        self.assertEqual(reg.status_code, 201, reg.text)
        self.assertEqual(reg.json()["email"], "Alice@example.com")
        resp = self.client.post(
            f"{PREFIX}/auth/login", json={"email": "Alice@Example.COM", "password": "p1"}
        )
        self.assertEqual(resp.status_code, 200, resp.text)
        claims = self.issuer.verify(resp.json()["access_token"])
        self.assertEqual(claims.sub, str(reg.json()["id"]))
        self.assertEqual(claims.email, "Alice@example.com")

    def test_login_local_part_stays_case_sensitive(self) -> None:
        self.register("Alice@x.com")
        resp = self.client.post(f"{PREFIX}/auth/login", json={"email": "alice@x.com", "password": "p1"})
        self.assertEqual(resp.status_code, 401)

    def test_wrong_password_and_unknown_email_look_the_same(self) -> None:
        self.register("a@x.com")
        wrong = self.client.post(f"{PREFIX}/auth/login", json={"email": "a@x.com", "password": "wrong"})
        unknown = self.client.post(f"{PREFIX}/auth/login", json={"email": "b@x.com", "password": "p1"})
        self.assertEqual(wrong.status_code, 401)
        self.assertEqual(wrong.json(), unknown.json())
        self.assertEqual(wrong.json()["error"], "invalid_credentials")

    def test_me_requires_token(self) -> None:
        resp = self.client.get(f"{PREFIX}/auth/me")
        self.assertEqual(resp.status_code, 401)
        self.assertEqual(resp.json()["error"], "unauthenticated")
        self.assertEqual(resp.headers.get("www-authenticate"), "Bearer")

    def test_me_rejects_garbage_token(self) -> None:
        resp = self.client.get(f"{PREFIX}/auth/me", headers=self.bearer("not.a.jwt"))
        self.assertEqual(resp.status_code, 401)

    def test_me_returns_identity(self) -> None:
        token = self.token_for("a@x.com")
        resp = self.client.get(f"{PREFIX}/auth/me", headers=self.bearer(token))
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["email"], "a@x.com")
        self.assertEqual(resp.json()["role"], "user")


class TestProductEndpoints(ApiTestCase):
    payload = {"name": "Widget", "description": "A useful widget", "price": 19.99, "stock": 10}

    def create_as_admin(self) -> dict:
        token = self.token_for("root@x.com", "admin")
        resp = self.client.post(f"{PREFIX}/products", json=self.payload, headers=self.bearer(token))
        self.assertEqual(resp.status_code, 201, resp.text)
        return resp.json()

    def test_reads_are_public(self) -> None:
        created = self.create_as_admin()
        listing = self.client.get(f"{PREFIX}/products")
        self.assertEqual(listing.status_code, 200)
        self.assertEqual([p["id"] for p in listing.json()], [created["id"]])
        one = self.client.get(f"{PREFIX}/products/{created['id']}")
        self.assertEqual(one.json()["name"], "Widget")

    def test_missing_product_is_404(self) -> None:
        resp = self.client.get(f"{PREFIX}/products/999")
        self.assertEqual(resp.status_code, 404)
        self.assertEqual(resp.json()["error"], "product_not_found")

    def test_create_without_token_is_unauthenticated(self) -> None:
        resp = self.client.post(f"{PREFIX}/products", json=self.payload)
        self.assertEqual(resp.status_code, 401)

    def test_user_role_is_forbidden_from_writes(self) -> None:
        created = self.create_as_admin()
        headers = self.bearer(self.token_for("a@x.com"))
        pid = created["id"]
        for method, url, json in [
            ("POST", f"{PREFIX}/products", self.payload),
            ("PUT", f"{PREFIX}/products/{pid}", {"price": 1.0}),
            ("DELETE", f"{PREFIX}/products/{pid}", None),
        ]:
            with self.subTest(method=method):
                resp = self.client.request(method, url, json=json, headers=headers)
                self.assertEqual(resp.status_code, 403)
                self.assertEqual(resp.json()["error"], "insufficient_permissions")

    def test_admin_update_and_delete(self) -> None:
        created = self.create_as_admin()
        headers = self.bearer(self.token_for("ops@x.com", "admin"))
        pid = created["id"]

        updated = self.client.put(f"{PREFIX}/products/{pid}", json={"stock": 3}, headers=headers)
        self.assertEqual(updated.status_code, 200)
        self.assertEqual(updated.json()["stock"], 3)
        self.assertEqual(updated.json()["price"], 19.99)

        deleted = self.client.delete(f"{PREFIX}/products/{pid}", headers=headers)
        self.assertEqual(deleted.status_code, 204)
        self.assertEqual(self.client.get(f"{PREFIX}/products/{pid}").status_code, 404)


class TestHealth(ApiTestCase):
    def test_health_reports_database(self) -> None:
        resp = self.client.get(f"{PREFIX}/health")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["status"], "ok")
        self.assertEqual(resp.json()["database"], "connected")


if __name__ == "__main__":
    unittest.main()

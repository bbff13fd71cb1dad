import os
import unittest

from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy.exc import IntegrityError

os.environ.setdefault("DATABASE_URL", "sqlite+pysqlite:///:memory:")

from app.core.http_hardening import install_error_envelope, install_http_hardening
from app.main import app


class HttpHardeningTests(unittest.TestCase):
    def setUp(self):
        self.client = TestClient(app)

    def tearDown(self):
        self.client.close()

    def test_health_has_security_headers_and_request_id(self):
        response = self.client.get("/health")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.headers.get("x-content-type-options"), "nosniff")
        self.assertEqual(response.headers.get("x-frame-options"), "DENY")
        self.assertEqual(response.headers.get("cache-control"), "no-store")
        self.assertRegex(str(response.headers.get("x-request-id")), r"^[A-Za-z0-9._-]{1,128}$")

    def test_valid_request_id_is_preserved(self):
        response = self.client.get("/health", headers={"X-Request-ID": "ibadah-minggu_2026.10.18"})
        self.assertEqual(response.headers.get("x-request-id"), "ibadah-minggu_2026.10.18")

    def test_invalid_request_id_is_replaced(self):
        response = self.client.get("/health", headers={"X-Request-ID": "bad id with spaces"})
        request_id = response.headers.get("x-request-id")
        self.assertNotEqual(request_id, "bad id with spaces")
        self.assertRegex(str(request_id), r"^[A-Za-z0-9._-]{1,128}$")

    def test_unknown_route_uses_error_envelope(self):
        response = self.client.get("/api/tidak-ada")
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json(), {"success": False, "data": None, "message": "Not Found"})
        self.assertIsNotNone(response.headers.get("x-request-id"))

    def test_auth_error_keeps_request_id(self):
        # No token => 401 from dependency, middleware headers must still be present.
        response = self.client.get("/api/jemaat")
        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.headers.get("x-content-type-options"), "nosniff")
        self.assertIsNotNone(response.headers.get("x-request-id"))


class ErrorEnvelopeTests(unittest.TestCase):
    def setUp(self):
        self.app = FastAPI()
        install_http_hardening(self.app)
        install_error_envelope(self.app)

        @self.app.post("/duplicate")
        def duplicate():
            raise IntegrityError("INSERT INTO rayon", {}, Exception("UNIQUE constraint failed: rayon.nama_rayon"))

        @self.app.get("/count")
        def count(n: int):
            return {"n": n}

        @self.app.get("/boom")
        def boom():
            raise RuntimeError("boom")

        self.client = TestClient(self.app, raise_server_exceptions=False)

    def tearDown(self):
        self.client.close()

    def test_integrity_error_is_409_envelope(self):
        response = self.client.post("/duplicate")
        self.assertEqual(response.status_code, 409)
        self.assertEqual(
            response.json(),
            {"success": False, "data": None, "message": "Data sudah ada atau melanggar relasi"},
        )
        self.assertEqual(response.headers.get("x-content-type-options"), "nosniff")

    def test_validation_error_is_400_with_errors(self):
        response = self.client.get("/count?n=banyak")
        self.assertEqual(response.status_code, 400)
        body = response.json()
        self.assertFalse(body["success"])
        self.assertEqual(body["message"], "Data tidak valid")
        self.assertTrue(body["errors"])

    def test_unhandled_error_is_500_envelope(self):
        response = self.client.get("/boom")
        self.assertEqual(response.status_code, 500)
        body = response.json()
        self.assertFalse(body["success"])
        self.assertEqual(body["message"], "Terjadi kesalahan pada server")

if __name__ == "__main__":
    unittest.main()

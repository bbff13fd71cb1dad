import os
import unittest
from datetime import date

from fastapi.testclient import TestClient
from sqlalchemy import create_engine, delete
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

# Ensure settings can be initialized in test environments
os.environ.setdefault("DATABASE_URL", "sqlite+pysqlite:///:memory:")

from app.core.security import create_access_token, hash_password
from app.db.session import get_db
from app.main import app
from app.models.registry import ALL_MODELS
from app.models.alamat import Alamat
from app.models.baptis import Baptis
from app.models.jemaat import Jemaat
from app.models.keluarga import Keluarga
from app.models.majelis import Majelis
from app.models.pernikahan import Pernikahan
from app.models.rayon import Rayon
from app.models.sidi import Sidi
from app.models.user import User


class CongregationTestBase(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        cls.engine = create_engine(
            "sqlite+pysqlite:///:memory:",
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
        cls.SessionLocal = sessionmaker(bind=cls.engine, autocommit=False, autoflush=False)
        for model in ALL_MODELS:
            model.__table__.create(bind=cls.engine)
        cls.password_hash = hash_password("rahasia")

    @classmethod
    def tearDownClass(cls):
        for model in reversed(ALL_MODELS):
            model.__table__.drop(bind=cls.engine)
        cls.engine.dispose()

    def setUp(self):
        with self.SessionLocal() as db:
            for model in reversed(ALL_MODELS):
                db.execute(delete(model))
            db.commit()
            self._seed(db)

        def override_get_db():
            db = self.SessionLocal()
            try:
                yield db
            finally:
                db.close()

        app.dependency_overrides[get_db] = override_get_db
        self.client = TestClient(app)

    def tearDown(self):
        self.client.close()
        app.dependency_overrides.clear()

    def _seed(self, db):
        db.add_all(
            [
                Rayon(id="r1", nama_rayon="Rayon 1"),
                Rayon(id="r2", nama_rayon="Rayon 2"),
                Rayon(id="r10", nama_rayon="Rayon 10"),
                Pernikahan(id="p1", tanggal=date(1984, 6, 10), id_klasis="kl1"),
                Pernikahan(id="p2", tanggal=date(2015, 8, 20), id_klasis="kl2"),
                Alamat(id="a1", id_kelurahan="k1", rt=3, rw=1, jalan="Jl. Timor Raya No. 1"),
                Alamat(id="a2", id_kelurahan="k2", rt=5, rw=2, jalan="Jl. Sumba No. 7"),
            ]
        )
        db.flush()
        db.add_all(
            [
                Keluarga(id="kel1", id_alamat="a1", id_rayon="r1", id_status_keluarga="sk1", no_bagungan=1, no_kk="5301001"),
                Keluarga(id="kel2", id_alamat="a2", id_rayon="r2", id_status_keluarga="sk2", no_bagungan=2, no_kk="5301002"),
                Majelis(id="m1", nama_lengkap="Majelis Rayon Satu", id_rayon="r1"),
            ]
        )
        db.flush()
        db.add_all(
            [
                Jemaat(id="j1", id_keluarga="kel1", nama="Maria Lay", jenis_kelamin=False, tanggal_lahir=date(1990, 5, 1), id_suku="s1"),
                Jemaat(id="j2", id_keluarga="kel1", nama="Yohanes Lay", jenis_kelamin=True, tanggal_lahir=date(1960, 2, 2), id_suku="s1", id_pernikahan="p1"),
                Jemaat(id="j3", id_keluarga="kel2", nama="Maria Ndun", jenis_kelamin=False, tanggal_lahir=date(2010, 7, 7), id_suku="s2", id_pernikahan="p2"),
                Jemaat(id="j4", id_keluarga="kel2", nama="Petrus Ndun", jenis_kelamin=True, tanggal_lahir=date(1985, 3, 3), status="KELUAR", id_pernikahan="p1"),
            ]
        )
        db.flush()
        db.add_all(
            [
                User(id="u-admin", username="admin", password_hash=self.password_hash, role="ADMIN"),
                User(id="u-majelis", username="majelis1", password_hash=self.password_hash, role="MAJELIS", id_majelis="m1"),
                User(id="u-jemaat", username="maria", password_hash=self.password_hash, role="JEMAAT", id_jemaat="j1"),
                User(id="u-inactive", username="lama", password_hash=self.password_hash, role="ADMIN", is_active=False),
                Baptis(id="b1", id_jemaat="j1", tanggal=date(1991, 1, 6)),
                Baptis(id="b2", id_jemaat="j3", tanggal=date(2011, 1, 9)),
                Sidi(id="s1", id_jemaat="j2", tanggal=date(1978, 4, 2)),
            ]
        )
        db.commit()

    @staticmethod
    def _auth_headers(user_id: str, role: str) -> dict[str, str]:
        return {"Authorization": f"Bearer {create_access_token(user_id, role)}"}

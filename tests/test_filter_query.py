import unittest
from datetime import date

from tests.base import CongregationTestBase

from app.models.baptis import Baptis
from app.models.jemaat import Jemaat
from app.schemas.query import QueryOptions
from app.services.filter_query import apply_parsed_query, page_meta, paginate
from app.services.query_params import SACRAMENT_FILTER_FIELDS, parse_query_params
from app.services.scope import ScopeConstraint, apply_scope

TODAY = date(2026, 10, 19)


class FilterQueryTests(CongregationTestBase):
    def _ids(self, query, model=Jemaat, fields=None, scope=None, **options):
        kwargs = {"today": TODAY}
        if fields is not None:
            kwargs["fields"] = fields
        parsed = apply_scope(parse_query_params(query, QueryOptions(**options), **kwargs), scope)
        with self.SessionLocal() as db:
            rows = apply_parsed_query(db.query(model), model, parsed).all()
            return [row.id for row in rows]

    def test_search_is_case_insensitive_substring(self):
        self.assertEqual(self._ids({"search": "maria"}), ["j1", "j3"])

    def test_search_escapes_like_wildcards(self):
        self.assertEqual(self._ids({"search": "%"}), [])

    def test_nested_family_filter(self):
        self.assertEqual(self._ids({"idRayon": "r1"}), ["j1", "j2"])
        self.assertEqual(self._ids({"rt": "5"}), ["j3", "j4"])
        self.assertEqual(self._ids({"idRayon": "r1", "idKelurahan": "k2"}), [])

    def test_membership_filter(self):
        self.assertEqual(self._ids({"status": ["AKTIF"]}), ["j1", "j2", "j3"])
        self.assertEqual(self._ids({"idSuku": ["s1", "s2"]}), ["j1", "j2", "j3"])

    def test_user_account_filter(self):
        self.assertEqual(self._ids({"hasUserAccount": "true"}), ["j1"])
        self.assertEqual(self._ids({"hasUserAccount": "false"}), ["j2", "j3", "j4"])
        self.assertEqual(self._ids({"userRole": "JEMAAT"}), ["j1"])
        self.assertEqual(self._ids({"hasUserAccount": "false", "userRole": "JEMAAT"}), [])

    def test_age_range(self):
        self.assertEqual(self._ids({"ageMin": "18", "ageMax": "40"}), ["j1"])

    def test_boolean_filter(self):
        self.assertEqual(self._ids({"jenisKelamin": "true"}), ["j2", "j4"])

    def test_unknown_filter_keys_are_ignored(self):
        # id_klasis is a sacrament column; jemaat has no such field.
        self.assertEqual(self._ids({"idKlasis": "kl1"}, fields=SACRAMENT_FILTER_FIELDS), ["j1", "j2", "j3", "j4"])

    def test_scope_with_conflicting_request_matches_nothing(self):
        scope = ScopeConstraint(path=("keluarga", "id_rayon"), value="r1")
        self.assertEqual(self._ids({"idRayon": "r2"}, scope=scope), [])
        self.assertEqual(self._ids({}, scope=scope), ["j1", "j2"])

    def test_sort_accepts_camel_case(self):
        self.assertEqual(self._ids({"sortBy": "tanggalLahir", "sortOrder": "desc"}), ["j3", "j1", "j4", "j2"])

    def test_unknown_sort_falls_back_to_primary_key(self):
        self.assertEqual(self._ids({"sortBy": "umur"}), ["j1", "j2", "j3", "j4"])

    def test_relation_chain_for_sacraments(self):
        ids = self._ids(
            {"idRayon": "r2", "search": "ndun"},
            model=Baptis,
            fields=SACRAMENT_FILTER_FIELDS,
            search_field="jemaat.nama",
        )
        self.assertEqual(ids, ["b2"])

    def test_paginate_returns_page_and_total(self):
        parsed = parse_query_params({"page": "2", "limit": "2", "sortBy": "nama"}, QueryOptions(), today=TODAY)
        with self.SessionLocal() as db:
            rows, total = paginate(apply_parsed_query(db.query(Jemaat), Jemaat, parsed), parsed)
            ids = [row.id for row in rows]
        self.assertEqual(total, 4)
        self.assertEqual(ids, ["j4", "j2"])

    def test_page_meta(self):
        parsed = parse_query_params({"limit": "3"}, QueryOptions(), today=TODAY)
        meta = page_meta(parsed, 4)
        self.assertEqual((meta.totalPages, meta.hasNext, meta.hasPrev), (2, True, False))
        self.assertEqual(page_meta(parsed, 0).totalPages, 0)


if __name__ == "__main__":
    unittest.main()

"""Tests for the HTTP surface with a scripted backend."""

import asyncio

from matrimony.models import QuickFilters
from matrimony.services.filter_service import build_payload


class TestMeta:
    def test_health(self, client):
        response = client.get("/api/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"


class TestAuth:
    def test_login_success_stores_session(self, client, fake_api, store):
        fake_api.respond("login", {"status": True, "data": {"client_id": "NM1", "tamil_client_id": "501"}})

        response = client.post("/api/auth/login", json={"profile_id": " NM1 ", "password": "pw"})

        assert response.status_code == 200
        assert fake_api.calls == [("login", ("NM1", "pw"))]
        assert asyncio.run(store.is_logged_in()) is True

    def test_login_requires_fields(self, client, fake_api):
        response = client.post("/api/auth/login", json={"profile_id": "", "password": "pw"})
        assert response.status_code == 400
        assert fake_api.calls == []

    def test_login_rejected(self, client, fake_api, store):
        fake_api.respond("login", {"status": False, "message": "Invalid credentials"})
        response = client.post("/api/auth/login", json={"profile_id": "NM1", "password": "bad"})
        assert response.status_code == 401
        assert response.json()["detail"] == "Invalid credentials"
        assert asyncio.run(store.is_logged_in()) is False

    def test_logout_and_session(self, client, logged_in):
        assert client.get("/api/auth/session").json()["logged_in"] is True
        client.post("/api/auth/logout")
        body = client.get("/api/auth/session").json()
        assert body == {"logged_in": False, "user": None}


class TestSearch:
    def test_quick_search(self, client, fake_api):
        fake_api.respond("search_profiles", {
            "status": True,
            "data": [{"id": "1", "name": "A", "age": "30"}, {"id": "2", "name": "B", "age": "24"}],
        })

        response = client.post("/api/search", json={
            "mode": "normal",
            "filters": {"lookingFor": "BRIDE", "age": "25", "religion": "SELECT_RELIGION", "caste": "SELECT_CASTE"},
        })

        body = response.json()
        assert response.status_code == 200
        assert body["status"] is True
        assert body["total"] == 2
        assert fake_api.calls[0][1][0] == {"gender": "Female", "age_from": "25", "age_to": "60", "limit": "50"}
        assert [p["name"] for p in body["profiles"]] == ["A", "B"]
        assert body["profiles"][0]["lastActive"] == "Recent"

    def test_sort_by_age(self, client, fake_api):
        fake_api.respond("search_profiles", {
            "status": True,
            "data": [{"id": "1", "age": "30"}, {"id": "2", "age": "24"}],
        })
        body = client.post("/api/search", json={"mode": "normal", "filters": {}, "sort": "age"}).json()
        assert [p["id"] for p in body["profiles"]] == ["2", "1"]

    def test_backend_failure_gives_zero_results(self, client, fake_api):
        body = client.post("/api/search", json={"mode": "normal", "filters": {}}).json()
        assert body["status"] is False
        assert body["total"] == 0
        assert body["profiles"] == []
        assert body["message"]

    def test_error_envelope_data_gives_empty_list(self, client, fake_api):
        fake_api.respond("search_profiles", {"status": True, "data": {"error": "unexpected"}})
        body = client.post("/api/search", json={"mode": "normal", "filters": {}}).json()
        assert body["status"] is True
        assert body["profiles"] == []

    def test_empty_quick_form_uses_form_defaults(self, client, fake_api):
        fake_api.respond("search_profiles", {"status": True, "data": []})
        body = client.post("/api/search", json={"mode": "normal", "filters": {}}).json()
        expected = build_payload("normal", QuickFilters())
        assert body["payload"] == expected
        assert fake_api.calls[0][1][0] == expected
        assert expected["caste"] == "NADAR"

    def test_empty_advanced_form_uses_form_defaults(self, client, fake_api, logged_in):
        fake_api.respond("search_profiles", {"status": True, "data": []})
        body = client.post("/api/search", json={"mode": "advanced", "filters": {}}).json()
        assert body["payload"] == {"gender": "Female", "age_from": "18", "age_to": "30", "limit": "50"}

    def test_invalid_filter_type_rejected(self, client, fake_api):
        response = client.post("/api/search", json={"mode": "normal", "filters": {"age": ["25"]}})
        assert response.status_code == 422
        assert fake_api.calls == []

    def test_advanced_requires_login(self, client, fake_api):
        response = client.post("/api/search", json={"mode": "advanced", "filters": {}})
        assert response.status_code == 403
        assert fake_api.calls == []

    def test_advanced_search(self, client, fake_api, logged_in):
        fake_api.respond("search_profiles", {"status": True, "data": []})
        body = client.post("/api/search", json={
            "mode": "advanced",
            "filters": {"ageFrom": "40", "ageTo": "25", "district": "CHENNAI"},
        }).json()
        assert body["payload"]["age_from"] == "25"
        assert body["payload"]["age_to"] == "40"
        assert body["payload"]["district"] == "CHENNAI"


class TestProfiles:
    def test_selected_requires_login(self, client):
        assert client.get("/api/profiles/selected").status_code == 401

    def test_selected_profiles(self, client, fake_api, logged_in):
        fake_api.respond("get_selected_profiles", {
            "status": True,
            "data": [{"profile_id": "NM9", "name": "Meena", "profile_image": "https://x/y.jpg"}],
        })
        body = client.get("/api/profiles/selected").json()
        assert fake_api.calls == [("get_selected_profiles", ("501",))]
        assert body["total"] == 1
        assert body["items"][0]["profile_image"] == "https://x/y.jpg"

    def test_selected_backend_failure_is_empty(self, client, fake_api, logged_in):
        body = client.get("/api/profiles/selected").json()
        assert body == {"total": 0, "items": []}

    def test_profile_detail_records_view(self, client, fake_api, store, logged_in):
        fake_api.respond("get_profile", {
            "status": True,
            "data": {"tamil_profile": {"profile_id": "NM9", "user_name": "Meena", "religion": "2"}},
        })

        body = client.get("/api/profiles/77").json()

        assert body["id"] == "NM9"
        assert body["name"] == "Meena"
        assert body["religion"] == "Christian"
        viewed = client.get("/api/profiles/viewed").json()
        assert viewed["total"] == 1
        assert viewed["items"][0]["id"] == "NM9"
        assert asyncio.run(store.get_user_data())["viewed_profiles"] == 1

    def test_profile_not_found(self, client, fake_api):
        fake_api.respond("get_profile", {"status": False, "message": "No profile"})
        response = client.get("/api/profiles/1")
        assert response.status_code == 404
        assert response.json()["detail"] == "No profile"


class TestDashboard:
    def test_requires_login(self, client):
        assert client.get("/api/dashboard").status_code == 401

    def test_merges_live_profile_and_stats(self, client, fake_api, store, logged_in):
        fake_api.respond("get_profile", {
            "status": True,
            "data": {"main_profile": {"user_name": "Priya M", "user_photo": "p.jpg", "mem_plan": "0"}},
        })
        fake_api.respond("get_dashboard_stats", {
            "status": True,
            "data": {"viewed_profiles": "12", "no_sel_profiles": "3"},
        })

        body = client.get("/api/dashboard").json()

        assert body["display_name"] == "Priya M"
        assert body["client_id"] == "NM501"
        assert body["plan"] == "Free"
        assert body["viewed_profiles"] == "12"
        assert body["selected_profiles"] == "3"
        assert body["profile_image"] == "https://nadarmahamai.com/uploads/p.jpg"
        assert asyncio.run(store.get_user_data())["viewed_profiles"] == "12"

    def test_refresh_failure_uses_stored_data(self, client, fake_api, logged_in):
        body = client.get("/api/dashboard").json()
        assert body["display_name"] == "Priya"
        assert body["views_limit"] == "50"
        assert [c[0] for c in fake_api.calls] == ["get_profile"]

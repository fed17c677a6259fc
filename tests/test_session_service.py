"""Tests for the JSON session store."""

import asyncio
import json

from matrimony.services.session_service import (
    SessionStore,
    resolve_client_id,
    USER_DATA,
    TAMIL_CLIENT_ID,
    CLIENT_ID,
    USERNAME,
)


def run(coro):
    return asyncio.run(coro)


class TestSession:
    def test_starts_logged_out(self, store):
        assert run(store.is_logged_in()) is False
        assert run(store.get_user_data()) is None

    def test_set_session_stores_keys(self, store):
        user = {"client_id": 12, "tamil_client_id": "501", "username": "kavi"}
        assert run(store.set_session(user)) is True

        assert run(store.is_logged_in()) is True
        assert run(store.get(USER_DATA)) == user
        assert run(store.get(CLIENT_ID)) == "12"
        assert run(store.get(TAMIL_CLIENT_ID)) == "501"
        assert run(store.get(USERNAME)) == "kavi"

    def test_empty_login_data_ignored(self, store):
        assert run(store.set_session({})) is False
        assert run(store.is_logged_in()) is False

    def test_clear_session(self, store):
        run(store.set_session({"client_id": "1"}))
        run(store.clear_session())
        assert run(store.is_logged_in()) is False
        assert run(store.get(CLIENT_ID)) is None

    def test_persists_across_instances(self, tmp_path):
        path = tmp_path / "session.json"
        run(SessionStore(store_path=path).set_session({"client_id": "1"}))
        assert run(SessionStore(store_path=path).is_logged_in()) is True

    def test_corrupt_file_reads_as_empty(self, tmp_path):
        path = tmp_path / "session.json"
        path.write_text("{not json", encoding="utf-8")
        assert run(SessionStore(store_path=path).is_logged_in()) is False

    def test_unicode_names_round_trip(self, store):
        run(store.set_session({"client_id": "1", "user_name": "ஜெனிஹரிலா"}))
        assert run(store.get_user_data())["user_name"] == "ஜெனிஹரிலா"
        raw = json.loads(store.store_path.read_text(encoding="utf-8"))
        assert "ஜெனிஹரிலா" in raw[USER_DATA]


class TestResolveClientId:
    def test_precedence(self):
        assert resolve_client_id({"tamil_client_id": "5", "client_id": "6"}) == "5"
        assert resolve_client_id({"client_id": "6", "profileid": "7"}) == "6"
        assert resolve_client_id({"profileid": "7", "id": 8}) == "7"
        assert resolve_client_id({"id": 8}) == "8"

    def test_missing(self):
        assert resolve_client_id({}) is None
        assert resolve_client_id(None) is None
        assert resolve_client_id({"tamil_client_id": ""}) is None


class TestViewedProfiles:
    def test_first_view_increments_counter(self, store):
        run(store.set_session({"client_id": "1", "viewed_profiles": "2"}))
        assert run(store.record_viewed_profile({"id": "NM5", "name": "A"})) is True

        viewed = run(store.get_viewed_profiles())
        assert len(viewed) == 1
        assert viewed[0]["name"] == "A"
        assert "viewedAt" in viewed[0]
        assert run(store.get_user_data())["viewed_profiles"] == 3

    def test_repeat_view_updates_in_place(self, store):
        run(store.set_session({"client_id": "1"}))
        run(store.record_viewed_profile({"id": "NM5", "name": "A"}))
        assert run(store.record_viewed_profile({"profile_id": "NM5", "id": "NM5", "name": "B"})) is False

        viewed = run(store.get_viewed_profiles())
        assert len(viewed) == 1
        assert viewed[0]["name"] == "B"
        assert run(store.get_user_data())["viewed_profiles"] == 1

    def test_profile_without_id_ignored(self, store):
        assert run(store.record_viewed_profile({"name": "anon"})) is False
        assert run(store.get_viewed_profiles()) == []

"""Tests for the check-in endpoints."""
from glimmer.models.check_in import CheckIn
from glimmer.services import check_in_service
from tests.conftest import create_test_user, make_user, utc


class TestCheckInAPI:
    def test_check_in_once_per_day(self, client):
        user = create_test_user(client)
        url = f"/api/users/{user['user_id']}/checkins"

        first = client.post(url, json={"emoji": "😊", "mood": "happy"})
        assert first.status_code == 201, first.text
        data = first.json()
        assert data["emoji"] == "😊"
        assert data["mood"] == "happy"
        assert data["encouragement"] is None
        assert data["display_date"]

        second = client.post(url, json={"emoji": "😐"})
        assert second.status_code == 400

    def test_defaults(self, client):
        user = create_test_user(client)
        resp = client.post(f"/api/users/{user['user_id']}/checkins", json={})
        assert resp.status_code == 201
        assert resp.json()["emoji"] == "🏃"
        assert resp.json()["mood"] == "positive"

    def test_low_mood_gets_encouragement(self, client):
        user = create_test_user(client)
        resp = client.post(f"/api/users/{user['user_id']}/checkins", json={"emoji": "😢", "mood": "sad"})
        assert resp.status_code == 201
        assert resp.json()["encouragement"] == "gentle words for sad"

    def test_unknown_user(self, client):
        resp = client.post("/api/users/nope/checkins", json={})
        assert resp.status_code == 404

    def test_list_newest_first(self, client):
        user = create_test_user(client)
        client.post(f"/api/users/{user['user_id']}/checkins", json={"mood": "happy"})
        resp = client.get(f"/api/users/{user['user_id']}/checkins")
        assert resp.status_code == 200
        assert len(resp.json()) == 1


class TestCheckInService:
    def test_date_is_utc_midnight_and_created_at_raw(self, db):
        user = make_user(db)
        now = utc(2026, 3, 1, 22, 15)
        check_in = check_in_service.create_check_in(db, user.user_id, "🙂", "tired", lambda mood: "rest", now=now)

        stored = db.query(CheckIn).filter(CheckIn.check_in_id == check_in.check_in_id).one()
        assert stored.date.replace(tzinfo=None) == utc(2026, 3, 1).replace(tzinfo=None)
        assert stored.created_at.replace(tzinfo=None) == now.replace(tzinfo=None)
        assert stored.encouragement == "rest"

    def test_next_utc_day_allowed(self, db):
        user = make_user(db)
        check_in_service.create_check_in(db, user.user_id, None, None, str, now=utc(2026, 3, 1, 23, 50))
        check_in_service.create_check_in(db, user.user_id, None, None, str, now=utc(2026, 3, 2, 0, 5))
        assert db.query(CheckIn).filter(CheckIn.user_id == user.user_id).count() == 2

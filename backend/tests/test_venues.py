"""Venue, availability endpoint, and resource catalog tests."""
from tests.conftest import create_test_user, create_test_venue, booking_payload


class TestVenues:

    def test_create_and_get(self, client):
        venue = create_test_venue(client, name="Conference Room - ARDE", capacity=25)
        assert venue["status"] == "available"
        assert venue["amenities"] == ["AC", "Audio System"]
        resp = client.get(f"/api/venues/{venue['venue_id']}")
        assert resp.status_code == 200
        assert resp.json()["capacity"] == 25

    def test_list_sorted_by_name(self, client):
        create_test_venue(client, name="Training Hall - Tech")
        create_test_venue(client, name="Lecture Hall - Beta")
        names = [v["name"] for v in client.get("/api/venues/").json()]
        assert names == ["Lecture Hall - Beta", "Training Hall - Tech"]

    def test_capacity_must_be_positive(self, client):
        resp = client.post("/api/venues/", json={"name": "Closet", "capacity": 0, "floor": "B1"})
        assert resp.status_code == 422

    def test_missing_venue(self, client):
        assert client.get("/api/venues/nope").status_code == 404


class TestCheckAvailability:

    def _check(self, client, venue_id, date, start, end, exclude=None):
        body = {"venue_id": venue_id, "date": date, "start_time": start, "end_time": end}
        if exclude:
            body["exclude_booking_id"] = exclude
        return client.post("/api/venues/check-availability", json=body)

    def test_reference_scenario(self, client):
        user = create_test_user(client)
        venue = create_test_venue(client)
        booking = client.post(
            f"/api/bookings/?actor_user_id={user['user_id']}",
            json=booking_payload(venue["venue_id"], start="10:00", end="12:00"),
        ).json()

        vid = venue["venue_id"]
        assert self._check(client, vid, "2024-03-01", "11:00", "13:00").json() == {"available": False}
        assert self._check(client, vid, "2024-03-01", "12:00", "13:00").json() == {"available": True}
        assert self._check(client, vid, "2024-03-02", "10:00", "12:00").json() == {"available": True}
        assert self._check(client, vid, "2024-03-01", "10:00", "12:00", exclude=booking["booking_id"]).json() == {"available": True}

    def test_invalid_range(self, client):
        venue = create_test_venue(client)
        assert self._check(client, venue["venue_id"], "2024-03-01", "13:00", "13:00").status_code == 400

    def test_unknown_venue(self, client):
        assert self._check(client, "nope", "2024-03-01", "10:00", "11:00").status_code == 404


class TestResources:

    def test_create_and_list(self, client):
        client.post("/api/resources/", json={"name": "Projector & Screen", "description": "HD projector"})
        client.post("/api/resources/", json={"name": "Document Camera", "available": False})
        all_names = [r["name"] for r in client.get("/api/resources/").json()]
        assert all_names == ["Document Camera", "Projector & Screen"]
        available = [r["name"] for r in client.get("/api/resources/?available_only=true").json()]
        assert available == ["Projector & Screen"]

    def test_duplicate_name(self, client):
        assert client.post("/api/resources/", json={"name": "Laptop/Computer"}).status_code == 201
        assert client.post("/api/resources/", json={"name": "Laptop/Computer"}).status_code == 400

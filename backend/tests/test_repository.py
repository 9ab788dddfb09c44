"""Repository query surface — role queues, dashboards, unresolved references."""
import logging
from datetime import date

from app.models.booking import BookingStatus
from app.models.user import UserRole


def _fields(start, end, venue_id="hall-a"):
    return {
        "venue_id": venue_id,
        "event_title": f"Session {start}",
        "meeting_type": "online",
        "event_date": date(2024, 5, 10),
        "start_time": start,
        "end_time": end,
        "expected_attendees": 12,
        "department": "Administration",
        "requested_resources": [],
    }


def _seed(workflow, people):
    ids = {role: u.user_id for role, u in people.items()}
    a = workflow.create(ids[UserRole.user], _fields("08:00", "09:00"))
    b = workflow.create(ids[UserRole.user], _fields("09:00", "10:00"))
    c = workflow.create(ids[UserRole.user], _fields("10:00", "11:00"))
    workflow.transition(b.booking_id, "gd_approved", ids[UserRole.group_director])
    workflow.transition(c.booking_id, "gd_approved", ids[UserRole.group_director])
    workflow.transition(c.booking_id, "secretary_approved", ids[UserRole.secretary])
    return ids, a, b, c


def test_pending_for_each_role(workflow, repo, people, hall):
    _, a, b, c = _seed(workflow, people)
    assert [x.booking_id for x in repo.list_pending_for_role(UserRole.group_director)] == [a.booking_id]
    assert [x.booking_id for x in repo.list_pending_for_role(UserRole.secretary)] == [b.booking_id]
    assert [x.booking_id for x in repo.list_pending_for_role(UserRole.it_team)] == [c.booking_id]
    assert repo.list_pending_for_role(UserRole.user) == []


def test_processed_for_each_role(workflow, repo, people, hall):
    ids, a, b, c = _seed(workflow, people)
    workflow.cancel(a.booking_id, ids[UserRole.user])

    director = [x.booking_id for x in repo.list_processed_for_role(UserRole.group_director)]
    assert director == [a.booking_id, c.booking_id, b.booking_id]  # most recently updated first
    secretary = {x.booking_id for x in repo.list_processed_for_role(UserRole.secretary)}
    assert secretary == {a.booking_id, c.booking_id}
    it_team = {x.booking_id for x in repo.list_processed_for_role(UserRole.it_team)}
    assert it_team == {a.booking_id}
    assert repo.list_processed_for_role(UserRole.user) == []


def test_list_by_user_and_status(workflow, repo, people, hall):
    ids, a, b, c = _seed(workflow, people)
    assert [x.booking_id for x in repo.list_by_user(ids[UserRole.user])] == [c.booking_id, b.booking_id, a.booking_id]
    assert repo.list_by_user(ids[UserRole.secretary]) == []
    assert [x.booking_id for x in repo.list_by_status(BookingStatus.gd_approved)] == [b.booking_id]


def test_lists_attach_user_and_venue(workflow, repo, people, hall):
    _seed(workflow, people)
    for booking in repo.list_by_user(people[UserRole.user].user_id):
        assert booking.user is people[UserRole.user]
        assert booking.venue is hall


def test_unresolved_references_are_skipped_and_logged(workflow, repo, people, hall, caplog):
    ids, a, b, c = _seed(workflow, people)
    del repo.venues[hall.venue_id]

    with caplog.at_level(logging.WARNING, logger="app.repositories.base"):
        assert repo.list_by_user(ids[UserRole.user]) == []
    assert "unresolved venue" in caplog.text
    # direct lookup still works
    assert repo.get_by_id(a.booking_id) is a

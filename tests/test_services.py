from __future__ import annotations

import pytest

from mycircle.errors import CRMError, ErrorKind

DAY = 86400


def _tag_id(services, name):
    return next(t.id for t in services.tags.list_tags() if t.name == name)


# --- contacts ---


def test_create_contact_with_tags(services, clock):
    family = _tag_id(services, "Family")
    c = services.contacts.create_contact("  Ana  ", "1990-04-02", "Loves hiking", [family])
    assert c.name == "Ana"
    assert c.birthday == "1990-04-02"
    assert c.created_at == clock.now
    assert [t.name for t in c.tags] == ["Family"]


@pytest.mark.parametrize(
    "kwargs",
    [
        {"name": ""},
        {"name": "   "},
        {"name": "x" * 201},
        {"name": "Ana", "birthday": "04/02/1990"},
        {"name": "Ana", "profile_note": "x" * 5001},
    ],
)
def test_create_contact_validation(services, kwargs):
    with pytest.raises(CRMError) as exc_info:
        services.contacts.create_contact(**kwargs)
    assert exc_info.value.kind is ErrorKind.VALIDATION


def test_create_contact_with_unknown_tag_rolls_back(services):
    with pytest.raises(CRMError) as exc_info:
        services.contacts.create_contact("Ana", tag_ids=[999])
    assert exc_info.value.kind is ErrorKind.NOT_FOUND
    assert services.contacts.list_contacts() == []


def test_list_contacts_filters(services, clock):
    family = _tag_id(services, "Family")
    a = services.contacts.create_contact("Ana", tag_ids=[family])
    clock.advance(1)
    b = services.contacts.create_contact("Bo")
    clock.advance(1)
    c = services.contacts.create_contact("Cy")
    services.contacts.archive_contact(c.id)

    assert [x.id for x in services.contacts.list_contacts()] == [c.id, b.id, a.id]
    assert [x.id for x in services.contacts.list_contacts(archived=False)] == [b.id, a.id]
    assert [x.id for x in services.contacts.list_contacts(archived=True)] == [c.id]
    assert [x.id for x in services.contacts.list_contacts(tag_id=family)] == [a.id]
    assert [x.id for x in services.contacts.list_contacts(limit=1, offset=1)] == [b.id]


def test_update_contact_partial_and_clearing(services):
    c = services.contacts.create_contact("Ana", "1990-04-02", "note")
    updated = services.contacts.update_contact(c.id, {"birthday": None})
    assert updated.birthday is None
    assert updated.profile_note == "note"
    assert updated.name == "Ana"


def test_update_missing_contact(services):
    with pytest.raises(CRMError) as exc_info:
        services.contacts.update_contact(42, {"name": "X"})
    assert exc_info.value.kind is ErrorKind.NOT_FOUND


def test_archive_and_unarchive(services):
    c = services.contacts.create_contact("Ana")
    assert services.contacts.archive_contact(c.id).archived is True
    assert services.contacts.unarchive_contact(c.id).archived is False


def test_assign_and_remove_tag(services):
    family = _tag_id(services, "Family")
    c = services.contacts.create_contact("Ana")
    assert [t.id for t in services.contacts.assign_tag(c.id, family).tags] == [family]

    with pytest.raises(CRMError) as exc_info:
        services.contacts.assign_tag(c.id, family)
    assert exc_info.value.kind is ErrorKind.CONFLICT

    assert services.contacts.remove_tag(c.id, family).tags == []
    with pytest.raises(CRMError) as exc_info:
        services.contacts.remove_tag(c.id, family)
    assert exc_info.value.kind is ErrorKind.NOT_FOUND


# --- tags ---


def test_tags_listed_by_priority(services):
    names = [t.name for t in services.tags.list_tags()]
    assert names == ["Family", "Close friend", "Acquaintance", "Old friend"]


def test_create_custom_tag(services):
    tag = services.tags.create_tag("Book club", 20, 45, 6)
    assert tag.is_default is False
    assert [t.name for t in services.tags.list_tags()][2] == "Book club"


@pytest.mark.parametrize(
    "args",
    [("", 1, 2, 1), ("Gym", 0, 2, 1), ("Gym", 5, 2, 1), ("Gym", 1, 2, 0), ("x" * 101, 1, 2, 1)],
)
def test_create_tag_validation(services, args):
    with pytest.raises(CRMError) as exc_info:
        services.tags.create_tag(*args)
    assert exc_info.value.kind is ErrorKind.VALIDATION


def test_duplicate_tag_name_conflicts(services):
    with pytest.raises(CRMError) as exc_info:
        services.tags.create_tag("Family", 1, 2, 1)
    assert exc_info.value.kind is ErrorKind.CONFLICT


def test_default_tags_are_read_only(services):
    family = _tag_id(services, "Family")
    for action in (
        lambda: services.tags.update_tag(family, {"priority": 1}),
        lambda: services.tags.delete_tag(family),
    ):
        with pytest.raises(CRMError) as exc_info:
            action()
        assert exc_info.value.kind is ErrorKind.CONFLICT


def test_update_custom_tag_checks_interval_against_existing(services):
    tag = services.tags.create_tag("Gym", 3, 10, 4)
    assert services.tags.update_tag(tag.id, {"max_interval_days": 20}).max_interval_days == 20
    with pytest.raises(CRMError):
        services.tags.update_tag(tag.id, {"min_interval_days": 30})


def test_delete_custom_tag_detaches_contacts(services):
    tag = services.tags.create_tag("Gym", 3, 10, 4)
    c = services.contacts.create_contact("Ana", tag_ids=[tag.id])
    services.tags.delete_tag(tag.id)
    assert services.tags.get_tag(tag.id) is None
    assert services.contacts.get_contact(c.id).tags == []


# --- interactions ---


def test_log_interaction_derives_weight(services, clock):
    c = services.contacts.create_contact("Ana")
    for type_, weight in (("text", 1), ("call", 3), ("hangout", 6)):
        assert services.interactions.log_interaction(c.id, type_, clock.now).weight == weight


def test_log_interaction_errors(services, clock):
    c = services.contacts.create_contact("Ana")
    with pytest.raises(CRMError) as exc_info:
        services.interactions.log_interaction(c.id, "letter", clock.now)
    assert exc_info.value.kind is ErrorKind.VALIDATION
    with pytest.raises(CRMError) as exc_info:
        services.interactions.log_interaction(999, "call", clock.now)
    assert exc_info.value.kind is ErrorKind.NOT_FOUND
    with pytest.raises(CRMError):
        services.interactions.log_interaction(c.id, "call", clock.now, "x" * 2001)


def test_latest_interaction_is_by_timestamp(services, clock):
    c = services.contacts.create_contact("Ana")
    services.interactions.log_interaction(c.id, "hangout", clock.now - 2 * DAY)
    services.interactions.log_interaction(c.id, "text", clock.now - 10 * DAY)
    assert services.interactions.latest_interaction(c.id).type == "hangout"


def test_list_interactions_ordering(services, clock):
    c = services.contacts.create_contact("Ana")
    first = services.interactions.log_interaction(c.id, "text", clock.now - 3 * DAY)
    second = services.interactions.log_interaction(c.id, "call", clock.now - 1 * DAY)
    newest_first = services.interactions.list_interactions(contact_id=c.id)
    assert [i.id for i in newest_first] == [second.id, first.id]
    oldest_first = services.interactions.list_interactions(contact_id=c.id, order="asc")
    assert [i.id for i in oldest_first] == [first.id, second.id]
    assert len(services.interactions.list_interactions(limit=1)) == 1


def test_update_interaction_type_updates_weight(services, clock):
    c = services.contacts.create_contact("Ana")
    i = services.interactions.log_interaction(c.id, "text", clock.now, "hi")
    updated = services.interactions.update_interaction(i.id, {"type": "hangout", "notes": None})
    assert (updated.type, updated.weight, updated.notes) == ("hangout", 6, None)


def test_delete_interaction(services, clock):
    c = services.contacts.create_contact("Ana")
    i = services.interactions.log_interaction(c.id, "text", clock.now)
    services.interactions.delete_interaction(i.id)
    assert services.interactions.get_interaction(i.id) is None
    with pytest.raises(CRMError):
        services.interactions.delete_interaction(i.id)


# --- reminders & snoozes ---


def test_overdue_reminders_only_pending_and_due(services, clock):
    c = services.contacts.create_contact("Ana")
    due = services.reminders.create_reminder(c.id, clock.now - DAY, "birthday")
    services.reminders.create_reminder(c.id, clock.now + DAY)
    done = services.reminders.create_reminder(c.id, clock.now - 2 * DAY)
    services.reminders.mark_done(done.id)

    assert [r.id for r in services.reminders.overdue_reminders()] == [due.id]


def test_list_reminders_hides_past_by_default(services, clock):
    c = services.contacts.create_contact("Ana")
    services.reminders.create_reminder(c.id, clock.now - DAY)
    upcoming = services.reminders.create_reminder(c.id, clock.now + DAY)
    assert [r.id for r in services.reminders.list_reminders()] == [upcoming.id]
    assert len(services.reminders.list_reminders(include_past=True)) == 2


def test_reminder_errors(services, clock):
    with pytest.raises(CRMError) as exc_info:
        services.reminders.create_reminder(999, clock.now)
    assert exc_info.value.kind is ErrorKind.NOT_FOUND
    with pytest.raises(CRMError) as exc_info:
        services.reminders.mark_done(999)
    assert exc_info.value.kind is ErrorKind.NOT_FOUND


def test_snooze_expires_and_upserts(services, clock):
    c = services.contacts.create_contact("Ana")
    first = services.snoozes.snooze(c.id, 2)
    assert services.snoozes.is_snoozed(c.id)
    again = services.snoozes.snooze(c.id, 5)
    assert again.id == first.id
    assert again.snoozed_until == clock.now + 5 * DAY
    assert [s.contact_id for s in services.snoozes.active_snoozes()] == [c.id]

    clock.advance(6)
    assert not services.snoozes.is_snoozed(c.id)
    assert services.snoozes.active_snoozes() == []


def test_snooze_needs_positive_days(services):
    c = services.contacts.create_contact("Ana")
    with pytest.raises(CRMError) as exc_info:
        services.snoozes.snooze(c.id, 0)
    assert exc_info.value.kind is ErrorKind.VALIDATION


# --- health & recommendations ---


def test_health_uses_latest_interaction_and_top_tag(services, clock):
    family = _tag_id(services, "Family")
    old_friend = _tag_id(services, "Old friend")
    c = services.contacts.create_contact("Ana", tag_ids=[old_friend, family])
    services.interactions.log_interaction(c.id, "hangout", clock.now - 7 * DAY)

    h = services.health.health(c.id)
    assert h.contact_id == c.id
    assert h.expected_interval_days == 14
    assert h.status == "green"
    assert h.last_interaction_timestamp == clock.now - 7 * DAY


def test_health_of_untagged_never_contacted(services):
    c = services.contacts.create_contact("Ana")
    h = services.health.health(c.id)
    assert (h.status, h.score, h.expected_interval_days) == ("red", 0.0, 365)


def test_health_for_missing_contact(services):
    with pytest.raises(CRMError) as exc_info:
        services.health.health(404)
    assert exc_info.value.kind is ErrorKind.NOT_FOUND


def test_health_scores_skip_missing(services):
    c = services.contacts.create_contact("Ana")
    assert list(services.health.health_scores([c.id, 404])) == [c.id]


def test_recommendations_end_to_end(services, clock):
    family = _tag_id(services, "Family")
    ana = services.contacts.create_contact("Ana", tag_ids=[family])
    bo = services.contacts.create_contact("Bo", tag_ids=[family])
    cy = services.contacts.create_contact("Cy", tag_ids=[family])
    dee = services.contacts.create_contact("Dee")  # untagged and new
    clock.advance(60)

    services.interactions.log_interaction(cy.id, "hangout", clock.now - DAY)
    services.reminders.create_reminder(bo.id, clock.now - DAY)

    recs = services.recommendations.recommend(limit=3)
    assert [r.contact_id for r in recs] == [bo.id, ana.id]
    assert recs[0].is_reminder is True
    assert dee.id not in [r.contact_id for r in recs]

    services.snoozes.snooze(ana.id, 7)
    assert [r.contact_id for r in services.recommendations.recommend()] == [bo.id]
    assert services.recommendations.refresh([bo.id]) == []

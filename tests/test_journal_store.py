import threading
from datetime import date, datetime

import pytest

from journal_app import models
from journal_app.core.exceptions import ConflictError, NotFoundError, ValidationError
from journal_app.schemas import (
    JournalEntryCreate,
    JournalEntryUpdate,
    MoodCreate,
    TagCreate,
    UserUpdate,
)
from journal_app.models.mood import MoodCategory


# ==================== Entries ====================

def test_create_entry_assigns_id_and_timestamps(store):
    entry_id = store.create_entry(
        JournalEntryCreate(entry_date=date(2024, 3, 1), title="First", content="<p>Hello there</p>")
    )

    entry = store.get_entry_by_id(entry_id)
    assert entry is not None
    assert entry.entry_date == date(2024, 3, 1)
    assert entry.title == "First"
    assert entry.created_at is not None
    assert entry.updated_at == entry.created_at
    assert entry.user_id == store.get_current_user().id


def test_ids_increase_monotonically(make_entry):
    first = make_entry(date(2024, 3, 1))
    second = make_entry(date(2024, 3, 2))
    assert second > first


def test_word_count_is_counted_from_content_when_omitted(store):
    entry_id = store.create_entry(
        JournalEntryCreate(entry_date=date(2024, 3, 1), content="<p>one two</p><p>three</p>")
    )
    assert store.get_entry_by_id(entry_id).word_count == 3


def test_second_entry_for_same_day_conflicts_and_keeps_original(store, make_entry):
    original_id = make_entry(date(2024, 3, 1), title="Original", word_count=10)

    with pytest.raises(ConflictError) as exc_info:
        store.create_entry(
            JournalEntryCreate(
                entry_date=datetime(2024, 3, 1, 21, 30), title="Duplicate", word_count=99
            )
        )

    assert exc_info.value.entry_date == date(2024, 3, 1)
    entries = store.list_all_entries()
    assert [e.id for e in entries] == [original_id]
    assert entries[0].title == "Original"
    assert entries[0].word_count == 10


def test_get_entry_by_date_truncates_time(store, make_entry):
    entry_id = make_entry(date(2024, 3, 1))
    owner = store.get_current_user()

    assert store.get_entry_by_date(owner.id, datetime(2024, 3, 1, 23, 59)).id == entry_id
    assert store.get_entry_by_date(None, date(2024, 3, 1)).id == entry_id
    assert store.get_entry_by_date(owner.id, date(2024, 3, 2)) is None


def test_get_entry_by_id_missing_returns_none(store):
    assert store.get_entry_by_id(999) is None


def test_update_entry_overwrites_fields_and_refreshes_updated_at(store, make_entry):
    entry_id = make_entry(date(2024, 3, 1), title="Old", content="old", word_count=1)
    before = store.get_entry_by_id(entry_id)

    updated = store.update_entry(
        entry_id,
        JournalEntryUpdate(entry_date=date(2024, 3, 1), title="New", content="new text", word_count=2),
    )

    assert updated.title == "New"
    assert updated.content == "new text"
    assert updated.word_count == 2
    assert updated.updated_at >= before.updated_at
    assert updated.created_at == before.created_at


def test_update_missing_entry_returns_none(store):
    assert store.update_entry(42, JournalEntryUpdate(entry_date=date(2024, 3, 1))) is None


def test_update_cannot_move_entry_onto_taken_day(store, make_entry):
    make_entry(date(2024, 3, 1))
    second = make_entry(date(2024, 3, 2), title="Second")

    with pytest.raises(ConflictError):
        store.update_entry(second, JournalEntryUpdate(entry_date=date(2024, 3, 1)))

    assert store.get_entry_by_id(second).entry_date == date(2024, 3, 2)


def test_delete_entry_removes_junction_rows(store, make_entry, moods, tags):
    entry_id = make_entry(date(2024, 3, 1))
    store.set_entry_moods(entry_id, moods["Happy"].id, [moods["Calm"].id])
    store.set_entry_tags(entry_id, [tags["Work"].id, tags["Travel"].id])

    assert store.delete_entry(entry_id) is True

    assert store.get_entry_by_id(entry_id) is None
    assert store.get_primary_mood(entry_id) is None
    assert store.get_secondary_moods(entry_id) == []
    assert store.get_tags_for_entry(entry_id) == []
    with store.database.session() as db:
        assert db.query(models.JournalEntryMood).count() == 0
        assert db.query(models.JournalEntryTag).count() == 0


def test_delete_missing_entry_returns_false(store):
    assert store.delete_entry(7) is False


def test_negative_id_is_invalid_input(store):
    with pytest.raises(ValidationError):
        store.get_entry_by_id(-1)
    with pytest.raises(ValidationError):
        store.delete_entry(0)


# ==================== Queries ====================

def test_list_all_entries_most_recent_first(store, make_entry):
    make_entry(date(2024, 3, 2))
    make_entry(date(2024, 3, 5))
    make_entry(date(2024, 3, 1))

    days = [e.entry_date for e in store.list_all_entries()]
    assert days == [date(2024, 3, 5), date(2024, 3, 2), date(2024, 3, 1)]


def test_list_entries_in_range_is_inclusive(store, make_entry):
    for day in range(1, 6):
        make_entry(date(2024, 3, day))

    entries = store.list_entries_in_range(date(2024, 3, 2), datetime(2024, 3, 4, 8, 0))
    assert [e.entry_date.day for e in entries] == [4, 3, 2]


def test_search_is_case_insensitive_on_title_or_content(store, make_entry):
    make_entry(date(2024, 3, 1), title="Beach Day", content="sunny")
    make_entry(date(2024, 3, 2), title="Work", content="Long MEETING about the beach house")
    make_entry(date(2024, 3, 3), title="Quiet", content="nothing much")

    assert [e.entry_date.day for e in store.search_entries("BEACH")] == [2, 1]
    assert [e.entry_date.day for e in store.search_entries("meeting")] == [2]
    assert store.search_entries("zebra") == []


def test_blank_search_returns_everything(store, make_entry):
    make_entry(date(2024, 3, 1))
    make_entry(date(2024, 3, 2))

    assert len(store.search_entries("   ")) == 2
    assert len(store.search_entries("")) == 2
    assert len(store.search_entries(None)) == 2


def test_filter_entries_combines_date_mood_and_tag(store, make_entry, moods, tags):
    first = make_entry(date(2024, 3, 1))
    second = make_entry(date(2024, 3, 2))
    third = make_entry(date(2024, 3, 3))
    store.set_entry_moods(first, moods["Happy"].id)
    store.set_entry_moods(second, moods["Sad"].id, [moods["Happy"].id])
    store.set_entry_moods(third, moods["Sad"].id)
    store.set_entry_tags(first, [tags["Work"].id])
    store.set_entry_tags(second, [tags["Family"].id])
    store.set_entry_tags(third, [tags["Work"].id])

    # Secondary moods count too
    assert [e.id for e in store.filter_entries(mood_ids=[moods["Happy"].id])] == [second, first]
    assert [e.id for e in store.filter_entries(tag_ids=[tags["Work"].id])] == [third, first]
    assert [
        e.id
        for e in store.filter_entries(
            start_date=date(2024, 3, 2), mood_ids=[moods["Sad"].id], tag_ids=[tags["Work"].id]
        )
    ] == [third]
    assert len(store.filter_entries()) == 3
    assert len(store.filter_entries(mood_ids=[], tag_ids=[])) == 3


# ==================== Moods on entries ====================

def test_set_entry_moods_keeps_first_two_secondaries(store, make_entry, moods):
    entry_id = make_entry(date(2024, 3, 1))
    store.set_entry_moods(
        entry_id,
        moods["Happy"].id,
        [moods["Tired"].id, moods["Busy"].id, moods["Calm"].id, moods["Sad"].id],
    )

    assert store.get_primary_mood(entry_id).name == "Happy"
    assert [m.name for m in store.get_secondary_moods(entry_id)] == ["Tired", "Busy"]
    with store.database.session() as db:
        rows = db.query(models.JournalEntryMood).filter_by(entry_id=entry_id).all()
    assert sorted(r.mood_type for r in rows) == ["Primary", "Secondary", "Secondary"]


def test_set_entry_moods_replaces_previous_set(store, make_entry, moods):
    entry_id = make_entry(date(2024, 3, 1))
    store.set_entry_moods(entry_id, moods["Happy"].id, [moods["Calm"].id, moods["Busy"].id])
    store.set_entry_moods(entry_id, moods["Sad"].id)

    assert store.get_primary_mood(entry_id).name == "Sad"
    assert store.get_secondary_moods(entry_id) == []
    assert [m.name for m in store.get_moods_for_entry(entry_id)] == ["Sad"]


def test_primary_mood_is_none_when_unset(store, make_entry):
    entry_id = make_entry(date(2024, 3, 1))
    assert store.get_primary_mood(entry_id) is None
    assert store.get_secondary_moods(entry_id) == []


def test_set_entry_moods_rejects_unknown_mood_and_keeps_old_set(store, make_entry, moods):
    entry_id = make_entry(date(2024, 3, 1))
    store.set_entry_moods(entry_id, moods["Happy"].id)

    with pytest.raises(NotFoundError):
        store.set_entry_moods(entry_id, 9999)

    assert store.get_primary_mood(entry_id).name == "Happy"


def test_set_entry_moods_on_missing_entry(store, moods):
    with pytest.raises(NotFoundError):
        store.set_entry_moods(123, moods["Happy"].id)


# ==================== Tags on entries ====================

def test_set_entry_tags_replaces_whole_set(store, make_entry, tags):
    entry_id = make_entry(date(2024, 3, 1))

    store.set_entry_tags(entry_id, [tags["Work"].id, tags["Health"].id])
    assert {t.name for t in store.get_tags_for_entry(entry_id)} == {"Work", "Health"}

    store.set_entry_tags(entry_id, [tags["Travel"].id])
    assert [t.name for t in store.get_tags_for_entry(entry_id)] == ["Travel"]

    store.set_entry_tags(entry_id, [])
    assert store.get_tags_for_entry(entry_id) == []


def test_set_entry_tags_keeps_duplicates(store, make_entry, tags):
    entry_id = make_entry(date(2024, 3, 1))
    store.set_entry_tags(entry_id, [tags["Work"].id, tags["Work"].id])

    assert [t.name for t in store.get_tags_for_entry(entry_id)] == ["Work", "Work"]


def test_set_entry_tags_rejects_unknown_tag(store, make_entry, tags):
    entry_id = make_entry(date(2024, 3, 1))
    store.set_entry_tags(entry_id, [tags["Work"].id])

    with pytest.raises(NotFoundError):
        store.set_entry_tags(entry_id, [tags["Family"].id, 555])

    assert [t.name for t in store.get_tags_for_entry(entry_id)] == ["Work"]


# ==================== Catalog & seeding ====================

def test_default_catalog_is_seeded_on_open(store):
    moods = store.list_moods()
    assert len(moods) == 15
    assert all(m.is_predefined for m in moods)
    by_category = {c: sum(1 for m in moods if m.category == c.value) for c in MoodCategory}
    assert by_category == {
        MoodCategory.Positive: 6,
        MoodCategory.Neutral: 4,
        MoodCategory.Negative: 5,
    }
    assert len(store.list_tags()) == 8


def test_seeding_is_idempotent(store):
    assert store.seed_default_moods() == 0
    assert store.seed_default_moods() == 0
    assert store.seed_default_tags() == 0
    assert len(store.list_moods()) == 15
    assert len(store.list_tags()) == 8


def test_ensure_default_user_creates_only_one(store):
    first = store.ensure_default_user()
    second = store.ensure_default_user()

    assert first.id == second.id
    assert first.user_name == "Default User"
    with store.database.session() as db:
        assert db.query(models.User).count() == 1


def test_update_user_changes_only_given_fields(store):
    user = store.update_user(UserUpdate(theme_preference="dark"))
    assert user.theme_preference == "dark"
    assert user.user_name == "Default User"

    user = store.update_user(UserUpdate(user_name="Sam", email="sam@example.com"))
    assert user.user_name == "Sam"
    assert user.email == "sam@example.com"
    assert user.theme_preference == "dark"


def test_added_mood_and_tag_are_not_predefined(store):
    mood = store.add_mood(MoodCreate(name="Nostalgic", category=MoodCategory.Neutral, emoji="🕰"))
    tag = store.add_tag(TagCreate(name="Music", color="#123456"))

    assert mood.is_predefined is False
    assert mood.category == "Neutral"
    assert tag.is_predefined is False
    assert tag.created_at is not None
    assert len(store.list_moods()) == 16
    assert len(store.list_tags()) == 9


def test_referenced_mood_or_tag_cannot_be_deleted(store, make_entry, moods, tags):
    entry_id = make_entry(date(2024, 3, 1))
    store.set_entry_moods(entry_id, moods["Happy"].id)
    store.set_entry_tags(entry_id, [tags["Work"].id])

    with pytest.raises(ConflictError):
        store.delete_mood(moods["Happy"].id)
    with pytest.raises(ConflictError):
        store.delete_tag(tags["Work"].id)

    assert store.delete_mood(moods["Sad"].id) is True
    assert store.delete_tag(tags["Travel"].id) is True
    assert store.delete_mood(moods["Sad"].id) is False
    assert store.get_primary_mood(entry_id).name == "Happy"


def test_unreferenced_after_entry_delete_can_be_removed(store, make_entry, moods):
    entry_id = make_entry(date(2024, 3, 1))
    store.set_entry_moods(entry_id, moods["Lonely"].id)
    store.delete_entry(entry_id)

    assert store.delete_mood(moods["Lonely"].id) is True


# ==================== Concurrent readers ====================

def test_readers_never_see_half_replaced_moods_or_tags(store, make_entry, moods, tags):
    entry_id = make_entry(date(2024, 6, 1))
    mood_sets = [
        (moods["Happy"].id, [moods["Calm"].id, moods["Busy"].id]),
        (moods["Sad"].id, [moods["Tired"].id, moods["Anxious"].id]),
    ]
    tag_sets = [
        [tags["Work"].id, tags["Health"].id, tags["Travel"].id],
        [tags["Family"].id, tags["Friends"].id, tags["Finance"].id],
    ]
    store.set_entry_moods(entry_id, *mood_sets[0])
    store.set_entry_tags(entry_id, tag_sets[0])

    done = threading.Event()
    bad = []

    def writer():
        try:
            for i in range(60):
                store.set_entry_moods(entry_id, *mood_sets[i % 2])
                store.set_entry_tags(entry_id, tag_sets[i % 2])
        except Exception as exc:
            bad.append(f"writer failed: {exc!r}")
        finally:
            done.set()

    def reader():
        while not done.is_set():
            primary = store.get_primary_mood(entry_id)
            secondary = store.get_secondary_moods(entry_id)
            entry_tags = store.get_tags_for_entry(entry_id)
            if primary is None:
                bad.append("no primary mood")
            if len(secondary) != 2:
                bad.append(f"{len(secondary)} secondary moods")
            if len(entry_tags) != 3:
                bad.append(f"{len(entry_tags)} tags")
            if {t.id for t in entry_tags} not in [set(ids) for ids in tag_sets]:
                bad.append("mixed tag set")

    threads = [threading.Thread(target=reader) for _ in range(3)]
    threads.append(threading.Thread(target=writer))
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert bad == []


def test_readers_see_entry_whole_or_gone_during_delete(store, make_entry, moods, tags):
    entry_id = make_entry(date(2024, 6, 2))
    store.set_entry_moods(entry_id, moods["Happy"].id, [moods["Calm"].id, moods["Busy"].id])
    store.set_entry_tags(entry_id, [tags["Work"].id, tags["Health"].id])

    deleted = threading.Event()
    bad = []

    def reader():
        while not deleted.is_set():
            entry_moods = store.get_moods_for_entry(entry_id)
            entry_tags = store.get_tags_for_entry(entry_id)
            if len(entry_moods) not in (0, 3):
                bad.append(f"{len(entry_moods)} moods")
            if len(entry_tags) not in (0, 2):
                bad.append(f"{len(entry_tags)} tags")

    threads = [threading.Thread(target=reader) for _ in range(3)]
    for thread in threads:
        thread.start()
    assert store.delete_entry(entry_id) is True
    deleted.set()
    for thread in threads:
        thread.join()

    assert bad == []
    assert store.get_moods_for_entry(entry_id) == []
    assert store.get_tags_for_entry(entry_id) == []

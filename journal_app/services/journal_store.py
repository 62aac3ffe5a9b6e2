# services/journal_store.py
import logging
import threading
from contextlib import contextmanager
from datetime import date, datetime
from typing import Iterator, List, Optional, Sequence, Union

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from journal_app import models, schemas
from journal_app.core.database import Database, database
from journal_app.core.exceptions import (
    ConflictError,
    NotFoundError,
    StoreUnavailableError,
    ValidationError,
)
from journal_app.crud.journal_entry import crud_journal_entry
from journal_app.crud.mood import crud_mood
from journal_app.crud.tag import crud_tag
from journal_app.crud.user import crud_user
from journal_app.data.default_catalog import DEFAULT_MOODS, DEFAULT_TAGS, DEFAULT_USER_NAME
from journal_app.models.journal_entry_mood import MoodRole
from journal_app.services.text_utils import count_words

logger = logging.getLogger(__name__)

MAX_SECONDARY_MOODS = 2

DayLike = Union[date, datetime]


def _to_day(value: DayLike) -> date:
    """Truncate a datetime to its calendar day."""
    if isinstance(value, datetime):
        return value.date()
    return value


def _require_id(value: int, name: str = "id") -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise ValidationError(f"Invalid {name}: {value!r}")
    return value


class JournalStore:
    """
    Sole reader and writer of the journal tables.

    - One entry per (user, calendar day)
    - Exactly one primary and at most two secondary moods per entry
    - Junction rows are removed before their entry
    """

    def __init__(self, database: Database):
        self.database = database
        # Writers are serialized; readers only ever see committed state
        self._write_lock = threading.RLock()
        database.add_initializer(self._initialize)

    # ====================================================
    # UNIT OF WORK
    # ====================================================

    @contextmanager
    def _session(self, action: str) -> Iterator[Session]:
        try:
            with self.database.session() as db:
                yield db
        except SQLAlchemyError as exc:
            logger.exception("Could not %s", action)
            raise StoreUnavailableError(f"Could not {action}") from exc

    @contextmanager
    def _transaction(self, action: str) -> Iterator[Session]:
        with self._write_lock:
            with self._session(action) as db:
                yield db

    def _initialize(self, db: Session) -> None:
        """First-open setup: catalogs and the default user."""
        self._seed_moods(db)
        self._seed_tags(db)
        self._ensure_user(db)

    # ====================================================
    # USERS
    # ====================================================

    def ensure_default_user(self) -> models.User:
        with self._transaction("create default user") as db:
            return self._ensure_user(db)

    def get_current_user(self) -> Optional[models.User]:
        with self._session("get user") as db:
            return crud_user.get_first(db)

    def update_user(self, obj_in: schemas.UserUpdate) -> models.User:
        """Update the journal owner's profile (only fields that were set)."""
        with self._transaction("update user") as db:
            user = self._ensure_user(db)
            fields = obj_in.model_dump(exclude_unset=True, exclude_none=True)
            user = crud_user.update(db, db_obj=user, fields=fields)
            logger.info("Updated user %s", user.id)
            return user

    def _ensure_user(self, db: Session) -> models.User:
        user = crud_user.get_first(db)
        if user is not None:
            return user

        user = crud_user.create(
            db, db_obj=models.User(user_name=DEFAULT_USER_NAME, created_at=datetime.now())
        )
        logger.info("Created default user %s", user.id)
        return user

    # ====================================================
    # ENTRIES - WRITE
    # ====================================================

    def create_entry(self, obj_in: schemas.JournalEntryCreate) -> int:
        """
        Insert a new entry and return its ID.

        Raises:
            ConflictError: the user already has an entry for that day
        """
        day = _to_day(obj_in.entry_date)

        with self._transaction("save entry") as db:
            if obj_in.user_id is not None:
                user_id = _require_id(obj_in.user_id, "user id")
            else:
                user_id = self._ensure_user(db).id

            if crud_journal_entry.get_by_user_and_date(db, user_id=user_id, day=day):
                logger.warning("Rejected second entry for %s", day.isoformat())
                raise self._day_taken(day)

            now = datetime.now()
            entry = models.JournalEntry(
                user_id=user_id,
                entry_date=day,
                title=obj_in.title,
                content=obj_in.content,
                word_count=self._word_count(obj_in),
                created_at=now,
                updated_at=now,
            )
            try:
                crud_journal_entry.create(db, db_obj=entry)
            except IntegrityError as exc:
                # Lost a race with another writer on the unique (user, day) index
                raise self._day_taken(day) from exc

            logger.info("Created entry %s for %s", entry.id, day.isoformat())
            return entry.id

    def update_entry(
        self, entry_id: int, obj_in: schemas.JournalEntryUpdate
    ) -> Optional[models.JournalEntry]:
        """
        Overwrite an entry's fields and refresh updated_at.

        Returns None when the entry does not exist.
        """
        _require_id(entry_id, "entry id")
        day = _to_day(obj_in.entry_date)

        with self._transaction("update entry") as db:
            entry = crud_journal_entry.get_by_id(db, entry_id=entry_id)
            if entry is None:
                logger.warning("Entry with ID %s not found", entry_id)
                return None

            if day != entry.entry_date:
                other = crud_journal_entry.get_by_user_and_date(
                    db, user_id=entry.user_id, day=day
                )
                if other is not None and other.id != entry.id:
                    raise self._day_taken(day)

            try:
                entry = crud_journal_entry.update(
                    db,
                    db_obj=entry,
                    fields={
                        "entry_date": day,
                        "title": obj_in.title,
                        "content": obj_in.content,
                        "word_count": self._word_count(obj_in),
                        "updated_at": datetime.now(),
                    },
                )
            except IntegrityError as exc:
                raise self._day_taken(day) from exc

            logger.info("Updated entry %s for %s", entry.id, day.isoformat())
            return entry

    def delete_entry(self, entry_id: int) -> bool:
        """Delete an entry with its mood and tag rows. False if it was not there."""
        _require_id(entry_id, "entry id")

        with self._transaction("delete entry") as db:
            entry = crud_journal_entry.get_by_id(db, entry_id=entry_id)
            if entry is None:
                logger.warning("Entry with ID %s not found", entry_id)
                return False

            crud_mood.delete_links(db, entry_id=entry_id)
            crud_tag.delete_links(db, entry_id=entry_id)
            crud_journal_entry.delete(db, db_obj=entry)

            logger.info("Deleted entry with ID %s", entry_id)
            return True

    # ====================================================
    # ENTRIES - READ
    # ====================================================

    def get_entry_by_id(self, entry_id: int) -> Optional[models.JournalEntry]:
        _require_id(entry_id, "entry id")
        with self._session("get entry") as db:
            return crud_journal_entry.get_by_id(db, entry_id=entry_id)

    def get_entry_by_date(
        self, user_id: Optional[int], day: DayLike
    ) -> Optional[models.JournalEntry]:
        """Entry for the calendar day containing `day`; user defaults to the owner."""
        day = _to_day(day)
        with self._session(f"get entry for {day.isoformat()}") as db:
            if user_id is None:
                owner = crud_user.get_first(db)
                if owner is None:
                    return None
                user_id = owner.id
            _require_id(user_id, "user id")
            return crud_journal_entry.get_by_user_and_date(db, user_id=user_id, day=day)

    def list_all_entries(self) -> List[models.JournalEntry]:
        with self._session("get entries") as db:
            return crud_journal_entry.get_all(db)

    def list_entries_in_range(self, start: DayLike, end: DayLike) -> List[models.JournalEntry]:
        """Entries on days start..end inclusive, most recent first."""
        with self._session("get entries for date range") as db:
            return crud_journal_entry.get_by_date_range(
                db, start_date=_to_day(start), end_date=_to_day(end)
            )

    def search_entries(self, term: Optional[str]) -> List[models.JournalEntry]:
        if term is None or not term.strip():
            return self.list_all_entries()

        with self._session("search entries") as db:
            return crud_journal_entry.search(db, term=term)

    def filter_entries(
        self,
        start_date: Optional[DayLike] = None,
        end_date: Optional[DayLike] = None,
        mood_ids: Optional[Sequence[int]] = None,
        tag_ids: Optional[Sequence[int]] = None,
    ) -> List[models.JournalEntry]:
        with self._session("filter entries") as db:
            return crud_journal_entry.filter(
                db,
                start_date=_to_day(start_date) if start_date is not None else None,
                end_date=_to_day(end_date) if end_date is not None else None,
                mood_ids=mood_ids,
                tag_ids=tag_ids,
            )

    def get_entry_days(self) -> List[date]:
        """Distinct days with an entry, most recent first."""
        with self._session("get entry days") as db:
            return crud_journal_entry.get_entry_days(db)

    def count_entries(self) -> int:
        with self._session("count entries") as db:
            return crud_journal_entry.count(db)

    # ====================================================
    # ENTRY MOODS
    # ====================================================

    def set_entry_moods(
        self,
        entry_id: int,
        primary_mood_id: int,
        secondary_mood_ids: Optional[Sequence[int]] = None,
    ) -> None:
        """
        Replace every mood on an entry.

        Secondary moods beyond the first two are dropped without error.
        """
        _require_id(entry_id, "entry id")
        _require_id(primary_mood_id, "mood id")
        secondary = list(secondary_mood_ids or [])[:MAX_SECONDARY_MOODS]
        for mood_id in secondary:
            _require_id(mood_id, "mood id")

        with self._transaction("set entry moods") as db:
            self._require_entry(db, entry_id)

            wanted = {primary_mood_id, *secondary}
            found = {mood.id for mood in crud_mood.get_many(db, mood_ids=list(wanted))}
            missing = sorted(wanted - found)
            if missing:
                raise NotFoundError(f"Mood not found: {missing}")

            crud_mood.delete_links(db, entry_id=entry_id)
            crud_mood.add_link(
                db, entry_id=entry_id, mood_id=primary_mood_id, role=MoodRole.Primary
            )
            for mood_id in secondary:
                crud_mood.add_link(
                    db, entry_id=entry_id, mood_id=mood_id, role=MoodRole.Secondary
                )
            db.flush()

    def get_primary_mood(self, entry_id: int) -> Optional[models.Mood]:
        _require_id(entry_id, "entry id")
        with self._session("get primary mood") as db:
            moods = crud_mood.get_for_entry(db, entry_id=entry_id, role=MoodRole.Primary)
            return moods[0] if moods else None

    def get_secondary_moods(self, entry_id: int) -> List[models.Mood]:
        _require_id(entry_id, "entry id")
        with self._session("get secondary moods") as db:
            return crud_mood.get_for_entry(db, entry_id=entry_id, role=MoodRole.Secondary)

    def get_moods_for_entry(self, entry_id: int) -> List[models.Mood]:
        _require_id(entry_id, "entry id")
        with self._session("get moods") as db:
            return crud_mood.get_for_entry(db, entry_id=entry_id)

    # ====================================================
    # ENTRY TAGS
    # ====================================================

    def set_entry_tags(self, entry_id: int, tag_ids: Sequence[int]) -> None:
        """Replace every tag on an entry. Duplicate IDs are stored as given."""
        _require_id(entry_id, "entry id")
        tag_ids = list(tag_ids or [])
        for tag_id in tag_ids:
            _require_id(tag_id, "tag id")

        with self._transaction("set entry tags") as db:
            self._require_entry(db, entry_id)

            found = {tag.id for tag in crud_tag.get_many(db, tag_ids=tag_ids)}
            missing = sorted(set(tag_ids) - found)
            if missing:
                raise NotFoundError(f"Tag not found: {missing}")

            crud_tag.delete_links(db, entry_id=entry_id)
            for tag_id in tag_ids:
                crud_tag.add_link(db, entry_id=entry_id, tag_id=tag_id)
            db.flush()

    def get_tags_for_entry(self, entry_id: int) -> List[models.Tag]:
        _require_id(entry_id, "entry id")
        with self._session("get tags") as db:
            return crud_tag.get_for_entry(db, entry_id=entry_id)

    # ====================================================
    # MOOD & TAG CATALOG
    # ====================================================

    def list_moods(self) -> List[models.Mood]:
        with self._session("get moods") as db:
            return crud_mood.get_all(db)

    def add_mood(self, obj_in: schemas.MoodCreate) -> models.Mood:
        with self._transaction("add mood") as db:
            mood = crud_mood.create(
                db,
                db_obj=models.Mood(
                    name=obj_in.name,
                    category=obj_in.category.value,
                    emoji=obj_in.emoji,
                    is_predefined=False,
                ),
            )
            logger.info("Added mood %s (%s)", mood.name, mood.category)
            return mood

    def delete_mood(self, mood_id: int) -> bool:
        """Delete a mood no entry uses. Referenced moods raise ConflictError."""
        _require_id(mood_id, "mood id")
        with self._transaction("delete mood") as db:
            mood = crud_mood.get(db, mood_id=mood_id)
            if mood is None:
                return False
            if crud_mood.is_referenced(db, mood_id=mood_id):
                raise ConflictError(f"Mood '{mood.name}' is used by existing entries")
            crud_mood.delete(db, db_obj=mood)
            logger.info("Deleted mood %s", mood_id)
            return True

    def list_tags(self) -> List[models.Tag]:
        with self._session("get tags") as db:
            return crud_tag.get_all(db)

    def add_tag(self, obj_in: schemas.TagCreate) -> models.Tag:
        with self._transaction("add tag") as db:
            tag = crud_tag.create(
                db,
                db_obj=models.Tag(
                    name=obj_in.name,
                    category=obj_in.category,
                    color=obj_in.color,
                    is_predefined=False,
                    created_at=datetime.now(),
                ),
            )
            logger.info("Added tag %s", tag.name)
            return tag

    def delete_tag(self, tag_id: int) -> bool:
        """Delete a tag no entry uses. Referenced tags raise ConflictError."""
        _require_id(tag_id, "tag id")
        with self._transaction("delete tag") as db:
            tag = crud_tag.get(db, tag_id=tag_id)
            if tag is None:
                return False
            if crud_tag.is_referenced(db, tag_id=tag_id):
                raise ConflictError(f"Tag '{tag.name}' is used by existing entries")
            crud_tag.delete(db, db_obj=tag)
            logger.info("Deleted tag %s", tag_id)
            return True

    # ====================================================
    # SEED DATA
    # ====================================================

    def seed_default_moods(self) -> int:
        """Insert the default mood catalog into an empty table. Returns rows added."""
        with self._transaction("seed moods") as db:
            return self._seed_moods(db)

    def seed_default_tags(self) -> int:
        """Insert the default tag catalog into an empty table. Returns rows added."""
        with self._transaction("seed tags") as db:
            return self._seed_tags(db)

    def _seed_moods(self, db: Session) -> int:
        if crud_mood.count(db) > 0:
            return 0

        for item in DEFAULT_MOODS:
            db.add(
                models.Mood(
                    name=item["name"],
                    category=item["category"].value,
                    emoji=item["emoji"],
                    is_predefined=True,
                )
            )
        db.flush()
        logger.info("Seeded %d default moods", len(DEFAULT_MOODS))
        return len(DEFAULT_MOODS)

    def _seed_tags(self, db: Session) -> int:
        if crud_tag.count(db) > 0:
            return 0

        now = datetime.now()
        for item in DEFAULT_TAGS:
            db.add(
                models.Tag(
                    name=item["name"],
                    category=item["category"],
                    color=item["color"],
                    is_predefined=True,
                    created_at=now,
                )
            )
        db.flush()
        logger.info("Seeded %d default tags", len(DEFAULT_TAGS))
        return len(DEFAULT_TAGS)

    # ====================================================
    # HELPERS
    # ====================================================

    @staticmethod
    def _word_count(obj_in: schemas.JournalEntryBase) -> int:
        if obj_in.word_count is not None:
            return obj_in.word_count
        return count_words(obj_in.content)

    @staticmethod
    def _day_taken(day: date) -> ConflictError:
        return ConflictError(
            f"You already have an entry for {day.isoformat()}. Edit that one instead.",
            entry_date=day,
        )

    @staticmethod
    def _require_entry(db: Session, entry_id: int) -> models.JournalEntry:
        entry = crud_journal_entry.get_by_id(db, entry_id=entry_id)
        if entry is None:
            raise NotFoundError(f"Entry {entry_id} not found")
        return entry


# Create singleton instance
journal_store = JournalStore(database)

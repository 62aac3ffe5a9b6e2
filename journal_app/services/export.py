# services/export.py
"""
Journal export: a date range of entries rendered as a standalone HTML
document (A4 print styles, one section per entry with moods and tags).
"""
import logging
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import List, Optional

from jinja2 import BaseLoader, Environment, select_autoescape

from journal_app import models
from journal_app.core.exceptions import NotFoundError
from journal_app.services.journal_store import JournalStore, journal_store
from journal_app.services.text_utils import strip_html

logger = logging.getLogger(__name__)

BASE_CSS = """
  @page { size: A4; margin: 2cm; }
  body { font-family: system-ui, -apple-system, "Segoe UI", Roboto, sans-serif; font-size: 11pt; color: #111; }
  header { border-bottom: 1px solid #ddd; padding-bottom: 6px; margin-bottom: 16px; }
  .title { font-size: 18pt; font-weight: 700; }
  .sub { font-size: 9pt; color: #555; }
  article { page-break-inside: avoid; margin-bottom: 24px; }
  article h2 { font-size: 13pt; margin: 0 0 2px; }
  .date { font-size: 9pt; color: #374151; text-transform: uppercase; letter-spacing: 0.08em; }
  .moods { margin: 6px 0; font-size: 10pt; }
  .content { white-space: pre-wrap; line-height: 1.5; }
  .tags span { display: inline-block; font-size: 8pt; padding: 2px 6px; margin-right: 4px; border-radius: 8px; color: #fff; background: #6b7280; }
  footer { border-top: 1px solid #ddd; padding-top: 6px; color: #666; font-size: 9pt; }
"""

EXPORT_TEMPLATE = r"""
<!DOCTYPE html><html><head><meta charset="utf-8"><title>Journal {{ start }} to {{ end }}</title>
<style>{{ base_css|safe }}</style></head><body>
<header>
  <div class="title">My Journal</div>
  <div class="sub">{{ start }} to {{ end }} &middot; {{ rows|length }} entr{{ "y" if rows|length == 1 else "ies" }}</div>
</header>
<main>
{% for row in rows %}
  <article>
    <div class="date">{{ row.entry.entry_date.strftime("%A, %d %B %Y") }}</div>
    <h2>{{ row.entry.title or "Untitled" }}</h2>
    {% if row.primary_mood %}
    <div class="moods">
      {{ row.primary_mood.emoji or "" }} {{ row.primary_mood.name }}
      {% for mood in row.secondary_moods %} &middot; {{ mood.emoji or "" }} {{ mood.name }}{% endfor %}
    </div>
    {% endif %}
    <div class="content">{{ row.text }}</div>
    {% if row.tags %}
    <div class="tags">{% for tag in row.tags %}<span style="background: {{ tag.color or '#6b7280' }}">{{ tag.name }}</span>{% endfor %}</div>
    {% endif %}
    <div class="sub">{{ row.entry.word_count }} words</div>
  </article>
{% endfor %}
</main>
<footer>Generated {{ generated_at }}</footer>
</body></html>
"""

_env = Environment(loader=BaseLoader(), autoescape=select_autoescape(default=True))


@dataclass
class EntryExport:
    entry: models.JournalEntry
    primary_mood: Optional[models.Mood] = None
    secondary_moods: List[models.Mood] = field(default_factory=list)
    tags: List[models.Tag] = field(default_factory=list)

    @property
    def text(self) -> str:
        return strip_html(self.entry.content)


class ExportService:
    def __init__(self, store: JournalStore):
        self.store = store

    def build(self, start_date: date, end_date: date) -> List[EntryExport]:
        """Entries in range (oldest first) with their moods and tags."""
        entries = self.store.list_entries_in_range(start_date, end_date)
        if not entries:
            raise NotFoundError("No entries found for those dates.")

        rows = []
        for entry in reversed(entries):
            rows.append(
                EntryExport(
                    entry=entry,
                    primary_mood=self.store.get_primary_mood(entry.id),
                    secondary_moods=self.store.get_secondary_moods(entry.id),
                    tags=self.store.get_tags_for_entry(entry.id),
                )
            )
        return rows

    def render_html(self, start_date: date, end_date: date) -> str:
        rows = self.build(start_date, end_date)
        html = _env.from_string(EXPORT_TEMPLATE).render(
            base_css=BASE_CSS,
            rows=rows,
            start=start_date.isoformat(),
            end=end_date.isoformat(),
            generated_at=datetime.now().strftime("%Y-%m-%d %H:%M"),
        )
        logger.info(
            "Exported %d entries for %s to %s", len(rows), start_date, end_date
        )
        return html


export_service = ExportService(journal_store)

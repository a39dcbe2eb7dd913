"""
Legacy document-store sink.

The first revision of the exporter pushed reports as JSON documents into a
document database instead of writing a CSV file. Documents are redacted:
no identifiers, associations or areas, and only one locale. They are
upserted into a Postgres JSONB table keyed by the report id.
"""
import logging
from typing import Any, Dict, Iterable, Optional

import psycopg2
from psycopg2 import sql
from psycopg2.extras import Json, execute_values

from extract_serac.config import settings
from extract_serac.exceptions import NoLocaleAvailable, SinkFailure
from extract_serac.schemas.xreport import XReport
from extract_serac.services.locale_selector import find_locale

logger = logging.getLogger(__name__)

# Report attributes copied as-is into the document
DOCUMENT_FIELDS = [
    "elevation",
    "nb_participants",
    "age",
    "autonomy",
    "avalanche_slope",
    "activities",
    "event_activity",
    "nb_outings",
    "gender",
    "nb_impacted",
    "date",
    "rescue",
    "author_status",
    "event_type",
    "severity",
    "activity_rate",
    "previous_injuries",
    "avalanche_level",
    "qualification",
    "supervision",
]

LOCALE_FIELDS = [
    "title",
    "summary",
    "description",
    "place",
    "route_study",
    "conditions",
    "training",
    "motivations",
    "group_management",
    "risk",
    "time_management",
    "safety",
    "reduce_impact",
    "increase_impact",
    "modifications",
    "other_comments",
]

UPSERT_PAGE_SIZE = 100


def report_to_document(report: XReport) -> Dict[str, Any]:
    """Build the redacted JSON document of a report."""
    document: Dict[str, Any] = {
        field: getattr(report, field) for field in DOCUMENT_FIELDS
    }
    document["geometry"] = report.geometry.geom if report.geometry else None
    document["author"] = report.author.model_dump() if report.author else None

    try:
        locale = find_locale(report.locales, report.available_langs)
    except NoLocaleAvailable:
        document["locales"] = []
    else:
        document["locales"] = [{field: getattr(locale, field) for field in LOCALE_FIELDS}]

    return document


def upsert_documents(
    reports: Iterable[XReport],
    database_url: Optional[str] = None,
    table: Optional[str] = None,
) -> int:
    """
    Upsert reports as JSONB documents.

    The table (document_id integer primary key, document jsonb) is created
    when missing; existing documents are replaced.

    Returns:
        Number of documents written

    Raises:
        SinkFailure: no database configured or a database error
    """
    database_url = database_url or settings.DATABASE_URL
    table = table or settings.DOCUMENT_TABLE
    if not database_url:
        raise SinkFailure("No database URL configured for the document store")

    values = [(report.document_id, Json(report_to_document(report))) for report in reports]

    create = sql.SQL(
        "CREATE TABLE IF NOT EXISTS {} (document_id INTEGER PRIMARY KEY, document JSONB NOT NULL)"
    ).format(sql.Identifier(table))
    upsert = sql.SQL(
        "INSERT INTO {} (document_id, document) VALUES %s "
        "ON CONFLICT (document_id) DO UPDATE SET document = EXCLUDED.document"
    ).format(sql.Identifier(table))

    try:
        conn = psycopg2.connect(database_url)
    except psycopg2.Error as e:
        raise SinkFailure(f"Cannot connect to the document store: {e}") from e

    try:
        with conn:
            with conn.cursor() as cur:
                cur.execute(create)
                if values:
                    execute_values(cur, upsert, values, page_size=UPSERT_PAGE_SIZE)
    except psycopg2.Error as e:
        raise SinkFailure(f"Document upsert failed: {e}") from e
    finally:
        conn.close()

    logger.info(f"Upserted {len(values)} documents into {table}")
    return len(values)

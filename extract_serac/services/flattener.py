"""
Field Flattener

Turns one fully-detailed x-report into one flat CSV row.

The row is rendered from a single locale (see locale_selector), coded
fields go through the translation table, and associations become
comma-joined lists of site URLs. Every cell is a string; absent values
render as "".

Two column layouts are supported:
- version 2 (current): qualification and supervision columns
- version 1 (legacy): a single "number of outings" column in their place
"""
from typing import Iterable, Optional

from extract_serac.config import settings
from extract_serac.schemas.xreport import Association, XReport
from extract_serac.services.locale_selector import find_locale
from extract_serac.services.translation import translate, translate_all
from extract_serac.utils.geometry import format_number, render_geometry

CURRENT_SCHEMA_VERSION = 2

# Narrative fields of the selected locale, in column order
NARRATIVE_COLUMNS = [
    ("summary", "Résumé"),
    ("description", "Description"),
    ("place", "Lieu"),
    ("route_study", "Étude de l'itinéraire"),
    ("conditions", "Conditions"),
    ("training", "Préparation physique et niveau technique"),
    ("motivations", "Motivations"),
    ("group_management", "Gestion du groupe"),
    ("risk", "Niveau de l'attention et évaluation des risques"),
    ("time_management", "Gestion de l'horaire"),
    ("safety", "Mesures et techniques de sécurité mises en oeuvre"),
    ("reduce_impact", "Éléments ayant atténué les conséquences de l'évènement"),
    ("increase_impact", "Éléments ayant aggravé les conséquences de l'évènement"),
    ("modifications", "Conséquences sur les pratiques"),
    ("other_comments", "Conséquences physiques et autres commentaires"),
]

_LEADING_COLUMNS = [
    ("document_id", "Document"),
    ("document_url", "Document (lien)"),
    ("title", "Titre"),
    ("activities", "Activités"),
    ("quality", "Complétude"),
    ("geometry", "Localisation"),
    ("elevation", "Altitude"),
    ("areas", "Régions"),
    ("author_name", "Contributeur"),
    ("author_url", "Contributeur (lien)"),
    ("date", "Date"),
    ("event_type", "Type d'évènement"),
    ("nb_participants", "Nombre de participants"),
    ("users", "Participants associés"),
    ("nb_impacted", "Nombre de personnes touchées"),
    ("rescue", "Intervention des services de secours"),
    ("severity", "Gravité"),
    ("avalanche_level", "Niveau de risque d'avalanche"),
    ("avalanche_slope", "Pente de la zone de départ"),
    ("age", "Âge"),
    ("gender", "Sexe"),
    ("author_status", "Implication dans la situation"),
    ("autonomy", "Niveau de pratique"),
    ("activity_rate", "Fréquence de pratique dans l'activité"),
]

_TRAILING_COLUMNS = [
    ("routes", "Itinéraires associés"),
    ("outings", "Sorties associées"),
    ("articles", "Articles associés"),
]

SCHEMAS: dict[int, list[tuple[str, str]]] = {
    1: (
        _LEADING_COLUMNS
        + [
            ("nb_outings", "Nombre de sorties"),
            ("previous_injuries", "Blessures antérieures"),
        ]
        + NARRATIVE_COLUMNS
        + _TRAILING_COLUMNS
    ),
    2: (
        _LEADING_COLUMNS
        + [
            ("previous_injuries", "Blessures antérieures"),
            ("qualification", "Qualification"),
            ("supervision", "Encadrement"),
        ]
        + NARRATIVE_COLUMNS
        + _TRAILING_COLUMNS
    ),
}

# Coded single-value fields and the translation category they belong to
CODED_FIELDS = {
    "quality": "quality",
    "rescue": "boolean",
    "severity": "severity",
    "avalanche_level": "avalanche_level",
    "avalanche_slope": "avalanche_slope",
    "gender": "gender",
    "author_status": "author_status",
    "autonomy": "autonomy",
    "activity_rate": "activity_rate",
    "nb_outings": "nb_outings",
    "previous_injuries": "previous_injuries",
    "qualification": "qualification",
    "supervision": "supervision",
}


def _schema(schema_version: int) -> list[tuple[str, str]]:
    try:
        return SCHEMAS[schema_version]
    except KeyError:
        raise ValueError(
            f"Unknown schema version {schema_version} (known: {sorted(SCHEMAS)})"
        ) from None


def header(schema_version: int = CURRENT_SCHEMA_VERSION) -> list[str]:
    """French column labels, in row order."""
    return [label for _, label in _schema(schema_version)]


def join_values(values: Iterable[Optional[str]]) -> str:
    """
    Comma-join values, skipping empty ones.

    Example:
        >>> join_values(["avalanche", None, "chute de pierres"])
        'avalanche,chute de pierres'
        >>> join_values([])
        ''
    """
    return ",".join(value for value in values if value)


def document_url(kind: str, document_id) -> str:
    """Canonical site URL of a document (e.g. kind="routes")."""
    return f"{settings.C2C_SITE_URL.rstrip('/')}/{kind}/{document_id}"


def associated_urls(associations: Iterable[Association], kind: str) -> str:
    """Comma-joined site URLs of associated documents ("" when none)."""
    return join_values(document_url(kind, item.document_id) for item in associations)


def _format_cell(value) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    return format_number(value)


def _activities(report: XReport) -> Optional[str]:
    if report.event_activity:
        return translate(report.event_activity, "activity")
    return join_values(translate_all(report.activities, "activity"))


def _event_type(report: XReport) -> Optional[str]:
    if isinstance(report.event_type, list):
        return join_values(translate_all(report.event_type, "event_type"))
    return translate(report.event_type, "event_type")


def _area_names(report: XReport) -> str:
    titles = []
    for area in report.areas:
        # Areas without any locale have no name to show
        if not area.locales:
            continue
        titles.append(find_locale(area.locales).title)
    return join_values(titles)


def _report_cells(report: XReport) -> dict:
    locale = find_locale(report.locales, report.available_langs)
    author = report.author

    cells = {
        "document_id": report.document_id,
        "document_url": document_url("xreports", report.document_id),
        "title": locale.title,
        "activities": _activities(report),
        "geometry": render_geometry(report.geometry),
        "elevation": report.elevation,
        "areas": _area_names(report),
        "author_name": author.name if author else None,
        "author_url": (
            document_url("users", author.user_id)
            if author and author.user_id is not None
            else None
        ),
        "date": report.date,
        "event_type": _event_type(report),
        "nb_participants": report.nb_participants,
        "users": associated_urls(report.associations.users, "users"),
        "nb_impacted": report.nb_impacted,
        "age": report.age,
        "routes": associated_urls(report.associations.routes, "routes"),
        "outings": associated_urls(report.associations.outings, "outings"),
        "articles": associated_urls(report.associations.articles, "articles"),
    }

    for field, category in CODED_FIELDS.items():
        cells[field] = translate(getattr(report, field), category)

    for field, _ in NARRATIVE_COLUMNS:
        cells[field] = getattr(locale, field)

    return cells


def flatten_report(
    report: XReport, schema_version: int = CURRENT_SCHEMA_VERSION
) -> list[str]:
    """
    Flatten one report into a row matching header(schema_version).

    Args:
        report: Fully-detailed report
        schema_version: Column layout (2 = current, 1 = legacy)

    Returns:
        One string per column

    Raises:
        NoLocaleAvailable: the report has no locale
        MalformedGeometry: the geometry payload cannot be parsed
    """
    columns = _schema(schema_version)
    cells = _report_cells(report)
    return [_format_cell(cells[key]) for key, _ in columns]


def flatten_reports(
    reports: Iterable[XReport], schema_version: int = CURRENT_SCHEMA_VERSION
) -> list[list[str]]:
    """Flatten several reports, preserving order."""
    return [flatten_report(report, schema_version) for report in reports]

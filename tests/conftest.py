"""
Pytest configuration and shared fixtures for extract-serac tests.

Provides:
- xreport_payload: raw detail payload as returned by GET /xreports/{id}
- xreport: the same payload validated into an XReport
- make_report: factory for minimal reports with overrides
"""
import copy

import pytest

from extract_serac.schemas.xreport import XReport


XREPORT_PAYLOAD = {
    "document_id": 1234,
    "version": 3,
    "protected": False,
    "available_langs": ["de", "fr"],
    "locales": [
        {
            "lang": "de",
            "title": "Lawine am Grand Combin",
            "summary": "Zusammenfassung",
        },
        {
            "lang": "fr",
            "title": "Avalanche au Grand Combin",
            "summary": "Départ spontané",
            "description": "Ligne 1\nLigne 2, avec virgule",
            "place": "Couloir nord",
            "other_comments": "RAS",
        },
    ],
    "areas": [
        {
            "document_id": 10,
            "locales": [
                {"lang": "it", "title": "Valle d'Aosta"},
                {"lang": "fr", "title": "Vallée d'Aoste"},
            ],
        },
        {
            "document_id": 11,
            "locales": [
                {"lang": "de", "title": "Wallis"},
                {"lang": "it", "title": "Vallese"},
            ],
        },
    ],
    "associations": {
        "users": [{"type": "u", "document_id": 42}],
        "routes": [
            {"type": "r", "document_id": 100},
            {"type": "r", "document_id": 101},
        ],
        "outings": [],
        "articles": [],
        "images": [],
        "waypoints": [],
    },
    "author": {"name": "Jeanne", "user_id": 7},
    "geometry": {"version": 1, "geom": '{"type": "Point", "coordinates": [6.5, 45.9]}'},
    "date": "2021-02-14",
    "elevation": 3100,
    "nb_participants": 3,
    "nb_impacted": 1,
    "age": 34,
    "event_activity": "skitouring",
    "event_type": "avalanche",
    "quality": "fine",
    "rescue": True,
    "severity": "1m_to_3m",
    "avalanche_level": "level_3",
    "avalanche_slope": "slope_35_40",
    "gender": "female",
    "author_status": "primary_impacted",
    "autonomy": "autonomous",
    "activity_rate": "activity_rate_m2",
    "previous_injuries": "no",
    "qualification": "federal_supervisor",
    "supervision": "no_supervision",
}


@pytest.fixture
def xreport_payload():
    """Deep copy of a realistic x-report detail payload."""
    return copy.deepcopy(XREPORT_PAYLOAD)


@pytest.fixture
def xreport(xreport_payload):
    return XReport.model_validate(xreport_payload)


@pytest.fixture
def make_report():
    """
    Build a minimal report (one French locale) with field overrides.

    Usage:
        def test_example(make_report):
            report = make_report(severity="bogus_code")
    """
    def _make(**overrides):
        payload = {
            "document_id": 1,
            "available_langs": ["fr"],
            "locales": [{"lang": "fr", "title": "Titre"}],
        }
        payload.update(overrides)
        return XReport.model_validate(payload)

    return _make

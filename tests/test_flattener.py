"""
Tests for the field flattener.

Every row must line up with its header; optional values render as empty
cells and only missing locales or malformed geometry are fatal.
"""
import pytest

from extract_serac.exceptions import MalformedGeometry, NoLocaleAvailable
from extract_serac.schemas.xreport import Association
from extract_serac.services.flattener import (
    CURRENT_SCHEMA_VERSION,
    SCHEMAS,
    associated_urls,
    document_url,
    flatten_report,
    flatten_reports,
    header,
    join_values,
)


def cell(row, label, schema_version=CURRENT_SCHEMA_VERSION):
    return row[header(schema_version).index(label)]


class TestHeader:
    def test_current_header(self):
        labels = header()
        assert len(labels) == 45
        assert labels[:3] == ["Document", "Document (lien)", "Titre"]
        assert labels[24:27] == ["Blessures antérieures", "Qualification", "Encadrement"]
        assert labels[-3:] == ["Itinéraires associés", "Sorties associées", "Articles associés"]

    def test_legacy_header(self):
        labels = header(1)
        assert len(labels) == 44
        assert "Nombre de sorties" in labels
        assert "Qualification" not in labels
        assert "Encadrement" not in labels

    def test_labels_unique(self):
        for version in SCHEMAS:
            assert len(set(header(version))) == len(header(version))

    def test_unknown_version(self):
        with pytest.raises(ValueError):
            header(99)


class TestRowShape:
    @pytest.mark.parametrize("schema_version", sorted(SCHEMAS))
    def test_row_matches_header_length(self, xreport, make_report, schema_version):
        assert len(flatten_report(xreport, schema_version)) == len(header(schema_version))
        assert len(flatten_report(make_report(), schema_version)) == len(header(schema_version))

    def test_all_cells_are_strings(self, xreport, make_report):
        for report in (xreport, make_report()):
            assert all(isinstance(value, str) for value in flatten_report(report))

    def test_flattening_twice_is_identical(self, xreport):
        assert flatten_report(xreport) == flatten_report(xreport)

    def test_report_not_mutated(self, xreport):
        before = xreport.model_dump()
        flatten_report(xreport)
        assert xreport.model_dump() == before

    def test_flatten_reports_keeps_order(self, make_report):
        rows = flatten_reports([make_report(document_id=2), make_report(document_id=1)])
        assert [row[0] for row in rows] == ["2", "1"]


class TestFullReport:
    """Cell values for a realistic report"""

    def test_identifiers(self, xreport):
        row = flatten_report(xreport)
        assert cell(row, "Document") == "1234"
        assert cell(row, "Document (lien)") == "https://www.camptocamp.org/xreports/1234"

    def test_french_locale_selected(self, xreport):
        row = flatten_report(xreport)
        assert cell(row, "Titre") == "Avalanche au Grand Combin"
        assert cell(row, "Résumé") == "Départ spontané"

    def test_narrative_copied_verbatim(self, xreport):
        row = flatten_report(xreport)
        assert cell(row, "Description") == "Ligne 1\nLigne 2, avec virgule"
        assert cell(row, "Lieu") == "Couloir nord"
        assert cell(row, "Conséquences physiques et autres commentaires") == "RAS"
        assert cell(row, "Motivations") == ""

    def test_areas_select_their_own_locale(self, xreport):
        row = flatten_report(xreport)
        assert cell(row, "Régions") == "Vallée d'Aoste,Vallese"

    def test_coded_fields(self, xreport):
        row = flatten_report(xreport)
        assert cell(row, "Activités") == "ski de randonnée"
        assert cell(row, "Complétude") == "bon"
        assert cell(row, "Type d'évènement") == "avalanche"
        assert cell(row, "Intervention des services de secours") == "oui"
        assert cell(row, "Gravité") == "De 1 à 3 mois"
        assert cell(row, "Niveau de risque d'avalanche") == "3 - marqué"
        assert cell(row, "Pente de la zone de départ") == "35-40"
        assert cell(row, "Sexe") == "F"
        assert cell(row, "Implication dans la situation") == "victime principale"
        assert cell(row, "Niveau de pratique") == "autonome"
        assert cell(row, "Fréquence de pratique dans l'activité") == "2 fois par mois"
        assert cell(row, "Blessures antérieures") == "non"
        assert cell(row, "Qualification") == "Initiateur fédéral"
        assert cell(row, "Encadrement") == "Non encadré"

    def test_numbers(self, xreport):
        row = flatten_report(xreport)
        assert cell(row, "Altitude") == "3100"
        assert cell(row, "Nombre de participants") == "3"
        assert cell(row, "Nombre de personnes touchées") == "1"
        assert cell(row, "Âge") == "34"
        assert cell(row, "Date") == "2021-02-14"

    def test_geometry(self, xreport):
        assert cell(flatten_report(xreport), "Localisation") == "[6.5:45.9]"

    def test_author(self, xreport):
        row = flatten_report(xreport)
        assert cell(row, "Contributeur") == "Jeanne"
        assert cell(row, "Contributeur (lien)") == "https://www.camptocamp.org/users/7"

    def test_associations(self, xreport):
        row = flatten_report(xreport)
        assert cell(row, "Participants associés") == "https://www.camptocamp.org/users/42"
        assert cell(row, "Itinéraires associés") == (
            "https://www.camptocamp.org/routes/100,https://www.camptocamp.org/routes/101"
        )
        assert cell(row, "Sorties associées") == ""
        assert cell(row, "Articles associés") == ""

    def test_legacy_layout(self, make_report):
        report = make_report(nb_outings="nb_outings_9", previous_injuries="previous_injuries_3")
        row = flatten_report(report, 1)
        assert cell(row, "Nombre de sorties", 1) == "de 5 à 9"
        assert cell(row, "Blessures antérieures", 1) == "autres blessures"


class TestOptionalFields:
    """Missing or unknown values render as empty cells"""

    def test_minimal_report(self, make_report):
        row = flatten_report(make_report())
        assert row[:3] == ["1", "https://www.camptocamp.org/xreports/1", "Titre"]
        assert all(value == "" for value in row[3:])

    def test_unknown_codes_render_empty(self, make_report):
        report = make_report(severity="bogus_code", gender="x", event_type="bogus_code")
        row = flatten_report(report)
        assert cell(row, "Gravité") == ""
        assert cell(row, "Sexe") == ""
        assert cell(row, "Type d'évènement") == ""

    def test_missing_author(self, make_report):
        row = flatten_report(make_report(author=None))
        assert cell(row, "Contributeur") == ""
        assert cell(row, "Contributeur (lien)") == ""

    def test_area_without_locales_skipped(self, make_report):
        report = make_report(
            areas=[{"locales": []}, {"locales": [{"lang": "fr", "title": "Savoie"}]}]
        )
        assert cell(flatten_report(report), "Régions") == "Savoie"

    def test_whole_float_numbers(self, make_report):
        assert cell(flatten_report(make_report(elevation=2500.0)), "Altitude") == "2500"

    def test_rescue_false(self, make_report):
        row = flatten_report(make_report(rescue=False))
        assert cell(row, "Intervention des services de secours") == "non"


class TestMultiValuedFields:
    def test_legacy_event_type_list(self, make_report):
        row = flatten_report(make_report(event_type=["avalanche", "stone_fall"]))
        assert cell(row, "Type d'évènement") == "avalanche,chute de pierres"

    def test_unknown_values_skipped_in_list(self, make_report):
        row = flatten_report(make_report(event_type=["bogus", "lightning", "bogus"]))
        assert cell(row, "Type d'évènement") == "foudre"

    def test_legacy_activities_list(self, make_report):
        row = flatten_report(make_report(activities=["hiking", "via_ferrata"]))
        assert cell(row, "Activités") == "randonnée,via ferrata"

    def test_event_activity_wins_over_list(self, make_report):
        row = flatten_report(make_report(event_activity="other", activities=["hiking"]))
        assert cell(row, "Activités") == "autres activités"


class TestFatalConditions:
    def test_no_locale(self, make_report):
        with pytest.raises(NoLocaleAvailable):
            flatten_report(make_report(available_langs=[], locales=[]))

    def test_malformed_geometry(self, make_report):
        report = make_report(geometry={"version": 1, "geom": "not json"})
        with pytest.raises(MalformedGeometry):
            flatten_report(report)


class TestHelpers:
    def test_join_values(self):
        assert join_values(["avalanche", "chute de pierres"]) == "avalanche,chute de pierres"
        assert join_values(["a", None, "", "b"]) == "a,b"
        assert join_values([]) == ""
        assert join_values([None]) == ""

    def test_document_url(self):
        assert document_url("outings", 9) == "https://www.camptocamp.org/outings/9"

    def test_associated_urls(self):
        items = [Association(type="c", document_id=1), Association(type="c", document_id=2)]
        assert associated_urls(items, "articles") == (
            "https://www.camptocamp.org/articles/1,https://www.camptocamp.org/articles/2"
        )
        assert associated_urls([], "articles") == ""

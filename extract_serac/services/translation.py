"""
Translation Table

French display strings for the coded fields of an x-report.

Labels are stored per (category, code) so that codes shared by several
categories ("other" is both an activity and an event type) cannot silently
overwrite each other. Callers that know the field they are rendering pass
the category; callers that only have a code use the flattened namespace,
where categories are merged in declaration order and later ones win.

Each category carries the current API codes plus the codes of the older
API, kept as deprecated aliases so that historical reports still render.
"""
from typing import Iterable, Optional

# =============================================================================
# CURRENT CODES
# =============================================================================

BOOLEAN = {
    "true": "oui",
    "false": "non",
}

ACTIVITY = {
    "sport_climbing": "escalade en falaise",
    "multipitch_climbing": "escalade en grande voie",
    "alpine_climbing": "rocher montagne (TA)",
    "ice_climbing": "cascade de glace",
    "skitouring": "ski de randonnée",
    "other": "autres activités",
}

QUALITY = {
    "empty": "vide",
    "draft": "ébauche",
    "medium": "moyen",
    "fine": "bon",
    "great": "excellent",
}

EVENT_TYPE = {
    "avalanche": "avalanche",
    "stone_ice_fall": "chute de pierre/glace/sérac",
    "ice_cornice_collapse": "effondrement cascade ou corniche",
    "person_fall": "chute d'une personne",
    "crevasse_fall": "chute en crevasse",
    "physical_failure": "défaillance physique",
    "blocked_person": "personne bloquée",
    "weather_event": "évènement météo",
    "safety_operation": "manœuvre de sécurité",
    "critical_situation": "situation complexe sans incident",
    "other": "autre",
}

SEVERITY = {
    "severity_no": "pas de blessure",
    "1d_to_3d": "De 1 à 3 jours",
    "4d_to_1m": "De 4 jours à 1 mois",
    "1m_to_3m": "De 1 à 3 mois",
    "more_than_3m": "supérieur à 3 mois",
}

AVALANCHE_LEVEL = {
    "level_1": "1 - faible",
    "level_2": "2 - limité",
    "level_3": "3 - marqué",
    "level_4": "4 - fort",
    "level_5": "5 - très fort",
    "level_na": "non renseigné",
}

AVALANCHE_SLOPE = {
    "slope_lt_30": "<30",
    "slope_30_35": "30-35",
    "slope_35_40": "35-40",
    "slope_40_45": "40-45",
    "slope_gt_45": ">45",
}

GENDER = {
    "female": "F",
    "male": "H",
}

AUTHOR_STATUS = {
    "primary_impacted": "victime principale",
    "secondary_impacted": "victime secondaire",
    "internal_witness": "témoin direct",
    "external_witness": "témoin extérieur",
}

AUTONOMY = {
    "non_autonomous": "non autonome",
    "autonomous": "autonome",
    "expert": "expert",
}

ACTIVITY_RATE = {
    "activity_rate_y5": "5 fois par an",
    "activity_rate_m2": "2 fois par mois",
    "activity_rate_w1": "1 fois par semaine",
}

PREVIOUS_INJURIES = {
    "no": "non",
    "previous_injuries_2": "autres blessures",
}

QUALIFICATION = {
    "federal_supervisor": "Initiateur fédéral",
    "federal_trainer": "Entraineur fédéral",
    "professional_diploma": "Diplôme professionnel",
}

SUPERVISION = {
    "no_supervision": "Non encadré",
    "federal_supervision": "Encadrement fédéral",
    "professional_supervision": "Encadrement professionnel",
}

# =============================================================================
# DEPRECATED CODES (older API revision)
# =============================================================================

LEGACY_ACTIVITY = {
    "hiking": "randonnée",
    "ice_climbing": "cascade de glace",
    "mountain_biking": "VTT",
    "mountain_climbing": "rocher haute-montagne",
    "paragliding": "parapente",
    "rock_climbing": "escalade",
    "skitouring": "ski de randonnée",
    "slacklining": "slackline",
    "snowshoeing": "raquettes",
    "snow_ice_mixed": "neige glace mixte",
    "via_ferrata": "via ferrata",
}

LEGACY_EVENT_TYPE = {
    "avalanche": "avalanche",
    "stone_fall": "chute de pierres",
    "falling_ice": "chute de glace",
    "person_fall": "chute d'une personne",
    "crevasse_fall": "chute en crevasse",
    "roped_fall": "chute encordé",
    "physical_failure": "défaillance physique",
    "lightning": "foudre",
    "other": "autre",
}

LEGACY_AUTONOMY = {
    "initiator": "débrouillé",
}

LEGACY_ACTIVITY_RATE = {
    "activity_rate_1": "1ère fois de sa vie",
    "activity_rate_5": "moins d'1 fois par an",
    "activity_rate_10": "moins d'1 fois par mois",
    "activity_rate_20": "1 fois par mois",
    "activity_rate_30": "2 à 3 fois par mois",
    "activity_rate_50": "1 à 2 fois par semaine",
    "activity_rate_150": "au moins 3 fois par semaine",
}

LEGACY_NB_OUTINGS = {
    "nb_outings_4": "de 0 à 4",
    "nb_outings_9": "de 5 à 9",
    "nb_outings_14": "de 10 à 14",
    "nb_outings_15": "15 et plus",
}

# TODO: confirm with the SERAC data owners whether previous_injuries_3 should
# have its own label; both codes currently read "autres blessures".
LEGACY_PREVIOUS_INJURIES = {
    "previous_injuries_2": "autres blessures",
    "previous_injuries_3": "autres blessures",
}

# =============================================================================
# TABLE
# =============================================================================

# Declaration order matters for the flattened namespace: later categories win
CATEGORIES: dict[str, dict[str, str]] = {
    "boolean": BOOLEAN,
    "activity": {**LEGACY_ACTIVITY, **ACTIVITY},
    "quality": QUALITY,
    "event_type": {**LEGACY_EVENT_TYPE, **EVENT_TYPE},
    "severity": SEVERITY,
    "avalanche_level": AVALANCHE_LEVEL,
    "avalanche_slope": AVALANCHE_SLOPE,
    "gender": GENDER,
    "author_status": AUTHOR_STATUS,
    "autonomy": {**LEGACY_AUTONOMY, **AUTONOMY},
    "activity_rate": {**LEGACY_ACTIVITY_RATE, **ACTIVITY_RATE},
    "nb_outings": LEGACY_NB_OUTINGS,
    "previous_injuries": {**LEGACY_PREVIOUS_INJURIES, **PREVIOUS_INJURIES},
    "qualification": QUALIFICATION,
    "supervision": SUPERVISION,
}

TRANSLATIONS: dict[tuple[str, str], str] = {
    (category, code): label
    for category, labels in CATEGORIES.items()
    for code, label in labels.items()
}

_FLAT: dict[str, str] = {}
for _labels in CATEGORIES.values():
    _FLAT.update(_labels)


def translate(code: Optional[str], category: Optional[str] = None) -> Optional[str]:
    """
    Return the display string for a coded value.

    Args:
        code: Raw code from the API (e.g. "level_3", "true")
        category: Restrict the lookup to one category (e.g. "avalanche_level").
            Without it, the flattened namespace is used.

    Returns:
        French label, or None for an empty, missing or unknown code

    Example:
        >>> translate("stone_fall")
        'chute de pierres'
        >>> translate("other", "activity")
        'autres activités'
        >>> translate("bogus_code") is None
        True
    """
    if not code:
        return None
    if category is None:
        return _FLAT.get(code)
    return TRANSLATIONS.get((category, code))


def translate_all(
    codes: Iterable[Optional[str]], category: Optional[str] = None
) -> list[Optional[str]]:
    """Translate a sequence of codes, keeping None for unknown ones."""
    return [translate(code, category) for code in codes]

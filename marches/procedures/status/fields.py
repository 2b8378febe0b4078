from collections.abc import Mapping
from types import MappingProxyType
from typing import Any

# Nom logique utilisé par les règles -> nom du champ stocké dans la procédure
FIELD_MAPPING: Mapping[str, str] = MappingProxyType(
    {
        "finalite_consultation": "Finalité de la consultation",
        "date_publication_donnees_essentielles": "Données essentielles",
        "date_avis_attribution": "Avis d'attribution",
        "finalite": "Finalité de la consultation",
        "type_marche": "Forme du marché",
        "Reprise_au_statut_Termine": "Reprise_au_statut_Termine",
        "statut_rapport_presentation": "RP - Statut",
        "date_ouverture_offres": "Date d'ouverture des offres",
        "date_remise_offres": "Date de remise des offres",
        "date_publication": "date_de_lancement_de_la_consultation",
        "numero_afpa_consultation": "Numéro de procédure (Afpa)",
    }
)


def is_missing(value: Any) -> bool:
    """
    Vrai pour None et pour les marqueurs de valeur manquante de pandas (NaN, NaT),
    seules valeurs différentes d'elles-mêmes.
    """
    if value is None:
        return True
    try:
        return bool(value != value)
    except TypeError:
        # pandas.NA : toute comparaison renvoie NA
        return True
    except ValueError:
        return False


def resolve_field(record: Mapping[str, Any], name: str) -> Any:
    """
    Lit la valeur d'un champ logique dans une procédure.

    Le nom est d'abord traduit via FIELD_MAPPING, sinon il est lu tel quel.
    Retourne None si le champ est absent ; ne lève jamais d'exception.
    """
    stored_name = FIELD_MAPPING.get(name, name)
    try:
        value = record.get(stored_name)
    except (AttributeError, TypeError):
        return None
    if is_missing(value):
        return None
    return value

import datetime
import logging
import numbers
from typing import Any

from .fields import is_missing

logger = logging.getLogger(__name__)

# Les tableurs comptent les jours depuis le 30/12/1899
EXCEL_EPOCH = datetime.datetime(1899, 12, 30)
# En dessous, un nombre n'est pas considéré comme une date (montant, nombre de lots...)
EXCEL_SERIAL_MIN = 40000


def to_naive_local(value: datetime.datetime) -> datetime.datetime:
    if value.tzinfo is None:
        return value
    return value.astimezone().replace(tzinfo=None)


def parse_excel_serial(serial: float) -> datetime.datetime | None:
    if serial <= EXCEL_SERIAL_MIN:
        return None
    try:
        return EXCEL_EPOCH + datetime.timedelta(days=float(serial))
    except OverflowError:
        return None


def parse_french_date(value: str) -> datetime.datetime | None:
    """
    Lit une date au format DD/MM/YYYY (jour et mois sur un ou deux chiffres).
    """
    parts = value.split("/")
    if len(parts) != 3:
        return None
    day, month, year = (part.strip() for part in parts)
    if not (day.isdigit() and month.isdigit() and year.isdigit()):
        return None
    try:
        return datetime.datetime(int(year), int(month), int(day))
    except ValueError:
        return None


def parse_date(value: Any) -> datetime.datetime | None:
    """
    Convertit une valeur de date (objet date, numéro de série Excel, texte FR ou ISO)
    en datetime naïf local.

    Exemples d'entrées possibles :
      - datetime(2024, 2, 1) ou date(2024, 2, 1)
      - 45000 (numéro de série Excel, soit le 15/03/2023)
      - "01/02/2024" (toujours lu comme le 1er février)
      - "2024-02-01" ou "2024-02-01T10:30:00+01:00"
    Retourne None si la valeur est vide ou illisible, sans jamais lever d'exception.
    """
    if is_missing(value) or value == "" or value is False:
        return None

    # datetime avant date : datetime est une sous-classe de date
    if isinstance(value, datetime.datetime):
        try:
            return to_naive_local(value)
        except OverflowError:
            return None

    if isinstance(value, datetime.date):
        return datetime.datetime(value.year, value.month, value.day)

    if isinstance(value, bool):
        return None

    if isinstance(value, numbers.Real):
        return parse_excel_serial(value)

    if isinstance(value, str):
        value = value.strip()
        if "/" in value:
            return parse_french_date(value)
        try:
            return to_naive_local(datetime.datetime.fromisoformat(value))
        except (ValueError, OverflowError):
            logger.debug("Date illisible : %r", value)
            return None

    return None

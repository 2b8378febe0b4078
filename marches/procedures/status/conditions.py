import datetime
import enum
import logging
import numbers
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Union

from .dates import parse_date
from .fields import is_missing, resolve_field

logger = logging.getLogger(__name__)

# Valeur spéciale : comparer la date du champ à la date du jour
TODAY = "TODAY"


class Operator(enum.StrEnum):
    EQ = "=="
    NE = "!="
    LT = "<"
    LE = "<="
    GT = ">"
    GE = ">="
    IN = "IN"
    IS_NOT_NULL = "IS_NOT_NULL"


class BoolOperator(enum.StrEnum):
    AND = "AND"
    OR = "OR"


@dataclass(frozen=True)
class Leaf:
    field: str
    operator: Operator
    value: Any = None


@dataclass(frozen=True)
class Default:
    """Condition toujours vraie (dernière règle de la table)."""


@dataclass(frozen=True)
class Combinator:
    operator: BoolOperator
    children: tuple["Condition", ...]


Condition = Union[Leaf, Default, Combinator]


def as_text(value: Any) -> str:
    """
    Forme texte d'une valeur pour les comparaisons d'égalité.
    Les valeurs vides (None, "", 0, False, NaN) deviennent "".
    """
    if is_missing(value) or value is False or value == "":
        return ""
    if value is True:
        return "true"
    if isinstance(value, numbers.Real) and value == 0:
        return ""
    if isinstance(value, numbers.Integral):
        value = int(value)
    elif isinstance(value, numbers.Real) and float(value).is_integer():
        value = int(value)
    try:
        return str(value)
    except ValueError:
        # entier au-delà de la limite de conversion en texte
        return ""


def to_number(value: Any) -> float | None:
    if is_missing(value) or isinstance(value, bool):
        return None
    try:
        if isinstance(value, numbers.Real):
            return float(value)
        return float(str(value).strip().replace(" ", "").replace(",", "."))
    except (ValueError, OverflowError):
        return None


def compare(left, right, operator: Operator) -> bool:
    match operator:
        case Operator.LT:
            return left < right
        case Operator.LE:
            return left <= right
        case Operator.GT:
            return left > right
        case Operator.GE:
            return left >= right
    return False


def compare_to_today(value: Any, operator: Operator, now: datetime.datetime) -> bool:
    """
    < et > comparent l'instant exact, <= et >= comparent au jour près.
    """
    field_date = parse_date(value)
    if field_date is None:
        return False
    if operator in (Operator.LE, Operator.GE):
        return compare(field_date.date(), now.date(), operator)
    return compare(field_date, now, operator)


def compare_numbers(value: Any, expected: Any, operator: Operator) -> bool:
    left = to_number(value)
    right = to_number(expected)
    if left is None or right is None:
        return False
    return compare(left, right, operator)


def evaluate_leaf(record: Mapping[str, Any], condition: Leaf | Default, now: datetime.datetime) -> bool:
    """
    Évalue une condition simple sur une procédure.

    Un champ absent ou illisible rend la condition fausse (sauf pour IS_NOT_NULL,
    qui est justement faux dans ce cas). Aucune exception n'est levée.
    """
    if isinstance(condition, Default):
        return True
    if not condition.field:
        return False

    value = resolve_field(record, condition.field)
    expected = condition.value

    match condition.operator:
        case Operator.EQ:
            return as_text(value).lower() == as_text(expected).lower()
        case Operator.NE:
            return as_text(value).lower() != as_text(expected).lower()
        case Operator.LT | Operator.LE | Operator.GT | Operator.GE:
            if expected == TODAY:
                return compare_to_today(value, condition.operator, now)
            return compare_numbers(value, expected, condition.operator)
        case Operator.IN:
            if isinstance(expected, str) or not isinstance(expected, Sequence):
                return False
            text = as_text(value).lower()
            return any(text == as_text(candidate).lower() for candidate in expected)
        case Operator.IS_NOT_NULL:
            return value is not None and value != ""

    logger.warning("Opérateur inconnu %r sur le champ %s", condition.operator, condition.field)
    return False


def evaluate_condition(record: Mapping[str, Any], condition: Condition, now: datetime.datetime) -> bool:
    """
    Évalue récursivement un arbre de conditions.

    Une combinaison sans enfant est fausse, pour ET comme pour OU.
    """
    if not isinstance(condition, Combinator):
        return evaluate_leaf(record, condition, now)

    if not condition.children:
        logger.warning("Combinaison %s sans condition, évaluée à faux", condition.operator)
        return False

    results = (evaluate_condition(record, child, now) for child in condition.children)
    if condition.operator == BoolOperator.AND:
        return all(results)
    if condition.operator == BoolOperator.OR:
        return any(results)
    return False

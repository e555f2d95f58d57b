"""Short human-readable ids: ``<prefix><4-digit sequence>``, e.g. RC0001 or N0012."""
import logging
from typing import Optional

from sqlalchemy.orm import Session

from jewelry_store.core.errors import GenerationExhaustedError, InvalidInputError
from jewelry_store.models.code_sequence import CodeSequence

logger = logging.getLogger(__name__)

NEWS_PREFIX = "N"
SEQUENCE_WIDTH = 4


def _initial(value, field: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise InvalidInputError(field, f"{field} must be a non-empty string")
    return value.strip()[0].upper()


def product_prefix(type_: str, brand: str) -> str:
    """Type initial then brand initial: Ring + Cartier -> RC."""
    return _initial(type_, "type") + _initial(brand, "brand")


def _sequence_of(code: str, prefix: str) -> Optional[int]:
    try:
        number = int(code[len(prefix):].strip())
    except ValueError:
        return None
    return number if number >= 0 else None


class CodeGenerator:
    """Derives the next free id for a model whose primary key is ``id``.

    The next number is one past the highest of: ids currently in the table,
    the prefix's high-water mark in ``code_sequences``, and ``exclude``.
    The caller's transaction carries the high-water update together with
    the insert; the primary key still decides races between writers.
    """

    def __init__(self, max_attempts: int = 5):
        self.max_attempts = max_attempts

    def next_candidate(self, db: Session, model, prefix: str, exclude: frozenset = frozenset()) -> str:
        codes = [r.id for r in db.query(model.id).filter(model.id.like(f"{prefix}%")).all()]
        codes.extend(exclude)
        numbers = [n for n in (_sequence_of(c, prefix) for c in codes) if n is not None]
        sequence = db.get(CodeSequence, prefix)
        numbers.append(sequence.last_value if sequence else 0)
        return f"{prefix}{max(numbers) + 1:0{SEQUENCE_WIDTH}d}"

    def _reserve(self, db: Session, prefix: str, code: str) -> None:
        number = _sequence_of(code, prefix)
        sequence = db.get(CodeSequence, prefix)
        if sequence is None:
            db.add(CodeSequence(prefix=prefix, last_value=number))
        elif number > sequence.last_value:
            sequence.last_value = number

    def generate(self, db: Session, model, prefix: str, exclude: frozenset = frozenset()) -> str:
        """Next ``prefix`` code not present in the table nor in ``exclude``.

        ``exclude`` holds candidates that already lost an insert race.
        """
        for _ in range(self.max_attempts):
            code = self.next_candidate(db, model, prefix, exclude)
            if db.get(model, code) is None:
                self._reserve(db, prefix, code)
                return code
            logger.warning("Duplicate id detected, regenerating: %s", code)
            exclude = exclude | {code}
        raise GenerationExhaustedError(f"Could not generate a unique id for prefix {prefix}")

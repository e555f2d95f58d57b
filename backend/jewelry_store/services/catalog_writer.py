"""Write coordination shared by products and news.

A write spans two stores that share no transaction: the row in the
database and image files in the blob store. The rules:

* images for the attempt are already on disk when a write starts;
  any failure before commit deletes them again;
* superseded images are deleted only after the commit succeeds;
* every session is closed on every exit path so its pooled connection
  goes back to the pool.
"""
import logging
from typing import Callable, Iterable, Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from jewelry_store.core.errors import (
    ConflictError,
    GenerationExhaustedError,
    NotFoundError,
    StorageError,
)
from jewelry_store.services.blob_store import BlobStore
from jewelry_store.services.code_generator import CodeGenerator

logger = logging.getLogger(__name__)

# plan(current_row) -> (column values to set, image refs superseded by them)
UpdatePlan = Callable[[object], tuple[dict, list[str]]]


class CatalogWriter:
    model = None
    label = "Entity"

    def __init__(
        self,
        session_factory: sessionmaker,
        blob_store: BlobStore,
        code_generator: Optional[CodeGenerator] = None,
    ):
        self.session_factory = session_factory
        self.blob_store = blob_store
        self.code_generator = code_generator or CodeGenerator()

    def _not_found(self, entity_id: str) -> NotFoundError:
        return NotFoundError(f"{self.label} with ID {entity_id} not found")

    def _discard_on_failure(self, refs: Iterable[str]) -> None:
        refs = [r for r in refs if r]
        if refs:
            logger.info("Removing %d image(s) uploaded for failed %s write", len(refs), self.label.lower())
            self.blob_store.discard(refs)

    def _insert(self, prefix: str, values: dict):
        """Insert a new row under a generated id with version 0."""
        model = self.model
        db = self.session_factory()
        try:
            lost = frozenset()
            for _ in range(self.code_generator.max_attempts):
                code = self.code_generator.generate(db, model, prefix, lost)
                row = model(id=code, version=0, **values)
                db.add(row)
                try:
                    db.commit()
                except IntegrityError:
                    # Another writer took this id between generate and commit
                    db.rollback()
                    logger.warning("Id %s taken concurrently, regenerating", code)
                    lost = lost | {code}
                    continue
                db.refresh(row)
                logger.info("%s %s created", self.label, row.id)
                return row
            raise GenerationExhaustedError(f"Could not generate a unique id for prefix {prefix}")
        except SQLAlchemyError as e:
            db.rollback()
            logger.exception("Error adding %s", self.label.lower())
            raise StorageError(f"Error adding {self.label.lower()}") from e
        finally:
            db.close()

    def _update(self, entity_id: str, version: Optional[int], plan: UpdatePlan):
        """Apply ``plan`` to the current row as one versioned update.

        ``version`` is the caller's expected version; None skips the check
        (last writer wins). Returns the updated row.
        """
        model = self.model
        db = self.session_factory()
        try:
            current = db.get(model, entity_id)
            if current is None:
                raise self._not_found(entity_id)
            if version is not None and version != current.version:
                logger.warning(
                    "%s %s version conflict: expected %s, stored %s",
                    self.label, entity_id, version, current.version,
                )
                raise ConflictError(f"{self.label} was modified by another user")
            values, superseded = plan(current)

            changes = {getattr(model, name): value for name, value in values.items()}
            changes[model.version] = model.version + 1
            query = db.query(model).filter(model.id == entity_id)
            if version is not None:
                query = query.filter(model.version == version)
            if query.update(changes, synchronize_session=False) == 0:
                db.rollback()
                if version is not None:
                    raise ConflictError(f"{self.label} was modified by another user")
                raise self._not_found(entity_id)
            db.commit()
            row = db.get(model, entity_id, populate_existing=True)
            if row is None:
                raise self._not_found(entity_id)
        except SQLAlchemyError as e:
            db.rollback()
            logger.exception("Error updating %s %s", self.label.lower(), entity_id)
            raise StorageError(f"Error updating {self.label.lower()}") from e
        finally:
            db.close()

        logger.info("%s %s updated to version %s", self.label, row.id, row.version)
        # Only now is nothing referencing the old images
        self.blob_store.discard(superseded)
        return row

    def delete(self, entity_id: str) -> None:
        model = self.model
        db = self.session_factory()
        try:
            row = db.get(model, entity_id)
            if row is None:
                raise self._not_found(entity_id)
            refs = list(row.image_urls)
            db.delete(row)
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            logger.exception("Error deleting %s %s", self.label.lower(), entity_id)
            raise StorageError(f"Error deleting {self.label.lower()}") from e
        finally:
            db.close()

        logger.info("%s %s deleted", self.label, entity_id)
        self.blob_store.discard(refs)

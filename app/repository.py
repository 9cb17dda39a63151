import logging
import uuid
from typing import Any, Callable, List, Mapping, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.errors import NotFound, StorageError
from app.models import Article

logger = logging.getLogger(__name__)


def parse_article_id(article_id: str) -> str:
    """
    Normalise a client-supplied id to the stored UUID hex form.
    Anything that is not a UUID can never match a stored article and is reported as a storage error.
    """
    try:
        return uuid.UUID(article_id).hex
    except (ValueError, AttributeError, TypeError) as e:
        raise StorageError(f"Malformed article id {article_id!r}") from e


class ArticleRepository:
    """
    Article persistence on top of a SQLAlchemy session.

    Every operation is a single commit. SQLAlchemy failures are rolled back and
    re-raised as StorageError; a missing id raises NotFound; invalid field values
    raise ValidationError from the Article entity before anything is written.
    """

    def __init__(self, db: Session):
        self.db = db

    def list_newest_first(self) -> List[Article]:
        try:
            return self.db.query(Article).order_by(Article.created_at.desc()).all()
        except SQLAlchemyError as e:
            raise StorageError(f"Failed to list articles: {e}") from e

    def get(self, article_id: str) -> Article:
        key = parse_article_id(article_id)
        try:
            article = self.db.query(Article).filter(Article.id == key).first()
        except SQLAlchemyError as e:
            raise StorageError(f"Failed to load article {key}: {e}") from e

        if article is None:
            raise NotFound()
        return article

    def create(self, title: Any, content: Any) -> Article:
        article = Article.new(title=title, content=content)
        self._commit(f"insert article {article.id}", stage=lambda: self.db.add(article), reload=article)
        return article

    def update(self, article_id: str, changes: Mapping[str, Any]) -> Article:
        article = self.get(article_id)
        article.apply_changes(changes)
        self._commit(f"update article {article.id}", reload=article)
        return article

    def delete(self, article_id: str) -> None:
        article = self.get(article_id)
        self._commit(f"delete article {article.id}", stage=lambda: self.db.delete(article))

    def _commit(
        self,
        description: str,
        stage: Optional[Callable[[], None]] = None,
        reload: Optional[Article] = None,
    ) -> None:
        """
        Stage a change, commit it and optionally reload the affected row.
        Any database failure along the way is rolled back and raised as StorageError.
        """
        try:
            if stage is not None:
                stage()
            self.db.commit()
            if reload is not None:
                self.db.refresh(reload)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Failed to {description}: {e}")
            raise StorageError(f"Failed to {description}: {e}") from e

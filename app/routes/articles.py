import logging
from typing import Any, List, Type

from fastapi import APIRouter, Depends, Request
from pydantic import BaseModel
from pydantic import ValidationError as SchemaError
from sqlalchemy.orm import Session

from app.auth import require_admin
from app.database import get_db
from app.errors import InvalidRequestBody, StorageError, ValidationError
from app.repository import ArticleRepository
from app.schemas import ArticleCreate, ArticleResponse, ArticleUpdate, MessageResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/articles", tags=["articles"])


def json_body(model: Type[BaseModel]):
    """
    Dependency that parses the request body into `model`.
    Declared after require_admin on write routes, so an unauthenticated request gets
    401 whatever its body contains.
    """
    async def dependency(request: Request) -> Any:
        try:
            return model.model_validate(await request.json())
        except (ValueError, SchemaError) as e:
            logger.info(f"{request.method} {request.url.path} body rejected: {e}")
            raise InvalidRequestBody() from e

    return dependency


create_body = json_body(ArticleCreate)
update_body = json_body(ArticleUpdate)


@router.get("", response_model=List[ArticleResponse])
def list_articles(db: Session = Depends(get_db)):
    """Return every article, newest first."""
    try:
        articles = ArticleRepository(db).list_newest_first()
    except StorageError as e:
        logger.error(f"[/articles] {e}")
        raise StorageError("Error fetching articles") from e

    logger.info(f"[/articles] Returning {len(articles)} articles")
    return articles


@router.get("/{article_id}", response_model=ArticleResponse)
def get_article(article_id: str, db: Session = Depends(get_db)):
    """Return a single article. Unknown ids are 404; malformed ids are reported as a server error."""
    try:
        return ArticleRepository(db).get(article_id)
    except StorageError as e:
        logger.error(f"[/articles/{article_id}] {e}")
        raise StorageError("Error fetching article") from e


@router.post("", status_code=201, response_model=ArticleResponse, dependencies=[Depends(require_admin)])
def create_article(payload: ArticleCreate = Depends(create_body), db: Session = Depends(get_db)):
    """Create an article from {title, content}. Admin only."""
    try:
        article = ArticleRepository(db).create(title=payload.title, content=payload.content)
    except ValidationError as e:
        logger.info(f"[/articles] Create rejected: {e}")
        raise ValidationError("Error creating article") from e
    except StorageError as e:
        logger.error(f"[/articles] {e}")
        raise StorageError("Error creating article") from e

    logger.info(f"[/articles] Created article {article.id}")
    return article


@router.put("/{article_id}", response_model=ArticleResponse, dependencies=[Depends(require_admin)])
def update_article(
    article_id: str,
    payload: ArticleUpdate = Depends(update_body),
    db: Session = Depends(get_db),
):
    """
    Apply the supplied fields to an existing article. Admin only.
    Fields left out of the body keep their current values; the result must still be a valid article.
    """
    changes = payload.model_dump(exclude_unset=True)
    try:
        article = ArticleRepository(db).update(article_id, changes)
    except ValidationError as e:
        logger.info(f"[/articles/{article_id}] Update rejected: {e}")
        raise ValidationError("Error updating article") from e
    except StorageError as e:
        logger.error(f"[/articles/{article_id}] {e}")
        raise StorageError("Error updating article") from e

    logger.info(f"[/articles/{article_id}] Updated fields {sorted(changes)}")
    return article


@router.delete("/{article_id}", response_model=MessageResponse, dependencies=[Depends(require_admin)])
def delete_article(article_id: str, db: Session = Depends(get_db)):
    """Delete an article permanently. Admin only."""
    try:
        ArticleRepository(db).delete(article_id)
    except StorageError as e:
        logger.error(f"[/articles/{article_id}] {e}")
        raise StorageError("Error deleting article") from e

    logger.info(f"[/articles/{article_id}] Deleted")
    return {"message": "Article deleted successfully"}

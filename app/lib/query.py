from contextlib import contextmanager
from typing import Type, Any, Optional, List, Dict
from sqlalchemy import select, func
from sqlalchemy.orm import DeclarativeMeta
from sqlalchemy.exc import SQLAlchemyError
from app.extensions import db
import logging

logger = logging.getLogger(__name__)


@contextmanager
def session_scope(operation: str):
    """Yield the request session and always release it afterwards.

    Database errors are logged under `operation`, rolled back and re-raised.
    """
    try:
        with db.session() as session:
            yield session
    except SQLAlchemyError as e:
        logger.error(f"Database error in {operation}: {e}")
        db.session.rollback()
        raise
    finally:
        db.session.remove()


def build_select(
    model: Type[DeclarativeMeta],
    filters: Optional[List[Any]] = None,
    order_by: Optional[List[Any]] = None,
    eager_opts: Optional[List[Any]] = None,
):
    stmt = select(model)
    for cond in filters or []:
        stmt = stmt.where(cond)
    if eager_opts:
        stmt = stmt.options(*eager_opts)
    if order_by:
        stmt = stmt.order_by(*order_by)
    return stmt


def select_with_filter(
    model: Type[DeclarativeMeta],
    filters: Optional[List[Any]] = None,
    order_by: Optional[List[Any]] = None,
    eager_opts: Optional[List[Any]] = None,
):
    with session_scope("select_with_filter") as session:
        stmt = build_select(model, filters, order_by, eager_opts)
        return session.execute(stmt).unique().scalars().all()


def select_with_filter_one(
    model: Type[DeclarativeMeta],
    filters: Optional[List[Any]] = None,
    order_by: Optional[List[Any]] = None,
    eager_opts: Optional[List[Any]] = None,
):
    with session_scope("select_with_filter_one") as session:
        stmt = build_select(model, filters, order_by, eager_opts)
        return session.execute(stmt).unique().scalars().first()


def select_by_id(
    model: Type[DeclarativeMeta],
    pk: Any,
    eager_opts: Optional[List[Any]] = None,
):
    return select_with_filter_one(model, [model.id == pk], eager_opts=eager_opts)


def select_with_pagination(
    model: Type[DeclarativeMeta],
    page: int,
    per_page: int,
    filters: Optional[List[Any]] = None,
    order_by: Optional[List[Any]] = None,
    eager_opts: Optional[List[Any]] = None,
) -> Dict[str, Any]:
    with session_scope("select_with_pagination") as session:
        stmt = build_select(model, filters, order_by, eager_opts)
        total = session.execute(
            select(func.count()).select_from(stmt.order_by(None).subquery())
        ).scalar_one()
        items = (
            session.execute(stmt.offset((page - 1) * per_page).limit(per_page))
            .unique()
            .scalars()
            .all()
        )
        return {
            "total": total,
            "page": page,
            "per_page": per_page,
            "pages": (total + per_page - 1) // per_page,
            "items": items,
        }


def update_by_id(
    model: Type[DeclarativeMeta],
    pk: Any,
    data: Dict[str, Any],
):
    """Apply `data` to one row and return it loaded, or None when absent."""
    with session_scope("update_by_id") as session:
        instance = session.get(model, pk)
        if instance is None:
            return None
        for key, value in data.items():
            setattr(instance, key, value)
        session.commit()
        # detached after the scope closes, load the committed values now
        session.refresh(instance)
        return instance


def delete_by_id(
    model: Type[DeclarativeMeta],
    pk: Any,
) -> bool:
    with session_scope("delete_by_id") as session:
        instance = session.get(model, pk)
        if instance is None:
            return False
        session.delete(instance)
        session.commit()
        return True

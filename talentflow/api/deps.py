"""接口公共依赖"""

from fastapi import Request
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from talentflow.exceptions import Err
from talentflow.log import api_logger
from talentflow.orm import get_db
from talentflow.services import NetworkSimulator


def get_simulator(request: Request) -> NetworkSimulator:
    """FastAPI 依赖：应用级的模拟网络层"""
    return request.app.state.simulator


def commit_or_raise(db: Session) -> None:
    """提交事务，失败时回滚并抛出 PersistenceError"""
    try:
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        api_logger.error(f"提交失败，已回滚: {exc}")
        raise Err.persistence() from exc


__all__ = [
    "get_db",
    "get_simulator",
    "commit_or_raise",
]

"""Explicit wiring of the application's object graph."""

from __future__ import annotations

import sqlite3
from concurrent.futures import Executor
from functools import cached_property
from typing import Optional

from todoapp.application.usecases import (
    AddTodoUseCase,
    DeleteTodoUseCase,
    GetTodosUseCase,
    UpdateTodoUseCase,
)
from todoapp.config.settings import Settings
from todoapp.db.connection import open_connection
from todoapp.domain.repositories.todo_repo import TodoRepository
from todoapp.logging_config import get_logger
from todoapp.presentation.view_model import TodoViewModel
from todoapp.repositories.sqlite.todos_sqlite import TodosDaoSqlite
from todoapp.repositories.todo_repository import TodoRepositoryImpl
from todoapp.repositories.todos import TodosDao

logger = get_logger()


class AppContainer:
    """Builds and owns long-lived collaborators.

    The connection, DAO and repository are created once per container; a new
    :class:`TodoViewModel` is built for every screen that asks for one.
    """

    def __init__(self, settings: Settings) -> None:
        self.settings = settings

    @cached_property
    def connection(self) -> sqlite3.Connection:
        return open_connection(self.settings.db_path)

    @cached_property
    def todos_dao(self) -> TodosDao:
        dao = TodosDaoSqlite(self.connection)
        logger.info(
            "Todo store ready",
            extra={"db_path": str(self.settings.db_path), "total": dao.count()},
        )
        return dao

    @cached_property
    def repository(self) -> TodoRepository:
        return TodoRepositoryImpl(self.todos_dao)

    def view_model(self, executor: Optional[Executor] = None) -> TodoViewModel:
        repo = self.repository
        return TodoViewModel(
            GetTodosUseCase(repo),
            AddTodoUseCase(repo),
            UpdateTodoUseCase(repo),
            DeleteTodoUseCase(repo),
            executor=executor,
            workers=self.settings.workers,
        )

    def close(self) -> None:
        if "connection" in self.__dict__:
            self.connection.close()
            del self.__dict__["connection"]

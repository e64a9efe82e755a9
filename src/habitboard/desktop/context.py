"""Application context for dependency injection."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Optional

import flet as ft
from supabase import create_client

from ..config import BaseConfig
from ..domain.repositories import HabitStore
from ..errors import NotAuthenticatedError
from ..infra.database import bootstrap_database
from ..infra.repositories import SQLModelHabitStore, SupabaseHabitStore
from ..logging_config import get_logger
from ..services.auth import AuthProvider, AuthSession, LocalAuth, SupabaseAuth
from ..services.cache import QueryCache
from ..services.habits import HabitService

logger = get_logger(__name__)


@dataclass
class AppContext:
    """Centralized application context with services and state."""

    config: BaseConfig
    store: HabitStore
    auth: AuthProvider
    cache: QueryCache

    # Local backend only
    session_factory: Optional[Callable[[], Any]] = None

    page: Optional[ft.Page] = None
    dev_mode: bool = False
    current_user: Optional[AuthSession] = None
    _service: Optional[HabitService] = field(default=None, repr=False)

    def require_user_id(self) -> str:
        """Return the current user id or raise if not set."""

        if self.current_user is None:
            raise NotAuthenticatedError("User is not authenticated")
        return self.current_user.user_id

    def habit_service(self) -> HabitService:
        """Service scoped to the signed-in user; rebuilt when the user changes."""

        user_id = self.require_user_id()
        if self._service is None or self._service.user_id != user_id:
            self._service = HabitService(self.store, self.cache, user_id, config=self.config)
        return self._service

    def sign_in(self, session: AuthSession) -> None:
        self.cache.clear()
        self._service = None
        self.current_user = session
        logger.info("Session started", extra={"user_id": session.user_id})

    def sign_out(self) -> None:
        self.auth.sign_out()
        self.cache.clear()
        self._service = None
        self.current_user = None


def create_app_context(config: Optional[BaseConfig] = None) -> AppContext:
    """Create and initialize the application context for the configured backend."""

    if config is None:
        config = BaseConfig()

    cache = QueryCache(ttl=config.CACHE_TTL)

    if config.uses_supabase:
        client = create_client(config.SUPABASE_URL, config.SUPABASE_ANON_KEY)
        supabase_auth = SupabaseAuth(client)
        ctx = AppContext(
            config=config,
            store=SupabaseHabitStore(
                client,
                habits_table=config.HABITS_TABLE,
                completions_table=config.COMPLETIONS_TABLE,
            ),
            auth=supabase_auth,
            cache=cache,
            dev_mode=config.DEV_MODE,
        )
        restored = supabase_auth.current()
        if restored is not None:
            ctx.sign_in(restored)
        return ctx

    _engine, session_factory = bootstrap_database(config)
    local_auth = LocalAuth(session_factory)
    ctx = AppContext(
        config=config,
        store=SQLModelHabitStore(session_factory),
        auth=local_auth,
        cache=cache,
        session_factory=session_factory,
        dev_mode=config.DEV_MODE,
    )
    # Offline mode opens straight into the default local profile
    ctx.sign_in(local_auth.sign_in_local())
    return ctx

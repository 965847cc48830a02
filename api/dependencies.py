# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2025-12-07
# Description: dependencies.py
# -----------------------------------------------------------------------------
import logging
from dataclasses import dataclass
from typing import FrozenSet, Optional

from fastapi import Header, HTTPException

from api import AppContainer as container_module
from services.EmbeddingWorker import EmbeddingWorker
from services.HealthService import HealthService
from services.IndexingService import IndexingService
from services.MatchQueryService import MatchQueryService

logger = logging.getLogger(__name__)

ADMIN_ROLES = frozenset({"admin", "superadmin"})


@dataclass(frozen=True)
class Requester:
    """Caller identity as forwarded by the upstream gateway."""
    user_id: str
    roles: FrozenSet[str] = frozenset()

    @property
    def is_admin(self) -> bool:
        return bool(self.roles & ADMIN_ROLES)


def get_indexing_service() -> IndexingService:
    # use the singleton service from the container
    return container_module.app_container.indexing_service

def get_match_query_service() -> MatchQueryService:
    # use the singleton service from the container
    return container_module.app_container.match_query_service

def get_worker() -> EmbeddingWorker:
    return container_module.app_container.worker

def get_health_service() -> HealthService:
    # use the singleton service from the container
    return container_module.app_container.health_service

def get_requester(
    x_user_id: Optional[str] = Header(None),
    x_user_roles: Optional[str] = Header(None),
) -> Requester:
    user_id = (x_user_id or "").strip()
    if not user_id:
        logger.warning("Request without X-User-Id -> 401")
        raise HTTPException(status_code=401, detail="Not authenticated")

    roles = frozenset(r.strip().lower() for r in (x_user_roles or "").split(",") if r.strip())
    return Requester(user_id=user_id, roles=roles)

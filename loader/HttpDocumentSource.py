# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-10
# Description: HttpDocumentSource.py
# -----------------------------------------------------------------------------

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import httpx

import settings
from config.Config import Config
from document.DocumentData import CandidateData, JobData
from matching.MatchingErrors import TransientIndexingError
from utility.logging_utils import get_class_logger


class HttpDocumentSource:
    """
    Thin client for the jobs and profiles services' internal endpoints.
    """

    JOB_PATH = "/api/v1/jobs/{job_id}/internal"
    CANDIDATE_PATH = "/api/v1/profiles/candidates/{user_id}/internal"

    def __init__(
        self,
        cfg: Config,
        *,
        jobs_client: httpx.Client | None = None,
        profiles_client: httpx.Client | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self.cfg = cfg
        self.logger = logger or get_class_logger(self.__class__)

        if jobs_client is None or profiles_client is None:
            cfg.require("jobs_service_url", "profiles_service_url")

        self.jobs_client = jobs_client or httpx.Client(
            base_url=cfg.jobs_service_url,
            timeout=settings.HTTP_TIMEOUT_SECONDS,
        )
        self.profiles_client = profiles_client or httpx.Client(
            base_url=cfg.profiles_service_url,
            timeout=settings.HTTP_TIMEOUT_SECONDS,
        )
        self.logger.info(
            "HttpDocumentSource initialised (jobs=%s, profiles=%s)",
            self.jobs_client.base_url,
            self.profiles_client.base_url,
        )

    def _get_json(self, client: httpx.Client, path: str, what: str) -> Optional[Dict[str, Any]]:
        try:
            resp = client.get(path)
        except httpx.HTTPError as e:
            self.logger.error("Failed to fetch %s from %s: %s", what, client.base_url, e)
            raise TransientIndexingError(f"Failed to fetch {what}: {e}") from e

        if resp.status_code == 404:
            self.logger.info("%s not found (404)", what)
            return None

        try:
            resp.raise_for_status()
        except httpx.HTTPStatusError as e:
            self.logger.error("Fetching %s returned %d", what, resp.status_code)
            raise TransientIndexingError(f"Failed to fetch {what}: HTTP {resp.status_code}") from e

        return resp.json()

    def get_job(self, job_id: str) -> Optional[JobData]:
        data = self._get_json(self.jobs_client, self.JOB_PATH.format(job_id=job_id), f"job {job_id}")
        return JobData.from_dict(data) if data else None

    def get_candidate(self, user_id: str) -> Optional[CandidateData]:
        data = self._get_json(
            self.profiles_client,
            self.CANDIDATE_PATH.format(user_id=user_id),
            f"candidate {user_id}",
        )
        return CandidateData.from_dict(data) if data else None

    def close(self) -> None:
        self.jobs_client.close()
        self.profiles_client.close()

# flowsync/workflow_api.py
"""
Cliente HTTP de la API de persistencia de workflows.

Operaciones:
- get:     GET  /workflows/{id}
- update:  PUT  /workflows/{id}
- execute: POST /workflows/{id}/runs

Sin reintentos: cualquier error de red o status no 2xx se propaga al
llamador (requests.RequestException / requests.HTTPError).
"""
from __future__ import annotations

from typing import Optional

import requests

from .config import settings
from .models import WorkflowDTO
from .session import Session, bearer_headers


class WorkflowApi:
    """Blocking client bound to one session and organization."""

    def __init__(
        self,
        session: Optional[Session],
        organization_id: Optional[str],
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        http: Optional[requests.Session] = None,
    ):
        self.session = session
        self.organization_id = organization_id
        self.base_url = (base_url or settings.api_url).rstrip("/")
        self.timeout = settings.request_timeout if timeout is None else timeout
        self.http = http or requests.Session()

    def _url(self, workflow_id: str, suffix: str = "") -> str:
        return f"{self.base_url}/workflows/{workflow_id}{suffix}"

    def _request(self, method: str, url: str, **kwargs) -> requests.Response:
        response = self.http.request(
            method,
            url,
            headers=bearer_headers(self.session, self.organization_id),
            timeout=self.timeout,
            **kwargs,
        )
        response.raise_for_status()
        return response

    def get(self, workflow_id: str) -> WorkflowDTO:
        """Fetch the full workflow document."""
        response = self._request("GET", self._url(workflow_id))
        return WorkflowDTO.model_validate(response.json())

    def update(self, workflow_id: str, workflow: WorkflowDTO) -> None:
        """Replace the stored workflow with `workflow`."""
        self._request("PUT", self._url(workflow_id), json=workflow.to_payload())

    def execute(self, workflow_id: str) -> None:
        """Trigger a run. Progress arrives later through the push channel."""
        self._request("POST", self._url(workflow_id, "/runs"))

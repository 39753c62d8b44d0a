"""Reports API client."""

from __future__ import annotations

import time
from typing import Any, List, Optional

import httpx
from pydantic import ValidationError

from civicsync.config import Settings
from civicsync.errors import AssignmentError, ReportFetchError
from civicsync.models import Report, ReportStats
from civicsync.reports.export import parse_reports, unwrap
from civicsync.utils.logging import get_logger


logger = get_logger(__name__)


class ReportsClient:
    """Thin wrapper over the portal's /reports endpoints.

    A caller-supplied ``httpx.Client`` is used as-is and never closed here;
    otherwise the client owns one built from settings.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        client: Optional[httpx.Client] = None,
    ) -> None:
        self.settings = settings or Settings()
        self._owns_client = client is None
        self._client = client or httpx.Client(timeout=self.settings.api_timeout_seconds)

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> "ReportsClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def list_reports(self) -> List[Report]:
        """Fetch the full report collection."""
        return self._fetch_reports(self.settings.reports_url())

    def list_my_reports(self) -> List[Report]:
        """Fetch reports submitted by the authenticated user."""
        return self._fetch_reports(self.settings.reports_url("/my-reports"))

    def get_stats(self) -> ReportStats:
        """Fetch the server-side summary totals."""
        payload = self._get_json(self.settings.reports_url("/stats"))
        data = unwrap(payload)
        if not isinstance(data, dict):
            raise ReportFetchError("stats payload is not an object")
        try:
            return ReportStats.model_validate(data)
        except ValidationError as exc:
            raise ReportFetchError(f"invalid stats payload: {exc}") from exc

    def assign_department(
        self,
        report_id: str,
        department: str,
        timeout: Optional[float] = None,
    ) -> None:
        """Persist a department reassignment. Raises AssignmentError on failure."""
        url = self.settings.reports_url(f"/{report_id}/assign")
        self._put(report_id, url, {"department": department}, timeout=timeout)
        logger.info("api.assign.ok report_id=%s department=%s", report_id, department)

    def update_status(self, report_id: str, status: str) -> None:
        """Persist a status change. Raises AssignmentError on failure."""
        url = self.settings.reports_url(f"/{report_id}")
        self._put(report_id, url, {"status": status})
        logger.info("api.status.ok report_id=%s status=%s", report_id, status)

    def _fetch_reports(self, url: str) -> List[Report]:
        payload = self._get_json(url)
        items = unwrap(payload)
        if not isinstance(items, list):
            raise ReportFetchError("report payload is not a list")

        reports = parse_reports(items)
        logger.info("api.reports.fetched url=%s count=%s", url, len(reports))
        return reports

    def _get_json(self, url: str) -> Any:
        try:
            response = _get_with_retry(
                self._client,
                url,
                headers=self._headers(),
                retries=self.settings.api_max_retries,
            )
        except httpx.RequestError as exc:
            raise ReportFetchError(f"request failed: {exc}") from exc

        if response.is_error:
            raise ReportFetchError(
                f"GET {url} returned {response.status_code}",
                status_code=response.status_code,
            )
        try:
            return response.json()
        except ValueError as exc:
            raise ReportFetchError(f"GET {url} returned invalid JSON") from exc

    def _put(
        self,
        report_id: str,
        url: str,
        body: dict[str, Any],
        timeout: Optional[float] = None,
    ) -> None:
        kwargs: dict[str, Any] = {"json": body, "headers": self._headers()}
        if timeout is not None:
            kwargs["timeout"] = timeout
        try:
            response = self._client.put(url, **kwargs)
        except httpx.TimeoutException as exc:
            raise AssignmentError(report_id, "request timed out") from exc
        except httpx.RequestError as exc:
            raise AssignmentError(report_id, f"request failed: {exc}") from exc

        if response.is_error:
            raise AssignmentError(
                report_id,
                f"PUT {url} returned {response.status_code}",
                status_code=response.status_code,
            )

    def _headers(self) -> dict[str, str]:
        if self.settings.api_token:
            return {"Authorization": f"Bearer {self.settings.api_token}"}
        return {}


def _get_with_retry(
    client: httpx.Client,
    url: str,
    headers: Optional[dict[str, str]] = None,
    retries: int = 3,
) -> httpx.Response:
    """GET with simple retry and backoff."""
    attempt = 0
    while True:
        try:
            response = client.get(url, headers=headers)
            if response.status_code >= 500 and attempt < retries:
                attempt += 1
                time.sleep(min(2**attempt, 8))
                continue
            return response
        except httpx.RequestError:
            attempt += 1
            if attempt > retries:
                raise
            time.sleep(min(2**attempt, 8))

# src/tasker/bugreport/reporter.py

from __future__ import annotations

import logging
import platform
import threading
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

import httpx

logger = logging.getLogger(__name__)

_MAX_DETAIL_CHARS = 500


@dataclass(frozen=True, slots=True)
class EnvironmentInfo:
    app_name: str
    app_version: str
    build_number: str
    os_version: str

    @classmethod
    def from_config(cls, config: Any) -> EnvironmentInfo:
        return cls(
            app_name=str(getattr(config, "app_name", "Tasker") or "Tasker"),
            app_version=str(getattr(config, "app_version", "N/A") or "N/A"),
            build_number=str(getattr(config, "build_number", "N/A") or "N/A"),
            os_version=platform.platform(),
        )


@dataclass(frozen=True, slots=True)
class ReportOutcome:
    """User-facing acknowledgment of a submission attempt."""

    ok: bool
    title: str
    message: str


def build_payload(description: str, env: EnvironmentInfo) -> dict[str, str]:
    return {
        "description": description,
        "appName": env.app_name,
        "appVersion": env.app_version,
        "buildNumber": env.build_number,
        "osVersion": env.os_version,
    }


def friendly_transport_error(exc: Exception) -> str:
    if isinstance(exc, httpx.TimeoutException):
        return "Failed to send report: the server did not respond in time."
    if isinstance(exc, httpx.ConnectError):
        return "Failed to send report: could not connect to the server."
    return f"Failed to send report: {exc}"


class BugReporter:
    """
    Sends bug reports as a JSON POST to a fixed endpoint.

    One attempt per report: no retry, no queueing. `send` never raises; every
    failure is mapped to a ReportOutcome the UI can show as-is.
    """

    def __init__(
        self,
        endpoint: str,
        *,
        client: httpx.Client | None = None,
        timeout: float = 10.0,
    ) -> None:
        self._endpoint = (endpoint or "").strip()
        self._client = client
        self._timeout = timeout

    @property
    def configured(self) -> bool:
        return bool(self._endpoint)

    def send(self, description: str, env: EnvironmentInfo) -> ReportOutcome:
        if not self.configured:
            return ReportOutcome(False, "Configuration Error", "Bug report endpoint is not configured.")

        if not (description or "").strip():
            return ReportOutcome(False, "Empty Report", "Please enter a description for the bug report.")

        payload = build_payload(description, env)
        try:
            if self._client is not None:
                resp = self._client.post(self._endpoint, json=payload, timeout=self._timeout)
            else:
                with httpx.Client(timeout=self._timeout) as client:
                    resp = client.post(self._endpoint, json=payload)
        except httpx.HTTPError as e:
            logger.warning("Bug report transport error: %s", e)
            return ReportOutcome(False, "Error", friendly_transport_error(e))

        if not resp.is_success:
            message = f"Server returned an error (Status: {resp.status_code})."
            details = resp.text.strip()
            if details:
                message += f"\nDetails: {details[:_MAX_DETAIL_CHARS]}"
            logger.warning("Bug report rejected status=%s", resp.status_code)
            return ReportOutcome(False, "Error", message)

        logger.info("Bug report submitted status=%s", resp.status_code)
        return ReportOutcome(True, "Report Sent", "Thank you! Your bug report has been submitted successfully.")

    def send_in_background(
        self,
        description: str,
        env: EnvironmentInfo,
        on_done: Callable[[ReportOutcome], None] | None = None,
    ) -> threading.Thread:
        def _run() -> None:
            outcome = self.send(description, env)
            if on_done is None:
                return
            try:
                on_done(outcome)
            except Exception:
                logger.exception("Bug report callback failed.")

        t = threading.Thread(target=_run, name="bug-report", daemon=True)
        t.start()
        return t

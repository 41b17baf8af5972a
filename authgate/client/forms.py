"""
AUTHGATE Client - Form State

A form owns its field values, the error messages from its last failed
submission and a processing flag that is true exactly while a submission
is in flight.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional

import httpx

logger = logging.getLogger(__name__)


@dataclass
class Visit:
    """Outcome of one form submission."""

    status_code: int
    location: Optional[str] = None
    errors: Dict[str, str] = field(default_factory=dict)

    @property
    def successful(self) -> bool:
        return not self.errors


class Form:
    """Field values, per-field errors and the processing flag of one form."""

    def __init__(self, defaults: Dict[str, Any], http: httpx.AsyncClient):
        self.defaults = dict(defaults)
        self.data: Dict[str, Any] = dict(defaults)
        self.errors: Dict[str, str] = {}
        self.processing = False
        self._http = http

    @property
    def has_errors(self) -> bool:
        return bool(self.errors)

    def set_data(self, name: str, value: Any) -> None:
        if name not in self.data:
            raise KeyError(f"Unknown form field: {name}")
        self.data[name] = value

    def reset(self, *fields: str) -> None:
        """Restore fields to their defaults. No arguments resets every field."""
        for name in fields or tuple(self.defaults):
            self.data[name] = self.defaults[name]

    def set_error(self, name: str, message: str) -> None:
        self.errors[name] = message

    def clear_errors(self, *fields: str) -> None:
        if not fields:
            self.errors.clear()
            return
        for name in fields:
            self.errors.pop(name, None)

    async def post(
        self,
        url: str,
        on_success: Optional[Callable[[Visit], None]] = None,
        on_error: Optional[Callable[[Dict[str, str]], None]] = None,
        on_finish: Optional[Callable[[], None]] = None,
    ) -> Visit:
        """
        Submit the form data to ``url``.

        A 422 answer fills ``errors``; a redirect or any other 2xx is a success.
        Other statuses raise ``httpx.HTTPStatusError`` and transport failures
        raise ``httpx.HTTPError``. Whatever the outcome, ``processing`` is back
        to False and ``on_finish`` has run before this returns or raises.
        """
        self.processing = True
        self.clear_errors()
        try:
            response = await self._http.post(
                url,
                json=self.data,
                headers={"Accept": "application/json"},
                follow_redirects=False,
            )
            visit = self._visit_from(response)
            if visit.errors:
                self.errors = dict(visit.errors)
                if on_error is not None:
                    on_error(self.errors)
            elif on_success is not None:
                on_success(visit)
            return visit
        except httpx.HTTPError as e:
            logger.warning(f"Form submission to {url} failed: {type(e).__name__}")
            raise
        finally:
            self.processing = False
            if on_finish is not None:
                on_finish()

    @staticmethod
    def _visit_from(response: httpx.Response) -> Visit:
        if response.status_code == httpx.codes.UNPROCESSABLE_ENTITY:
            body = response.json()
            errors = body.get("errors") or {}
            return Visit(
                status_code=response.status_code,
                errors={str(name): str(message) for name, message in errors.items()},
            )

        if response.is_redirect:
            return Visit(
                status_code=response.status_code,
                location=response.headers["location"],
            )

        response.raise_for_status()
        return Visit(status_code=response.status_code)

"""
Error types raised by the holders app and the unified API exception handler.

The aggregate, repository and services raise :class:`ClinicError`
subclasses and never log or retry; :func:`api_exception_handler` turns
them (and DRF's own exceptions) into the ``{'ok': False, 'error': ...}``
envelope returned by every endpoint.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Iterable, List, Optional

from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler

logger = logging.getLogger(__name__)


class ClinicError(Exception):
    """Base class for all clinic errors."""


class NotFound(ClinicError):
    """A requested holder or pet does not exist."""


class HolderNotFound(NotFound):
    def __init__(self, holder_id: Any) -> None:
        super().__init__(f"holder {holder_id} not found")
        self.holder_id = holder_id


class PetNotFound(NotFound):
    def __init__(self, pet_id: Any, holder_id: Any = None) -> None:
        super().__init__(f"pet {pet_id} not found for holder {holder_id}")
        self.pet_id = pet_id
        self.holder_id = holder_id


@dataclass(frozen=True)
class FieldError:
    field: str
    code: str
    message: str = ''

    def as_dict(self) -> dict:
        return {'field': self.field, 'code': self.code, 'message': self.message}


class ValidationFailure(ClinicError):
    """Input was rejected before anything was saved.

    Carries one :class:`FieldError` per offending field and reason.
    """

    def __init__(self, errors: Iterable[FieldError]) -> None:
        self.errors: List[FieldError] = list(errors)
        super().__init__('; '.join(f"{e.field}: {e.code}" for e in self.errors))

    @classmethod
    def single(cls, field: str, code: str, message: str = '') -> 'ValidationFailure':
        return cls([FieldError(field, code, message)])

    @classmethod
    def from_serializer_errors(cls, errors: dict, prefix: Optional[str] = None) -> 'ValidationFailure':
        """Flatten DRF ``serializer.errors`` into field errors, keeping codes."""
        out: List[FieldError] = []
        for name, details in errors.items():
            field_name = f"{prefix}.{name}" if prefix else name
            if isinstance(details, dict):
                out.extend(cls.from_serializer_errors(details, prefix=field_name).errors)
                continue
            if not isinstance(details, (list, tuple)):
                details = [details]
            for detail in details:
                out.append(FieldError(field_name, getattr(detail, 'code', None) or 'invalid', str(detail)))
        return cls(out)


class PersistenceFailure(ClinicError):
    """The database refused to commit; nothing from the attempt was kept."""


def api_exception_handler(exc, context):
    if isinstance(exc, NotFound):
        return Response({'ok': False, 'error': {'code': 'not_found', 'message': str(exc)}},
                        status=status.HTTP_404_NOT_FOUND)
    if isinstance(exc, ValidationFailure):
        return Response({'ok': False, 'error': {'code': 'validation_failed',
                                                'fields': [e.as_dict() for e in exc.errors]}},
                        status=status.HTTP_400_BAD_REQUEST)
    if isinstance(exc, PersistenceFailure):
        logger.error("persistence failure in %s: %s", _request_path(context), exc, exc_info=exc)
        return Response({'ok': False, 'error': {'code': 'persistence_failed', 'message': 'could not save changes'}},
                        status=status.HTTP_500_INTERNAL_SERVER_ERROR)
    resp = drf_exception_handler(exc, context)
    if resp is None:
        logger.exception("unhandled error in %s", _request_path(context), exc_info=exc)
        return Response({'ok': False, 'error': {'code': 'server_error', 'message': str(exc)}}, status=500)
    # normalize response
    detail = None
    if isinstance(resp.data, dict):
        detail = resp.data.get('detail') or resp.data
    else:
        detail = str(resp.data)
    return Response({'ok': False, 'error': {'code': 'api_error', 'message': detail}}, status=resp.status_code)


def _request_path(context) -> str:
    request = (context or {}).get('request')
    return getattr(request, 'path', '?')

"""
API Exceptions - the error taxonomy raised by services.

Services raise these; the views never catch them. DRF hands them to
``marketplace_exception_handler``, which renders every error as:

    {"success": false, "data": null, "message": "...", "error_code": "...",
     "errors": [...], "meta": {"timestamp": "...", ...}}

Classes:
- InvalidInputError (400 VALIDATION_ERROR)
- ResourceNotFoundError (404 NOT_FOUND)
- PermissionDeniedError (403 PERMISSION_DENIED)
- ResourceAlreadyExistsError (400 ALREADY_EXISTS)
- BusinessRuleViolationError (400 BUSINESS_RULE_VIOLATION)
"""

import logging
from typing import Any, Dict, List

from django.core.exceptions import PermissionDenied as DjangoPermissionDenied
from django.http import Http404
from django.utils import timezone
from django.utils.translation import gettext_lazy as _

from rest_framework import status
from rest_framework.exceptions import APIException, ValidationError
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


# =============================================================================
# BASE EXCEPTIONS
# =============================================================================

class MarketplaceAPIException(APIException):
    """
    Base of the taxonomy.

    ``extra_data`` is merged into the ``meta`` of the error response.
    """

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = _("An unexpected error occurred.")
    default_code = "ERROR"

    def __init__(self, detail: str = None, code: str = None, extra_data: Dict = None):
        self.error_code = code or self.default_code
        self.extra_data = extra_data or {}
        super().__init__(detail=str(self.default_detail) if detail is None else detail, code=code)


# =============================================================================
# RESOURCE EXCEPTIONS
# =============================================================================

class ResourceNotFoundError(MarketplaceAPIException):
    """Raised when a requested resource doesn't exist."""

    status_code = status.HTTP_404_NOT_FOUND
    default_detail = _("The requested resource was not found.")
    default_code = "NOT_FOUND"

    def __init__(self, resource_type: str = None, resource_id: Any = None, **kwargs):
        extra_data = kwargs.pop('extra_data', {})
        detail = kwargs.pop('detail', None)

        if resource_type:
            extra_data['resource_type'] = resource_type
            if detail is None:
                detail = f"{resource_type} not found"
        if resource_id is not None:
            extra_data['resource_id'] = str(resource_id)

        super().__init__(detail=detail, extra_data=extra_data, **kwargs)


class ResourceAlreadyExistsError(MarketplaceAPIException):
    """Raised when creating a resource that already exists (HTTP 400)."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = _("This resource already exists.")
    default_code = "ALREADY_EXISTS"


# =============================================================================
# PERMISSION EXCEPTIONS
# =============================================================================

class PermissionDeniedError(MarketplaceAPIException):
    """Raised when user lacks permission for an action."""

    status_code = status.HTTP_403_FORBIDDEN
    default_detail = _("You do not have permission to perform this action.")
    default_code = "PERMISSION_DENIED"


# =============================================================================
# VALIDATION EXCEPTIONS
# =============================================================================

class InvalidInputError(MarketplaceAPIException):
    """Raised for general input validation errors."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = _("Invalid input provided.")
    default_code = "VALIDATION_ERROR"

    def __init__(self, detail: str = None, field: str = None, **kwargs):
        extra_data = kwargs.pop('extra_data', {})
        if field:
            extra_data['field'] = field
        super().__init__(detail=detail, extra_data=extra_data, **kwargs)


class BusinessRuleViolationError(MarketplaceAPIException):
    """Raised when a business rule is violated."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = _("This action violates a business rule.")
    default_code = "BUSINESS_RULE_VIOLATION"

    def __init__(self, detail: str = None, rule_name: str = None, **kwargs):
        extra_data = kwargs.pop('extra_data', {})
        if rule_name:
            extra_data['rule'] = rule_name
        super().__init__(detail=detail, extra_data=extra_data, **kwargs)


# =============================================================================
# EXCEPTION HANDLER
# =============================================================================

# Django exceptions DRF converts before building its response
DJANGO_ERROR_CODES = (
    (Http404, 'NOT_FOUND'),
    (DjangoPermissionDenied, 'PERMISSION_DENIED'),
)


def error_envelope(message: str, error_code: str, errors=None, meta=None) -> Dict:
    """Body of every error response."""
    return {
        'success': False,
        'data': None,
        'message': message,
        'error_code': error_code,
        'errors': errors or [],
        'meta': {'timestamp': timezone.now().isoformat(), **(meta or {})},
    }


def _validation_errors(detail) -> List[Dict]:
    if isinstance(detail, dict):
        return [
            {'field': field, 'messages': [str(m) for m in (msgs if isinstance(msgs, list) else [msgs])]}
            for field, msgs in detail.items()
        ]
    return [{'field': 'non_field_errors', 'messages': [str(m) for m in detail]}]


def marketplace_exception_handler(exc, context):
    """
    DRF ``EXCEPTION_HANDLER`` producing the error envelope.

    Service exceptions carry their own code and meta. Serializer errors are
    listed per field. Anything DRF does not handle is logged and returned
    as a 500 "Server error".
    """
    response = exception_handler(exc, context)

    if response is None:
        view = context.get('view')
        logger.exception(
            f"Unhandled exception in {view.__class__.__name__ if view else 'view'}: {exc}"
        )
        return Response(
            error_envelope('Server error', 'INTERNAL_ERROR'),
            status=status.HTTP_500_INTERNAL_SERVER_ERROR
        )

    if isinstance(exc, MarketplaceAPIException):
        body = error_envelope(str(exc.detail), exc.error_code, meta=exc.extra_data)
    elif isinstance(exc, ValidationError):
        errors = _validation_errors(exc.detail)
        if isinstance(exc.detail, dict) or not exc.detail:
            message = 'Validation failed.'
        else:
            message = str(exc.detail[0])
        body = error_envelope(message, 'VALIDATION_ERROR', errors=errors)
    else:
        error_code = next(
            (code for exc_type, code in DJANGO_ERROR_CODES if isinstance(exc, exc_type)),
            str(getattr(exc, 'default_code', 'error')).upper()
        )
        body = error_envelope(str(response.data.get('detail', exc)), error_code)

    if response.status_code >= 500:
        logger.error(f"API error {response.status_code}: {body['message']}")

    response.data = body
    return response

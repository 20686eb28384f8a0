"""
Core ViewSets - Base classes for service-backed API endpoints.

Viewsets in this project are thin: they translate the request into service
arguments and the ServiceResult into a response. This module provides the
shared plumbing for that translation:

- ServiceViewSet: lookup raising ResourceNotFoundError, request payload and
  upload extraction, access logging

USAGE:
    from core.viewsets import ServiceViewSet

    class ProjectViewSet(ServiceViewSet):
        queryset = Project.objects.all()
        resource_name = 'Project'
        list_fields = ('skills',)
"""

import logging
from typing import Any, Dict, List, Sequence

from rest_framework import viewsets
from rest_framework.request import Request

from .exceptions import ResourceNotFoundError

logger = logging.getLogger(__name__)


def field_value(data, name: str, *aliases: str, default=None):
    """
    Read a request field published in camelCase, accepting snake_case aliases.

    Works on ``request.data`` and ``request.query_params`` alike. The first
    name present wins.
    """
    for key in (name,) + aliases:
        if key in data:
            return data.get(key)
    return default


class ServiceViewSet(viewsets.GenericViewSet):
    """
    GenericViewSet whose writes are delegated to a service class.

    Attributes:
        resource_name: Used in "<resource_name> not found" errors
        list_fields: Request fields that may be repeated and are kept as lists
        upload_field: Multipart field carrying file uploads
    """

    resource_name: str = 'Resource'
    list_fields: Sequence[str] = ()
    upload_field: str = 'attachments'

    def initial(self, request: Request, *args, **kwargs) -> None:
        super().initial(request, *args, **kwargs)
        logger.debug(
            f"API {request.method} {request.path} "
            f"user={getattr(request.user, 'pk', None)} action={self.action}"
        )

    def get_object(self):
        """Look up by primary key, raising ResourceNotFoundError when absent."""
        lookup_url_kwarg = self.lookup_url_kwarg or self.lookup_field
        value = self.kwargs[lookup_url_kwarg]
        queryset = self.filter_queryset(self.get_queryset())
        try:
            obj = queryset.get(**{self.lookup_field: value})
        except (queryset.model.DoesNotExist, ValueError, TypeError):
            raise ResourceNotFoundError(self.resource_name, value)
        self.check_object_permissions(self.request, obj)
        return obj

    def request_payload(self, request: Request) -> Dict[str, Any]:
        """
        Flatten request data into a plain dict.

        Multipart and form data arrive as a QueryDict; fields listed in
        ``list_fields`` keep every submitted value, the rest keep the last.
        Uploads are excluded.
        """
        data = request.data
        if not hasattr(data, 'getlist'):
            return {k: v for k, v in data.items() if k != self.upload_field}

        payload = {}
        for key in data.keys():
            if key == self.upload_field:
                continue
            if key in self.list_fields:
                payload[key] = data.getlist(key)
            else:
                payload[key] = data.get(key)
        return payload

    def uploaded_files(self, request: Request) -> List:
        return request.FILES.getlist(self.upload_field)

# api/exceptions.py
import logging

from django.db import DatabaseError
from django.utils.translation import gettext_lazy as _
from rest_framework import status
from rest_framework.exceptions import ValidationError
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


def _first_message(detail):
    if isinstance(detail, dict):
        for value in detail.values():
            return _first_message(value)
        return ''
    if isinstance(detail, (list, tuple)):
        return _first_message(detail[0]) if detail else ''
    return str(detail)


def error_exception_handler(exc, context):
    """
    Devuelve todos los errores como {"error": "<mensaje>"}.
    Los errores de validación conservan el detalle por campo en 'fields'.
    """
    response = exception_handler(exc, context)

    if response is None:
        view = context.get('view')
        view_name = view.__class__.__name__ if view else 'N/A'
        logger.error(f"[API] Error 500 inesperado en {view_name}: {exc}", exc_info=True)
        if isinstance(exc, DatabaseError):
            message = _("Error interno al acceder a los datos.")
        else:
            message = _("Error interno")
        return Response({"error": str(message)}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)

    if isinstance(exc, ValidationError):
        response.data = {"error": _first_message(exc.detail), "fields": exc.detail}
    else:
        response.data = {"error": _first_message(response.data.get('detail', response.data) if isinstance(response.data, dict) else response.data)}
    return response

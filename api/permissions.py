# api/permissions.py
from rest_framework.permissions import BasePermission, IsAuthenticated, AllowAny
from django.utils.translation import gettext_lazy as _

# ==============================================================================
# ------------------------- PERMISOS PERSONALIZADOS --------------------------
# ==============================================================================


def _viewer(request):
    user = getattr(request, 'user', None)
    if not user or not getattr(user, 'is_authenticated', False):
        return None
    return user


class IsAdminViewer(BasePermission):
    """Solo el administrador (rol 'Administrador' o el admin integrado)."""
    message = _("Necesitas ser Administrador para esta acción.")

    def has_permission(self, request, view):
        viewer = _viewer(request)
        return bool(viewer and viewer.is_admin)


class CanAccessDashboard(BasePermission):
    """Tableros internos: administrador y miembros del equipo."""
    message = _("No tienes permiso para acceder al dashboard.")

    def has_permission(self, request, view):
        viewer = _viewer(request)
        return bool(viewer and viewer.is_staff)


class IsClientViewer(BasePermission):
    message = _("Solo los clientes pueden acceder al portal.")

    def has_permission(self, request, view):
        viewer = _viewer(request)
        return bool(viewer and viewer.is_client)


class IsAdminOrReadOnly(BasePermission):
    """Lectura para cualquier usuario autenticado, escritura solo para el administrador."""
    message = _("Necesitas ser Administrador para modificar estos datos.")

    def has_permission(self, request, view):
        viewer = _viewer(request)
        if not viewer:
            return False
        if request.method in ('GET', 'HEAD', 'OPTIONS'):
            return True
        return viewer.is_admin


__all__ = [
    'AllowAny', 'IsAuthenticated', 'IsAdminViewer', 'CanAccessDashboard',
    'IsClientViewer', 'IsAdminOrReadOnly',
]

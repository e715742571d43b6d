# api/views/team.py
import logging

from django_filters.rest_framework import DjangoFilterBackend
from rest_framework import viewsets

from ..models import TeamMember
from ..permissions import CanAccessDashboard, IsAdminViewer
from ..serializers.team import TeamMemberSerializer
from ..visibility import visible_team_members

logger = logging.getLogger(__name__)


class TeamMemberViewSet(viewsets.ModelViewSet):
    """
    ViewSet para gestionar Miembros del Equipo.
    Se publica dos veces, como 'team' y como 'users'.
    """
    serializer_class = TeamMemberSerializer
    filter_backends = [DjangoFilterBackend]
    filterset_fields = {
        'role': ['exact'],
        'status': ['exact'],
        'name': ['icontains'],
        'email': ['exact'],
    }

    def get_permissions(self):
        """ Permisos: lectura para el equipo, escritura solo administrador. """
        if self.action in ['list', 'retrieve']:
            self.permission_classes = [CanAccessDashboard]
        else:
            self.permission_classes = [IsAdminViewer]
        return super().get_permissions()

    def get_queryset(self):
        base_qs = TeamMember.objects.all()
        viewer = self.request.user
        if viewer is None:
            return base_qs.none()
        if viewer.is_admin:
            return base_qs
        ids = [member.pk for member in visible_team_members(viewer, base_qs.only('id', 'name'))]
        return base_qs.filter(pk__in=ids)

    def perform_create(self, serializer):
        member = serializer.save()
        logger.info(f"[TeamMemberViewSet] Miembro '{member.name}' ({member.role}) creado.")

    def perform_destroy(self, instance):
        # Las tareas asignadas conservan el texto de 'responsible' y pasan a etiqueta
        logger.info(f"[TeamMemberViewSet] Miembro '{instance.name}' (id {instance.pk}) eliminado.")
        instance.delete()

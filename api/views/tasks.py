# api/views/tasks.py
import logging

from django.shortcuts import get_object_or_404
from django_filters import rest_framework as filters
from rest_framework import permissions, viewsets

from ..models import Task
from ..permissions import IsAdminViewer
from ..scoping import scope_clients, scope_tasks
from ..serializers.tasks import TaskSerializer

logger = logging.getLogger(__name__)


class TaskFilter(filters.FilterSet):
    client = filters.NumberFilter(field_name='client_id')
    responsible = filters.CharFilter(field_name='responsible', lookup_expr='iexact')

    class Meta:
        model = Task
        fields = ['client', 'status', 'category', 'responsible']


class TaskViewSet(viewsets.ModelViewSet):
    """
    ViewSet para gestionar Tareas. Se monta también anidado bajo
    /clients/{client_pk}/tasks/.
    """
    serializer_class = TaskSerializer
    filter_backends = [filters.DjangoFilterBackend]
    filterset_class = TaskFilter

    def get_permissions(self):
        """ Crear y borrar: administrador. Leer y editar: quien pueda ver la tarea. """
        if self.action in ['create', 'destroy']:
            self.permission_classes = [IsAdminViewer]
        else:
            self.permission_classes = [permissions.IsAuthenticated]
        return super().get_permissions()

    def get_client(self):
        client_pk = self.kwargs.get('client_pk')
        if client_pk is None:
            return None
        if not hasattr(self, '_client'):
            self._client = get_object_or_404(scope_clients(self.request.user), pk=client_pk)
        return self._client

    def get_serializer_context(self):
        context = super().get_serializer_context()
        context['client'] = self.get_client()
        return context

    def get_queryset(self):
        base_qs = Task.objects.select_related('client', 'assignee')
        client = self.get_client()
        if client is not None:
            base_qs = base_qs.filter(client=client)
        return scope_tasks(self.request.user, base_qs)

    def perform_create(self, serializer):
        client = self.get_client()
        if client is not None:
            task = serializer.save(client=client)
        else:
            task = serializer.save()
        logger.info(f"[TaskViewSet] Tarea {task.pk} creada para cliente {task.client_id} por {self.request.user}.")

    def perform_destroy(self, instance):
        logger.info(f"[TaskViewSet] Tarea {instance.pk} eliminada por {self.request.user}.")
        instance.delete()

# api/serializers/tasks.py
"""
Serializers para las tareas de los clientes.
"""
import logging

from django.utils import timezone
from django.utils.translation import gettext_lazy as _
from rest_framework import serializers
from rest_framework.exceptions import ValidationError

from ..models import Client, Task
from ..roles import Responsible
from ..visibility import apply_status_progress

logger = logging.getLogger(__name__)


class TaskSerializer(serializers.ModelSerializer):
    """ Serializer para LEER/ESCRIBIR tareas. """
    # Opcional en el cuerpo cuando la ruta anidada (clients/{id}/tasks/) ya fija el cliente
    client = serializers.PrimaryKeyRelatedField(queryset=Client.objects.all(), required=False)
    client_company = serializers.CharField(source='client.company', read_only=True)
    responsible = serializers.CharField(max_length=150, required=False, allow_blank=True)
    assignee_name = serializers.CharField(source='assignee.name', read_only=True, allow_null=True)
    assignee_kind = serializers.CharField(read_only=True)
    is_overdue = serializers.SerializerMethodField()

    class Meta:
        model = Task
        fields = [
            'id', 'client', 'client_company', 'title', 'description', 'category',
            'status', 'progress', 'responsible', 'assignee', 'assignee_name',
            'assignee_kind', 'deadline', 'comments', 'attachments',
            'client_feedback', 'is_overdue', 'created_at',
        ]
        read_only_fields = ['id', 'client_company', 'assignee', 'assignee_name', 'assignee_kind', 'created_at']

    def get_is_overdue(self, obj):
        return obj.is_overdue(timezone.localdate())

    def validate_responsible(self, value):
        return value.strip() or Responsible.UNASSIGNED

    def validate_client(self, value):
        if self.instance is not None and value != self.instance.client:
            raise ValidationError(_("No se puede mover una tarea a otro cliente."))
        return value

    def validate(self, attrs):
        if self.instance is None and 'client' not in attrs and self.context.get('client') is None:
            raise ValidationError({'client': [_("Este campo es requerido.")]})
        if 'status' in attrs and 'progress' not in attrs:
            adjusted = apply_status_progress(attrs)
            if 'progress' in adjusted:
                task_ref = self.instance.pk if self.instance is not None else 'nueva'
                logger.info(f"[TaskSerializer] Tarea {task_ref}: estado '{attrs['status']}' fija el progreso en {adjusted['progress']}.")
            attrs = adjusted
        return attrs

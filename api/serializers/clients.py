# api/serializers/clients.py
"""
Serializers para el modelo Client.
"""
import logging
from numbers import Number

from django.utils.translation import gettext_lazy as _
from django_countries.serializers import CountryFieldMixin
from rest_framework import serializers
from rest_framework.exceptions import ValidationError

from ..models import METRIC_KEYS, Client, default_metrics
from ..services import ClientService
from ..visibility import aggregate_progress, visible_tasks

logger = logging.getLogger(__name__)


class ClientSerializer(CountryFieldMixin, serializers.ModelSerializer):
    """
    Serializer para leer/escribir clientes. Al crear, genera las tareas del plan.
    """
    password = serializers.CharField(
        write_only=True, required=False, allow_blank=True, trim_whitespace=False,
        help_text=_("Contraseña del portal (opcional; sin ella vale el código de acceso)")
    )
    plan_base = serializers.CharField(max_length=30, required=False, allow_blank=True)
    start_date = serializers.DateField(required=False, allow_null=True)
    access_code = serializers.CharField(max_length=32, required=False, allow_blank=True)
    task_count = serializers.SerializerMethodField()
    progress = serializers.SerializerMethodField()

    class Meta:
        model = Client
        fields = [
            'id', 'company', 'contact_name', 'email', 'phone', 'country',
            'plan_base', 'status', 'billing_cycle', 'start_date', 'renewal_date',
            'metrics', 'drive_folder', 'platforms', 'access_code', 'password',
            'task_count', 'progress', 'created_at',
        ]
        read_only_fields = ['id', 'renewal_date', 'created_at', 'task_count', 'progress']

    def _visible_tasks(self, obj):
        """Tareas del cliente que ve quien hace la petición (un miembro solo ve las suyas)."""
        if not obj.pk:
            return []
        request = self.context.get('request')
        viewer = getattr(request, 'user', None)
        tasks = obj.tasks.all()
        if viewer is None or viewer.is_admin or viewer.is_client:
            return list(tasks)
        return visible_tasks(viewer, tasks)

    def get_task_count(self, obj):
        return len(self._visible_tasks(obj))

    def get_progress(self, obj):
        return aggregate_progress(self._visible_tasks(obj))

    def validate_metrics(self, value):
        if value in (None, ''):
            return default_metrics()
        if not isinstance(value, dict):
            raise ValidationError(_("Las métricas deben ser un objeto."))
        metrics = default_metrics()
        if self.instance is not None:
            metrics.update(self.instance.metrics or {})
        for key, amount in value.items():
            if key not in METRIC_KEYS:
                raise ValidationError(_("Métrica desconocida: {}").format(key))
            if isinstance(amount, bool) or not isinstance(amount, Number) or amount < 0:
                raise ValidationError(_("La métrica '{}' debe ser un número no negativo.").format(key))
            metrics[key] = amount
        return metrics

    def validate_platforms(self, value):
        if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
            raise ValidationError(_("Las plataformas deben ser una lista de textos."))
        return value

    def validate_access_code(self, value):
        value = (value or '').strip()
        if not value:
            return value
        qs = Client.objects.filter(access_code=value)
        if self.instance is not None:
            qs = qs.exclude(pk=self.instance.pk)
        if qs.exists():
            raise ValidationError(_("Ya existe un cliente con este código de acceso."))
        return value

    def create(self, validated_data):
        password = validated_data.pop('password', None)
        # Las métricas arrancan siempre en cero
        validated_data['metrics'] = default_metrics()
        # Sin plan explícito solo se genera la tarea de onboarding
        validated_data.setdefault('plan_base', '')
        return ClientService.create_client(validated_data, password=password)

    def update(self, instance, validated_data):
        password = validated_data.pop('password', None)
        if not validated_data.get('access_code', True):
            validated_data.pop('access_code')
        if validated_data.get('start_date', True) is None:
            validated_data.pop('start_date')
        instance = super().update(instance, validated_data)
        if password is not None:
            instance.set_password(password)
            instance.save(update_fields=['password'])
        return instance

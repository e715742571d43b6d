# api/services.py
import logging

from django.db import transaction
from django.utils import timezone
from django.utils.translation import gettext_lazy as _

from .models import Client, Task, TeamMember
from .plans import build_tasks_for_plan

logger = logging.getLogger(__name__)


class TaskTemplateService:
    """
    Genera el checklist de tareas de un cliente según su plan.
    """
    @staticmethod
    def generate_tasks_for_plan(client, today=None):
        """
        Crea las tareas del plan de 'client'. Todo el lote va en una única
        transacción: si falla una inserción no queda ninguna tarea creada.
        """
        if not isinstance(client, Client) or not client.pk:
            logger.error(f"[TaskTemplateService] Se esperaba un Client guardado, se recibió {client!r}")
            raise TypeError(_("Se requiere un cliente guardado para generar tareas."))

        today = today or timezone.localdate()
        members = list(TeamMember.objects.only('id', 'name'))
        tasks_to_create = []
        for data in build_tasks_for_plan(client.plan_base, today=today):
            task = Task(client=client, **data)
            task.resolve_assignee(members)
            tasks_to_create.append(task)

        try:
            with transaction.atomic():
                created = Task.objects.bulk_create(tasks_to_create)
        except Exception as e:
            logger.error(f"[TaskTemplateService] Error generando tareas para cliente {client.pk} (plan {client.plan_base}): {e}", exc_info=True)
            raise
        logger.info(f"[TaskTemplateService] {len(created)} tareas creadas para cliente {client.pk} (plan {client.plan_base}).")
        return created


class ClientService:
    """
    Alta de clientes: guarda el cliente y genera su checklist en la misma
    transacción, de modo que un fallo no deja clientes sin tareas.
    """
    @staticmethod
    @transaction.atomic
    def create_client(validated_data, password=None, today=None):
        validated_data = dict(validated_data)
        today = today or timezone.localdate()
        validated_data.setdefault('start_date', today)
        if validated_data.get('start_date') is None:
            validated_data['start_date'] = today

        client = Client(**validated_data)
        client.set_password(password)
        client.save()
        logger.info(f"[ClientService] Cliente '{client.company}' creado (id {client.pk}, plan {client.plan_base}).")

        TaskTemplateService.generate_tasks_for_plan(client, today=today)
        return client

    @staticmethod
    @transaction.atomic
    def delete_client(client):
        task_count = client.tasks.count()
        client_id = client.pk
        client.delete()
        logger.info(f"[ClientService] Cliente {client_id} eliminado junto con {task_count} tareas.")
        return task_count

# api/views/dashboard.py
import logging
from collections import Counter

from django.shortcuts import get_object_or_404
from django.utils import timezone
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from ..models import Client, Task, TeamMember
from ..permissions import CanAccessDashboard, IsClientViewer
from ..scoping import scope_clients
from ..serializers.base import ClientBasicSerializer, TeamMemberBasicSerializer
from ..serializers.tasks import TaskSerializer
from ..visibility import (
    aggregate_progress, client_deliverables, completion_rate, tasks_for_member,
    unassigned_tasks, upcoming_tasks, visible_clients, visible_tasks,
    visible_team_members, COMPLETED_STATUSES,
)

logger = logging.getLogger(__name__)


def _all_tasks():
    return list(Task.objects.select_related('client', 'assignee'))


def _all_members():
    return list(TeamMember.objects.all())


class DashboardDataView(APIView):
    """
    Panel principal: clientes visibles con su progreso.
    El administrador recibe además los KPIs globales.
    """
    permission_classes = [IsAuthenticated, CanAccessDashboard]

    def get(self, request, *args, **kwargs):
        viewer = request.user
        logger.info(f"[DashboardView] GET solicitado por {viewer.name} ({viewer.role})")

        tasks = visible_tasks(viewer, _all_tasks())
        clients = visible_clients(viewer, Client.objects.all(), tasks)

        tasks_by_client = {}
        for task in tasks:
            tasks_by_client.setdefault(task.client_id, []).append(task)

        client_rows = []
        for client in clients:
            client_tasks = tasks_by_client.get(client.pk, [])
            row = ClientBasicSerializer(client).data
            row['task_count'] = len(client_tasks)
            row['progress'] = aggregate_progress(client_tasks)
            client_rows.append(row)

        data = {
            'viewer': viewer.as_dict(),
            'clients': client_rows,
            'task_count': len(tasks),
            'progress': aggregate_progress(tasks),
        }

        if viewer.is_admin:
            today = timezone.localdate()
            status_counts = Counter(task.status for task in tasks)
            data['kpis'] = {
                'total_clients': len(clients),
                'active_clients': sum(1 for client in clients if client.is_active),
                'total_tasks': len(tasks),
                'completed_tasks': sum(status_counts[status] for status in COMPLETED_STATUSES),
                'overdue_tasks': sum(1 for task in tasks if task.is_overdue(today)),
                'unassigned_tasks': len(unassigned_tasks(tasks, _all_members())),
                'tasks_by_status': dict(status_counts),
                'team_size': TeamMember.objects.filter(status=TeamMember.ACTIVE).count(),
            }
        return Response(data)


class ClientProgressView(APIView):
    """
    Detalle de un cliente: tareas visibles, progreso total y vencimientos.
    """
    permission_classes = [IsAuthenticated, CanAccessDashboard]

    def get(self, request, pk, *args, **kwargs):
        viewer = request.user
        client = get_object_or_404(scope_clients(viewer), pk=pk)
        tasks = visible_tasks(viewer, client.tasks.select_related('assignee'))

        return Response({
            'client': ClientBasicSerializer(client).data,
            'tasks': TaskSerializer(tasks, many=True).data,
            'total_progress': aggregate_progress(tasks),
            'overdue_count': sum(1 for task in tasks if task.is_overdue()),
        })


class TeamWorkloadView(APIView):
    """
    Carga de trabajo por miembro. El administrador ve también la bandeja
    de tareas sin asignar.
    """
    permission_classes = [IsAuthenticated, CanAccessDashboard]

    def get(self, request, *args, **kwargs):
        viewer = request.user
        tasks = visible_tasks(viewer, _all_tasks())
        members = _all_members()

        workload = []
        for member in visible_team_members(viewer, members):
            member_tasks = tasks_for_member(tasks, member.name)
            workload.append({
                'member': TeamMemberBasicSerializer(member).data,
                'tasks': TaskSerializer(member_tasks, many=True).data,
                'progress': aggregate_progress(member_tasks),
            })

        data = {'members': workload}
        if viewer.is_admin:
            data['unassigned'] = TaskSerializer(unassigned_tasks(tasks, members), many=True).data
        return Response(data)


class PortalView(APIView):
    """
    Portal del cliente: sus tareas, métricas y entregables.
    """
    permission_classes = [IsAuthenticated, IsClientViewer]

    def get(self, request, *args, **kwargs):
        client = get_object_or_404(Client, pk=request.user.id)
        tasks = list(client.tasks.select_related('assignee'))
        completed = [task for task in tasks if task.status in COMPLETED_STATUSES]

        return Response({
            'client': ClientBasicSerializer(client).data,
            'metrics': client.metrics,
            'drive_folder': client.drive_folder,
            'tasks': TaskSerializer(tasks, many=True).data,
            'progress': aggregate_progress(tasks),
            'completion_rate': completion_rate(tasks),
            'completed_count': len(completed),
            'deliverables': TaskSerializer(client_deliverables(tasks), many=True).data,
            'upcoming': TaskSerializer(upcoming_tasks(tasks), many=True).data,
        })

# api/scoping.py
"""
Aplica las reglas de visibilidad de api.visibility a querysets.
"""
from .models import Client, Task
from .visibility import visible_clients, visible_tasks


def scope_tasks(viewer, queryset=None):
    queryset = Task.objects.select_related('client', 'assignee') if queryset is None else queryset
    if viewer is None:
        return queryset.none()
    if viewer.is_admin:
        return queryset
    if viewer.is_client:
        return queryset.filter(client_id=viewer.id)
    candidates = queryset.select_related(None).prefetch_related(None).only('id', 'responsible')
    ids = [task.pk for task in visible_tasks(viewer, candidates)]
    return queryset.filter(pk__in=ids)


def scope_clients(viewer, queryset=None):
    queryset = Client.objects.all() if queryset is None else queryset
    if viewer is None:
        return queryset.none()
    if viewer.is_admin:
        return queryset
    if viewer.is_client:
        return queryset.filter(pk=viewer.id)
    tasks = Task.objects.only('id', 'client', 'responsible')
    candidates = queryset.prefetch_related(None).only('id')
    ids = [client.pk for client in visible_clients(viewer, candidates, tasks)]
    return queryset.filter(pk__in=ids)

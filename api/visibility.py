# api/visibility.py
"""
Reglas de visibilidad por rol y agregación de progreso.

Todas las funciones son puras: reciben listas de tareas, clientes o miembros
(instancias de modelo o diccionarios) y un 'viewer' con id, name y role.
Los tableros y los ViewSets las usan para decidir qué ve cada usuario.
"""
from decimal import ROUND_HALF_UP, Decimal

from .roles import Responsible, Roles

ADMIN_VIEWER_ID = 'admin'
COMPLETED_STATUSES = ('Terminado', 'Aprobado')
DELIVERABLE_STATUSES = ('En revisión', 'Aprobado')
UPCOMING_STATUSES = ('Pendiente', 'En proceso')

# Efecto del estado sobre el progreso cuando la actualización no trae progreso.
STATUS_PROGRESS = {
    'Terminado': 100,
    'Pendiente': 0,
}


class AssigneeKind:
    UNASSIGNED = 'unassigned'
    ROLE_LABEL = 'role_label'
    MEMBER = 'member'


def _get(obj, field, default=None):
    if obj is None:
        return default
    if isinstance(obj, dict):
        return obj.get(field, default)
    return getattr(obj, field, default)


def _client_id(task):
    if isinstance(task, dict):
        for key in ('client_id', 'clientId', 'client'):
            if key in task:
                return task[key]
        return None
    return getattr(task, 'client_id', None)


def _same_id(left, right):
    if left is None or right is None:
        return False
    return str(left) == str(right)


def normalize_name(value):
    return (value or '').strip().lower()


def round_half_up(value):
    """Redondeo de 'Math.round': las mitades suben."""
    return int(Decimal(str(value)).quantize(Decimal('1'), rounding=ROUND_HALF_UP))


# --- Viewer ---

def is_admin_viewer(viewer):
    if viewer is None:
        return False
    return _get(viewer, 'role') == Roles.ADMINISTRATOR or _same_id(_get(viewer, 'id'), ADMIN_VIEWER_ID)


def is_responsible(viewer, task):
    return normalize_name(_get(task, 'responsible')) == normalize_name(_get(viewer, 'name'))


def visible_tasks(viewer, tasks):
    tasks = list(tasks)
    if is_admin_viewer(viewer):
        return tasks
    return [task for task in tasks if is_responsible(viewer, task)]


def visible_clients(viewer, clients, tasks):
    clients = list(clients)
    if is_admin_viewer(viewer):
        return clients
    client_ids = {str(_client_id(task)) for task in visible_tasks(viewer, tasks)}
    return [client for client in clients if str(_get(client, 'id')) in client_ids]


def visible_team_members(viewer, members):
    members = list(members)
    if is_admin_viewer(viewer):
        return members
    target = normalize_name(_get(viewer, 'name'))
    return [member for member in members if normalize_name(_get(member, 'name')) == target]


# --- Asignación ---

def resolve_assignee(responsible, members):
    """
    Clasifica el texto de 'responsible'.
    Devuelve (AssigneeKind, miembro o None). La coincidencia es por nombre
    normalizado; si hay varios miembros con el mismo nombre gana el primero.
    """
    normalized = normalize_name(responsible or Responsible.UNASSIGNED)
    if normalized in Responsible.UNASSIGNED_ALIASES or not normalized:
        return AssigneeKind.UNASSIGNED, None
    for member in members:
        if normalize_name(_get(member, 'name')) == normalized:
            return AssigneeKind.MEMBER, member
    return AssigneeKind.ROLE_LABEL, None


def unassigned_tasks(tasks, members):
    """Bandeja de 'sin asignar' del administrador."""
    member_names = {normalize_name(_get(member, 'name')) for member in members}
    result = []
    for task in tasks:
        responsible = normalize_name(_get(task, 'responsible') or Responsible.UNASSIGNED)
        if responsible in Responsible.UNASSIGNED_ALIASES or responsible not in member_names:
            result.append(task)
    return result


def tasks_for_member(tasks, member_name):
    target = normalize_name(member_name)
    return [task for task in tasks if normalize_name(_get(task, 'responsible')) == target]


# --- Progreso ---

def aggregate_progress(tasks):
    tasks = list(tasks)
    if not tasks:
        return 0
    total = sum(_get(task, 'progress') or 0 for task in tasks)
    return round_half_up(total / len(tasks))


def completion_rate(tasks):
    tasks = list(tasks)
    if not tasks:
        return 0
    completed = sum(1 for task in tasks if _get(task, 'status') in COMPLETED_STATUSES)
    return round_half_up(completed * 100 / len(tasks))


def client_deliverables(tasks):
    return [
        task for task in tasks
        if _get(task, 'status') in DELIVERABLE_STATUSES or _get(task, 'category') == 'Contenido'
    ]


def upcoming_tasks(tasks, limit=5):
    return [task for task in tasks if _get(task, 'status') in UPCOMING_STATUSES][:limit]


def is_overdue(task, today):
    deadline = _get(task, 'deadline')
    return bool(deadline and deadline < today and _get(task, 'status') != 'Terminado')


def apply_status_progress(updates):
    """
    Ajusta 'progress' según el nuevo 'status' si la actualización no trae uno.
    Terminado -> 100, Pendiente -> 0; el resto de estados no lo tocan.
    """
    updates = dict(updates)
    status = updates.get('status')
    if status in STATUS_PROGRESS and updates.get('progress') is None:
        updates['progress'] = STATUS_PROGRESS[status]
    return updates

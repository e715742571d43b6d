# -*- coding: utf-8 -*-
from django.core.management.base import BaseCommand
from django.db import transaction

from api.models import Task, TeamMember
from api.visibility import AssigneeKind


class Command(BaseCommand):
    help = "Resuelve 'assignee' de todas las tareas a partir del texto de 'responsible'. Se puede re-ejecutar."

    def add_arguments(self, parser):
        parser.add_argument('--dry-run', action='store_true', help='Muestra el resultado sin guardar cambios')

    def handle(self, *args, **options):
        members = list(TeamMember.objects.only('id', 'name'))
        counts = {AssigneeKind.UNASSIGNED: 0, AssigneeKind.ROLE_LABEL: 0, AssigneeKind.MEMBER: 0}
        changed = []

        for task in Task.objects.only('id', 'responsible', 'assignee').iterator():
            previous = task.assignee_id
            kind = task.resolve_assignee(members)
            counts[kind] += 1
            if task.assignee_id != previous:
                changed.append(task)

        if not options['dry_run'] and changed:
            with transaction.atomic():
                Task.objects.bulk_update(changed, ['assignee'])

        prefix = "[DRY-RUN] " if options['dry_run'] else ""
        self.stdout.write(self.style.SUCCESS(
            f"{prefix}{len(changed)} tareas actualizadas. "
            f"Miembro: {counts[AssigneeKind.MEMBER]}, "
            f"etiqueta de rol: {counts[AssigneeKind.ROLE_LABEL]}, "
            f"sin asignar: {counts[AssigneeKind.UNASSIGNED]}."
        ))

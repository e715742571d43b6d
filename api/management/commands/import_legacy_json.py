# -*- coding: utf-8 -*-
import json
import logging
from decimal import Decimal, InvalidOperation
from pathlib import Path

from django.core.management.base import BaseCommand, CommandError
from django.db import transaction
from django.utils import timezone
from django.utils.dateparse import parse_date

from api.models import Client, ServicePackage, Task, TeamMember, default_metrics

logger = logging.getLogger(__name__)


def _legacy_date(value):
    """Acepta '2024-01-31' o un ISO completo ('2024-01-31T10:00:00.000Z')."""
    if not value:
        return None
    try:
        return parse_date(str(value)[:10])
    except ValueError:
        return None


def _legacy_int(value, default):
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


class Command(BaseCommand):
    help = 'Importa el archivo db.json del sistema anterior (users, team, services, clients, tasks). Se puede re-ejecutar.'

    def add_arguments(self, parser):
        parser.add_argument('path', nargs='?', default='data/db.json', help='Ruta al db.json heredado')

    def handle(self, *args, **options):
        path = Path(options['path'])
        if not path.exists():
            raise CommandError(f"No se encontró el archivo {path}")
        try:
            data = json.loads(path.read_text(encoding='utf-8'))
        except json.JSONDecodeError as e:
            raise CommandError(f"El archivo {path} no es JSON válido: {e}")

        self.stdout.write(f"Iniciando importación de {path}...")
        with transaction.atomic():
            members = self.import_members(data.get('users') or [], data.get('team') or [])
            services = self.import_services(data.get('services') or [])
            clients = self.import_clients(data.get('clients') or [])
            tasks, skipped = self.import_tasks(data.get('tasks') or [])

        self.stdout.write(self.style.SUCCESS(
            f"Importación completada: {members} miembros, {services} servicios, "
            f"{clients} clientes, {tasks} tareas ({skipped} omitidas)."
        ))

    # --- Equipo ---

    @staticmethod
    def _legacy_key(entry, prefix=''):
        return f"{prefix}{entry['id']}" if entry.get('id') is not None else None

    def import_members(self, users, team):
        # Los ids de 'team' llevan prefijo: son otra lista y pueden repetir los de 'users'
        merged = [(entry, self._legacy_key(entry)) for entry in users]
        known_emails = {(user.get('email') or '').strip().lower() for user in users}
        for entry in team:
            email = (entry.get('email') or '').strip().lower()
            if email and email not in known_emails:
                merged.append((entry, self._legacy_key(entry, prefix='team:')))
                known_emails.add(email)

        count = 0
        for entry, legacy_id in merged:
            email = (entry.get('email') or '').strip().lower()
            if not email:
                self.stdout.write(self.style.WARNING(f"  [WARN] Miembro '{entry.get('name')}' sin email. Omitido."))
                continue
            member = TeamMember.objects.filter(email=email).first() or TeamMember(email=email)
            member.name = entry.get('name') or member.name or email
            member.role = entry.get('role') or member.role
            member.status = entry.get('status') or TeamMember.ACTIVE
            if legacy_id and TeamMember.objects.filter(legacy_id=legacy_id).exclude(pk=member.pk).exists():
                self.stdout.write(self.style.WARNING(
                    f"  [WARN] ID heredado '{legacy_id}' ya usado por otro miembro. Se importa '{email}' sin él."
                ))
            elif legacy_id:
                member.legacy_id = legacy_id
            # Sin contraseña guardada se aplica la contraseña heredada por defecto al iniciar sesión
            raw_password = entry.get('passwordHash') or entry.get('password')
            if raw_password:
                member.set_password(raw_password)
            member.save()
            count += 1
        return count

    # --- Catálogo ---

    def import_services(self, services):
        count = 0
        for entry in services:
            legacy_id = str(entry.get('id')) if entry.get('id') is not None else None
            try:
                price = Decimal(str(entry.get('price') or 0))
            except InvalidOperation:
                price = Decimal('0')
            defaults = {
                'name': entry.get('name') or '',
                'description': entry.get('description') or '',
                'price': price,
                'features': entry.get('features') or [],
                'status': entry.get('status') or 'Activo',
            }
            if legacy_id:
                ServicePackage.objects.update_or_create(legacy_id=legacy_id, defaults=defaults)
            else:
                ServicePackage.objects.create(**defaults)
            count += 1
        return count

    # --- Clientes ---

    def import_clients(self, clients):
        count = 0
        for entry in clients:
            legacy_id = str(entry.get('id')) if entry.get('id') is not None else None
            client = Client.objects.filter(legacy_id=legacy_id).first() if legacy_id else None
            client = client or Client(legacy_id=legacy_id)

            client.company = entry.get('company') or ''
            client.contact_name = entry.get('contactName') or ''
            client.email = entry.get('email') or ''
            client.phone = entry.get('phone') or ''
            client.plan_base = entry.get('planBase') or 'Started'
            client.status = entry.get('status') or Client.ACTIVE
            client.billing_cycle = _legacy_int(entry.get('billingCycle'), Client.DEFAULT_BILLING_CYCLE) or Client.DEFAULT_BILLING_CYCLE
            client.start_date = _legacy_date(entry.get('startDate')) or client.start_date or timezone.localdate()
            client.drive_folder = entry.get('driveFolder') or ''
            client.platforms = entry.get('platforms') or []
            metrics = default_metrics()
            metrics.update(entry.get('metrics') or {})
            client.metrics = metrics

            access_code = (entry.get('accessCode') or '').strip()
            if access_code and Client.objects.filter(access_code=access_code).exclude(pk=client.pk).exists():
                self.stdout.write(self.style.WARNING(
                    f"  [WARN] Código de acceso '{access_code}' repetido en cliente {legacy_id}. Se genera uno nuevo."
                ))
                access_code = ''
            client.access_code = access_code

            if entry.get('password'):
                client.set_password(entry['password'])
            client.save()
            count += 1
        return count

    # --- Tareas ---

    def import_tasks(self, tasks):
        clients_by_legacy_id = {client.legacy_id: client for client in Client.objects.exclude(legacy_id__isnull=True)}
        imported = skipped = 0
        for entry in tasks:
            client = clients_by_legacy_id.get(str(entry.get('clientId')))
            if client is None:
                self.stdout.write(self.style.WARNING(
                    f"  [WARN] Saltando tarea {entry.get('id')}: el cliente {entry.get('clientId')} no existe."
                ))
                skipped += 1
                continue

            defaults = {
                'client': client,
                'title': entry.get('title') or '',
                'description': entry.get('description') or '',
                'category': entry.get('category') or Task.DEFAULT_CATEGORY,
                'status': entry.get('status') or Task.PENDING,
                'progress': min(max(_legacy_int(entry.get('progress'), 0), 0), 100),
                'responsible': entry.get('responsible') or '',
                'deadline': _legacy_date(entry.get('deadline')),
                'comments': entry.get('comments') or [],
                'attachments': entry.get('attachments') or [],
                'client_feedback': entry.get('clientFeedback') or '',
            }
            if entry.get('id') is not None:
                Task.objects.update_or_create(legacy_id=str(entry['id']), defaults=defaults)
            else:
                Task.objects.create(**defaults)
            imported += 1

        if skipped:
            logger.warning(f"[import_legacy_json] {skipped} tareas omitidas por cliente inexistente.")
        return imported, skipped

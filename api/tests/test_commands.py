# api/tests/test_commands.py
import json
import shutil
import tempfile
from io import StringIO
from pathlib import Path

from django.core.management import call_command
from django.core.management.base import CommandError
from django.test import TestCase

from api.models import Client, ServicePackage, Task, TeamMember

LEGACY_DB = {
    'users': [
        {'id': 'u1', 'name': 'Ana', 'role': 'Diseñador', 'email': 'Ana@agencia.test', 'passwordHash': 'clave'},
    ],
    'team': [
        {'id': 't1', 'name': 'Ana Duplicada', 'role': 'Dev', 'email': 'ana@agencia.test'},
        {'id': 't2', 'name': 'Carlos', 'role': 'Dev', 'email': 'carlos@agencia.test'},
    ],
    'services': [
        {'id': 's1', 'name': 'Pack Redes', 'description': 'Gestión', 'price': 300, 'features': ['IG'], 'status': 'Activo'},
    ],
    'clients': [
        {
            'id': 'c1', 'company': 'Acme', 'contactName': 'Marta', 'email': 'marta@acme.test',
            'planBase': 'Growth', 'status': 'Activo', 'startDate': '2024-06-01T00:00:00.000Z',
            'accessCode': 'ACME01', 'metrics': {'reach': 10}, 'billingCycle': '30',
        },
    ],
    'tasks': [
        {'id': 'k1', 'clientId': 'c1', 'title': 'Post 1', 'category': 'Contenido', 'status': 'En proceso',
         'progress': 40, 'responsible': 'carlos', 'deadline': '2024-06-10'},
        {'id': 'k2', 'clientId': 'c1', 'title': 'Sin responsable', 'status': 'Pendiente'},
        {'id': 'k3', 'clientId': 'zz', 'title': 'Huérfana'},
    ],
}


class ImportLegacyJsonTest(TestCase):

    def setUp(self):
        self.tmpdir = tempfile.mkdtemp()
        self.path = Path(self.tmpdir) / 'db.json'
        self.path.write_text(json.dumps(LEGACY_DB), encoding='utf-8')

    def tearDown(self):
        shutil.rmtree(self.tmpdir)

    def run_import(self):
        out = StringIO()
        call_command('import_legacy_json', str(self.path), stdout=out)
        return out.getvalue()

    def test_imports_all_collections(self):
        output = self.run_import()
        self.assertIn('Saltando tarea k3', output)

        self.assertEqual(TeamMember.objects.count(), 2)
        ana = TeamMember.objects.get(email='ana@agencia.test')
        self.assertEqual(ana.name, 'Ana')
        self.assertTrue(ana.check_password('clave'))
        self.assertFalse(TeamMember.objects.get(email='carlos@agencia.test').has_password)

        self.assertTrue(ServicePackage.objects.filter(legacy_id='s1', name='Pack Redes').exists())

        client = Client.objects.get(legacy_id='c1')
        self.assertEqual(client.access_code, 'ACME01')
        self.assertEqual(str(client.start_date), '2024-06-01')
        self.assertEqual(client.metrics, {'reach': 10, 'leads': 0, 'clicks': 0, 'spent': 0})
        # Los clientes importados traen sus propias tareas, no se genera el plan
        self.assertEqual(client.tasks.count(), 2)

        task = Task.objects.get(legacy_id='k1')
        self.assertEqual(task.assignee.email, 'carlos@agencia.test')
        self.assertEqual(Task.objects.get(legacy_id='k2').responsible, 'Por asignar')

    def test_import_can_be_rerun(self):
        self.run_import()
        self.run_import()
        self.assertEqual(TeamMember.objects.count(), 2)
        self.assertEqual(Client.objects.filter(legacy_id='c1').count(), 1)
        self.assertEqual(Task.objects.count(), 2)
        self.assertEqual(ServicePackage.objects.filter(legacy_id='s1').count(), 1)

    def test_users_and_team_may_share_legacy_ids(self):
        data = {
            'users': [{'id': 1, 'name': 'Ana', 'email': 'ana@agencia.test'}],
            'team': [{'id': 1, 'name': 'Carlos', 'email': 'carlos@agencia.test'}],
        }
        self.path.write_text(json.dumps(data), encoding='utf-8')
        self.run_import()
        self.run_import()
        members = dict(TeamMember.objects.values_list('email', 'legacy_id'))
        self.assertEqual(members, {'ana@agencia.test': '1', 'carlos@agencia.test': 'team:1'})

    def test_taken_legacy_id_is_skipped_with_warning(self):
        TeamMember.objects.create(name='Eva', email='eva@agencia.test', legacy_id='u1')
        output = self.run_import()
        self.assertIn("ID heredado 'u1' ya usado", output)
        self.assertIsNone(TeamMember.objects.get(email='ana@agencia.test').legacy_id)

    def test_missing_file(self):
        with self.assertRaises(CommandError):
            call_command('import_legacy_json', str(Path(self.tmpdir) / 'nope.json'), stdout=StringIO())


class ResolveTaskAssigneesTest(TestCase):

    def test_resolves_legacy_rows(self):
        client = Client.objects.create(company='Acme')
        member = TeamMember.objects.create(name='Carlos', email='carlos@agencia.test')
        task = Task.objects.create(client=client, title='X', responsible='Carlos')
        Task.objects.filter(pk=task.pk).update(assignee=None)

        out = StringIO()
        call_command('resolve_task_assignees', '--dry-run', stdout=out)
        self.assertIn('[DRY-RUN] 1 tareas actualizadas', out.getvalue())
        task.refresh_from_db()
        self.assertIsNone(task.assignee)

        call_command('resolve_task_assignees', stdout=StringIO())
        task.refresh_from_db()
        self.assertEqual(task.assignee, member)

        out = StringIO()
        call_command('resolve_task_assignees', stdout=out)
        self.assertIn('0 tareas actualizadas', out.getvalue())


class SeedDemoDataTest(TestCase):

    def test_seed_and_clear(self):
        call_command('seed_demo_data', '--clientes', '3', '--equipo', '2', '--seed', '7', stdout=StringIO())
        self.assertEqual(TeamMember.objects.count(), 2)
        self.assertEqual(Client.objects.count(), 3)
        for client in Client.objects.all():
            self.assertGreaterEqual(client.tasks.count(), 8)

        call_command('seed_demo_data', '--clientes', '1', '--equipo', '1', '--clear', stdout=StringIO())
        self.assertEqual(TeamMember.objects.count(), 1)
        self.assertEqual(Client.objects.count(), 1)

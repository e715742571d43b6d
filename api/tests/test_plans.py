# api/tests/test_plans.py
import datetime
from collections import Counter
from unittest import mock

from django.db import DatabaseError
from django.test import SimpleTestCase, TestCase

from api.models import Client, Task
from api.plans import build_tasks_for_plan
from api.services import ClientService, TaskTemplateService

from .utils import make_bare_client, make_member

TODAY = datetime.date(2025, 3, 10)


class BuildTasksForPlanTest(SimpleTestCase):

    def test_started_plan(self):
        tasks = build_tasks_for_plan('Started', today=TODAY)
        self.assertEqual(len(tasks), 8)
        self.assertEqual(
            Counter(task['category'] for task in tasks),
            Counter({'Estrategia': 1, 'Redes': 1, 'Ads': 1, 'Contenido': 4, 'Reporte': 1}),
        )
        self.assertTrue(all(task['status'] == 'Pendiente' for task in tasks))
        self.assertTrue(all(task['deadline'] == TODAY for task in tasks))

    def test_growth_plan_weekly_posts(self):
        tasks = build_tasks_for_plan('Growth', today=TODAY)
        self.assertEqual(len(tasks), 19)
        posts = [task['title'] for task in tasks if task['title'].startswith('Semana')]
        expected = {f'Semana {week}: Post {post}' for week in range(1, 5) for post in range(1, 4)}
        self.assertEqual(len(posts), 12)
        self.assertEqual(set(posts), expected)
        self.assertEqual(
            [task['title'] for task in tasks[-3:]],
            ['Campaña 1 (Branding)', 'Campaña 2 (Conversión)', 'Campaña 3 (Retargeting)'],
        )

    def test_scale_plan_content_packs(self):
        tasks = build_tasks_for_plan('Scale', today=TODAY)
        self.assertEqual(len(tasks), 9)
        packs = [task['title'] for task in tasks if 'Pack Contenido' in task['title']]
        self.assertEqual(packs, [f'Semana {week}: Pack Contenido (4 posts)' for week in range(1, 5)])

    def test_unknown_or_missing_plan_falls_back_to_onboarding(self):
        for plan in ('Unknown', None, '', 'started'):
            with self.subTest(plan=plan):
                tasks = build_tasks_for_plan(plan, today=TODAY)
                self.assertEqual(len(tasks), 1)
                self.assertEqual(tasks[0]['title'], 'Onboarding Cliente')
                self.assertEqual(tasks[0]['category'], 'Estrategia')

    def test_role_labels_as_responsible(self):
        responsibles = {task['responsible'] for task in build_tasks_for_plan('Growth', today=TODAY)}
        self.assertEqual(responsibles, {'Admin', 'Equipo', 'Dev', 'Diseñador', 'Trafficker'})


class TaskTemplateServiceTest(TestCase):

    def test_generates_tasks_for_saved_client(self):
        client = make_bare_client(plan_base='Scale')
        created = TaskTemplateService.generate_tasks_for_plan(client, today=TODAY)
        self.assertEqual(len(created), 9)
        self.assertEqual(client.tasks.count(), 9)
        self.assertFalse(client.tasks.exclude(deadline=TODAY).exists())

    def test_requires_saved_client(self):
        with self.assertRaises(TypeError):
            TaskTemplateService.generate_tasks_for_plan(Client(company='Sin guardar'))

    def test_resolves_assignee_when_label_matches_member(self):
        member = make_member(name='Trafficker', role='Trafficker')
        client = make_bare_client(plan_base='Started')
        TaskTemplateService.generate_tasks_for_plan(client, today=TODAY)
        task = client.tasks.get(title='Campaña Activa (Setup)')
        self.assertEqual(task.assignee, member)
        self.assertIsNone(client.tasks.get(title='Reporte Mensual').assignee)

    def test_failure_leaves_no_partial_tasks(self):
        client = make_bare_client(plan_base='Growth')
        with mock.patch.object(Task.objects, 'bulk_create', side_effect=DatabaseError('fallo')):
            with self.assertRaises(DatabaseError):
                TaskTemplateService.generate_tasks_for_plan(client)
        self.assertEqual(client.tasks.count(), 0)


class ClientServiceTest(TestCase):

    def test_create_client_generates_checklist(self):
        client = ClientService.create_client(
            {'company': 'Acme', 'plan_base': 'Started', 'start_date': TODAY}, today=TODAY
        )
        self.assertEqual(client.tasks.count(), 8)
        self.assertEqual(client.renewal_date, TODAY + datetime.timedelta(days=30))
        self.assertTrue(client.access_code)

    def test_create_client_is_atomic(self):
        with mock.patch.object(Task.objects, 'bulk_create', side_effect=DatabaseError('fallo')):
            with self.assertRaises(DatabaseError):
                ClientService.create_client({'company': 'Huérfano', 'plan_base': 'Started'})
        self.assertFalse(Client.objects.filter(company='Huérfano').exists())
        self.assertEqual(Task.objects.count(), 0)

    def test_delete_client_cascades(self):
        client = ClientService.create_client({'company': 'Acme', 'plan_base': 'Scale'})
        self.assertEqual(ClientService.delete_client(client), 9)
        self.assertEqual(Task.objects.count(), 0)

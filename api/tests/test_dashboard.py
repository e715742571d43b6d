# api/tests/test_dashboard.py
from django.test import TestCase
from rest_framework import status

from api.identity import Viewer
from api.models import Task

from .utils import admin_api_client, api_client_for, make_client, make_member


class DashboardTest(TestCase):

    def setUp(self):
        self.ana = make_member(name='Ana')
        self.carlos = make_member(name='Carlos', role='Dev')
        self.acme = make_client(company='Acme')
        self.globex = make_client(company='Globex', plan_base='Scale')
        Task.objects.create(client=self.acme, title='Post extra', responsible='Ana', progress=50)
        Task.objects.create(client=self.acme, title='Banner', responsible='ana ', progress=0)
        Task.objects.create(client=self.globex, title='API', responsible='Carlos', status='Terminado', progress=100)

    def test_admin_dashboard_has_kpis(self):
        response = admin_api_client().get('/api/dashboard/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual({row['company'] for row in response.data['clients']}, {'Acme', 'Globex'})
        kpis = response.data['kpis']
        self.assertEqual(kpis['total_clients'], 2)
        self.assertEqual(kpis['total_tasks'], 8 + 9 + 3)
        self.assertEqual(kpis['completed_tasks'], 1)
        # Todas las tareas del plan llevan etiquetas de rol sin dueño
        self.assertEqual(kpis['unassigned_tasks'], 17)

    def test_member_dashboard_is_scoped(self):
        response = api_client_for(Viewer.for_member(self.ana)).get('/api/dashboard/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertNotIn('kpis', response.data)
        self.assertEqual(len(response.data['clients']), 1)
        row = response.data['clients'][0]
        self.assertEqual(row['company'], 'Acme')
        self.assertEqual(row['task_count'], 2)
        self.assertEqual(row['progress'], 25)

    def test_client_cannot_open_dashboard(self):
        response = api_client_for(Viewer.for_client(self.acme)).get('/api/dashboard/')
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_client_progress_view(self):
        response = api_client_for(Viewer.for_member(self.ana)).get(f'/api/dashboard/clients/{self.acme.pk}/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([task['title'] for task in response.data['tasks']], ['Post extra', 'Banner'])
        self.assertEqual(response.data['total_progress'], 25)

        response = api_client_for(Viewer.for_member(self.ana)).get(f'/api/dashboard/clients/{self.globex.pk}/')
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_team_workload(self):
        response = admin_api_client().get('/api/dashboard/team/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        by_name = {row['member']['name']: row for row in response.data['members']}
        self.assertEqual(len(by_name['Ana']['tasks']), 2)
        self.assertEqual(by_name['Carlos']['progress'], 100)
        self.assertEqual(len(response.data['unassigned']), 17)

        response = api_client_for(Viewer.for_member(self.carlos)).get('/api/dashboard/team/')
        self.assertNotIn('unassigned', response.data)
        self.assertEqual([row['member']['name'] for row in response.data['members']], ['Carlos'])


class PortalViewTest(TestCase):

    def setUp(self):
        self.acme = make_client(company='Acme')
        tasks = list(self.acme.tasks.order_by('id'))
        Task.objects.filter(pk=tasks[0].pk).update(status='Terminado', progress=100)
        Task.objects.filter(pk=tasks[1].pk).update(status='Aprobado', progress=100)
        Task.objects.filter(pk=tasks[2].pk).update(status='En revisión', progress=80)

    def test_portal_summary(self):
        response = api_client_for(Viewer.for_client(self.acme)).get('/api/portal/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data['tasks']), 8)
        self.assertEqual(response.data['completed_count'], 2)
        self.assertEqual(response.data['completion_rate'], 25)
        self.assertEqual(response.data['progress'], 35)
        # En revisión, Aprobado y las 4 tareas de Contenido
        self.assertEqual(len(response.data['deliverables']), 6)
        self.assertEqual(len(response.data['upcoming']), 5)
        self.assertEqual(response.data['metrics']['reach'], 0)

    def test_staff_cannot_open_portal(self):
        response = admin_api_client().get('/api/portal/')
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

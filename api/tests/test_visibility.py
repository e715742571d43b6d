# api/tests/test_visibility.py
import datetime

from django.test import SimpleTestCase

from api.visibility import (
    AssigneeKind, aggregate_progress, apply_status_progress, client_deliverables,
    completion_rate, is_admin_viewer, is_overdue, resolve_assignee, tasks_for_member,
    unassigned_tasks, upcoming_tasks, visible_clients, visible_tasks,
    visible_team_members,
)

ANA = {'id': 3, 'name': 'Ana', 'role': 'Diseñador'}
ADMIN = {'id': 'admin', 'name': 'Admin', 'role': 'Administrador'}
MEMBERS = [{'id': 3, 'name': 'Ana'}, {'id': 4, 'name': 'Carlos'}]


class VisibleTasksTest(SimpleTestCase):

    def test_member_sees_tasks_matching_name_after_trim_and_lowercase(self):
        tasks = [{'responsible': 'ana'}, {'responsible': 'Ana '}, {'responsible': 'Carlos'}]
        self.assertEqual(visible_tasks(ANA, tasks), tasks[:2])

    def test_admin_sees_everything(self):
        tasks = [{'responsible': 'Carlos'}, {'responsible': 'Por asignar'}]
        self.assertEqual(visible_tasks(ADMIN, tasks), tasks)

    def test_admin_detected_by_role_or_id(self):
        self.assertTrue(is_admin_viewer({'id': 9, 'name': 'Eva', 'role': 'Administrador'}))
        self.assertTrue(is_admin_viewer({'id': 'admin', 'name': 'X', 'role': 'Dev'}))
        self.assertFalse(is_admin_viewer(ANA))
        self.assertFalse(is_admin_viewer(None))

    def test_visible_clients_follow_visible_tasks(self):
        clients = [{'id': 1}, {'id': 2}, {'id': 3}]
        tasks = [
            {'client_id': 1, 'responsible': 'ANA'},
            {'clientId': 2, 'responsible': 'Carlos'},
            {'client': 3, 'responsible': ' ana'},
        ]
        self.assertEqual(visible_clients(ANA, clients, tasks), [{'id': 1}, {'id': 3}])
        self.assertEqual(visible_clients(ADMIN, clients, []), clients)

    def test_visible_team_members(self):
        self.assertEqual(visible_team_members(ANA, MEMBERS), [MEMBERS[0]])
        self.assertEqual(visible_team_members(ADMIN, MEMBERS), MEMBERS)


class ProgressTest(SimpleTestCase):

    def test_aggregate_progress(self):
        self.assertEqual(aggregate_progress([]), 0)
        self.assertEqual(aggregate_progress([{'progress': 50}, {'progress': None}]), 25)
        self.assertEqual(aggregate_progress([{'progress': 50}, {}]), 25)
        # Las mitades redondean hacia arriba
        self.assertEqual(aggregate_progress([{'progress': 1}, {'progress': 0}]), 1)

    def test_completion_rate(self):
        tasks = [{'status': 'Terminado'}, {'status': 'Aprobado'}, {'status': 'Pendiente'}]
        self.assertEqual(completion_rate(tasks), 67)
        self.assertEqual(completion_rate([]), 0)

    def test_terminado_forces_full_progress(self):
        self.assertEqual(apply_status_progress({'status': 'Terminado'})['progress'], 100)
        self.assertEqual(apply_status_progress({'status': 'Pendiente'})['progress'], 0)

    def test_other_statuses_leave_progress_untouched(self):
        for status in ('En proceso', 'En revisión', 'Aprobado'):
            with self.subTest(status=status):
                self.assertNotIn('progress', apply_status_progress({'status': status}))

    def test_explicit_progress_wins(self):
        self.assertEqual(apply_status_progress({'status': 'Terminado', 'progress': 40})['progress'], 40)


class AssignmentTest(SimpleTestCase):

    def test_unassigned_bucket(self):
        tasks = [
            {'responsible': 'por asignar'},
            {'responsible': '  POR ASIGNAR '},
            {'responsible': 'Sin asignar'},
            {'responsible': 'Trafficker'},
            {'responsible': ' carlos '},
            {'responsible': 'Ana'},
        ]
        self.assertEqual(unassigned_tasks(tasks, MEMBERS), tasks[:4])

    def test_resolve_assignee_kinds(self):
        self.assertEqual(resolve_assignee(' Por Asignar', MEMBERS), (AssigneeKind.UNASSIGNED, None))
        self.assertEqual(resolve_assignee('', MEMBERS), (AssigneeKind.UNASSIGNED, None))
        self.assertEqual(resolve_assignee('Dev', MEMBERS), (AssigneeKind.ROLE_LABEL, None))
        self.assertEqual(resolve_assignee('carlos ', MEMBERS), (AssigneeKind.MEMBER, MEMBERS[1]))

    def test_tasks_for_member(self):
        tasks = [{'responsible': 'Carlos'}, {'responsible': 'Ana'}]
        self.assertEqual(tasks_for_member(tasks, ' CARLOS'), [tasks[0]])


class PortalHelpersTest(SimpleTestCase):

    def test_deliverables_and_upcoming(self):
        tasks = [
            {'status': 'En revisión', 'category': 'Ads'},
            {'status': 'Pendiente', 'category': 'Contenido'},
            {'status': 'En proceso', 'category': 'Web'},
            {'status': 'Terminado', 'category': 'Reporte'},
        ]
        self.assertEqual(client_deliverables(tasks), tasks[:2])
        self.assertEqual(upcoming_tasks(tasks), tasks[1:3])
        self.assertEqual(upcoming_tasks(tasks, limit=1), [tasks[1]])

    def test_is_overdue(self):
        today = datetime.date(2025, 5, 2)
        yesterday = today - datetime.timedelta(days=1)
        self.assertTrue(is_overdue({'deadline': yesterday, 'status': 'Pendiente'}, today))
        self.assertFalse(is_overdue({'deadline': yesterday, 'status': 'Terminado'}, today))
        self.assertFalse(is_overdue({'deadline': today, 'status': 'Pendiente'}, today))
        self.assertFalse(is_overdue({'deadline': None, 'status': 'Pendiente'}, today))

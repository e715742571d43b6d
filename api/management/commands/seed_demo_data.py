# -*- coding: utf-8 -*-
import random

import faker
from django.core.management.base import BaseCommand
from django.db import transaction

from api.models import Client, Task, TeamMember
from api.roles import Roles
from api.services import ClientService

fake = faker.Faker('es_ES')

DEMO_EMAIL_DOMAIN = 'demo.agencia.test'
DEMO_PASSWORD = 'demo1234'
PLANS = ['Started', 'Growth', 'Scale']
TEAM_ROLES = [Roles.DESIGNER, Roles.TRAFFICKER, Roles.DEVELOPER, Roles.COMMUNITY_MANAGER]
PLATFORMS = ['Instagram', 'Facebook', 'TikTok', 'LinkedIn', 'Google Ads']


class Command(BaseCommand):
    help = 'Genera miembros del equipo y clientes de demostración (con sus tareas de plan)'

    def add_arguments(self, parser):
        parser.add_argument('--clientes', type=int, default=10)
        parser.add_argument('--equipo', type=int, default=5)
        parser.add_argument('--clear', action='store_true', help='Elimina antes los datos de demostración existentes')
        parser.add_argument('--seed', type=int, default=None, help='Semilla para resultados reproducibles')

    def handle(self, *args, **options):
        if options['seed'] is not None:
            random.seed(options['seed'])
            fake.seed_instance(options['seed'])

        with transaction.atomic():
            if options['clear']:
                self.limpiar_datos_demo()
            members = self.crear_equipo(options['equipo'])
            clients = self.crear_clientes(options['clientes'])
            self.asignar_tareas(clients, members)

        self.stdout.write(self.style.SUCCESS(
            f"¡Datos de demostración generados! {len(members)} miembros y {len(clients)} clientes."
        ))

    def limpiar_datos_demo(self):
        deleted_clients, _ = Client.objects.filter(email__endswith=f'@{DEMO_EMAIL_DOMAIN}').delete()
        deleted_members, _ = TeamMember.objects.filter(email__endswith=f'@{DEMO_EMAIL_DOMAIN}').delete()
        self.stdout.write(f"Eliminados {deleted_clients} registros de clientes y {deleted_members} de equipo.")

    def _demo_email(self, prefix):
        return f"{prefix}.{fake.unique.random_int(min=1000, max=999999)}@{DEMO_EMAIL_DOMAIN}"

    def crear_equipo(self, cantidad):
        members = []
        for _ in range(cantidad):
            first_name = fake.first_name()
            member = TeamMember(
                name=f"{first_name} {fake.last_name()}",
                role=random.choice(TEAM_ROLES),
                email=self._demo_email(fake.user_name()),
            )
            member.set_password(DEMO_PASSWORD)
            member.save()
            members.append(member)
        return members

    def crear_clientes(self, cantidad):
        clients = []
        for _ in range(cantidad):
            data = {
                'company': fake.company(),
                'contact_name': fake.name(),
                'email': self._demo_email('cliente'),
                'phone': fake.phone_number(),
                'country': random.choice(['ES', 'CL', 'MX', 'AR', 'CO']),
                'plan_base': random.choice(PLANS),
                'start_date': fake.date_between(start_date='-60d', end_date='today'),
                'platforms': random.sample(PLATFORMS, k=random.randint(1, 3)),
                'drive_folder': fake.url(),
            }
            client = ClientService.create_client(data, password=DEMO_PASSWORD)
            client.metrics = {
                'reach': random.randint(0, 50000),
                'leads': random.randint(0, 500),
                'clicks': random.randint(0, 5000),
                'spent': round(random.uniform(0, 2000), 2),
            }
            client.save(update_fields=['metrics'])
            clients.append(client)
        return clients

    def asignar_tareas(self, clients, members):
        """Reparte parte de las tareas generadas entre el equipo y avanza algunos estados."""
        if not members:
            return
        statuses = [Task.PENDING, Task.IN_PROGRESS, Task.IN_REVIEW, Task.APPROVED, Task.DONE]
        for task in Task.objects.filter(client__in=clients):
            if random.random() < 0.6:
                task.responsible = random.choice(members).name
            task.status = random.choice(statuses)
            task.progress = {Task.PENDING: 0, Task.DONE: 100}.get(task.status, random.randint(10, 90))
            task.save()

# api/tests/utils.py
"""
Ayudas compartidas por los tests de la API.
"""
import datetime

from rest_framework.test import APIClient

from api.identity import Viewer, issue_session_token
from api.models import Client, TeamMember
from api.services import ClientService


def make_member(name='Ana', role='Diseñador', email=None, password='secreto1', **extra):
    member = TeamMember(
        name=name, role=role,
        email=email or f"{name.strip().lower().replace(' ', '.')}@agencia.test",
        **extra
    )
    member.set_password(password)
    member.save()
    return member


def make_client(company='Acme', plan_base='Started', email=None, password=None, **extra):
    """Crea el cliente por el mismo servicio que la API (genera sus tareas)."""
    data = {
        'company': company,
        'email': email or f"{company.lower()}@cliente.test",
        'plan_base': plan_base,
        'start_date': extra.pop('start_date', datetime.date(2025, 1, 1)),
    }
    data.update(extra)
    return ClientService.create_client(data, password=password)


def make_bare_client(company='Bare', **extra):
    """Cliente sin tareas generadas."""
    client = Client(company=company, **extra)
    client.save()
    return client


def api_client_for(viewer):
    api_client = APIClient()
    if viewer is not None:
        api_client.credentials(HTTP_AUTHORIZATION=f'Bearer {issue_session_token(viewer)}')
    return api_client


def admin_api_client():
    return api_client_for(Viewer.admin())

# api/identity.py
"""
Identidad del usuario que hace la petición (admin, miembro del equipo o cliente)
y emisión del token de sesión firmado.
"""
import logging

from rest_framework_simplejwt.tokens import AccessToken

from .models import Client, TeamMember
from .roles import Roles
from .visibility import ADMIN_VIEWER_ID, is_admin_viewer

logger = logging.getLogger(__name__)

ACTOR_CLAIM = 'actor'
ACTOR_ID_CLAIM = 'actor_id'


class Viewer:
    """Usuario resuelto a partir del token. Lo usa DRF como request.user."""
    ADMIN = 'admin'
    USER = 'user'
    CLIENT = 'client'

    is_authenticated = True
    is_anonymous = False

    def __init__(self, kind, id, name, role, record=None):
        self.kind = kind
        self.id = id
        self.name = name
        self.role = role
        self.record = record

    def __repr__(self):
        return f"<Viewer {self.kind}:{self.id} {self.name!r}>"

    def __str__(self):
        return self.name

    @property
    def pk(self):
        return self.id

    @property
    def is_admin(self):
        return is_admin_viewer(self)

    @property
    def is_client(self):
        return self.kind == self.CLIENT

    @property
    def is_staff(self):
        return self.kind in (self.ADMIN, self.USER)

    def as_dict(self):
        data = {'id': self.id, 'name': self.name, 'role': self.role}
        if self.kind != self.ADMIN:
            data['type'] = self.kind
        return data

    @classmethod
    def admin(cls):
        return cls(cls.ADMIN, ADMIN_VIEWER_ID, 'Admin', Roles.ADMINISTRATOR)

    @classmethod
    def for_member(cls, member):
        return cls(cls.USER, member.pk, member.name, member.role, record=member)

    @classmethod
    def for_client(cls, client):
        return cls(cls.CLIENT, client.pk, client.company, Roles.CLIENT, record=client)


def issue_session_token(viewer):
    """Token firmado con el tipo de actor y su id."""
    token = AccessToken()
    token[ACTOR_CLAIM] = viewer.kind
    token[ACTOR_ID_CLAIM] = str(viewer.id)
    return token


def resolve_viewer(token):
    """
    Resuelve el Viewer a partir de los claims de un token ya validado.
    Hace como mucho una consulta a la base de datos. Devuelve None si el
    registro ya no existe o el claim no es reconocible.
    """
    kind = token.get(ACTOR_CLAIM)
    actor_id = token.get(ACTOR_ID_CLAIM)

    if kind == Viewer.ADMIN:
        return Viewer.admin()
    if kind == Viewer.USER:
        member = TeamMember.objects.filter(pk=actor_id).first() if str(actor_id).isdigit() else None
        return Viewer.for_member(member) if member else None
    if kind == Viewer.CLIENT:
        client = Client.objects.filter(pk=actor_id).first() if str(actor_id).isdigit() else None
        return Viewer.for_client(client) if client else None

    logger.warning(f"[identity] Token con actor desconocido: {kind!r}")
    return None

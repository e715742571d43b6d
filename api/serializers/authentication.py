# api/serializers/authentication.py
"""
Serializers de inicio de sesión (panel interno y portal de clientes).
"""
import logging

from django.conf import settings
from django.utils.translation import gettext_lazy as _
from rest_framework import serializers
from rest_framework.exceptions import AuthenticationFailed

from ..identity import Viewer
from ..models import Client, TeamMember

logger = logging.getLogger(__name__)


def legacy_default_password():
    return getattr(settings, 'AGENCY_LEGACY_DEFAULT_PASSWORD', '') or None


def member_password_matches(member, password):
    if member.has_password:
        return member.check_password(password)
    default = legacy_default_password()
    return default is not None and password == default


def client_password_matches(client, password):
    if client.has_password:
        return client.check_password(password)
    if client.access_code and password == client.access_code:
        return True
    default = legacy_default_password()
    return default is not None and password == default


class LoginSerializer(serializers.Serializer):
    """
    Valida credenciales en orden: administrador integrado, miembro del equipo,
    cliente. Deja el Viewer resultante en validated_data['viewer'].
    """
    email = serializers.CharField(required=False, allow_blank=True, default='')
    password = serializers.CharField(write_only=True, allow_blank=True, trim_whitespace=False)

    def validate(self, attrs):
        email = (attrs.get('email') or '').strip().lower()
        password = attrs.get('password')

        # 1. Administrador integrado
        admin_email = (getattr(settings, 'AGENCY_ADMIN_EMAIL', '') or '').strip().lower()
        admin_password = getattr(settings, 'AGENCY_ADMIN_PASSWORD', '')
        if admin_password and password == admin_password and (not email or email == admin_email):
            logger.info("[LoginSerializer] Acceso de administrador.")
            return {'viewer': Viewer.admin()}

        if not email:
            raise AuthenticationFailed(_("Credenciales inválidas o cuenta inactiva"), code="invalid_credentials")

        # 2. Miembros del equipo
        member = TeamMember.objects.filter(email=email).first()
        if member and member.is_active:
            if member_password_matches(member, password):
                logger.info(f"[LoginSerializer] Acceso del miembro {member.pk}.")
                return {'viewer': Viewer.for_member(member)}
            logger.warning(f"[LoginSerializer] Contraseña incorrecta para el miembro {member.pk}.")
            raise AuthenticationFailed(_("Contraseña incorrecta"), code="invalid_credentials")

        # 3. Clientes
        client = Client.objects.filter(email=email).first()
        if client and client.is_active:
            if client_password_matches(client, password):
                logger.info(f"[LoginSerializer] Acceso del cliente {client.pk}.")
                return {'viewer': Viewer.for_client(client)}
            logger.warning(f"[LoginSerializer] Contraseña incorrecta para el cliente {client.pk}.")
            raise AuthenticationFailed(_("Contraseña incorrecta"), code="invalid_credentials")

        logger.info("[LoginSerializer] Credenciales sin cuenta activa asociada.")
        raise AuthenticationFailed(_("Credenciales inválidas o cuenta inactiva"), code="invalid_credentials")


class PortalLoginSerializer(serializers.Serializer):
    """ Acceso al portal solo con el código del cliente. """
    access_code = serializers.CharField()

    def validate(self, attrs):
        code = attrs['access_code'].strip()
        client = Client.objects.filter(access_code=code).first() if code else None
        if client is None:
            raise AuthenticationFailed(_("Código inválido"), code="invalid_access_code")
        logger.info(f"[PortalLoginSerializer] Acceso al portal del cliente {client.pk}.")
        return {'viewer': Viewer.for_client(client)}

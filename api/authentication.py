# api/authentication.py
import logging

from django.conf import settings
from django.utils.translation import gettext_lazy as _
from rest_framework.authentication import BaseAuthentication, get_authorization_header
from rest_framework.exceptions import AuthenticationFailed
from rest_framework_simplejwt.exceptions import TokenError
from rest_framework_simplejwt.tokens import AccessToken

from .identity import resolve_viewer

logger = logging.getLogger(__name__)


def session_cookie_name():
    return settings.SIMPLE_JWT.get('AUTH_COOKIE', 'session_token')


class SessionTokenAuthentication(BaseAuthentication):
    """
    Autentica con el token firmado de la cookie de sesión o, en su defecto,
    con una cabecera 'Authorization: Bearer <token>'. Cubre los tres tipos de
    actor (admin, equipo, cliente) por el mismo camino.
    """
    keyword = 'Bearer'

    def get_raw_token(self, request):
        header = get_authorization_header(request).split()
        if header and header[0].lower() == self.keyword.lower().encode():
            if len(header) != 2:
                raise AuthenticationFailed(_("Cabecera de autorización inválida."))
            return header[1].decode()
        return request.COOKIES.get(session_cookie_name()) or None

    def authenticate(self, request):
        raw_token = self.get_raw_token(request)
        if not raw_token:
            return None

        try:
            token = AccessToken(raw_token)
        except TokenError as e:
            logger.info(f"[SessionTokenAuthentication] Token rechazado: {e}")
            raise AuthenticationFailed(_("Sesión inválida o expirada."), code="token_not_valid")

        viewer = resolve_viewer(token)
        if viewer is None:
            raise AuthenticationFailed(_("La cuenta de la sesión ya no existe."), code="user_not_found")
        return viewer, token

    def authenticate_header(self, request):
        return f'{self.keyword} realm="api"'

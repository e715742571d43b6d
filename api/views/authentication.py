# api/views/authentication.py
import logging

from django.conf import settings
from django.utils.translation import gettext_lazy as _
from rest_framework import status
from rest_framework.exceptions import AuthenticationFailed, NotAuthenticated
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from ..authentication import SessionTokenAuthentication, session_cookie_name
from ..identity import issue_session_token
from ..serializers.authentication import LoginSerializer, PortalLoginSerializer

logger = logging.getLogger(__name__)


class OptionalSessionTokenAuthentication(SessionTokenAuthentication):
    """
    Igual que SessionTokenAuthentication pero ignora tokens caducados o
    inválidos, para que login y logout funcionen con una cookie vieja.
    """
    def authenticate(self, request):
        try:
            return super().authenticate(request)
        except AuthenticationFailed as e:
            logger.debug(f"[OptionalSessionTokenAuthentication] Cookie ignorada: {e}")
            return None


def set_session_cookie(response, token):
    jwt_settings = settings.SIMPLE_JWT
    response.set_cookie(
        session_cookie_name(),
        str(token),
        max_age=int(jwt_settings['ACCESS_TOKEN_LIFETIME'].total_seconds()),
        httponly=True,
        secure=jwt_settings.get('AUTH_COOKIE_SECURE', False),
        samesite=jwt_settings.get('AUTH_COOKIE_SAMESITE', 'Lax'),
        path='/',
    )
    return response


def clear_session_cookie(response):
    response.delete_cookie(session_cookie_name(), path='/')
    return response


class AuthView(APIView):
    """
    POST: inicia sesión. GET ?logout=true y DELETE: cierran la sesión.
    """
    authentication_classes = [OptionalSessionTokenAuthentication]
    permission_classes = [AllowAny]

    def post(self, request):
        serializer = LoginSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        viewer = serializer.validated_data['viewer']

        token = issue_session_token(viewer)
        redirect_to = '/portal' if viewer.is_client else '/dashboard'
        response = Response({
            'success': True,
            'redirect_to': redirect_to,
            'user': viewer.as_dict(),
            'token': str(token),
        })
        return set_session_cookie(response, token)

    def get(self, request):
        if request.query_params.get('logout') == 'true':
            return clear_session_cookie(Response({'success': True}))
        return Response({'error': str(_("No encontrado"))}, status=status.HTTP_404_NOT_FOUND)

    def delete(self, request):
        return clear_session_cookie(Response({'success': True}))


class MeView(APIView):
    """
    Devuelve la identidad resuelta a partir de la sesión actual.
    """
    permission_classes = [IsAuthenticated]

    def get(self, request):
        return Response(request.user.as_dict())

    def permission_denied(self, request, message=None, code=None):
        if request.authenticators and not request.successful_authenticator:
            raise NotAuthenticated(_("No autenticado"))
        super().permission_denied(request, message=message, code=code)


class PortalLoginView(APIView):
    """
    Acceso al portal de clientes con el código de acceso.
    Emite el mismo token de sesión que el login principal.
    """
    authentication_classes = [OptionalSessionTokenAuthentication]
    permission_classes = [AllowAny]

    def post(self, request):
        serializer = PortalLoginSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        viewer = serializer.validated_data['viewer']

        token = issue_session_token(viewer)
        response = Response({'success': True, 'client_id': viewer.id, 'token': str(token)})
        return set_session_cookie(response, token)

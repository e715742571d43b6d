# api/views/services_catalog.py
from rest_framework import viewsets
from django_filters.rest_framework import DjangoFilterBackend

from ..models import ServicePackage
from ..permissions import AllowAny, IsAdminViewer
from ..serializers.services_catalog import ServicePackageSerializer


class ServicePackageViewSet(viewsets.ModelViewSet):
    """
    ViewSet para gestionar el catálogo de Paquetes de Servicios.
    """
    queryset = ServicePackage.objects.all()
    serializer_class = ServicePackageSerializer
    filter_backends = [DjangoFilterBackend]
    filterset_fields = {
        'status': ['exact'],
        'name': ['icontains'],
    }

    def get_permissions(self):
        """ Permisos: Lectura pública, escritura restringida. """
        if self.action in ['list', 'retrieve']:
            self.permission_classes = [AllowAny]
        else:
            self.permission_classes = [IsAdminViewer]
        return super().get_permissions()

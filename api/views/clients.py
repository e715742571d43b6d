# api/views/clients.py
from django_filters.rest_framework import DjangoFilterBackend
from rest_framework import viewsets

from ..models import Client
from ..permissions import IsAdminOrReadOnly
from ..scoping import scope_clients
from ..serializers.clients import ClientSerializer
from ..services import ClientService


class ClientViewSet(viewsets.ModelViewSet):
    """
    ViewSet para gestionar Clientes. La creación genera las tareas del plan.
    """
    serializer_class = ClientSerializer
    permission_classes = [IsAdminOrReadOnly]
    filter_backends = [DjangoFilterBackend]
    filterset_fields = {
        'status': ['exact'],
        'plan_base': ['exact'],
        'company': ['icontains'],
        'email': ['exact'],
        'country': ['exact'],
    }

    def get_queryset(self):
        base_qs = Client.objects.prefetch_related('tasks')
        return scope_clients(self.request.user, base_qs)

    def perform_destroy(self, instance):
        # Las tareas se borran en cascada
        ClientService.delete_client(instance)

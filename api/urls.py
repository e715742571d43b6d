# api/urls.py

from django.urls import path, include
from rest_framework.routers import DefaultRouter
from rest_framework_nested import routers

# --- Importa los MÓDULOS de vistas ---
from .views import (
    authentication,
    clients,
    dashboard,
    services_catalog,
    tasks,
    team,
)

# ------------------- Router Principal -------------------
router = DefaultRouter()

router.register(r'clients', clients.ClientViewSet, basename='client')
router.register(r'tasks', tasks.TaskViewSet, basename='task')
# El mismo recurso se publica como 'team' y como 'users'
router.register(r'team', team.TeamMemberViewSet, basename='team')
router.register(r'users', team.TeamMemberViewSet, basename='user')
router.register(r'services', services_catalog.ServicePackageViewSet, basename='service')

# --- Rutas Anidadas: /clients/{client_pk}/tasks/ ---
# TaskViewSet lee self.kwargs['client_pk'].
clients_router = routers.NestedDefaultRouter(router, r'clients', lookup='client')
clients_router.register(r'tasks', tasks.TaskViewSet, basename='client-tasks')

# ------------------- URLs Principales de la API -------------------
urlpatterns = [
    path('', include(router.urls)),
    path('', include(clients_router.urls)),

    # --- Sesión ---
    path('auth/', authentication.AuthView.as_view(), name='auth'),
    path('auth/me/', authentication.MeView.as_view(), name='auth-me'),
    path('portal/login/', authentication.PortalLoginView.as_view(), name='portal-login'),

    # --- Tableros ---
    path('dashboard/', dashboard.DashboardDataView.as_view(), name='dashboard_data'),
    path('dashboard/clients/<int:pk>/', dashboard.ClientProgressView.as_view(), name='dashboard-client'),
    path('dashboard/team/', dashboard.TeamWorkloadView.as_view(), name='dashboard-team'),
    path('portal/', dashboard.PortalView.as_view(), name='portal'),
]

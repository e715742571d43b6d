# Paquete de vistas de la API:
#   authentication.py  login, logout, /auth/me/ y login del portal
#   clients.py         ClientViewSet
#   tasks.py           TaskViewSet (también anidado bajo clients)
#   team.py            TeamMemberViewSet ('team' y 'users')
#   services_catalog.py ServicePackageViewSet
#   dashboard.py       tableros internos y portal del cliente

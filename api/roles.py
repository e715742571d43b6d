# api/roles.py
"""
Constantes para los roles del equipo y las etiquetas de responsable.
Evita errores tipográficos y hace el código más legible.
"""


class Roles:
    # Rol con visibilidad total en los tableros
    ADMINISTRATOR = 'Administrador'

    # Roles del equipo
    ADMIN = 'Admin'
    DESIGNER = 'Diseñador'
    TRAFFICKER = 'Trafficker'
    DEVELOPER = 'Dev'
    COMMUNITY_MANAGER = 'Community Manager'

    # Rol sintético de los clientes que entran al portal
    CLIENT = 'Cliente'

    @classmethod
    def team_choices(cls):
        return [
            (cls.ADMIN, 'Admin'),
            (cls.DESIGNER, 'Diseñador'),
            (cls.TRAFFICKER, 'Trafficker'),
            (cls.DEVELOPER, 'Dev'),
            (cls.COMMUNITY_MANAGER, 'Community Manager'),
            (cls.ADMINISTRATOR, 'Administrador'),
        ]


class Responsible:
    """Etiquetas de responsable que no apuntan a una persona concreta."""
    UNASSIGNED = 'Por asignar'
    UNASSIGNED_ALIASES = ('por asignar', 'sin asignar')
    TEAM = 'Equipo'

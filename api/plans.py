# api/plans.py
"""
Plantillas de tareas por plan contratado.

Cada plan se traduce en una lista fija de (título, categoría, responsable).
Los responsables son etiquetas de rol; el equipo las reasigna después.
"""
from django.utils import timezone

from .roles import Responsible, Roles

DEFAULT_CATEGORY = 'General'
DEFAULT_STATUS = 'Pendiente'

WEEKS_PER_CYCLE = 4
GROWTH_POSTS_PER_WEEK = 3


def _weekly_posts():
    return [
        (f'Semana {week}: Post {post}', 'Contenido', Roles.DESIGNER)
        for week in range(1, WEEKS_PER_CYCLE + 1)
        for post in range(1, GROWTH_POSTS_PER_WEEK + 1)
    ]


def _weekly_packs():
    return [
        (f'Semana {week}: Pack Contenido (4 posts)', 'Contenido', Roles.DESIGNER)
        for week in range(1, WEEKS_PER_CYCLE + 1)
    ]


PLAN_TEMPLATES = {
    'Started': [
        ('Análisis de Mercado Inicial', 'Estrategia', Roles.ADMIN),
        ('Configuración de 1 Plataforma', 'Redes', Responsible.TEAM),
        ('Campaña Activa (Setup)', 'Ads', Roles.TRAFFICKER),
        ('Post Semanal 1', 'Contenido', Roles.DESIGNER),
        ('Post Semanal 2', 'Contenido', Roles.DESIGNER),
        ('Post Semanal 3', 'Contenido', Roles.DESIGNER),
        ('Post Semanal 4', 'Contenido', Roles.DESIGNER),
        ('Reporte Mensual', 'Reporte', Roles.ADMIN),
    ],
    'Growth': [
        ('Análisis de Mercado Profundo', 'Estrategia', Roles.ADMIN),
        ('Gestión 2 Plataformas', 'Redes', Responsible.TEAM),
        ('Configuración Bot IA', 'Tech', Roles.DEVELOPER),
        ('Optimización Web Básica', 'Web', Roles.DEVELOPER),
        *_weekly_posts(),
        ('Campaña 1 (Branding)', 'Ads', Roles.TRAFFICKER),
        ('Campaña 2 (Conversión)', 'Ads', Roles.TRAFFICKER),
        ('Campaña 3 (Retargeting)', 'Ads', Roles.TRAFFICKER),
    ],
    'Scale': [
        ('Estrategia Avanzada Omnicanal', 'Estrategia', Roles.ADMIN),
        ('Automatización de Flujos', 'Tech', Roles.DEVELOPER),
        ('Desarrollo/Mejora Ecosistema Web', 'Web', Roles.DEVELOPER),
        *_weekly_packs(),
        ('Campañas High-Ticket', 'Ads', Roles.TRAFFICKER),
        ('Soporte VIP Mensual', 'Soporte', Roles.ADMIN),
    ],
}

FALLBACK_TEMPLATE = [
    ('Onboarding Cliente', 'Estrategia', Roles.ADMIN),
]


def get_plan_template(plan_base):
    """Plantilla del plan; cualquier valor desconocido o vacío usa el onboarding."""
    return PLAN_TEMPLATES.get(plan_base, FALLBACK_TEMPLATE)


def build_tasks_for_plan(plan_base, today=None):
    """
    Devuelve los datos de las tareas a crear para un plan.
    La fecha límite de todas es el día de creación.
    """
    today = today or timezone.localdate()
    tasks = []
    for title, category, responsible in get_plan_template(plan_base):
        tasks.append({
            'title': title,
            'category': category or DEFAULT_CATEGORY,
            'status': DEFAULT_STATUS,
            'responsible': responsible or Responsible.UNASSIGNED,
            'deadline': today,
        })
    return tasks

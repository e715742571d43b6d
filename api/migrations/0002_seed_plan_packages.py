# api/migrations/0002_seed_plan_packages.py

from decimal import Decimal

from django.db import migrations

# --- PAQUETES DE LOS PLANES ---
# name, description, price, features
PLAN_PACKAGES = [
    ("Started", "Plan de entrada: estrategia, redes, una campaña y contenido mensual.", Decimal("0"), [
        "Estrategia de contenidos",
        "Configuración de redes sociales",
        "Campaña de Ads",
        "4 posts de contenido",
        "Reporte mensual",
    ]),
    ("Growth", "Plan de crecimiento con publicación semanal y campañas segmentadas.", Decimal("0"), [
        "Estrategia y auditoría",
        "12 posts al mes (3 por semana)",
        "3 campañas de Ads",
        "Reporte mensual",
    ]),
    ("Scale", "Plan avanzado con packs de contenido semanales y optimización.", Decimal("0"), [
        "Estrategia integral",
        "4 packs de contenido (4 posts cada uno)",
        "Campañas escaladas",
        "Reporte y optimización",
    ]),
]


def seed_plan_packages(apps, schema_editor):
    db_alias = schema_editor.connection.alias
    ServicePackage = apps.get_model('api', 'ServicePackage')
    for name, description, price, features in PLAN_PACKAGES:
        ServicePackage.objects.using(db_alias).get_or_create(
            name=name,
            defaults={'description': description, 'price': price, 'features': features, 'status': 'Activo'},
        )


def remove_plan_packages(apps, schema_editor):
    db_alias = schema_editor.connection.alias
    ServicePackage = apps.get_model('api', 'ServicePackage')
    ServicePackage.objects.using(db_alias).filter(
        name__in=[package[0] for package in PLAN_PACKAGES], legacy_id__isnull=True
    ).delete()


class Migration(migrations.Migration):
    dependencies = [
        ('api', '0001_initial'),
    ]

    operations = [
        migrations.RunPython(seed_plan_packages, remove_plan_packages),
    ]

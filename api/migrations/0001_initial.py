import datetime

import django.core.validators
import django.db.models.deletion
import django_countries.fields
from django.db import migrations, models

import api.models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
    ]

    operations = [
        migrations.CreateModel(
            name='TeamMember',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=150, verbose_name='Nombre')),
                ('role', models.CharField(choices=[('Admin', 'Admin'), ('Diseñador', 'Diseñador'), ('Trafficker', 'Trafficker'), ('Dev', 'Dev'), ('Community Manager', 'Community Manager'), ('Administrador', 'Administrador')], default='Diseñador', max_length=30, verbose_name='Rol')),
                ('email', models.EmailField(max_length=254, unique=True, verbose_name='Email')),
                ('password', models.CharField(blank=True, max_length=128, verbose_name='Contraseña')),
                ('status', models.CharField(choices=[('Activo', 'Activo'), ('Inactivo', 'Inactivo')], db_index=True, default='Activo', max_length=20, verbose_name='Estado')),
                ('legacy_id', models.CharField(blank=True, help_text='Identificador del sistema anterior (importación db.json)', max_length=64, null=True, unique=True, verbose_name='ID Heredado')),
                ('created_at', models.DateTimeField(auto_now_add=True, verbose_name='Fecha de Creación')),
            ],
            options={
                'verbose_name': 'Miembro del Equipo',
                'verbose_name_plural': 'Miembros del Equipo',
                'ordering': ['name'],
            },
        ),
        migrations.CreateModel(
            name='Client',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('company', models.CharField(max_length=200, verbose_name='Empresa')),
                ('contact_name', models.CharField(blank=True, max_length=150, verbose_name='Contacto Principal')),
                ('email', models.EmailField(blank=True, db_index=True, max_length=254, verbose_name='Email')),
                ('phone', models.CharField(blank=True, max_length=30, verbose_name='Teléfono')),
                ('country', django_countries.fields.CountryField(blank=True, max_length=2, null=True, verbose_name='País')),
                ('plan_base', models.CharField(default='Started', help_text='Started, Growth o Scale. Otros valores generan solo la tarea de onboarding.', max_length=30, verbose_name='Plan')),
                ('status', models.CharField(choices=[('Activo', 'Activo'), ('En Pausa', 'En Pausa'), ('Finalizado', 'Finalizado')], db_index=True, default='Activo', max_length=20, verbose_name='Estado')),
                ('billing_cycle', models.PositiveIntegerField(default=30, validators=[django.core.validators.MinValueValidator(1)], verbose_name='Ciclo de Facturación (días)')),
                ('start_date', models.DateField(default=datetime.date.today, verbose_name='Fecha de Inicio')),
                ('renewal_date', models.DateField(blank=True, editable=False, null=True, verbose_name='Fecha de Renovación')),
                ('metrics', models.JSONField(blank=True, default=api.models.default_metrics, verbose_name='Métricas')),
                ('drive_folder', models.CharField(blank=True, max_length=500, verbose_name='Carpeta de Drive')),
                ('platforms', models.JSONField(blank=True, default=list, verbose_name='Plataformas')),
                ('access_code', models.CharField(blank=True, max_length=32, unique=True, verbose_name='Código de Acceso')),
                ('password', models.CharField(blank=True, max_length=128, verbose_name='Contraseña')),
                ('legacy_id', models.CharField(blank=True, max_length=64, null=True, unique=True, verbose_name='ID Heredado')),
                ('created_at', models.DateTimeField(auto_now_add=True, verbose_name='Fecha de Creación')),
            ],
            options={
                'verbose_name': 'Cliente',
                'verbose_name_plural': 'Clientes',
                'ordering': ['company'],
            },
        ),
        migrations.CreateModel(
            name='ServicePackage',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=150, verbose_name='Nombre')),
                ('description', models.TextField(blank=True, verbose_name='Descripción')),
                ('price', models.DecimalField(decimal_places=2, default=0, max_digits=12, validators=[django.core.validators.MinValueValidator(0)], verbose_name='Precio')),
                ('features', models.JSONField(blank=True, default=list, verbose_name='Características')),
                ('status', models.CharField(choices=[('Activo', 'Activo'), ('Inactivo', 'Inactivo')], default='Activo', max_length=20, verbose_name='Estado')),
                ('legacy_id', models.CharField(blank=True, max_length=64, null=True, unique=True, verbose_name='ID Heredado')),
            ],
            options={
                'verbose_name': 'Paquete de Servicios',
                'verbose_name_plural': 'Paquetes de Servicios',
                'ordering': ['price', 'name'],
            },
        ),
        migrations.CreateModel(
            name='Task',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('title', models.CharField(max_length=255, verbose_name='Título')),
                ('description', models.TextField(blank=True, verbose_name='Descripción')),
                ('category', models.CharField(choices=[('Estrategia', 'Estrategia'), ('Contenido', 'Contenido'), ('Ads', 'Ads'), ('Web', 'Web'), ('Reporte', 'Reporte'), ('Redes', 'Redes'), ('Tech', 'Tech'), ('Soporte', 'Soporte'), ('General', 'General')], default='General', max_length=20, verbose_name='Categoría')),
                ('status', models.CharField(choices=[('Pendiente', 'Pendiente'), ('En proceso', 'En proceso'), ('En revisión', 'En revisión'), ('Aprobado', 'Aprobado'), ('Terminado', 'Terminado')], db_index=True, default='Pendiente', max_length=20, verbose_name='Estado')),
                ('progress', models.PositiveSmallIntegerField(default=0, validators=[django.core.validators.MinValueValidator(0), django.core.validators.MaxValueValidator(100)], verbose_name='Progreso')),
                ('responsible', models.CharField(blank=True, default='Por asignar', help_text='Nombre de un miembro del equipo o etiqueta de rol', max_length=150, verbose_name='Responsable')),
                ('deadline', models.DateField(blank=True, null=True, verbose_name='Fecha Límite')),
                ('comments', models.JSONField(blank=True, default=list, verbose_name='Comentarios')),
                ('attachments', models.JSONField(blank=True, default=list, verbose_name='Adjuntos')),
                ('client_feedback', models.TextField(blank=True, verbose_name='Feedback del Cliente')),
                ('legacy_id', models.CharField(blank=True, max_length=64, null=True, unique=True, verbose_name='ID Heredado')),
                ('created_at', models.DateTimeField(auto_now_add=True, verbose_name='Fecha de Creación')),
                ('assignee', models.ForeignKey(blank=True, editable=False, help_text='Se resuelve a partir del responsable', null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='assigned_tasks', to='api.teammember', verbose_name='Miembro Asignado')),
                ('client', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='tasks', to='api.client', verbose_name='Cliente')),
            ],
            options={
                'verbose_name': 'Tarea',
                'verbose_name_plural': 'Tareas',
                'ordering': ['client', 'id'],
            },
        ),
    ]

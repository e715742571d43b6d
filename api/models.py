# api/models.py

import datetime
import logging

from django.contrib.auth.hashers import check_password, make_password
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models
from django.db.models.signals import post_save, pre_save
from django.dispatch import receiver
from django.utils import timezone
from django.utils.crypto import get_random_string
from django.utils.translation import gettext_lazy as _
from django_countries.fields import CountryField

from .roles import Responsible, Roles
from .visibility import AssigneeKind, normalize_name, resolve_assignee

logger = logging.getLogger(__name__)

METRIC_KEYS = ('reach', 'leads', 'clicks', 'spent')


def default_metrics():
    return {key: 0 for key in METRIC_KEYS}


def generate_access_code():
    return get_random_string(8, allowed_chars='ABCDEFGHJKLMNPQRSTUVWXYZ23456789')


class CredentialMixin:
    """Contraseña guardada con los hashers de Django. Vacía = sin contraseña."""

    def set_password(self, raw_password):
        self.password = make_password(raw_password) if raw_password else ''

    def check_password(self, raw_password):
        if not self.password or raw_password is None:
            return False
        return check_password(raw_password, self.password)

    @property
    def has_password(self):
        return bool(self.password)


# ==============================================================================
# ------------------------------ EQUIPO ---------------------------------------
# ==============================================================================

class TeamMember(CredentialMixin, models.Model):
    """Miembro del equipo de la agencia (expuesto como 'team' y 'users')."""
    STATUS_CHOICES = [('Activo', _('Activo')), ('Inactivo', _('Inactivo'))]
    ACTIVE = 'Activo'

    name = models.CharField(_("Nombre"), max_length=150)
    role = models.CharField(_("Rol"), max_length=30, choices=Roles.team_choices(), default=Roles.DESIGNER)
    email = models.EmailField(_("Email"), unique=True)
    password = models.CharField(_("Contraseña"), max_length=128, blank=True)
    status = models.CharField(_("Estado"), max_length=20, choices=STATUS_CHOICES, default=ACTIVE, db_index=True)
    legacy_id = models.CharField(
        _("ID Heredado"), max_length=64, blank=True, null=True, unique=True,
        help_text=_("Identificador del sistema anterior (importación db.json)")
    )
    created_at = models.DateTimeField(_("Fecha de Creación"), auto_now_add=True)

    class Meta:
        verbose_name = _("Miembro del Equipo")
        verbose_name_plural = _("Miembros del Equipo")
        ordering = ['name']

    def __str__(self):
        return f"{self.name} ({self.role})"

    @property
    def is_active(self):
        return self.status == self.ACTIVE

    def save(self, *args, **kwargs):
        self.name = (self.name or '').strip()
        self.email = (self.email or '').strip().lower()
        super().save(*args, **kwargs)


# ==============================================================================
# ------------------------------ CLIENTES -------------------------------------
# ==============================================================================

class Client(CredentialMixin, models.Model):
    """Cliente de la agencia con su plan contratado."""
    PLAN_CHOICES = [('Started', 'Started'), ('Growth', 'Growth'), ('Scale', 'Scale')]
    STATUS_CHOICES = [
        ('Activo', _('Activo')), ('En Pausa', _('En Pausa')), ('Finalizado', _('Finalizado')),
    ]
    ACTIVE = 'Activo'
    DEFAULT_BILLING_CYCLE = 30

    company = models.CharField(_("Empresa"), max_length=200)
    contact_name = models.CharField(_("Contacto Principal"), max_length=150, blank=True)
    email = models.EmailField(_("Email"), blank=True, db_index=True)
    phone = models.CharField(_("Teléfono"), max_length=30, blank=True)
    country = CountryField(_("País"), blank=True, null=True)
    plan_base = models.CharField(
        _("Plan"), max_length=30, default='Started',
        help_text=_("Started, Growth o Scale. Otros valores generan solo la tarea de onboarding.")
    )
    status = models.CharField(_("Estado"), max_length=20, choices=STATUS_CHOICES, default=ACTIVE, db_index=True)
    billing_cycle = models.PositiveIntegerField(
        _("Ciclo de Facturación (días)"), default=DEFAULT_BILLING_CYCLE, validators=[MinValueValidator(1)]
    )
    start_date = models.DateField(_("Fecha de Inicio"), default=datetime.date.today)
    renewal_date = models.DateField(_("Fecha de Renovación"), null=True, blank=True, editable=False)
    metrics = models.JSONField(_("Métricas"), default=default_metrics, blank=True)
    drive_folder = models.CharField(_("Carpeta de Drive"), max_length=500, blank=True)
    platforms = models.JSONField(_("Plataformas"), default=list, blank=True)
    access_code = models.CharField(_("Código de Acceso"), max_length=32, unique=True, blank=True)
    password = models.CharField(_("Contraseña"), max_length=128, blank=True)
    legacy_id = models.CharField(_("ID Heredado"), max_length=64, blank=True, null=True, unique=True)
    created_at = models.DateTimeField(_("Fecha de Creación"), auto_now_add=True)

    class Meta:
        verbose_name = _("Cliente")
        verbose_name_plural = _("Clientes")
        ordering = ['company']

    def __str__(self):
        return f"{self.company} ({self.plan_base})"

    @property
    def is_active(self):
        return self.status == self.ACTIVE

    def compute_renewal_date(self):
        if not self.start_date:
            return None
        return self.start_date + datetime.timedelta(days=self.billing_cycle or self.DEFAULT_BILLING_CYCLE)

    def save(self, *args, **kwargs):
        if isinstance(self.start_date, datetime.datetime):
            self.start_date = self.start_date.date()
        self.renewal_date = self.compute_renewal_date()
        if not self.access_code:
            self.access_code = generate_access_code()
            while Client.objects.filter(access_code=self.access_code).exists():
                self.access_code = generate_access_code()
        self.email = (self.email or '').strip().lower()
        metrics = default_metrics()
        metrics.update(self.metrics or {})
        self.metrics = metrics
        super().save(*args, **kwargs)


# ==============================================================================
# ------------------------------ TAREAS ---------------------------------------
# ==============================================================================

class Task(models.Model):
    """Tarea de un cliente, generada por plan o creada a mano."""
    CATEGORY_CHOICES = [
        ('Estrategia', 'Estrategia'), ('Contenido', 'Contenido'), ('Ads', 'Ads'),
        ('Web', 'Web'), ('Reporte', 'Reporte'), ('Redes', 'Redes'), ('Tech', 'Tech'),
        ('Soporte', 'Soporte'), ('General', 'General'),
    ]
    STATUS_CHOICES = [
        ('Pendiente', _('Pendiente')), ('En proceso', _('En proceso')),
        ('En revisión', _('En revisión')), ('Aprobado', _('Aprobado')),
        ('Terminado', _('Terminado')),
    ]
    PENDING = 'Pendiente'
    IN_PROGRESS = 'En proceso'
    IN_REVIEW = 'En revisión'
    APPROVED = 'Aprobado'
    DONE = 'Terminado'
    DEFAULT_CATEGORY = 'General'

    client = models.ForeignKey(
        Client, on_delete=models.CASCADE, related_name='tasks', verbose_name=_("Cliente")
    )
    title = models.CharField(_("Título"), max_length=255)
    description = models.TextField(_("Descripción"), blank=True)
    category = models.CharField(
        _("Categoría"), max_length=20, choices=CATEGORY_CHOICES, default=DEFAULT_CATEGORY
    )
    status = models.CharField(
        _("Estado"), max_length=20, choices=STATUS_CHOICES, default=PENDING, db_index=True
    )
    progress = models.PositiveSmallIntegerField(
        _("Progreso"), default=0, validators=[MinValueValidator(0), MaxValueValidator(100)]
    )
    responsible = models.CharField(
        _("Responsable"), max_length=150, blank=True, default=Responsible.UNASSIGNED,
        help_text=_("Nombre de un miembro del equipo o etiqueta de rol")
    )
    assignee = models.ForeignKey(
        TeamMember, on_delete=models.SET_NULL, null=True, blank=True,
        related_name='assigned_tasks', verbose_name=_("Miembro Asignado"), editable=False,
        help_text=_("Se resuelve a partir del responsable")
    )
    deadline = models.DateField(_("Fecha Límite"), null=True, blank=True)
    comments = models.JSONField(_("Comentarios"), default=list, blank=True)
    attachments = models.JSONField(_("Adjuntos"), default=list, blank=True)
    client_feedback = models.TextField(_("Feedback del Cliente"), blank=True)
    legacy_id = models.CharField(_("ID Heredado"), max_length=64, blank=True, null=True, unique=True)
    created_at = models.DateTimeField(_("Fecha de Creación"), auto_now_add=True)

    class Meta:
        verbose_name = _("Tarea")
        verbose_name_plural = _("Tareas")
        ordering = ['client', 'id']

    def __str__(self):
        return f"{self.title} [{self.status}] - {self.responsible}"

    def is_overdue(self, today=None):
        today = today or timezone.localdate()
        return bool(self.deadline and self.deadline < today and self.status != self.DONE)

    def resolve_assignee(self, members=None):
        """Actualiza 'assignee' a partir del texto de 'responsible'."""
        if members is None:
            members = TeamMember.objects.only('id', 'name')
        kind, member = resolve_assignee(self.responsible, members)
        self.assignee = member if kind == AssigneeKind.MEMBER else None
        return kind

    @property
    def assignee_kind(self):
        if self.assignee_id:
            return AssigneeKind.MEMBER
        if normalize_name(self.responsible or Responsible.UNASSIGNED) in Responsible.UNASSIGNED_ALIASES:
            return AssigneeKind.UNASSIGNED
        return AssigneeKind.ROLE_LABEL


# ==============================================================================
# ------------------------- CATÁLOGO DE SERVICIOS -----------------------------
# ==============================================================================

class ServicePackage(models.Model):
    """Paquete de servicios del catálogo. No interviene en la generación de tareas."""
    STATUS_CHOICES = [('Activo', _('Activo')), ('Inactivo', _('Inactivo'))]

    name = models.CharField(_("Nombre"), max_length=150)
    description = models.TextField(_("Descripción"), blank=True)
    price = models.DecimalField(
        _("Precio"), max_digits=12, decimal_places=2, default=0, validators=[MinValueValidator(0)]
    )
    features = models.JSONField(_("Características"), default=list, blank=True)
    status = models.CharField(_("Estado"), max_length=20, choices=STATUS_CHOICES, default='Activo')
    legacy_id = models.CharField(_("ID Heredado"), max_length=64, blank=True, null=True, unique=True)

    class Meta:
        verbose_name = _("Paquete de Servicios")
        verbose_name_plural = _("Paquetes de Servicios")
        ordering = ['price', 'name']

    def __str__(self):
        return f"{self.name} ({self.price})"


# ==============================================================================
# ---------------------- SEÑALES DE LA APLICACIÓN -----------------------------
# ==============================================================================

@receiver(pre_save, sender=Task)
def resolve_task_assignee_signal(sender, instance, raw=False, **kwargs):
    if raw:
        return
    instance.responsible = (instance.responsible or '').strip() or Responsible.UNASSIGNED
    instance.resolve_assignee()


@receiver(post_save, sender=TeamMember)
def reassign_tasks_on_member_change_signal(sender, instance, created, raw=False, **kwargs):
    """Re-resuelve las tareas afectadas cuando se crea o renombra un miembro."""
    if raw:
        return
    members = list(TeamMember.objects.only('id', 'name'))
    target = normalize_name(instance.name)
    affected = [
        task for task in Task.objects.filter(models.Q(assignee=instance) | models.Q(assignee__isnull=True))
        if task.assignee_id == instance.pk or normalize_name(task.responsible) == target
    ]
    for task in affected:
        previous = task.assignee_id
        task.resolve_assignee(members)
        if task.assignee_id != previous:
            Task.objects.filter(pk=task.pk).update(assignee=task.assignee)
    if affected:
        logger.debug(f"[TeamMember] {len(affected)} tareas re-resueltas para '{instance.name}' (id {instance.pk}).")

# api/admin.py

from django.contrib import admin
from django.utils.translation import gettext_lazy as _

from .models import Client, ServicePackage, Task, TeamMember


# --- Inline de tareas dentro del cliente ---
class TaskInline(admin.TabularInline):
    model = Task
    extra = 0
    fields = ('title', 'category', 'status', 'progress', 'responsible', 'deadline')
    show_change_link = True


@admin.register(Client)
class ClientAdmin(admin.ModelAdmin):
    list_display = ('company', 'contact_name', 'plan_base', 'status', 'start_date', 'renewal_date', 'country')
    list_filter = ('status', 'plan_base', 'country')
    search_fields = ('company', 'contact_name', 'email', 'access_code')
    readonly_fields = ('renewal_date', 'password', 'legacy_id', 'created_at')
    inlines = [TaskInline]
    fieldsets = (
        (None, {'fields': ('company', 'contact_name', 'email', 'phone', 'country')}),
        (_('Plan'), {'fields': ('plan_base', 'status', 'billing_cycle', 'start_date', 'renewal_date')}),
        (_('Portal'), {'fields': ('access_code', 'password', 'drive_folder', 'platforms', 'metrics')}),
        (_('Metadata'), {'fields': ('legacy_id', 'created_at'), 'classes': ('collapse',)}),
    )


@admin.register(Task)
class TaskAdmin(admin.ModelAdmin):
    list_display = ('title', 'client', 'category', 'status', 'progress', 'responsible', 'assignee', 'deadline')
    list_filter = ('status', 'category')
    search_fields = ('title', 'responsible', 'client__company')
    list_select_related = ('client', 'assignee')
    autocomplete_fields = ['client']
    readonly_fields = ('assignee', 'legacy_id', 'created_at')


@admin.register(TeamMember)
class TeamMemberAdmin(admin.ModelAdmin):
    list_display = ('name', 'role', 'email', 'status')
    list_filter = ('role', 'status')
    search_fields = ('name', 'email')
    readonly_fields = ('password', 'legacy_id', 'created_at')


@admin.register(ServicePackage)
class ServicePackageAdmin(admin.ModelAdmin):
    list_display = ('name', 'price', 'status')
    list_filter = ('status',)
    search_fields = ('name', 'description')

# api/serializers/team.py
"""
Serializers para los miembros del equipo.
"""
from django.utils.translation import gettext_lazy as _
from rest_framework import serializers
from rest_framework.exceptions import ValidationError

from ..models import TeamMember


class TeamMemberSerializer(serializers.ModelSerializer):
    """ Serializer para crear/leer/actualizar miembros del equipo. """
    password = serializers.CharField(
        write_only=True, required=False, allow_blank=True, trim_whitespace=False
    )
    task_count = serializers.SerializerMethodField()

    class Meta:
        model = TeamMember
        fields = ['id', 'name', 'role', 'email', 'password', 'status', 'task_count', 'created_at']
        read_only_fields = ['id', 'task_count', 'created_at']

    def get_task_count(self, obj):
        return obj.assigned_tasks.count() if obj.pk else 0

    def validate_name(self, value):
        value = value.strip()
        if not value:
            raise ValidationError(_("El nombre no puede estar vacío."))
        return value

    def validate_email(self, value):
        value = value.strip().lower()
        qs = TeamMember.objects.filter(email=value)
        if self.instance is not None:
            qs = qs.exclude(pk=self.instance.pk)
        if qs.exists():
            raise ValidationError(_('Ya existe un miembro con este email.'))
        return value

    def create(self, validated_data):
        password = validated_data.pop('password', None)
        member = TeamMember(**validated_data)
        member.set_password(password)
        member.save()
        return member

    def update(self, instance, validated_data):
        password = validated_data.pop('password', None)
        if password is not None:
            instance.set_password(password)
        return super().update(instance, validated_data)

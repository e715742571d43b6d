# api/serializers/base.py
"""
Serializers base usados en varios módulos (tableros, tareas, portal).
"""
from rest_framework import serializers

from ..models import Client, TeamMember


class TeamMemberBasicSerializer(serializers.ModelSerializer):
    """ Info mínima de un miembro del equipo. """
    class Meta:
        model = TeamMember
        fields = ['id', 'name', 'role', 'status']
        read_only_fields = fields


class ClientBasicSerializer(serializers.ModelSerializer):
    """ Info mínima de un cliente para listados y tableros. """
    class Meta:
        model = Client
        fields = ['id', 'company', 'plan_base', 'status', 'start_date', 'renewal_date']
        read_only_fields = fields

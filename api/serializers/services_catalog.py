# api/serializers/services_catalog.py
"""
Serializers para el catálogo de paquetes de servicios.
"""
from django.utils.translation import gettext_lazy as _
from rest_framework import serializers
from rest_framework.exceptions import ValidationError

from ..models import ServicePackage


class ServicePackageSerializer(serializers.ModelSerializer):
    """ Serializer para leer/escribir paquetes de servicios. """
    class Meta:
        model = ServicePackage
        fields = ['id', 'name', 'description', 'price', 'features', 'status']
        read_only_fields = ['id']

    def validate_features(self, value):
        if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
            raise ValidationError(_("Las características deben ser una lista de textos."))
        return value

from rest_framework import serializers

from .holder import clean_text


class PetWriteSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=30)
    birthDate = serializers.DateField()
    # Required for new pets only; checked in holders.services.pets.
    typeId = serializers.IntegerField(required=False, allow_null=True, min_value=1)

    def validate_name(self, v):
        v = clean_text(v)
        if not v:
            raise serializers.ValidationError('must not be blank', code='blank')
        return v


class VisitWriteSerializer(serializers.Serializer):
    date = serializers.DateField(required=False, allow_null=True)
    description = serializers.CharField(max_length=255)

    def validate_description(self, v):
        v = clean_text(v)
        if not v:
            raise serializers.ValidationError('must not be blank', code='blank')
        return v

import bleach
from django.core.validators import RegexValidator
from rest_framework import serializers

from holders.domain import Holder, Pet, Visit

telephone_validator = RegexValidator(r'^\d{1,10}$', message='numeric value out of bounds (<10 digits>.<0 digits> expected)', code='digits')


def clean_text(v):
    return bleach.clean((v or '').strip(), strip=True)


class HolderWriteSerializer(serializers.Serializer):
    firstName = serializers.CharField(max_length=30)
    lastName = serializers.CharField(max_length=30)
    address = serializers.CharField(max_length=255)
    city = serializers.CharField(max_length=80)
    telephone = serializers.CharField(max_length=10, validators=[telephone_validator])

    def validate_firstName(self, v):
        return self._required_text(v)

    def validate_lastName(self, v):
        return self._required_text(v)

    def validate_address(self, v):
        return self._required_text(v)

    def validate_city(self, v):
        return self._required_text(v)

    @staticmethod
    def _required_text(v):
        v = clean_text(v)
        if not v:
            raise serializers.ValidationError('must not be blank', code='blank')
        return v


class HolderSearchQuerySerializer(serializers.Serializer):
    lastName = serializers.CharField(required=False, allow_blank=True, max_length=30, trim_whitespace=False)
    page = serializers.IntegerField(required=False, min_value=1)


def serialize_visit(visit: Visit) -> dict:
    return {
        'id': visit.id,
        'date': visit.date.isoformat() if visit.date else None,
        'description': visit.description,
    }


def serialize_pet(pet: Pet, *, with_visits: bool = True) -> dict:
    data = {
        'id': pet.id,
        'name': pet.name,
        'birthDate': pet.birth_date.isoformat() if pet.birth_date else None,
        'type': {'id': pet.type.id, 'name': pet.type.name} if pet.type else None,
    }
    if with_visits:
        data['visits'] = [serialize_visit(v) for v in pet.visits]
    return data


def serialize_holder(holder: Holder, *, with_visits: bool = True) -> dict:
    return {
        'id': holder.id,
        'firstName': holder.first_name,
        'lastName': holder.last_name,
        'address': holder.address,
        'city': holder.city,
        'telephone': holder.telephone,
        'pets': [serialize_pet(p, with_visits=with_visits) for p in holder.pets],
    }

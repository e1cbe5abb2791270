"""
Pet and visit views, nested under a holder.

Every write loads the holder aggregate, changes it in memory and saves
it back as a whole.
"""
from __future__ import annotations

from rest_framework import status
from rest_framework.decorators import api_view
from rest_framework.response import Response

from ..serializers.holder import serialize_holder, serialize_pet, serialize_visit
from ..services.pets import add_pet, add_pets, update_pet
from ..services.visits import add_visit


@api_view(['POST'])
def pet_create(request, holder_id: int):
    """Add one pet, or several at once when the body carries a ``pets`` list."""
    items = request.data.get('pets') if hasattr(request.data, 'get') else None
    if isinstance(items, list):
        holder = add_pets(holder_id, items)
        return Response(serialize_holder(holder), status=status.HTTP_201_CREATED)
    pet = add_pet(holder_id, request.data)
    return Response(serialize_pet(pet), status=status.HTTP_201_CREATED)


@api_view(['POST'])
def pet_update(request, holder_id: int, pet_id: int):
    pet = update_pet(holder_id, pet_id, request.data)
    return Response(serialize_pet(pet))


@api_view(['POST'])
def visit_create(request, holder_id: int, pet_id: int):
    visit = add_visit(holder_id, pet_id, request.data)
    return Response({'petId': pet_id, **serialize_visit(visit)}, status=status.HTTP_201_CREATED)

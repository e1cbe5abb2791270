"""
Holder views.

Create, edit, search and show holders.  Search follows the clinic's
find-holders form: an empty page is a ``lastName`` rejection, a single match
redirects to that holder and anything else is returned as a page.
"""
from __future__ import annotations

from django.shortcuts import redirect
from rest_framework import status
from rest_framework.decorators import api_view
from rest_framework.response import Response

from ..repository import HolderRepository
from ..serializers import validate_or_raise
from ..serializers.holder import HolderSearchQuerySerializer, serialize_holder
from ..services.holders import create_holder, search_holders, update_holder


@api_view(['GET'])
def find_holders(request):
    q = validate_or_raise(HolderSearchQuerySerializer, request.query_params)
    page = q.get('page') or 1
    # no lastName parameter means "every holder"
    results = search_holders(q.get('lastName', ''), page)
    if results.total_elements == 1:
        return redirect('holder-detail', holder_id=results.content[0].id)
    return Response({
        'ok': True,
        'currentPage': page,
        'totalPages': results.total_pages,
        'totalItems': results.total_elements,
        'listHolders': [serialize_holder(h, with_visits=False) for h in results],
    })


@api_view(['POST'])
def holder_create(request):
    holder = create_holder(request.data)
    return Response(serialize_holder(holder), status=status.HTTP_201_CREATED)


@api_view(['GET'])
def holder_detail(request, holder_id: int):
    holder = HolderRepository().find_by_id(holder_id)
    return Response(serialize_holder(holder))


@api_view(['POST'])
def holder_update(request, holder_id: int):
    # the id always comes from the URL, never from the body
    holder = update_holder(holder_id, request.data)
    return Response(serialize_holder(holder))


@api_view(['GET'])
def pet_types(request):
    return Response([{'id': t.id, 'name': t.name} for t in HolderRepository().find_pet_types()])

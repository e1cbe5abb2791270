"""
URL mappings for the pet clinic API.

Paths mirror the clinic's holder and pet forms.  Trailing slashes are
omitted throughout (``APPEND_SLASH`` is off).
"""
from django.urls import path, include

from .views import health
from .views.holders import find_holders, holder_create, holder_detail, holder_update, pet_types
from .views.pets import pet_create, pet_update, visit_create


urlpatterns = [
    path('', include('django_prometheus.urls')),
    path('healthz', health.healthz),
    path('api/pettypes', pet_types, name='pet-types'),
    # Holders
    path('api/holders', find_holders, name='holder-find'),
    path('api/holders/new', holder_create, name='holder-create'),
    path('api/holders/<int:holder_id>', holder_detail, name='holder-detail'),
    path('api/holders/<int:holder_id>/edit', holder_update, name='holder-update'),
    # Pets and visits
    path('api/holders/<int:holder_id>/pets/new', pet_create, name='pet-create'),
    path('api/holders/<int:holder_id>/pets/<int:pet_id>/edit', pet_update, name='pet-update'),
    path('api/holders/<int:holder_id>/pets/<int:pet_id>/visits/new', visit_create, name='visit-create'),
]

"""
Django admin registrations for the clinic tables.

Superusers can inspect and correct holders, pets and visits at
``/admin/``.  Edits made here bypass the duplicate pet name check done
by the API.
"""

from django.contrib import admin

from .models import HolderRecord, PetRecord, PetTypeRecord, VisitRecord


class PetInline(admin.TabularInline):
    model = PetRecord
    extra = 0


class VisitInline(admin.TabularInline):
    model = VisitRecord
    extra = 0


@admin.register(PetTypeRecord)
class PetTypeAdmin(admin.ModelAdmin):
    list_display = ('id', 'name')
    search_fields = ('name',)


@admin.register(HolderRecord)
class HolderAdmin(admin.ModelAdmin):
    list_display = ('id', 'first_name', 'last_name', 'city', 'telephone')
    search_fields = ('last_name', 'first_name', 'telephone')
    inlines = [PetInline]


@admin.register(PetRecord)
class PetAdmin(admin.ModelAdmin):
    list_display = ('id', 'name', 'type', 'birth_date', 'holder')
    list_filter = ('type',)
    search_fields = ('name', 'holder__last_name')
    inlines = [VisitInline]


@admin.register(VisitRecord)
class VisitAdmin(admin.ModelAdmin):
    list_display = ('id', 'pet', 'visit_date', 'description')
    list_filter = ('visit_date',)

"""
Database tables for the pet clinic.

These records are the storage rows behind the holder aggregate.  They
are never handed to callers directly: :mod:`holders.repository` reads
them into detached :mod:`holders.domain` objects and writes those
objects back.  Table names follow the clinic schema (``holder``,
``pet``, ``pet_type``, ``visit``).
"""
from __future__ import annotations

from django.db import models


class PetTypeRecord(models.Model):
    """A kind of animal the clinic treats (cat, dog, ...)."""
    name = models.CharField(max_length=80, unique=True)

    class Meta:
        db_table = 'pet_type'
        ordering = ['name']

    def __str__(self) -> str:
        return self.name


class HolderRecord(models.Model):
    first_name = models.CharField(max_length=30)
    # Searched by prefix, so index it.
    last_name = models.CharField(max_length=30, db_index=True)
    address = models.CharField(max_length=255)
    city = models.CharField(max_length=80)
    telephone = models.CharField(max_length=20)

    class Meta:
        db_table = 'holder'

    def __str__(self) -> str:
        return f"{self.first_name} {self.last_name} (#{self.id})"


class PetRecord(models.Model):
    holder = models.ForeignKey(HolderRecord, on_delete=models.CASCADE, related_name='pets')
    type = models.ForeignKey(PetTypeRecord, on_delete=models.PROTECT, related_name='pets')
    name = models.CharField(max_length=30)
    birth_date = models.DateField(null=True, blank=True)

    class Meta:
        db_table = 'pet'
        indexes = [
            models.Index(fields=['holder', 'name']),
        ]

    def __str__(self) -> str:
        return f"{self.name} (#{self.id}, holder={self.holder_id})"


class VisitRecord(models.Model):
    pet = models.ForeignKey(PetRecord, on_delete=models.CASCADE, related_name='visits')
    visit_date = models.DateField()
    description = models.CharField(max_length=255)

    class Meta:
        db_table = 'visit'
        indexes = [models.Index(fields=['pet', 'visit_date'])]

    def __str__(self) -> str:
        return f"visit {self.id} pet={self.pet_id} @ {self.visit_date:%F}"

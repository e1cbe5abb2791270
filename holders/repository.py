"""
Persistence for the holder aggregate.

:class:`HolderRepository` is the only code that reads or writes the
``holder``, ``pet``, ``pet_type`` and ``visit`` tables.  Every method
states which nested collections it fills in; the objects it returns are
detached :mod:`holders.domain` snapshots, so nothing is lazily loaded
after the call returns.

Page numbers are 1-indexed for callers and converted to a 0-indexed
offset here.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Dict, Generic, Iterator, List, Optional, Tuple, TypeVar

from django.conf import settings
from django.db import DatabaseError, connection, transaction
from django.db.models import Prefetch, QuerySet
from django.db.models.functions import Collate, Left

from .domain import Holder, Pet, PetType, Visit
from .exceptions import HolderNotFound, PersistenceFailure
from .models import HolderRecord, PetRecord, PetTypeRecord, VisitRecord

T = TypeVar('T')

MYSQL_BINARY_COLLATION = 'utf8mb4_bin'


@dataclass
class Page(Generic[T]):
    """One page of results plus the totals needed to render pagination."""
    content: List[T]
    number: int
    size: int
    total_elements: int

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total_elements / self.size) if self.size else 0

    @property
    def is_empty(self) -> bool:
        return not self.content

    def __iter__(self) -> Iterator[T]:
        return iter(self.content)

    def __len__(self) -> int:
        return len(self.content)


def default_page_size() -> int:
    return getattr(settings, 'CLINIC_PAGE_SIZE', 5)


class HolderRepository:

    def find_pet_types(self) -> List[PetType]:
        """All pet types, sorted by name."""
        return [PetType(id=r.id, name=r.name) for r in PetTypeRecord.objects.order_by('name', 'id')]

    def find_by_last_name(self, last_name: Optional[str], page: int = 1,
                          page_size: Optional[int] = None) -> Page[Holder]:
        """Holders whose last name starts with ``last_name``, case-sensitively.

        An empty prefix matches every holder.  Each holder comes back with
        its pets (and their types) but without visits.
        """
        qs = HolderRecord.objects.all()
        prefix = last_name or ''
        if prefix:
            qs = qs.annotate(
                last_name_prefix=self._prefix_expression(prefix, connection.vendor),
            ).filter(last_name_prefix=prefix)
        return self._page(qs, page, page_size)

    def find_all(self, page: int = 1, page_size: Optional[int] = None) -> Page[Holder]:
        """Every holder, one page at a time, with pets but without visits."""
        return self._page(HolderRecord.objects.all(), page, page_size)

    def find_by_id(self, holder_id: int) -> Holder:
        """The holder with its pets, their types and their visits.

        Raises :class:`~holders.exceptions.HolderNotFound` when no holder has
        that id.
        """
        record = (
            HolderRecord.objects
            .prefetch_related(self._pets_prefetch(), self._visits_prefetch())
            .filter(pk=holder_id)
            .first()
        )
        if record is None:
            raise HolderNotFound(holder_id)
        return self._to_holder(record, {}, with_visits=True)

    def save(self, holder: Holder) -> None:
        """Insert or update the holder together with all its pets and visits.

        Runs in one transaction.  Transient pets and visits get ids in the
        order they appear in their parent's collection.  If the database
        rejects any statement nothing is committed, the ids handed out
        during the attempt are cleared again and
        :class:`~holders.exceptions.PersistenceFailure` is raised.
        """
        undo: List[Tuple[object, str, object]] = []
        try:
            with transaction.atomic():
                self._write(holder, undo)
        except DatabaseError as exc:
            for obj, attr, old in reversed(undo):
                setattr(obj, attr, old)
            raise PersistenceFailure(str(exc)) from exc

    # ------------------------------------------------------------------
    # internals
    # ------------------------------------------------------------------

    def _page(self, qs: QuerySet, page: int, page_size: Optional[int]) -> Page[Holder]:
        size = default_page_size() if page_size is None else page_size
        if page < 1:
            raise ValueError(f"page must be >= 1, got {page}")
        if size < 1:
            raise ValueError(f"page_size must be >= 1, got {size}")
        offset = (page - 1) * size
        total = qs.count()
        rows = list(qs.order_by('id').prefetch_related(self._pets_prefetch())[offset:offset + size])
        types: Dict[int, PetType] = {}
        content = [self._to_holder(r, types, with_visits=False) for r in rows]
        return Page(content=content, number=page, size=size, total_elements=total)

    @staticmethod
    def _prefix_expression(prefix: str, vendor: str):
        # LIKE is case-insensitive on SQLite; compare the leading characters instead.
        expression = Left('last_name', len(prefix))
        if vendor == 'mysql':
            # utf8mb4 default collations ignore case
            expression = Collate(expression, MYSQL_BINARY_COLLATION)
        return expression

    @staticmethod
    def _pets_prefetch() -> Prefetch:
        return Prefetch('pets', queryset=PetRecord.objects.select_related('type').order_by('name', 'id'))

    @staticmethod
    def _visits_prefetch() -> Prefetch:
        return Prefetch('pets__visits', queryset=VisitRecord.objects.order_by('visit_date', 'id'))

    def _to_holder(self, record: HolderRecord, types: Dict[int, PetType], *, with_visits: bool) -> Holder:
        holder = Holder(
            id=record.id,
            first_name=record.first_name,
            last_name=record.last_name,
            address=record.address,
            city=record.city,
            telephone=record.telephone,
        )
        for pet_row in record.pets.all():
            pet_type = types.get(pet_row.type_id)
            if pet_type is None:
                pet_type = types[pet_row.type_id] = PetType(id=pet_row.type.id, name=pet_row.type.name)
            pet = Pet(id=pet_row.id, name=pet_row.name, birth_date=pet_row.birth_date, type=pet_type)
            if with_visits:
                pet.visits = [
                    Visit(id=v.id, pet_id=pet_row.id, date=v.visit_date, description=v.description)
                    for v in pet_row.visits.all()
                ]
            holder.add_pet(pet)
        return holder

    def _write(self, holder: Holder, undo: List[Tuple[object, str, object]]) -> None:
        row = HolderRecord(
            id=holder.id,
            first_name=holder.first_name,
            last_name=holder.last_name,
            address=holder.address,
            city=holder.city,
            telephone=holder.telephone,
        )
        row.save()
        self._assign_id(holder, row.id, undo)
        for pet in holder.pets:
            pet_row = PetRecord(
                id=pet.id,
                holder_id=holder.id,
                type_id=pet.type.id if pet.type is not None else None,
                name=pet.name,
                birth_date=pet.birth_date,
            )
            pet_row.save()
            self._assign_id(pet, pet_row.id, undo)
            for visit in pet.visits:
                if visit.pet_id != pet.id:
                    undo.append((visit, 'pet_id', visit.pet_id))
                    visit.pet_id = pet.id
                visit_row = VisitRecord(
                    id=visit.id,
                    pet_id=pet.id,
                    visit_date=visit.date,
                    description=visit.description,
                )
                visit_row.save()
                self._assign_id(visit, visit_row.id, undo)

    @staticmethod
    def _assign_id(entity, new_id: int, undo: List[Tuple[object, str, object]]) -> None:
        if entity.id is None:
            undo.append((entity, 'id', None))
            entity.id = new_id

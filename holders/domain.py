"""
The holder aggregate.

A :class:`Holder` owns its :class:`Pet` objects and each pet owns its
:class:`Visit` objects.  These are plain in-memory objects: nothing here
touches the database.  They are produced by
:class:`holders.repository.HolderRepository` as detached snapshots,
mutated by callers and handed back to ``save``.

An entity is *transient* while its ``id`` is ``None`` and becomes
persisted once ``save`` assigns one.
"""
from __future__ import annotations

import datetime
import weakref
from dataclasses import dataclass, field
from typing import List, Optional

from .exceptions import PetNotFound


@dataclass(frozen=True)
class PetType:
    """Reference data shared by every pet of that kind."""
    id: int
    name: str

    def __str__(self) -> str:
        return self.name


@dataclass
class Visit:
    description: str = ''
    date: datetime.date = field(default_factory=datetime.date.today)
    id: Optional[int] = None
    pet_id: Optional[int] = None

    @property
    def is_new(self) -> bool:
        return self.id is None


@dataclass
class Pet:
    name: str = ''
    birth_date: Optional[datetime.date] = None
    type: Optional[PetType] = None
    id: Optional[int] = None
    visits: List[Visit] = field(default_factory=list)
    # Non-owning link back to the holder; set by Holder.add_pet.
    _owner_ref: Optional[weakref.ref] = field(default=None, repr=False, compare=False)

    @property
    def is_new(self) -> bool:
        return self.id is None

    @property
    def owner(self) -> Optional['Holder']:
        """The holder this pet belongs to, if it is still alive."""
        return self._owner_ref() if self._owner_ref is not None else None

    def add_visit(self, visit: Visit) -> None:
        visit.pet_id = self.id
        self.visits.append(visit)


@dataclass
class Holder:
    """A pet owner and the root of the aggregate.

    Pet names are unique within one holder, compared case-insensitively.
    The web layer checks this through :meth:`get_pet_by_name` before
    calling ``save``; the database does not enforce it.
    """
    first_name: str = ''
    last_name: str = ''
    address: str = ''
    city: str = ''
    telephone: str = ''
    id: Optional[int] = None
    pets: List[Pet] = field(default_factory=list)

    @property
    def is_new(self) -> bool:
        return self.id is None

    def add_pet(self, pet: Pet) -> None:
        """Attach ``pet`` to this holder.

        A pet that is already in the collection (the same object, or a
        persisted pet with the same id) is not added twice.
        """
        pet._owner_ref = weakref.ref(self)
        for existing in self.pets:
            if existing is pet:
                return
        if not pet.is_new and self.get_pet(pet.id) is not None:
            self.pets = [pet if p.id == pet.id else p for p in self.pets]
            return
        self.pets.append(pet)

    def get_pet(self, pet_id: Optional[int]) -> Optional[Pet]:
        """Return the pet with the given id, or ``None``."""
        if pet_id is None:
            return None
        for pet in self.pets:
            if pet.id == pet_id:
                return pet
        return None

    def get_pet_by_name(self, name: Optional[str], must_be_new: bool = False) -> Optional[Pet]:
        """Return the pet whose name matches ``name`` ignoring case, or ``None``.

        With ``must_be_new`` only transient pets are considered, which is
        how duplicate names are detected among pets added in the current
        edit.
        """
        if not name:
            return None
        wanted = name.casefold()
        for pet in self.pets:
            if must_be_new and not pet.is_new:
                continue
            if (pet.name or '').casefold() == wanted:
                return pet
        return None

    def add_visit(self, pet_id: Optional[int], visit: Visit) -> None:
        """Append ``visit`` to the pet with ``pet_id``.

        Raises :class:`~holders.exceptions.PetNotFound` if no pet of this
        holder has that id.
        """
        pet = self.get_pet(pet_id)
        if pet is None:
            raise PetNotFound(pet_id, holder_id=self.id)
        pet.add_visit(visit)

import logging
from typing import Dict, List, Optional

from holders.domain import Holder, Pet, PetType
from holders.exceptions import FieldError, PetNotFound, ValidationFailure
from holders.repository import HolderRepository
from holders.serializers import validate_or_raise
from holders.serializers.pet import PetWriteSerializer

logger = logging.getLogger(__name__)


def _types_by_id(repo: HolderRepository) -> Dict[int, PetType]:
    return {t.id: t for t in repo.find_pet_types()}


def _field(prefix: Optional[str], name: str) -> str:
    return f"{prefix}.{name}" if prefix else name


def add_pets(holder_id: int, items: List[dict], *, repo: Optional[HolderRepository] = None) -> Holder:
    """Validate and attach new pets to a holder, then save the holder once.

    A name is rejected as ``duplicate`` when it matches, ignoring case, a
    pet added earlier in the same call.  All items are checked before
    anything is saved.
    """
    repo = repo or HolderRepository()
    holder = repo.find_by_id(holder_id)
    if not items:
        raise ValidationFailure.single('pets', 'required', 'at least one pet is required')
    types = _types_by_id(repo)
    errors: List[FieldError] = []
    single = len(items) == 1
    for index, data in enumerate(items):
        prefix = None if single else f"pets.{index}"
        try:
            values = validate_or_raise(PetWriteSerializer, data, prefix=prefix)
        except ValidationFailure as exc:
            errors.extend(exc.errors)
            continue
        pet = Pet(name=values['name'], birth_date=values['birthDate'])
        if holder.get_pet_by_name(pet.name, must_be_new=True) is not None:
            errors.append(FieldError(_field(prefix, 'name'), 'duplicate', 'already exists'))
        type_id = values.get('typeId')
        if type_id is None:
            errors.append(FieldError(_field(prefix, 'typeId'), 'required', 'is required'))
        elif type_id not in types:
            errors.append(FieldError(_field(prefix, 'typeId'), 'invalid', f'unknown pet type {type_id}'))
        else:
            pet.type = types[type_id]
        holder.add_pet(pet)
    if errors:
        raise ValidationFailure(errors)
    repo.save(holder)
    logger.info("holder %s: added %d pet(s)", holder.id, len(items))
    return holder


def add_pet(holder_id: int, data, *, repo: Optional[HolderRepository] = None) -> Pet:
    holder = add_pets(holder_id, [data], repo=repo)
    return holder.pets[-1]


def update_pet(holder_id: int, pet_id: int, data, *, repo: Optional[HolderRepository] = None) -> Pet:
    repo = repo or HolderRepository()
    values = validate_or_raise(PetWriteSerializer, data)
    holder = repo.find_by_id(holder_id)
    pet = holder.get_pet(pet_id)
    if pet is None:
        raise PetNotFound(pet_id, holder_id=holder_id)
    pet.name = values['name']
    pet.birth_date = values['birthDate']
    type_id = values.get('typeId')
    if type_id is not None:
        types = _types_by_id(repo)
        if type_id not in types:
            raise ValidationFailure.single('typeId', 'invalid', f'unknown pet type {type_id}')
        pet.type = types[type_id]
    holder.add_pet(pet)
    repo.save(holder)
    logger.info("holder %s: pet %s updated", holder.id, pet.id)
    return pet

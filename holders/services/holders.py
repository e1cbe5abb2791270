import logging
from typing import Optional

from holders.domain import Holder
from holders.exceptions import ValidationFailure
from holders.repository import HolderRepository, Page
from holders.serializers import validate_or_raise
from holders.serializers.holder import HolderWriteSerializer

logger = logging.getLogger(__name__)


def _apply(holder: Holder, values: dict) -> None:
    holder.first_name = values['firstName']
    holder.last_name = values['lastName']
    holder.address = values['address']
    holder.city = values['city']
    holder.telephone = values['telephone']


def create_holder(data, *, repo: Optional[HolderRepository] = None) -> Holder:
    repo = repo or HolderRepository()
    values = validate_or_raise(HolderWriteSerializer, data)
    holder = Holder()
    _apply(holder, values)
    repo.save(holder)
    logger.info("holder %s created (%s %s)", holder.id, holder.first_name, holder.last_name)
    return holder


def update_holder(holder_id: int, data, *, repo: Optional[HolderRepository] = None) -> Holder:
    """Replace the holder's contact fields; its pets and visits are kept."""
    repo = repo or HolderRepository()
    values = validate_or_raise(HolderWriteSerializer, data)
    holder = repo.find_by_id(holder_id)
    _apply(holder, values)
    repo.save(holder)
    logger.info("holder %s updated", holder.id)
    return holder


def search_holders(last_name: Optional[str], page: int = 1, *,
                   repo: Optional[HolderRepository] = None) -> Page[Holder]:
    """Find holders by last-name prefix; a missing name lists everyone.

    An empty page, including a page past the last one, is reported as a
    ``notFound`` rejection of ``lastName``.
    """
    repo = repo or HolderRepository()
    results = repo.find_by_last_name(last_name or '', page)
    if results.is_empty:
        raise ValidationFailure.single('lastName', 'notFound', 'not found')
    return results

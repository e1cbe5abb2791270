import datetime
import logging
from typing import Optional

from holders.domain import Visit
from holders.repository import HolderRepository
from holders.serializers import validate_or_raise
from holders.serializers.pet import VisitWriteSerializer

logger = logging.getLogger(__name__)


def add_visit(holder_id: int, pet_id: int, data, *, repo: Optional[HolderRepository] = None) -> Visit:
    repo = repo or HolderRepository()
    values = validate_or_raise(VisitWriteSerializer, data)
    holder = repo.find_by_id(holder_id)
    visit = Visit(description=values['description'], date=values.get('date') or datetime.date.today())
    holder.add_visit(pet_id, visit)
    repo.save(holder)
    logger.info("holder %s: visit %s recorded for pet %s", holder.id, visit.id, pet_id)
    return visit

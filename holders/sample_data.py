"""
The classic pet clinic sample dataset.

Rows carry fixed ids so that tests and demos can refer to, say, holder 6
and the cat Samantha (pet 7) directly.
"""
import datetime

from django.core.management.color import no_style
from django.db import connection, transaction

from .models import HolderRecord, PetRecord, PetTypeRecord, VisitRecord

PET_TYPES = [
    (1, 'cat'),
    (2, 'dog'),
    (3, 'lizard'),
    (4, 'snake'),
    (5, 'bird'),
    (6, 'hamster'),
]

HOLDERS = [
    (1, 'George', 'Franklin', '110 W. Liberty St.', 'Madison', '6085551023'),
    (2, 'Betty', 'Davis', '638 Cardinal Ave.', 'Sun Prairie', '6085551749'),
    (3, 'Eduardo', 'Rodriquez', '2693 Commerce St.', 'McFarland', '6085558763'),
    (4, 'Harold', 'Davis', '563 Friendly St.', 'Windsor', '6085553198'),
    (5, 'Peter', 'McTavish', '2387 S. Fair Way', 'Madison', '6085552765'),
    (6, 'Jean', 'Coleman', '105 N. Lake St.', 'Monona', '6085552654'),
    (7, 'Jeff', 'Black', '1450 Oak Blvd.', 'Monona', '6085555387'),
    (8, 'Maria', 'Escobito', '345 Maple St.', 'Madison', '6085557683'),
    (9, 'David', 'Schroeder', '2749 Blackhawk Trail', 'Madison', '6085559435'),
    (10, 'Carlos', 'Estaban', '2335 Independence La.', 'Waunakee', '6085555487'),
]

# (id, name, birth date, type id, holder id)
PETS = [
    (1, 'Leo', '2010-09-07', 1, 1),
    (2, 'Basil', '2012-08-06', 6, 2),
    (3, 'Rosy', '2011-04-17', 2, 3),
    (4, 'Jewel', '2010-03-07', 2, 3),
    (5, 'Iggy', '2010-11-30', 3, 4),
    (6, 'George', '2010-01-20', 4, 5),
    (7, 'Samantha', '2012-09-04', 1, 6),
    (8, 'Max', '2012-09-04', 1, 6),
    (9, 'Lucky', '2011-08-06', 5, 7),
    (10, 'Mulligan', '2007-02-24', 2, 8),
    (11, 'Freddy', '2010-03-09', 5, 9),
    (12, 'Lucky', '2010-06-24', 2, 10),
    (13, 'Sly', '2012-06-08', 1, 10),
]

# (id, pet id, date, description)
VISITS = [
    (1, 7, '2013-01-01', 'rabies shot'),
    (2, 8, '2013-01-02', 'rabies shot'),
    (3, 8, '2013-01-03', 'neutered'),
    (4, 7, '2013-01-04', 'spayed'),
]


def _date(value: str) -> datetime.date:
    return datetime.date.fromisoformat(value)


@transaction.atomic
def load_sample_data() -> dict:
    """Insert the sample rows, skipping any id that already exists."""
    created = {'pet_types': 0, 'holders': 0, 'pets': 0, 'visits': 0}
    for type_id, name in PET_TYPES:
        _, new = PetTypeRecord.objects.get_or_create(id=type_id, defaults={'name': name})
        created['pet_types'] += new
    for holder_id, first, last, address, city, phone in HOLDERS:
        _, new = HolderRecord.objects.get_or_create(id=holder_id, defaults={
            'first_name': first, 'last_name': last, 'address': address, 'city': city, 'telephone': phone,
        })
        created['holders'] += new
    for pet_id, name, born, type_id, holder_id in PETS:
        _, new = PetRecord.objects.get_or_create(id=pet_id, defaults={
            'name': name, 'birth_date': _date(born), 'type_id': type_id, 'holder_id': holder_id,
        })
        created['pets'] += new
    for visit_id, pet_id, day, description in VISITS:
        _, new = VisitRecord.objects.get_or_create(id=visit_id, defaults={
            'pet_id': pet_id, 'visit_date': _date(day), 'description': description,
        })
        created['visits'] += new
    _reset_sequences()
    return created


def _reset_sequences() -> None:
    # Explicit ids leave PostgreSQL-style sequences behind; SQLite needs nothing.
    statements = connection.ops.sequence_reset_sql(
        no_style(), [PetTypeRecord, HolderRecord, PetRecord, VisitRecord])
    if statements:
        with connection.cursor() as cursor:
            for sql in statements:
                cursor.execute(sql)

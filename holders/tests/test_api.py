"""
Integration tests for the pet clinic API.

These tests exercise the holder search, create/edit and the nested pet
and visit endpoints through Django REST Framework's APIClient within the
APITestCase base class.

To run the tests:

```
pytest -q holders/tests
```
"""

from rest_framework import status
from rest_framework.test import APITestCase

from ..models import HolderRecord, PetRecord, VisitRecord
from ..sample_data import load_sample_data


class HolderAPITests(APITestCase):
    def setUp(self) -> None:
        load_sample_data()

    def valid_holder(self, **overrides):
        data = {
            'firstName': 'Sam',
            'lastName': 'Schultz',
            'address': '4, Evans Street',
            'city': 'Wollongong',
            'telephone': '4444444444',
        }
        data.update(overrides)
        return data

    def field_codes(self, response):
        return {(f['field'], f['code']) for f in response.data['error']['fields']}

    def test_search_with_several_matches_returns_page(self):
        response = self.client.get('/api/holders', {'lastName': 'Davis'})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['totalItems'], 2)
        self.assertEqual(response.data['currentPage'], 1)
        self.assertEqual(response.data['totalPages'], 1)
        names = [h['firstName'] for h in response.data['listHolders']]
        self.assertEqual(names, ['Betty', 'Harold'])
        # search results do not include visits
        self.assertNotIn('visits', response.data['listHolders'][0]['pets'][0])

    def test_search_without_name_lists_everyone_in_pages(self):
        response = self.client.get('/api/holders')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['totalItems'], 10)
        self.assertEqual(response.data['totalPages'], 2)
        self.assertEqual(len(response.data['listHolders']), 5)

        response = self.client.get('/api/holders', {'page': 2})
        self.assertEqual([h['id'] for h in response.data['listHolders']], [6, 7, 8, 9, 10])

    def test_search_with_single_match_redirects_to_holder(self):
        response = self.client.get('/api/holders', {'lastName': 'Franklin'})
        self.assertEqual(response.status_code, status.HTTP_302_FOUND)
        self.assertEqual(response['Location'], '/api/holders/1')

    def test_search_without_match_rejects_last_name(self):
        response = self.client.get('/api/holders', {'lastName': 'Daviss'})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertFalse(response.data['ok'])
        self.assertEqual(self.field_codes(response), {('lastName', 'notFound')})

    def test_search_single_match_past_last_page_rejects_last_name(self):
        response = self.client.get('/api/holders', {'lastName': 'Franklin', 'page': 2})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(self.field_codes(response), {('lastName', 'notFound')})

    def test_search_page_past_the_end_rejects_last_name(self):
        response = self.client.get('/api/holders', {'page': 3})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(self.field_codes(response), {('lastName', 'notFound')})

    def test_search_rejects_page_zero(self):
        response = self.client.get('/api/holders', {'page': 0})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn(('page', 'min_value'), self.field_codes(response))

    def test_create_holder(self):
        response = self.client.post('/api/holders/new', self.valid_holder(), format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        holder_id = response.data['id']
        self.assertTrue(holder_id)
        self.assertEqual(HolderRecord.objects.get(id=holder_id).last_name, 'Schultz')

    def test_create_holder_validates_fields(self):
        response = self.client.post(
            '/api/holders/new',
            self.valid_holder(telephone='12ab', city='   ', firstName=None),
            format='json',
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        codes = self.field_codes(response)
        self.assertIn(('telephone', 'digits'), codes)
        self.assertIn(('city', 'blank'), codes)
        self.assertIn(('firstName', 'null'), codes)
        self.assertEqual(HolderRecord.objects.filter(last_name='Schultz').count(), 0)

    def test_create_holder_rejects_long_telephone(self):
        response = self.client.post(
            '/api/holders/new', self.valid_holder(telephone='12345678901'), format='json'
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn(('telephone', 'max_length'), self.field_codes(response))
        self.assertEqual(HolderRecord.objects.filter(last_name='Schultz').count(), 0)

    def test_show_holder_includes_pets_and_visits(self):
        response = self.client.get('/api/holders/6')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['lastName'], 'Coleman')
        samantha = next(p for p in response.data['pets'] if p['id'] == 7)
        self.assertEqual(samantha['type'], {'id': 1, 'name': 'cat'})
        self.assertEqual([v['date'] for v in samantha['visits']], ['2013-01-01', '2013-01-04'])

    def test_show_unknown_holder_is_404(self):
        response = self.client.get('/api/holders/999')
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.data['error']['code'], 'not_found')

    def test_update_holder_uses_id_from_path(self):
        response = self.client.post(
            '/api/holders/1/edit', {**self.valid_holder(lastName='Frank'), 'id': 2}, format='json'
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(HolderRecord.objects.get(id=1).last_name, 'Frank')
        self.assertEqual(HolderRecord.objects.get(id=2).last_name, 'Davis')
        # pets survive a contact details update
        self.assertEqual(PetRecord.objects.filter(holder_id=1).count(), 1)

    def test_pet_types_are_sorted_by_name(self):
        response = self.client.get('/api/pettypes')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([t['name'] for t in response.data],
                         ['bird', 'cat', 'dog', 'hamster', 'lizard', 'snake'])


class PetAPITests(APITestCase):
    def setUp(self) -> None:
        load_sample_data()

    def field_codes(self, response):
        return {(f['field'], f['code']) for f in response.data['error']['fields']}

    def test_add_pet(self):
        response = self.client.post(
            '/api/holders/6/pets/new',
            {'name': 'bowser', 'birthDate': '2020-05-01', 'typeId': 2},
            format='json',
        )
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['type']['name'], 'dog')
        pet = PetRecord.objects.get(id=response.data['id'])
        self.assertEqual(pet.holder_id, 6)
        self.assertEqual(PetRecord.objects.filter(holder_id=6).count(), 3)

    def test_add_pet_requires_type_and_birth_date(self):
        response = self.client.post('/api/holders/6/pets/new', {'name': 'bowser'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn(('birthDate', 'required'), self.field_codes(response))

        response = self.client.post(
            '/api/holders/6/pets/new', {'name': 'bowser', 'birthDate': '2020-05-01'}, format='json'
        )
        self.assertEqual(self.field_codes(response), {('typeId', 'required')})

    def test_add_pet_with_unknown_type(self):
        response = self.client.post(
            '/api/holders/6/pets/new',
            {'name': 'bowser', 'birthDate': '2020-05-01', 'typeId': 99},
            format='json',
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(self.field_codes(response), {('typeId', 'invalid')})

    def test_duplicate_names_among_new_pets_are_rejected(self):
        response = self.client.post(
            '/api/holders/6/pets/new',
            {'pets': [
                {'name': 'Rex', 'birthDate': '2020-05-01', 'typeId': 2},
                {'name': 'rex', 'birthDate': '2021-05-01', 'typeId': 2},
            ]},
            format='json',
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(self.field_codes(response), {('pets.1.name', 'duplicate')})
        self.assertEqual(PetRecord.objects.filter(holder_id=6).count(), 2)

    def test_add_several_pets_at_once(self):
        response = self.client.post(
            '/api/holders/6/pets/new',
            {'pets': [
                {'name': 'Rex', 'birthDate': '2020-05-01', 'typeId': 2},
                {'name': 'Tweety', 'birthDate': '2021-05-01', 'typeId': 5},
            ]},
            format='json',
        )
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual([p['name'] for p in response.data['pets']], ['Max', 'Samantha', 'Rex', 'Tweety'])
        self.assertEqual(PetRecord.objects.filter(holder_id=6).count(), 4)

    def test_add_empty_pet_list_is_rejected(self):
        response = self.client.post('/api/holders/6/pets/new', {'pets': []}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(self.field_codes(response), {('pets', 'required')})
        self.assertEqual(PetRecord.objects.filter(holder_id=6).count(), 2)

    def test_add_pet_to_unknown_holder_is_404(self):
        response = self.client.post(
            '/api/holders/999/pets/new',
            {'name': 'bowser', 'birthDate': '2020-05-01', 'typeId': 2},
            format='json',
        )
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_edit_pet(self):
        response = self.client.post(
            '/api/holders/6/pets/7/edit',
            {'name': 'SamanthaX', 'birthDate': '2012-09-04'},
            format='json',
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        pet = PetRecord.objects.get(id=7)
        self.assertEqual(pet.name, 'SamanthaX')
        # type is kept when not sent
        self.assertEqual(pet.type_id, 1)

    def test_edit_pet_of_another_holder_is_404(self):
        response = self.client.post(
            '/api/holders/1/pets/7/edit',
            {'name': 'Stolen', 'birthDate': '2012-09-04'},
            format='json',
        )
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(PetRecord.objects.get(id=7).name, 'Samantha')

    def test_add_visit(self):
        response = self.client.post(
            '/api/holders/6/pets/7/visits/new',
            {'description': 'annual checkup', 'date': '2024-02-01'},
            format='json',
        )
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertIsNotNone(response.data['id'])
        self.assertEqual(response.data['petId'], 7)
        self.assertEqual(VisitRecord.objects.filter(pet_id=7).count(), 3)

    def test_add_visit_requires_description(self):
        response = self.client.post('/api/holders/6/pets/7/visits/new', {}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(self.field_codes(response), {('description', 'required')})

    def test_add_visit_to_pet_of_another_holder_is_404(self):
        response = self.client.post(
            '/api/holders/1/pets/7/visits/new', {'description': 'checkup'}, format='json'
        )
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(VisitRecord.objects.filter(pet_id=7).count(), 2)


class HealthTests(APITestCase):
    def test_healthz_reports_database(self):
        load_sample_data()
        response = self.client.get('/healthz')
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {'ok': True, 'db': True, 'petTypes': 6})

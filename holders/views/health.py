from django.db import DatabaseError, connections
from django.http import JsonResponse


def healthz(request):
    try:
        with connections['default'].cursor() as c:
            c.execute('SELECT COUNT(*) FROM pet_type')
            row = c.fetchone()
    except DatabaseError as e:
        return JsonResponse({'ok': False, 'error': str(e)}, status=503)
    return JsonResponse({'ok': True, 'db': True, 'petTypes': row[0] if row else 0})

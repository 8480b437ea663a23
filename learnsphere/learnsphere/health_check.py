"""
Health Check Views

- /api/health/ : database liveness
- /api/health/status/ : database plus schema (every model table exists)
"""
import logging

from django.apps import apps
from django.db import DatabaseError, connection
from django.utils import timezone
from rest_framework import status
from rest_framework.decorators import api_view, authentication_classes, permission_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response

logger = logging.getLogger(__name__)


class HealthCheckService:
    """Checks run by the health endpoints"""

    @staticmethod
    def check_database():
        try:
            with connection.cursor() as cursor:
                cursor.execute("SELECT 1")
            return {
                'status': 'healthy',
                'database': 'connected',
            }
        except DatabaseError as e:
            logger.error(f"Database health check failed: {e}")
            return {
                'status': 'unhealthy',
                'database': 'disconnected',
                'error': str(e),
            }

    @staticmethod
    def check_tables():
        """Compare model tables against the tables present in the database."""
        try:
            required = {model._meta.db_table for model in apps.get_models()}
            existing = set(connection.introspection.table_names())
            missing = sorted(required - existing)
            return {
                'status': 'healthy' if not missing else 'degraded',
                'total_required': len(required),
                'missing': missing,
            }
        except DatabaseError as e:
            logger.error(f"Table health check failed: {e}")
            return {
                'status': 'unhealthy',
                'error': str(e),
            }

    @staticmethod
    def get_system_status():
        checks = {
            'database': HealthCheckService.check_database(),
            'tables': HealthCheckService.check_tables(),
        }
        statuses = [check['status'] for check in checks.values()]
        if 'unhealthy' in statuses:
            overall = 'unhealthy'
        elif 'degraded' in statuses:
            overall = 'degraded'
        else:
            overall = 'healthy'
        return {
            'status': overall,
            'timestamp': timezone.now().isoformat(),
            'checks': checks,
        }


@api_view(['GET'])
@authentication_classes([])
@permission_classes([AllowAny])
def health_check(request):
    health = HealthCheckService.check_database()
    code = status.HTTP_200_OK if health['status'] == 'healthy' else status.HTTP_503_SERVICE_UNAVAILABLE
    return Response(health, status=code)


@api_view(['GET'])
@authentication_classes([])
@permission_classes([AllowAny])
def system_status(request):
    data = HealthCheckService.get_system_status()
    code = status.HTTP_503_SERVICE_UNAVAILABLE if data['status'] == 'unhealthy' else status.HTTP_200_OK
    return Response(data, status=code)

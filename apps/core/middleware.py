"""
HTTP middleware for the Payment Collection API.

- RequestLoggingMiddleware: one log line per request.
- CORSMiddleware: lets the mobile client call the API from another origin.
- APIKeyMiddleware: optional X-API-KEY authentication.
"""

import logging
import time

from django.conf import settings
from django.http import HttpResponse, JsonResponse

logger = logging.getLogger(__name__)

# Paths that don't require authentication
EXEMPT_PATHS = (
    '/health/',
    '/health',
    '/admin/',
)


class RequestLoggingMiddleware:
    """Logs method, path, status and duration of every request."""

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        started = time.monotonic()
        response = self.get_response(request)
        elapsed_ms = (time.monotonic() - started) * 1000

        logger.info(
            "%s %s -> %d (%.1f ms)",
            request.method,
            request.get_full_path(),
            response.status_code,
            elapsed_ms,
        )
        return response


class CORSMiddleware:
    """
    Adds CORS headers using settings.CORS_ORIGIN.

    Preflight OPTIONS requests are answered directly with 204.
    """

    ALLOW_METHODS = 'GET, POST, OPTIONS'
    ALLOW_HEADERS = 'Content-Type, X-API-KEY'

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        if (
            request.method == 'OPTIONS'
            and 'HTTP_ACCESS_CONTROL_REQUEST_METHOD' in request.META
        ):
            response = HttpResponse(status=204)
        else:
            response = self.get_response(request)

        response['Access-Control-Allow-Origin'] = getattr(settings, 'CORS_ORIGIN', '*')
        response['Access-Control-Allow-Methods'] = self.ALLOW_METHODS
        response['Access-Control-Allow-Headers'] = self.ALLOW_HEADERS
        return response


class APIKeyMiddleware:
    """
    Middleware that checks for a valid API key in the X-API-KEY header.

    If API_KEYS is empty in settings (e.g., during development), the
    middleware is effectively disabled and all requests pass through.
    """

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        # Index and health endpoints are public
        if request.path == '/' or any(
            request.path.startswith(path) for path in EXEMPT_PATHS
        ):
            return self.get_response(request)

        # If no API keys configured, skip auth (dev/test mode)
        api_keys = getattr(settings, 'API_KEYS', [])
        if not api_keys:
            return self.get_response(request)

        provided_key = request.META.get('HTTP_X_API_KEY', '')

        if not provided_key:
            logger.warning(
                "Request to %s rejected: missing API key",
                request.path,
            )
            return JsonResponse(
                {
                    'error': True,
                    'status_code': 401,
                    'detail': 'Authentication required. Provide X-API-KEY header.',
                },
                status=401,
            )

        if provided_key not in api_keys:
            logger.warning(
                "Request to %s rejected: invalid API key",
                request.path,
            )
            return JsonResponse(
                {
                    'error': True,
                    'status_code': 403,
                    'detail': 'Invalid API key.',
                },
                status=403,
            )

        return self.get_response(request)

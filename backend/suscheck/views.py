import logging

from django.conf import settings
from django.utils import timezone
from rest_framework import status
from rest_framework.exceptions import ParseError
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from suscheck.risk_engine.errors import InputError
from suscheck.serializers import ScanRequestSerializer
from suscheck.services import build_scan_response, run_scan

logger = logging.getLogger(__name__)


def _input_error_response(detail: str) -> Response:
    return Response(
        {
            'error': 'invalid_url',
            'detail': detail,
        },
        status=status.HTTP_400_BAD_REQUEST,
    )


def _first_error(errors) -> str:
    for messages in errors.values():
        if isinstance(messages, (list, tuple)) and messages:
            return str(messages[0])
        if messages:
            return str(messages)
    return 'Please provide a URL.'


class HealthAPIView(APIView):
    throttle_scope = 'default'
    authentication_classes = []
    permission_classes = [AllowAny]

    def get(self, request):
        return Response({'status': 'ok', 'timestamp': timezone.now(), 'version': settings.APP_VERSION})


class ScanAPIView(APIView):
    throttle_scope = 'scan'
    authentication_classes = []
    permission_classes = [AllowAny]

    def post(self, request):
        try:
            data = request.data if isinstance(request.data, dict) else {}
        except ParseError:
            return _input_error_response('Request body must be valid JSON.')
        serializer = ScanRequestSerializer(data=data)
        if not serializer.is_valid():
            return _input_error_response(_first_error(serializer.errors))

        url = serializer.validated_data['url']
        try:
            report = run_scan(url)
        except InputError as error:
            return _input_error_response(error.message)
        except Exception:
            logger.exception('Unexpected scan failure (url_len=%s).', len(url))
            return Response(
                {
                    'error': 'server_error',
                    'detail': 'Scan failed. Please try again.',
                },
                status=status.HTTP_500_INTERNAL_SERVER_ERROR,
            )

        return Response(build_scan_response(report), status=status.HTTP_200_OK)

from rest_framework import serializers

from suscheck.domain_utils import normalize_url
from suscheck.risk_engine.errors import InputError


class ScanRequestSerializer(serializers.Serializer):
    url = serializers.CharField(
        max_length=2048,
        trim_whitespace=True,
        error_messages={
            'required': 'Please provide a URL.',
            'blank': 'Please provide a URL.',
            'null': 'Please provide a URL.',
            'invalid': 'Please provide a URL.',
        },
    )

    def validate_url(self, value: str) -> str:
        try:
            url, _ = normalize_url(value)
        except InputError as exc:
            raise serializers.ValidationError(exc.message) from exc
        return url


class CheckResultSerializer(serializers.Serializer):
    name = serializers.CharField()
    status = serializers.CharField()
    detail = serializers.CharField()


class ScanReportSerializer(serializers.Serializer):
    url = serializers.CharField()
    score = serializers.IntegerField(min_value=0, max_value=100)
    verdict = serializers.CharField()
    checks = CheckResultSerializer(many=True)

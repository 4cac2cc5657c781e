from __future__ import annotations

from rest_framework import serializers


class TimelineEventSerializer(serializers.Serializer):
    title = serializers.CharField(max_length=200, allow_blank=True)
    date = serializers.CharField(max_length=64, allow_blank=True, required=False, default="")
    description = serializers.CharField(allow_blank=True, required=False, default="", trim_whitespace=False)
    imageUrl = serializers.CharField(max_length=2000, allow_blank=True, required=False)
    notes = serializers.CharField(allow_blank=True, required=False, trim_whitespace=False)


class DraftUpdateSerializer(serializers.Serializer):
    content = serializers.CharField(allow_blank=True, trim_whitespace=False)

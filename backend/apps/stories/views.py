from __future__ import annotations

import logging

from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from .serializers import DraftUpdateSerializer, TimelineEventSerializer
from .services.drafts import DEFAULT_PARAGRAPH, DraftService
from .services.sharing import ShareService
from .services.story import STYLE_TAGS, StoryService, TimelineEventNotFound
from .tasks import generate_story_draft

logger = logging.getLogger(__name__)


class StoryDetailView(APIView):
    stories = StoryService()

    def get(self, request):
        story = self.stories.get_or_create(request.user)
        return Response(self.stories.to_payload(story))

    def patch(self, request):
        story = self.stories.get_or_create(request.user)
        try:
            payload = self.stories.update(story, request.data)
        except ValueError as exc:
            return Response({"error": str(exc)}, status=status.HTTP_400_BAD_REQUEST)
        return Response(payload)


class TimelineEventListView(APIView):
    stories = StoryService()

    def post(self, request):
        serializer = TimelineEventSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        story = self.stories.get_or_create(request.user)
        event = self.stories.add_timeline_event(story, serializer.validated_data)
        return Response(event, status=status.HTTP_201_CREATED)


class TimelineEventDetailView(APIView):
    stories = StoryService()

    def patch(self, request, event_id: str):
        serializer = TimelineEventSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        story = self.stories.get_or_create(request.user)
        try:
            event = self.stories.update_timeline_event(story, event_id, serializer.validated_data)
        except TimelineEventNotFound:
            return Response({"error": "Timeline event not found"}, status=status.HTTP_404_NOT_FOUND)
        return Response(event)

    def delete(self, request, event_id: str):
        story = self.stories.get_or_create(request.user)
        try:
            self.stories.delete_timeline_event(story, event_id)
        except TimelineEventNotFound:
            return Response({"error": "Timeline event not found"}, status=status.HTTP_404_NOT_FOUND)
        return Response(status=status.HTTP_204_NO_CONTENT)


class StoryDraftView(APIView):
    stories = StoryService()

    def put(self, request, style: str):
        if style not in STYLE_TAGS:
            return Response({"error": f"Unknown style: {style}"}, status=status.HTTP_400_BAD_REQUEST)
        serializer = DraftUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        story = self.stories.get_or_create(request.user)
        payload = self.stories.update_draft(story, style, serializer.validated_data["content"])
        return Response(payload)


class ShareLinkView(APIView):
    stories = StoryService()

    def post(self, request):
        story = self.stories.get_or_create(request.user)
        draft = request.data.get("draft")
        style = request.data.get("style") or self.stories.to_payload(story)["selectedStyle"]
        try:
            share_id = ShareService().create_share_link(story, draft, style)
        except ValueError as exc:
            return Response({"error": str(exc)}, status=status.HTTP_400_BAD_REQUEST)
        return Response({"shareId": share_id}, status=status.HTTP_201_CREATED)


class ShareSnapshotView(APIView):
    permission_classes = [AllowAny]

    def get(self, request, share_id: str):
        payload = ShareService().get_share_snapshot(share_id)
        if payload is None:
            return Response(
                {"error": "This shared story is no longer available."},
                status=status.HTTP_404_NOT_FOUND,
            )
        return Response(payload)


class GenerateStoryView(APIView):
    permission_classes = [AllowAny]

    def post(self, request):
        story = request.data.get("story")
        style = request.data.get("style")
        if not style or (not story and not self._is_async(request)):
            return Response({"error": "Missing style or story payload."}, status=status.HTTP_400_BAD_REQUEST)
        if style not in STYLE_TAGS:
            return Response({"error": f"Unknown style: {style}"}, status=status.HTTP_400_BAD_REQUEST)

        if self._is_async(request):
            if not request.user or not request.user.is_authenticated:
                return Response({"error": "Authentication required"}, status=status.HTTP_401_UNAUTHORIZED)
            if not self._wants_persist(request):
                return Response(
                    {"error": "Async generation requires persist: true"}, status=status.HTTP_400_BAD_REQUEST
                )
            stored = StoryService().get_or_create(request.user)
            generate_story_draft.delay(str(stored.id), style)
            return Response({"status": "queued"}, status=status.HTTP_202_ACCEPTED)

        try:
            result = DraftService().generate(story, style)
        except ValueError as exc:
            return Response({"error": str(exc)}, status=status.HTTP_400_BAD_REQUEST)
        except Exception:
            logger.error("generate-story error", exc_info=True)
            return Response(
                {"error": "Failed to generate story", "draft": DEFAULT_PARAGRAPH},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR,
            )
        return Response(result)

    def _is_async(self, request) -> bool:
        return str(request.query_params.get("async", "0")).lower() in {"1", "true", "yes"}

    def _wants_persist(self, request) -> bool:
        persist = request.data.get("persist")
        return persist is True or str(persist).lower() in {"1", "true", "yes"}

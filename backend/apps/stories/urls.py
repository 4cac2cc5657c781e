from django.urls import path

from .views import (
    GenerateStoryView,
    ShareLinkView,
    ShareSnapshotView,
    StoryDetailView,
    StoryDraftView,
    TimelineEventDetailView,
    TimelineEventListView,
)

urlpatterns = [
    path("story/", StoryDetailView.as_view(), name="story-detail"),
    path("story/timeline/", TimelineEventListView.as_view(), name="story-timeline"),
    path("story/timeline/<str:event_id>/", TimelineEventDetailView.as_view(), name="story-timeline-event"),
    path("story/drafts/<str:style>/", StoryDraftView.as_view(), name="story-draft"),
    path("story/share/", ShareLinkView.as_view(), name="story-share"),
    path("shares/<str:share_id>/", ShareSnapshotView.as_view(), name="share-snapshot"),
    path("generate-story/", GenerateStoryView.as_view(), name="generate-story"),
]

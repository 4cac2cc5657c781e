from __future__ import annotations

from django.contrib.auth import get_user_model
from django.test import TestCase
from rest_framework.authtoken.models import Token
from rest_framework.test import APIClient, APITestCase

from apps.stories.models import ShareSnapshot
from apps.stories.services.sharing import ShareService
from apps.stories.services.story import StoryService


class ShareServiceTests(TestCase):
    def setUp(self):
        self.user = get_user_model().objects.create_user(username="sharer", password="pass12345")
        self.stories = StoryService()
        self.story = self.stories.get_or_create(self.user)
        self.stories.update(self.story, {"customization": {"title": "My Life"}, "personal": {"fullName": "Ada"}})

    def test_first_share_assigns_an_identifier_and_snapshot(self):
        share_id = ShareService().create_share_link(self.story, "Para one.\n\nPara two.", "simple")

        self.assertEqual(len(share_id), 12)
        self.story.refresh_from_db()
        self.assertEqual(self.story.share_id, share_id)
        payload = self.stories.to_payload(self.story)
        self.assertEqual(payload["shareableId"], share_id)
        self.assertEqual(payload["selectedStyle"], "simple")
        self.assertEqual(payload["storyDrafts"]["simple"], "Para one.\n\nPara two.")

        snapshot = ShareService().get_share_snapshot(share_id)
        self.assertEqual(snapshot["title"], "My Life")
        self.assertEqual(snapshot["paragraphs"], ["Para one.", "Para two."])
        self.assertEqual(snapshot["personal"]["fullName"], "Ada")
        self.assertEqual(snapshot["storyId"], str(self.story.id))

    def test_resharing_reuses_identifier_and_overwrites_snapshot(self):
        self.story.share_id = "abc123"
        self.story.save(update_fields=["share_id"])

        first = ShareService().create_share_link(self.story, "Old draft.", "simple")
        second = ShareService().create_share_link(self.story, "New draft.", "poetic")

        self.assertEqual(first, "abc123")
        self.assertEqual(second, "abc123")
        self.assertEqual(ShareSnapshot.objects.count(), 1)
        snapshot = ShareService().get_share_snapshot("abc123")
        self.assertEqual(snapshot["draft"], "New draft.")
        self.assertEqual(snapshot["style"], "poetic")

    def test_empty_draft_is_rejected(self):
        with self.assertRaises(ValueError):
            ShareService().create_share_link(self.story, "   ", "simple")
        self.assertFalse(ShareSnapshot.objects.exists())

    def test_long_title_is_stored_in_full(self):
        title = "A" * 150 + " " + "B" * 149
        self.stories.update(self.story, {"customization": {"title": title}})

        share_id = ShareService().create_share_link(self.story, "Draft.", "simple")

        self.assertEqual(len(title), 300)
        self.assertEqual(ShareSnapshot.objects.get(share_id=share_id).title, title)
        self.assertEqual(ShareService().get_share_snapshot(share_id)["title"], title)

    def test_unknown_identifier_returns_none(self):
        self.assertIsNone(ShareService().get_share_snapshot("nope"))


class ShareApiTests(APITestCase):
    def setUp(self):
        self.user = get_user_model().objects.create_user(username="sharer_api", password="pass12345")
        self.token = Token.objects.create(user=self.user)
        self.client.credentials(HTTP_AUTHORIZATION=f"Token {self.token.key}")

    def test_share_then_public_read(self):
        created = self.client.post(
            "/api/stories/story/share/",
            {"draft": "Chapter one.\n\nChapter two.", "style": "professional"},
            format="json",
        )
        self.assertEqual(created.status_code, 201)
        share_id = created.data["shareId"]

        anonymous = APIClient()
        response = anonymous.get(f"/api/stories/shares/{share_id}/")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data["style"], "professional")
        self.assertEqual(response.data["title"], "My Autobiography")
        self.assertEqual(response.data["paragraphs"], ["Chapter one.", "Chapter two."])

        again = self.client.post("/api/stories/story/share/", {"draft": "Rewritten.", "style": "simple"}, format="json")
        self.assertEqual(again.data["shareId"], share_id)
        self.assertEqual(anonymous.get(f"/api/stories/shares/{share_id}/").data["draft"], "Rewritten.")

    def test_missing_draft_is_rejected(self):
        response = self.client.post("/api/stories/story/share/", {"style": "simple"}, format="json")
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.data, {"error": "Missing draft"})

    def test_unknown_share_reads_as_unavailable(self):
        response = APIClient().get("/api/stories/shares/does-not-exist/")
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.data, {"error": "This shared story is no longer available."})

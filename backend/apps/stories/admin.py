from django.contrib import admin

from .models import ShareSnapshot, Story


@admin.register(Story)
class StoryAdmin(admin.ModelAdmin):
    list_display = ("id", "owner", "selected_style", "share_id", "updated_at")
    search_fields = ("owner__username", "share_id")
    list_filter = ("selected_style",)


@admin.register(ShareSnapshot)
class ShareSnapshotAdmin(admin.ModelAdmin):
    list_display = ("share_id", "title", "style", "created_at")
    search_fields = ("share_id", "title")
    list_filter = ("style",)

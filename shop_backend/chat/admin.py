# chat/admin.py

from django.contrib import admin

from chat.models import ChatMessage


@admin.register(ChatMessage)
class ChatMessageAdmin(admin.ModelAdmin):
    list_display = ("user", "short_message", "read_by_admin", "created_at")
    list_filter = ("read_by_admin",)
    search_fields = ("message", "admin_response", "user__email")
    raw_id_fields = ("user",)
    readonly_fields = ("read_at", "created_at", "updated_at")

    @admin.display(description="Message")
    def short_message(self, obj):
        return obj.message[:60]

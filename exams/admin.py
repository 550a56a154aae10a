from django.contrib import admin

# Register your models here.
from .models import Question


@admin.register(Question)
class QuestionAdmin(admin.ModelAdmin):
    list_display = ('id', 'topic', 'status', 'max_score', 'is_auto_generated', 'created_by')
    list_filter = ('topic', 'status', 'is_auto_generated')
    search_fields = ('question_text',)

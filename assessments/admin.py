from django.contrib import admin

from .models import ExamSession, StudentAnswer


class StudentAnswerInline(admin.TabularInline):
    model = StudentAnswer
    extra = 0
    fields = ('question', 'answer_text', 'attachment_path', 'score', 'graded_by', 'graded_at')
    readonly_fields = fields
    can_delete = False


@admin.register(ExamSession)
class ExamSessionAdmin(admin.ModelAdmin):
    list_display = ('id', 'student', 'started_at', 'ended_at', 'duration_minutes', 'is_active', 'end_reason')
    list_filter = ('is_active', 'end_reason')
    search_fields = ('student__username', 'student__nim')
    readonly_fields = ('student', 'started_at', 'ended_at', 'duration_minutes', 'is_active', 'end_reason', 'created_at')
    inlines = [StudentAnswerInline]

    def has_delete_permission(self, request, obj=None):
        # Attempts are kept as history
        return False


@admin.register(StudentAnswer)
class StudentAnswerAdmin(admin.ModelAdmin):
    list_display = ('id', 'session', 'question', 'score', 'graded_by', 'updated_at')
    list_filter = ('question__topic',)
    readonly_fields = ('session', 'question', 'answer_text', 'attachment_path', 'score', 'graded_by', 'graded_at', 'created_at', 'updated_at')

    def has_delete_permission(self, request, obj=None):
        return False

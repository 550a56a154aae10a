from django.urls import path
from .views import (
    ExamInstructionsView, StartExamView, CurrentSessionView, ResumeExamView, EndExamView,
    SessionAnswersView, StudentSessionHistoryView, GradingQueueView, GradeAnswerView
)

urlpatterns = [
    # --- Student Exam Flow ---
    path('exams/instructions/', ExamInstructionsView.as_view(), name='exam-instructions'),
    path('exams/start/', StartExamView.as_view(), name='start-exam'),
    path('exams/attempts/', StudentSessionHistoryView.as_view(), name='student-attempts'),
    path('exams/session/current/', CurrentSessionView.as_view(), name='current-session'),
    path('exams/session/resume/', ResumeExamView.as_view(), name='resume-session'),
    path('exams/session/<int:session_id>/end/', EndExamView.as_view(), name='end-exam'),
    path('exams/session/<int:session_id>/answers/', SessionAnswersView.as_view(), name='session-answers'),

    # --- Grading Module (Lecturer) ---
    path('grading/answers/', GradingQueueView.as_view(), name='grading-queue'),
    path('grading/answers/<int:answer_id>/grade/', GradeAnswerView.as_view(), name='grade-answer'),
]

"""
Question catalog.

Lecturers author and approve questions here; the exam services only ever
read from it through ``visible_questions``.
"""

import logging

from django.db import transaction

from cores.decimals import to_fixed_decimal
from cores.exceptions import ConflictError, InvalidInputError, NotFoundError
from users import identity

from .generator import generate_question_texts
from .models import Question

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = ('topic', 'question_text', 'answer_key', 'max_score', 'status')
MAX_GENERATED_PER_REQUEST = 10


def list_questions(statuses=None, topic=None, created_by=None):
    queryset = Question.objects.all()
    if statuses is not None:
        queryset = queryset.filter(status__in=statuses)
    if topic:
        queryset = queryset.filter(topic=topic)
    if created_by is not None:
        queryset = queryset.filter(created_by_id=created_by)
    return queryset.order_by('id')


def visible_questions():
    """Questions a student may see: approved or active."""
    return list(list_questions(statuses=Question.VISIBLE_STATUSES))


def _validate_topic(topic):
    if topic not in Question.Topic.values:
        raise InvalidInputError(f"Unknown topic '{topic}'")


def _validate_max_score(max_score):
    value = to_fixed_decimal(max_score, field="max_score")
    if value <= 0:
        raise InvalidInputError("max_score must be positive")
    return value


def create_question(lecturer_id, topic, question_text, answer_key=None, max_score=10,
                    is_auto_generated=False):
    lecturer = identity.resolve_lecturer(lecturer_id)
    _validate_topic(topic)
    if not question_text or not question_text.strip():
        raise InvalidInputError("question_text must not be empty")

    question = Question.objects.create(
        topic=topic,
        question_text=question_text,
        answer_key=answer_key,
        max_score=_validate_max_score(max_score),
        status=Question.Status.DRAFT,
        is_auto_generated=is_auto_generated,
        created_by=lecturer,
    )
    logger.info(f"Lecturer {lecturer.pk} created question {question.pk} ({topic})")
    return question


def update_question(lecturer_id, question_id, **changes):
    """Apply ``changes`` to a question owned by the lecturer."""
    unknown = set(changes) - set(EDITABLE_FIELDS)
    if unknown:
        raise InvalidInputError(f"Cannot update field(s): {', '.join(sorted(unknown))}")

    with transaction.atomic():
        question = (
            Question.objects.select_for_update()
            .filter(pk=question_id, created_by_id=lecturer_id)
            .first()
        )
        if question is None:
            raise NotFoundError("Question not found or access denied")

        if 'topic' in changes:
            _validate_topic(changes['topic'])
        if 'status' in changes and changes['status'] not in Question.Status.values:
            raise InvalidInputError(f"Unknown status '{changes['status']}'")
        if 'max_score' in changes:
            changes['max_score'] = _validate_max_score(changes['max_score'])

        for field, value in changes.items():
            setattr(question, field, value)
        question.save()

    return question


def approve_question(lecturer_id, question_id):
    identity.resolve_lecturer(lecturer_id)
    with transaction.atomic():
        question = Question.objects.select_for_update().filter(pk=question_id).first()
        if question is None:
            raise NotFoundError("Question not found")
        if question.status != Question.Status.DRAFT:
            raise ConflictError("Only draft questions can be approved")

        question.status = Question.Status.APPROVED
        question.save(update_fields=['status', 'updated_at'])

    logger.info(f"Lecturer {lecturer_id} approved question {question_id}")
    return question


def auto_generate_questions(lecturer_id, topic, count, max_score=10, rng=None):
    """Create ``count`` draft questions from the topic's templates."""
    lecturer = identity.resolve_lecturer(lecturer_id)
    _validate_topic(topic)
    if not 1 <= count <= MAX_GENERATED_PER_REQUEST:
        raise InvalidInputError(f"count must be between 1 and {MAX_GENERATED_PER_REQUEST}")
    max_score = _validate_max_score(max_score)

    texts = generate_question_texts(topic, count, rng)
    with transaction.atomic():
        questions = [
            Question.objects.create(
                topic=topic,
                question_text=text,
                answer_key=None,
                max_score=max_score,
                status=Question.Status.DRAFT,
                is_auto_generated=True,
                created_by=lecturer,
            )
            for text in texts
        ]

    logger.info(f"Generated {len(questions)} {topic} questions for lecturer {lecturer.pk}")
    return questions

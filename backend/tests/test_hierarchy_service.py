from types import SimpleNamespace
from uuid import uuid4

import pytest
from sqlalchemy.exc import SQLAlchemyError

from academy.exceptions import ConflictError, NotFoundError, PersistenceError, ValidationError
from academy.models.course import Chapter, ChapterElement, ChapterElementType, Lesson
from academy.models.quiz import QuizForm, QuizQuestion
from academy.schemas.course import ChapterCreate, ChapterElementCreate, ChapterElementUpdate, LessonCreate, ReorderItem
from academy.services.hierarchy_service import HierarchyService, apply_reorder


def siblings(*indices):
    return [SimpleNamespace(id=uuid4(), index=index) for index in indices]


def items(*pairs):
    return [ReorderItem(id=str(child_id), index=index) for child_id, index in pairs]


# === apply_reorder ===

def test_reorder_overwrites_named_siblings_only():
    a, b, c = siblings(1, 2, 3)

    updated, ignored = apply_reorder([a, b, c], items((a.id, 5), (c.id, 7)))

    assert updated == 2
    assert ignored == []
    assert (a.index, b.index, c.index) == (5, 2, 7)


def test_reorder_is_idempotent():
    children = siblings(1, 2, 3)
    request = items((children[0].id, 3), (children[1].id, 1), (children[2].id, 2))

    apply_reorder(children, request)
    first = [child.index for child in children]
    apply_reorder(children, request)

    assert [child.index for child in children] == first == [3, 1, 2]


def test_reorder_ignores_foreign_and_malformed_ids():
    a, b = siblings(1, 2)
    stranger = uuid4()

    updated, ignored = apply_reorder([a, b], items((a.id, 9), (stranger, 1), ("not-a-uuid", 4)))

    assert updated == 1
    assert sorted(ignored) == sorted([str(stranger), "not-a-uuid"])
    assert (a.index, b.index) == (9, 2)


def test_reorder_duplicate_ids_last_value_wins():
    (a,) = siblings(1)
    apply_reorder([a], items((a.id, 4), (a.id, 8)))
    assert a.index == 8


def test_reorder_does_not_compact_indices():
    a, b = siblings(10, 20)
    apply_reorder([a, b], items((b.id, 40)))
    assert (a.index, b.index) == (10, 40)


# === Creation ===

def test_new_children_get_next_free_index(db, course_tree):
    lesson = course_tree.lesson
    assert [chapter.index for chapter in course_tree.chapters] == [1, 2]

    explicit = HierarchyService.create_chapter(db, lesson.id, ChapterCreate(title="Late", index=10))
    after = HierarchyService.create_chapter(db, lesson.id, ChapterCreate(title="After"))

    assert explicit.index == 10
    assert after.index == 11
    assert course_tree.lesson.index == 1


def test_create_requires_existing_parent(db):
    with pytest.raises(NotFoundError):
        HierarchyService.create_lesson(db, LessonCreate(learning_course_id=uuid4(), title="Orphan"))
    with pytest.raises(NotFoundError):
        HierarchyService.create_chapter(db, uuid4(), ChapterCreate(title="Orphan"))
    with pytest.raises(NotFoundError):
        HierarchyService.create_element(db, uuid4(), ChapterElementCreate(type="Text", content="hi"))


def test_element_type_and_form_rules(db, course_tree, make_quiz):
    chapter = course_tree.chapters[0]

    with pytest.raises(ValidationError):
        HierarchyService.create_element(db, chapter.id, ChapterElementCreate(type="Video"))
    with pytest.raises(ValidationError):
        HierarchyService.create_element(db, chapter.id, ChapterElementCreate(type=ChapterElementType.FORM))
    with pytest.raises(NotFoundError):
        HierarchyService.create_element(
            db, chapter.id, ChapterElementCreate(type=ChapterElementType.FORM, form_id=uuid4())
        )

    quiz = make_quiz(chapter.id)
    with pytest.raises(ValidationError):
        HierarchyService.create_element(
            db, chapter.id, ChapterElementCreate(type=ChapterElementType.TEXT, form_id=quiz.id)
        )
    with pytest.raises(ConflictError):
        HierarchyService.create_element(
            db, chapter.id, ChapterElementCreate(type=ChapterElementType.FORM, form_id=quiz.id)
        )


def test_quiz_element_is_appended_to_chapter(db, course_tree, make_quiz):
    chapter = course_tree.chapters[0]
    HierarchyService.create_element(db, chapter.id, ChapterElementCreate(type="Header", content="Intro"))

    quiz = make_quiz(chapter.id)

    response = HierarchyService.get_chapter_elements(db, chapter.id)
    assert response.title == chapter.title
    assert [element.type for element in response.elements] == ["Header", "Form"]
    assert [element.index for element in response.elements] == [1, 2]
    assert HierarchyService.get_element_by_form(db, quiz.id).chapter_id == chapter.id


# === Reorder through the service ===

def test_reorder_chapters_persists_partial_update(db, course_tree):
    first, second = course_tree.chapters
    third = HierarchyService.create_chapter(db, course_tree.lesson.id, ChapterCreate(title="Chapter 3"))
    first_id, second_id, third_id = first.id, second.id, third.id

    updated = HierarchyService.reorder_chapters(
        db, course_tree.lesson.id, items((third_id, 1), (first_id, 3))
    )

    assert updated == 2
    ordered = HierarchyService.get_chapters_by_lesson(db, course_tree.lesson.id)
    assert [(chapter.id, chapter.index) for chapter in ordered] == [
        (third_id, 1), (second_id, 2), (first_id, 3)
    ]


def test_reorder_ignores_children_of_other_parents(db, course_tree):
    other_lesson = HierarchyService.create_lesson(
        db, LessonCreate(learning_course_id=course_tree.course.id, title="Other")
    )
    foreign = HierarchyService.create_chapter(db, other_lesson.id, ChapterCreate(title="Foreign"))
    foreign_id = foreign.id

    updated = HierarchyService.reorder_chapters(db, course_tree.lesson.id, items((foreign_id, 99)))

    assert updated == 0
    assert HierarchyService.get_chapter(db, foreign_id).index == 1


def test_reorder_unknown_parent_is_not_found(db):
    with pytest.raises(NotFoundError):
        HierarchyService.reorder_lessons(db, uuid4(), [])


def test_failed_commit_keeps_previous_order(db, course_tree, monkeypatch):
    first_id, second_id = (chapter.id for chapter in course_tree.chapters)

    def failing_commit():
        raise SQLAlchemyError("connection lost")

    monkeypatch.setattr(db, "commit", failing_commit)
    with pytest.raises(PersistenceError):
        HierarchyService.reorder_chapters(
            db, course_tree.lesson.id, items((first_id, 2), (second_id, 1))
        )
    monkeypatch.undo()

    ordered = HierarchyService.get_chapters_by_lesson(db, course_tree.lesson.id)
    assert [(chapter.id, chapter.index) for chapter in ordered] == [(first_id, 1), (second_id, 2)]


# === Deletion ===

def test_delete_lesson_cascades_to_chapters_elements_and_quizzes(db, course_tree, make_quiz):
    chapter = course_tree.chapters[0]
    HierarchyService.create_element(db, chapter.id, ChapterElementCreate(type="Text", content="body"))
    make_quiz(chapter.id)
    make_quiz(course_tree.chapters[1].id)

    HierarchyService.delete_lesson(db, course_tree.lesson.id)

    assert db.query(Lesson).count() == 0
    assert db.query(Chapter).count() == 0
    assert db.query(ChapterElement).count() == 0
    assert db.query(QuizForm).count() == 0
    assert db.query(QuizQuestion).count() == 0


def test_delete_course_cascades_whole_tree(db, course_tree, make_quiz):
    make_quiz(course_tree.chapters[0].id)

    HierarchyService.delete_course(db, course_tree.course.id)

    assert db.query(Lesson).count() == 0
    assert db.query(Chapter).count() == 0
    assert db.query(QuizForm).count() == 0
    with pytest.raises(NotFoundError):
        HierarchyService.delete_course(db, course_tree.course.id)


def test_delete_form_element_deletes_its_quiz(db, course_tree, make_quiz):
    quiz = make_quiz(course_tree.chapters[0].id)
    element = HierarchyService.get_element_by_form(db, quiz.id)

    HierarchyService.delete_element(db, element.id)

    assert db.query(QuizForm).count() == 0
    assert db.query(ChapterElement).count() == 0


def test_update_element_replacing_quiz_removes_old_one(db, course_tree, make_quiz):
    chapter = course_tree.chapters[0]
    quiz = make_quiz(chapter.id)
    quiz_id = quiz.id
    element = HierarchyService.get_element_by_form(db, quiz_id)

    updated = HierarchyService.update_element(
        db, element.id, ChapterElementUpdate(type="Text", title="Notes", content="No more quiz")
    )

    assert updated.type == "Text"
    assert updated.form_id is None
    assert db.query(QuizForm).filter(QuizForm.id == quiz_id).first() is None


def test_chapter_hierarchy(db, course_tree):
    hierarchy = HierarchyService.get_chapter_hierarchy(db, course_tree.chapters[1].id)
    assert hierarchy.lesson_id == course_tree.lesson.id
    assert hierarchy.course_title == "Python Basics"
    assert hierarchy.lesson_title == "Variables"

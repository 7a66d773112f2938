"""
HTTP tests: auth flow, role gate, admin course authoring, quiz submission
"""

from uuid import uuid4

from sqlalchemy.exc import SQLAlchemyError

import academy.main as main
from academy.controllers.dependencies import get_ai_quiz_service
from academy.schemas.course import ChapterElementCreate
from academy.services.ai_quiz_service import AIQuizService
from academy.services.hierarchy_service import HierarchyService
from conftest import PASSWORD


def test_health(client):
    assert client.get("/api/health").json() == {"status": "healthy"}
    assert client.get("/").json()["status"] == "running"


# === Auth ===

def test_register_login_and_me(client):
    response = client.post("/Auth/register", json={
        "username": "newbie",
        "first_name": "New",
        "last_name": "Learner",
        "email": "newbie@example.com",
        "password": PASSWORD,
    })
    assert response.status_code == 201
    assert response.json()["role_names"] == ["User"]

    assert client.get("/Auth/username/newbie").json() is True
    assert client.get("/Auth/email/nobody@example.com").json() is False

    tokens = client.post("/Auth/login", json={"email": "newbie@example.com", "password": PASSWORD}).json()
    me = client.get("/Auth/me", headers={"Authorization": f"Bearer {tokens['token']}"})

    assert me.status_code == 200
    assert me.json()["email"] == "newbie@example.com"
    assert me.json()["roles"] == ["User"]

    refreshed = client.post("/Auth/refresh-token", json={"refresh_token": tokens["refresh_token"]})
    assert refreshed.status_code == 200
    assert refreshed.json()["refresh_token"] != tokens["refresh_token"]


def test_register_rejects_blank_name(client):
    response = client.post("/Auth/register", json={
        "username": "blank_name",
        "first_name": "   ",
        "last_name": "Learner",
        "email": "blank@example.com",
        "password": PASSWORD,
    })

    assert response.status_code == 400
    assert client.get("/Auth/username/blank_name").json() is False


def test_wrong_password_is_unauthorized(client, student):
    response = client.post("/Auth/login", json={"username": "student", "password": "wrong-password"})

    assert response.status_code == 401
    assert response.json() == {"detail": "Incorrect username or password"}


def test_missing_token_is_unauthorized(client):
    response = client.get("/Auth/me")

    assert response.status_code == 401
    assert response.headers["WWW-Authenticate"] == "Bearer"


def test_garbage_token_is_unauthorized(client):
    response = client.get("/UserProgress/chapter/" + str(uuid4()), headers={"Authorization": "Bearer abc.def.ghi"})
    assert response.status_code == 401


def test_student_cannot_use_admin_routes(client, student_headers):
    response = client.post("/LearningCourse", json={"title": "Hack"}, headers=student_headers)

    assert response.status_code == 403
    assert "detail" in response.json()


def test_not_found_uses_detail_body(client):
    response = client.get(f"/LearningCourse/{uuid4()}")

    assert response.status_code == 404
    assert response.json() == {"detail": "Learning course not found"}


# === Admin authoring ===

def test_admin_builds_and_reorders_course(client, admin_headers):
    course = client.post(
        "/LearningCourse",
        json={"title": "Web Basics", "level": "Beginner", "tag_names": ["web", "html"]},
        headers=admin_headers,
    )
    assert course.status_code == 201
    course_id = course.json()["id"]
    assert course.json()["is_published"] is False
    assert sorted(course.json()["tag_names"]) == ["html", "web"]

    lesson_ids = [
        client.post(
            "/Lesson", json={"learning_course_id": course_id, "title": title}, headers=admin_headers
        ).json()["id"]
        for title in ("HTML", "CSS")
    ]
    chapter = client.post(f"/Chapter/lesson/{lesson_ids[0]}", json={"title": "Tags"}, headers=admin_headers)
    assert chapter.status_code == 201
    element = client.post(
        f"/ChapterElement/chapter/{chapter.json()['id']}",
        json={"type": "Text", "content": "<p>Hello</p>"},
        headers=admin_headers,
    )
    assert element.status_code == 201

    response = client.put(
        f"/Lesson/course/{course_id}/reorder",
        json={"lessons": [{"id": lesson_ids[0], "index": 2}, {"id": lesson_ids[1], "index": 1}]},
        headers=admin_headers,
    )
    assert response.json() == {"updated": 2}

    ordered = client.get(f"/Lesson/by-course/{course_id}").json()
    assert [lesson["title"] for lesson in ordered] == ["CSS", "HTML"]

    assert client.delete(f"/Lesson/{lesson_ids[0]}", headers=admin_headers).status_code == 204
    assert client.get(f"/Chapter/{chapter.json()['id']}").status_code == 404
    assert client.get(f"/ChapterElement/{element.json()['id']}").status_code == 404


def test_database_failure_hides_details(client, db, admin_headers, course_tree, monkeypatch):
    lesson_id = course_tree.lesson.id
    chapter_id = course_tree.chapters[0].id

    def failing_commit():
        raise SQLAlchemyError("password=hunter2 connection refused")

    monkeypatch.setattr(main.settings, "DEBUG", False)
    monkeypatch.setattr(db, "commit", failing_commit)
    response = client.put(
        f"/Chapter/lesson/{lesson_id}/reorder",
        json={"chapters": [{"id": str(chapter_id), "index": 5}]},
        headers=admin_headers,
    )

    assert response.status_code == 500
    assert response.json() == {"detail": "Internal server error"}


def test_invalid_element_type_is_rejected(client, admin_headers, course_tree):
    response = client.post(
        f"/ChapterElement/chapter/{course_tree.chapters[0].id}",
        json={"type": "Video"},
        headers=admin_headers,
    )
    assert response.status_code == 400


def test_tags(client, admin_headers):
    assert client.post("/Tag", json="python", headers=admin_headers).status_code == 201
    assert client.get("/Tag").json() == ["python"]


# === Learner flow ===

def test_quiz_submission_over_http(client, student_headers, course_tree, make_quiz):
    chapter_id = str(course_tree.chapters[0].id)
    quiz = make_quiz(course_tree.chapters[0].id)
    quiz_id = str(quiz.id)

    failed = client.post(
        "/QuizSubmission", json={"quiz_id": quiz_id, "answers": [3, 3, 3]}, headers=student_headers
    )
    assert failed.status_code == 200
    assert failed.json()["passed"] is False

    passed = client.post(
        "/QuizSubmission", json={"quiz_id": quiz_id, "answers": [0, 2, 1]}, headers=student_headers
    )
    assert passed.json()["passed"] is True
    assert passed.json()["percentage"] == 100

    history = client.get(f"/QuizSubmission/quiz/{quiz_id}", headers=student_headers).json()
    assert len(history) == 2
    progress = client.get(f"/UserProgress/chapter/{chapter_id}", headers=student_headers)
    assert progress.json() == {"is_completed": True}


def test_quiz_submission_requires_login(client, course_tree, make_quiz):
    quiz = make_quiz(course_tree.chapters[0].id)
    response = client.post("/QuizSubmission", json={"quiz_id": str(quiz.id), "answers": [0, 2, 1]})
    assert response.status_code == 401


def test_complete_chapters_over_http(client, student_headers, course_tree):
    for chapter in course_tree.chapters:
        response = client.post(f"/UserProgress/chapter/{chapter.id}/complete", headers=student_headers)
        assert response.status_code == 200

    progress = client.get(f"/UserProgress/course/{course_tree.course.id}", headers=student_headers).json()
    assert progress["is_completed"] is True
    assert progress["progress_percentage"] == 100.0


# === AI assistance ===

class CannedModel:
    def __init__(self, text):
        self.text = text

    def generate_content(self, prompt):
        return self


def use_ai_reply(settings, text):
    main.app.dependency_overrides[get_ai_quiz_service] = lambda: AIQuizService(settings, model=CannedModel(text))


def test_admin_generates_quiz_from_chapter(client, db, settings, admin_headers, student_headers, course_tree):
    chapter_id = course_tree.chapters[0].id
    HierarchyService.create_element(db, chapter_id, ChapterElementCreate(type="Text", content="Loops repeat code. " * 10))
    use_ai_reply(settings, '[{"question": "What do loops do?", "options": ["Repeat", "Stop", "Print", "Import"], '
                           '"correctAnswerIndex": 0}]')

    assert client.post(f"/Chapter/{chapter_id}/generate-quiz", headers=student_headers).status_code == 403

    response = client.post(f"/Chapter/{chapter_id}/generate-quiz", headers=admin_headers)
    assert response.status_code == 200
    assert response.json() == [{
        "question_text": "What do loops do?",
        "options": ["Repeat", "Stop", "Print", "Import"],
        "correct_answer_index": 0,
    }]


def test_hint_for_logged_in_user(client, settings, student_headers):
    use_ai_reply(settings, "Count on your fingers.")
    body = {"question_text": "What is 2 + 2?", "options": ["3", "4", "5", "22"]}

    assert client.post("/QuizQuestion/hint", json=body).status_code == 401
    response = client.post("/QuizQuestion/hint", json=body, headers=student_headers)
    assert response.json() == {"hint": "Count on your fingers."}
    assert client.post(
        "/QuizQuestion/hint", json={"question_text": "", "options": []}, headers=student_headers
    ).status_code == 400


def test_ai_without_api_key_is_unavailable(client, settings, student_headers):
    main.app.dependency_overrides[get_ai_quiz_service] = lambda: AIQuizService(
        settings.model_copy(update={"GEMINI_API_KEY": None})
    )
    response = client.post(
        "/QuizQuestion/hint", json={"question_text": "Why?", "options": ["a", "b"]}, headers=student_headers
    )

    assert response.status_code == 503
    assert response.json() == {"detail": "AI features are not configured"}

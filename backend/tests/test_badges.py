from uuid import uuid4

import pytest

from academy.exceptions import ConflictError, NotFoundError, ValidationError
from academy.models.badge import Badge
from academy.schemas.badge import BadgeCreate, ExternalBadgeCreate
from academy.schemas.course import CourseCreate, CourseUpdate
from academy.schemas.portfolio import PortfolioCreate, PortfolioReview
from academy.services.badge_service import BadgeService
from academy.services.course_service import CourseService
from academy.services.hierarchy_service import HierarchyService
from academy.services.portfolio_service import PortfolioService


def new_badge(db, name="Python Beginner", base_name="Python", level="Beginner", icon="<svg>1</svg>"):
    return BadgeService.create_badge(db, BadgeCreate(name=name, base_name=base_name, level=level, icon=icon))


def test_badge_icon_and_level_must_be_unique(db):
    new_badge(db)

    with pytest.raises(ValidationError):
        new_badge(db, name="Copy", level="Advanced")
    with pytest.raises(ValidationError):
        new_badge(db, name="Same level", base_name="python", icon="<svg>2</svg>")


def test_badge_can_belong_to_one_course_only(db, course_tree):
    badge = new_badge(db)
    CourseService.update_course(db, course_tree.course.id, CourseUpdate(title="Python Basics", badge_id=badge.id))

    assert HierarchyService.exists_with_badge(db, badge.id)
    assert not HierarchyService.exists_with_badge(db, badge.id, exclude_course_id=course_tree.course.id)
    with pytest.raises(ConflictError):
        CourseService.create_course(db, CourseCreate(title="Other course", badge_id=badge.id))


def test_badge_icon_cannot_repeat_across_courses(db, course_tree):
    badge = new_badge(db)
    CourseService.update_course(db, course_tree.course.id, CourseUpdate(title="Python Basics", badge_id=badge.id))

    assert HierarchyService.exists_with_badge_icon(db, "<svg>1</svg>")
    assert not HierarchyService.exists_with_badge_icon(db, "<svg>1</svg>", exclude_course_id=course_tree.course.id)


def test_course_can_keep_its_own_badge_on_update(db, course_tree):
    badge = new_badge(db)
    course_id = course_tree.course.id
    CourseService.update_course(db, course_id, CourseUpdate(title="Python Basics", badge_id=badge.id))

    updated = CourseService.update_course(
        db, course_id, CourseUpdate(title="Python Basics 2", badge_id=badge.id, is_published=True)
    )

    assert updated.badge_id == badge.id
    assert updated.is_published


def test_assigning_missing_badge_is_not_found(db, course_tree):
    with pytest.raises(NotFoundError):
        CourseService.update_course(db, course_tree.course.id, CourseUpdate(title="X", badge_id=uuid4()))


def test_badge_in_use_cannot_be_deleted(db, course_tree):
    badge = new_badge(db)
    CourseService.update_course(db, course_tree.course.id, CourseUpdate(title="Python Basics", badge_id=badge.id))

    with pytest.raises(ConflictError):
        BadgeService.delete_badge(db, badge.id)

    unused = new_badge(db, name="Web", base_name="Web", icon="<svg>web</svg>")
    BadgeService.delete_badge(db, unused.id)
    assert db.query(Badge).count() == 1


def test_update_badge_icon(db):
    first = new_badge(db)
    second = new_badge(db, name="Web", base_name="Web", icon="<svg>web</svg>")

    assert BadgeService.update_icon(db, first.id, "<svg>new</svg>").icon == "<svg>new</svg>"
    with pytest.raises(ValidationError):
        BadgeService.update_icon(db, second.id, "<svg>new</svg>")


def test_external_badge_rules(db, student):
    badge = BadgeService.create_external_badge(
        db, ExternalBadgeCreate(name="Scratch Star", category="Scratch", icon="<svg>star</svg>")
    )
    with pytest.raises(ValidationError):
        BadgeService.create_external_badge(
            db, ExternalBadgeCreate(name="scratch star", category="Scratch", icon="<svg>other</svg>")
        )
    with pytest.raises(ValidationError):
        BadgeService.create_external_badge(
            db, ExternalBadgeCreate(name="Another", category="Web", icon="<svg>star</svg>")
        )

    portfolio = PortfolioService.create_portfolio(
        db, student.id, PortfolioCreate(title="Game", description="A maze", screenshot_url="data:image/png;base64,AAAA")
    )
    PortfolioService.review(db, portfolio.id, PortfolioReview(status="Approved", external_badge_id=badge.id))

    with pytest.raises(ConflictError):
        BadgeService.delete_external_badge(db, badge.id)

from enum import Enum


class UserRole(str, Enum):
    STUDENT = "student"
    PROFESSOR = "professor"
    ADMIN = "admin"


class EnrollmentStatus(str, Enum):
    ACTIVE = "active"
    COMPLETED = "completed"
    DROPPED = "dropped"


class ComponentType(str, Enum):
    """성적 구성요소 분류 (과목 평가 비율의 단위)"""
    LAB = "Lab"
    ASSIGNMENT = "Assignment"
    MIDTERM = "Midterm"
    EXAM = "Exam"
    PROJECT = "Project"


class AssignmentType(str, Enum):
    LAB = "lab"
    ASSIGNMENT = "assignment"
    QUIZ = "quiz"
    EXAM = "exam"
    PROJECT = "project"


class AssignmentStatus(str, Enum):
    """과제 진행 상태 (draft → published → completed → graded 순서로만 이동)"""
    DRAFT = "draft"
    PUBLISHED = "published"
    COMPLETED = "completed"
    GRADED = "graded"


class SubmissionStatus(str, Enum):
    """학생별 과제 제출 상태"""
    NOT_SUBMITTED = "not_submitted"
    SUBMITTED = "submitted"
    COMPLETED = "completed"
    GRADED = "graded"


class PassingStatus(str, Enum):
    PASSING = "passing"
    AT_RISK = "at-risk"
    FAILING = "failing"
    UNKNOWN = "unknown"


# ✅ 구성요소 분류 → 과제 유형 매핑
#    - 중간고사(Midterm)는 quiz 유형 과제로 출제
COMPONENT_ASSIGNMENT_TYPES = {
    ComponentType.LAB: AssignmentType.LAB,
    ComponentType.ASSIGNMENT: AssignmentType.ASSIGNMENT,
    ComponentType.MIDTERM: AssignmentType.QUIZ,
    ComponentType.EXAM: AssignmentType.EXAM,
    ComponentType.PROJECT: AssignmentType.PROJECT,
}

ASSIGNMENT_STATUS_ORDER = [
    AssignmentStatus.DRAFT,
    AssignmentStatus.PUBLISHED,
    AssignmentStatus.COMPLETED,
    AssignmentStatus.GRADED,
]

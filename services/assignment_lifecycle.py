from models.enums import AssignmentStatus, ASSIGNMENT_STATUS_ORDER
from services.grading.errors import InvalidTransitionError


def next_status(current: AssignmentStatus):
    """다음 단계 상태 (graded 이후는 None)"""
    idx = ASSIGNMENT_STATUS_ORDER.index(current)
    return ASSIGNMENT_STATUS_ORDER[idx + 1] if idx + 1 < len(ASSIGNMENT_STATUS_ORDER) else None


def check_transition(current: AssignmentStatus, target: AssignmentStatus) -> AssignmentStatus:
    """
    과제 상태 변경 검증
    - draft → published → completed → graded, 한 단계씩 앞으로만 이동
    - 같은 상태로의 변경은 허용하지 않음
    """
    if next_status(current) != target:
        raise InvalidTransitionError(
            f"Cannot move assignment from {current.value} to {target.value}",
            details={"from": current.value, "to": target.value},
        )
    return target

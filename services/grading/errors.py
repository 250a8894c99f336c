"""
성적 집계 도메인 예외.

모든 예외는 GradingError를 상속하며, 전역 에러 핸들러가 error_code와 http_status로
표준 에러 응답(ErrorResponse)을 만든다.
"""

from typing import Any, Dict, Optional


class GradingError(Exception):
    """성적 집계/설정 관련 예외의 기본 클래스"""

    error_code = "GRADING_ERROR"
    http_status = 422

    def __init__(self, message: str, error_code: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        if error_code:
            self.error_code = error_code
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        return {"code": self.error_code, "message": self.message, "details": self.details}


class ConfigurationError(GradingError):
    """과목 설정 오류 (가중치 합 ≠ 100, 등급 구간 중복 등). 교수가 설정을 고쳐야 함."""

    error_code = "CONFIGURATION_ERROR"


class IncompleteGradingError(GradingError):
    """필수 구성요소에 채점된 항목이 없어 최종 성적을 아직 낼 수 없음."""

    error_code = "INCOMPLETE_GRADING"
    http_status = 409


class ScoreOutOfRangeError(GradingError):
    """점수가 만점을 넘거나 0 미만. 기본적으로는 경고로 결과에 첨부된다."""

    error_code = "SCORE_OUT_OF_RANGE"


class BandNotFoundError(GradingError):
    """최종 점수를 포함하는 등급 구간이 없음 (구간 사이의 빈틈)."""

    error_code = "BAND_NOT_FOUND"


class InvalidTransitionError(GradingError):
    error_code = "INVALID_TRANSITION"
    http_status = 409

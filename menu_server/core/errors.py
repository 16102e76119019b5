from typing import Optional, Dict, Any
from fastapi import HTTPException, status
from pydantic import BaseModel


class ErrorResponse(BaseModel):
    """표준 에러 응답 모델"""
    error: str
    message: str
    details: Optional[Dict[str, Any]] = None
    status_code: int


# =============================================================================
# 도메인 예외 (서비스 계층에서 발생)
# =============================================================================

class InvalidArgumentError(ValueError):
    """필수 식별자가 누락된 요청"""


class StorageError(Exception):
    """JSON 문서 읽기/쓰기 실패"""

    def __init__(self, document: str, message: str):
        self.document = document
        super().__init__(f"{document}: {message}")


# =============================================================================
# 커스텀 HTTP 예외 클래스들
# =============================================================================

class BaseCustomException(HTTPException):
    """기본 커스텀 예외 클래스"""
    def __init__(
        self,
        status_code: int,
        error: str,
        message: str,
        details: Optional[Dict[str, Any]] = None
    ):
        self.error = error
        self.message = message
        self.details = details
        self.status_code = status_code  # status_code를 먼저 설정
        super().__init__(status_code=status_code, detail=self.to_dict())

    def to_dict(self) -> Dict[str, Any]:
        """예외를 딕셔너리로 변환"""
        return {
            "error": self.error,
            "message": self.message,
            "details": self.details,
            "status_code": self.status_code
        }


class InvalidArgumentException(BaseCustomException):
    """잘못된 요청 인자 예외"""
    def __init__(
        self,
        message: str = "Invalid argument",
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            error="invalid_argument",
            message=message,
            details=details
        )


class StorageException(BaseCustomException):
    """저장소 접근 실패 예외"""
    def __init__(
        self,
        message: str = "Server data unavailable",
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            error="storage_error",
            message=message,
            details=details
        )


class NotImplementedFeatureException(BaseCustomException):
    """서버에 구성되지 않은 기능 예외"""
    def __init__(
        self,
        message: str = "Feature not configured on this server.",
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            status_code=status.HTTP_501_NOT_IMPLEMENTED,
            error="not_implemented",
            message=message,
            details=details
        )


# =============================================================================
# 에러 헬퍼 함수들
# =============================================================================

def create_error_response(
    error: str,
    message: str,
    status_code: int,
    details: Optional[Dict[str, Any]] = None
) -> ErrorResponse:
    """표준 에러 응답 생성"""
    return ErrorResponse(
        error=error,
        message=message,
        status_code=status_code,
        details=details
    )


def missing_uids_error():
    """호출자 또는 대상 uid 누락 에러"""
    return InvalidArgumentException("Missing uids")


def server_data_unavailable_error():
    """설정 문서를 읽을 수 없음 에러"""
    return StorageException("Server data unavailable")


def tts_not_configured_error():
    """TTS 미구성 에러"""
    return NotImplementedFeatureException("TTS not configured on this server.")

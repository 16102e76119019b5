from typing import Any, Dict, List, Optional
from pydantic import BaseModel, ConfigDict, Field


class FriendTargetRequest(BaseModel):
    """친구 요청/삭제 요청 스키마"""
    model_config = ConfigDict(coerce_numbers_to_str=True)

    uid: Optional[str] = Field(None, description="대상 사용자 ID")
    callerUid: Optional[str] = Field(None, description="x-uid 헤더가 없을 때 사용하는 호출자 ID")


class SuccessResponse(BaseModel):
    """성공 응답 스키마"""
    success: bool = Field(default=True, description="처리 성공 여부")


class FriendActionResponse(SuccessResponse):
    """친구 요청 처리 결과 스키마"""
    action: str = Field(..., description="처리 결과: accepted, requested")


class FriendStateResponse(BaseModel):
    """사용자 친구 상태 스키마"""
    # 이전 서버가 저장한 숫자 ID도 문자열로 응답
    model_config = ConfigDict(coerce_numbers_to_str=True)

    friends: Dict[str, Dict[str, Any]] = Field(default_factory=dict, description="친구 ID별 표시 정보")
    pending: List[str] = Field(default_factory=list, description="내가 보낸 친구 요청 대상 ID")
    incomingRequests: List[str] = Field(default_factory=list, description="나에게 친구 요청을 보낸 사용자 ID")
    blocked: List[str] = Field(default_factory=list, description="차단한 사용자 ID")

from app.schemas.events import EVENT_JOIN, EVENT_NICK_CHANGE

MISSING_PARAMETERS = "파라미터가 부족합니다. (nickname, type)"
SERVER_MISCONFIGURED = "서버 설정 오류입니다. 관리자에게 문의하세요."
SERVER_ERROR = "서버 오류가 발생했습니다."
EVENT_PROCESSED = "이벤트 처리 완료"


def event_reply(nickname: str, event_type: str, count: int) -> str:
    """Chat text for a successfully recorded event."""
    if event_type == EVENT_JOIN:
        if count == 1:
            return f"환영합니다, {nickname}님! (첫 입장)"
        return f'알림: "{nickname}" 닉네임은 이번이 {count}번째 입장입니다.'
    if event_type == EVENT_NICK_CHANGE:
        return f"알림: {nickname} 님이 닉네임을 변경했습니다."
    return EVENT_PROCESSED

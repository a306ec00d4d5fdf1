from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, Field, ConfigDict


EVENT_JOIN = "join"
EVENT_NICK_CHANGE = "nick_change"

# Where each field may live in the request body, tried in order:
# flat key, skill `action.params`, skill `action.detailParams.<field>.value`.
FIELD_PATHS: Dict[str, List[Tuple[str, ...]]] = {
    field: [
        (field,),
        ("action", "params", field),
        ("action", "detailParams", field, "value"),
    ]
    for field in ("nickname", "type")
}


def _lookup(body: Any, path: Tuple[str, ...]) -> Any:
    node = body
    for key in path:
        if not isinstance(node, dict):
            return None
        node = node.get(key)
    return node


def _first_present(body: Any, paths: List[Tuple[str, ...]], strip: bool = True) -> Optional[str]:
    for path in paths:
        value = _lookup(body, path)
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            value = str(value)
        if isinstance(value, str) and value.strip():
            return value.strip() if strip else value
    return None


class EventPayload(BaseModel):
    """Nickname and event type extracted from an inbound webhook body."""

    nickname: Optional[str] = Field(None, description="User nickname, trimmed.")
    type: Optional[str] = Field(None, description="Event type as sent: join, nick_change or any other string.")

    @classmethod
    def from_body(cls, body: Any) -> "EventPayload":
        return cls(
            nickname=_first_present(body, FIELD_PATHS["nickname"]),
            type=_first_present(body, FIELD_PATHS["type"], strip=False),
        )

    @property
    def is_complete(self) -> bool:
        return bool(self.nickname) and bool(self.type)


class SimpleText(BaseModel):
    text: str


class Output(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    simple_text: SimpleText = Field(..., alias="simpleText")


class Template(BaseModel):
    outputs: List[Output]


class SkillResponse(BaseModel):
    """Chatbot skill response envelope (version 2.0)."""

    version: str = "2.0"
    template: Template

    @classmethod
    def text(cls, message: str) -> "SkillResponse":
        return cls(template=Template(outputs=[Output(simple_text=SimpleText(text=message))]))

    def to_json(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True)


class HealthResponse(BaseModel):
    ok: bool = True
    ping: str = "event"

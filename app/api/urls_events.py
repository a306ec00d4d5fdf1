from typing import Optional

from fastapi import APIRouter, Depends, Request, status
from loguru import logger

from app.core.exceptions import InvalidInput, MethodNotAllowed
from app.schemas.events import EventPayload, HealthResponse, SkillResponse
from app.services import replies
from app.services.auth_service import verify_webhook_secret
from app.services.counter_store import NicknameCounterStore

events_router = APIRouter()


def get_counter_store(request: Request) -> Optional[NicknameCounterStore]:
    """Store built in the app lifespan; None when the server is misconfigured."""
    return getattr(request.app.state, "counter_store", None)


@events_router.get("/event", response_model=HealthResponse)
async def event_health():
    """Health check, no side effects."""
    return HealthResponse()


@events_router.post(
    "/event",
    status_code=status.HTTP_200_OK,
    dependencies=[Depends(verify_webhook_secret)],
)
async def handle_event(
    request: Request,
    store: Optional[NicknameCounterStore] = Depends(get_counter_store),
):
    """
    Records a join / nick_change event and answers with chat text.
    Every business outcome, failures included, is a 200 carrying the message in-band.
    """
    try:
        body = await request.json() if await request.body() else {}
        payload = EventPayload.from_body(body)

        if not payload.is_complete:
            raise InvalidInput("nickname and type are required")

        if store is None:
            logger.error("Event received but the counter store is not configured")
            return SkillResponse.text(replies.SERVER_MISCONFIGURED).to_json()

        count = await store.record_event(payload.nickname, payload.type)
        message = replies.event_reply(payload.nickname, payload.type, count)
        return SkillResponse.text(message).to_json()

    except InvalidInput as e:
        logger.info(f"Rejected event: {e}")
        return SkillResponse.text(replies.MISSING_PARAMETERS).to_json()
    except Exception:
        logger.exception("Failed to process event")
        return SkillResponse.text(replies.SERVER_ERROR).to_json()


@events_router.api_route("/event", methods=["PUT", "PATCH", "DELETE"], include_in_schema=False)
async def event_method_not_allowed(request: Request):
    raise MethodNotAllowed(f"{request.method} is not supported")

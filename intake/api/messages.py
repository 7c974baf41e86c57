from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Query, status

from intake.api.deps import get_message_service, read_text_field
from intake.core.errors import APIError, success_response
from intake.domain.errors import ValidationError
from intake.services.message_service import MessageService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/messages", tags=["messages"])

SEND_SUCCESS_MESSAGE = "Message successfully sent."
LIST_FAILURE_MESSAGE = "An error occurred while retrieving messages."
SEND_FAILURE_MESSAGE = "An error occurred while sending the message."


@router.get("")
def list_messages(
    status_filter: str | None = Query(default=None, alias="status"),
    page: str | None = Query(default=None),
    limit: str | None = Query(default=None),
    service: MessageService = Depends(get_message_service),
):
    logger.info("List messages endpoint hit status=%s page=%s limit=%s", status_filter, page, limit)
    try:
        messages = service.list_formatted(status_filter, page, limit)
    except ValidationError:
        raise
    except Exception as exc:
        logger.exception("Error while listing messages")
        raise APIError(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, message=LIST_FAILURE_MESSAGE) from exc
    return success_response({"messages": messages})


@router.post("/send")
def send_message(
    text: object = Depends(read_text_field),
    service: MessageService = Depends(get_message_service),
):
    logger.info("Send message endpoint hit")
    try:
        job_id = service.submit(text)
    except ValidationError:
        raise
    except Exception as exc:
        logger.exception("Error while dispatching message")
        raise APIError(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, message=SEND_FAILURE_MESSAGE) from exc
    logger.debug("Message accepted job_id=%s", job_id)
    return success_response({"message": SEND_SUCCESS_MESSAGE}, status_code=status.HTTP_202_ACCEPTED)

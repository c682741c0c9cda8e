# core/api.py

"""
WORKFLOW ERROR -> HTTP RESPONSE

Views call the workflow services and translate WorkflowError here so every
endpoint answers with the same body shape:

    {"detail": "<message>", "kind": "<category>", "code": "<ErrorName>"}
"""

from __future__ import annotations

import logging

from rest_framework import status
from rest_framework.response import Response

from core.exceptions import (
    KIND_BUSINESS_RULE,
    KIND_INVALID_STATE,
    KIND_NOT_FOUND,
    KIND_REFERENTIAL_INTEGRITY,
    WorkflowError,
)

logger = logging.getLogger(__name__)

KIND_TO_STATUS = {
    KIND_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    KIND_INVALID_STATE: status.HTTP_409_CONFLICT,
    KIND_BUSINESS_RULE: status.HTTP_400_BAD_REQUEST,
    KIND_REFERENTIAL_INTEGRITY: status.HTTP_422_UNPROCESSABLE_ENTITY,
}


def status_for(exc: WorkflowError) -> int:
    return KIND_TO_STATUS.get(exc.kind, status.HTTP_400_BAD_REQUEST)


def workflow_error_response(exc: WorkflowError) -> Response:
    http_status = status_for(exc)
    logger.info(
        "Workflow request rejected",
        extra={"kind": exc.kind, "code": exc.code, "status": http_status},
    )
    return Response(
        {"detail": exc.message, "kind": exc.kind, "code": exc.code},
        status=http_status,
    )

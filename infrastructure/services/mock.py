"""Mock submission service for testing and dry runs."""

import logging
import uuid

from domain.payload import SubmissionPayload
from infrastructure.services.base import SubmissionReceipt, SubmissionService

logger = logging.getLogger(__name__)


class MockSubmissionService(SubmissionService):
    """Record payloads instead of sending them; optionally fail every call."""

    def __init__(self, *, fail_with: str | None = None) -> None:
        self.fail_with = fail_with
        self.submitted: list[SubmissionPayload] = []
        logger.info("Initialized mock submission service (no real requests will be made)")

    async def submit_deal(self, payload: SubmissionPayload) -> SubmissionReceipt:
        if self.fail_with is not None:
            raise RuntimeError(self.fail_with)

        self.submitted.append(payload)
        receipt = SubmissionReceipt(deal_id=f"mock-{uuid.uuid4().hex[:12]}")
        logger.debug("Mock service accepted deal %s (%r)", receipt.deal_id, payload.title)
        return receipt

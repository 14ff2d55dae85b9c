"""
Message builders for trigger-driven communications.

Bodies are plain text; paragraphs are separated by blank lines. Channel
gateways decide how to present them (the email gateway wraps them in HTML).
"""

from collections.abc import Callable
from dataclasses import dataclass

from ...domain.models import ResourceRecord, format_amount

SIGNATURE = "Warm regards,\nThe Appeals Team"


@dataclass(frozen=True)
class RenderedMessage:
    subject: str
    body: str


ApprovalBuilder = Callable[[ResourceRecord, str | None], RenderedMessage]
RejectionBuilder = Callable[[ResourceRecord, str], RenderedMessage]


def build_approval_message(resource: ResourceRecord, approver_name: str | None = None) -> RenderedMessage:
    paragraphs = [
        "Dear Valued Donor,",
        f"Great news! The appeal '{resource.title}' has been approved "
        "and we will now proceed with implementation.",
        f"Approved amount: {format_amount(resource.amount)}",
    ]
    if approver_name:
        paragraphs.append(f"Approved by: {approver_name}")
    paragraphs += [
        "Your donations will be utilized as per the plan. We will keep you updated "
        "with regular progress reports on this appeal.",
        "Thank you for your generous support!",
        SIGNATURE,
    ]
    return RenderedMessage(
        subject=f"Appeal Approved: {resource.title}",
        body="\n\n".join(paragraphs),
    )


def build_rejection_message(resource: ResourceRecord, reason: str) -> RenderedMessage:
    paragraphs = [
        "Dear Valued Donor,",
        f"We regret to inform you that the appeal '{resource.title}' has not been approved.",
        f"Reason: {reason.strip() or 'Not specified'}",
        "The appeal may be revised and resubmitted with additional information.",
        "We appreciate your understanding and continued support.",
        SIGNATURE,
    ]
    return RenderedMessage(
        subject=f"Appeal Rejected: {resource.title}",
        body="\n\n".join(paragraphs),
    )

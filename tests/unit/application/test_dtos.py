import pytest
from pydantic import ValidationError

from appeal_comms.application.dtos import DispatchResultDTO, HistoryRecordDTO, SendCommunicationRequest
from appeal_comms.domain.models import (
    ChannelType,
    DispatchOutcome,
    DispatchResult,
    DispatchStatus,
    HistoryRecord,
    TriggerType,
)


class TestSendCommunicationRequest:
    def test_valid_email_request(self) -> None:
        dto = SendCommunicationRequest(
            appealId=1,
            channel=" email ",
            subject="Update",
            message="  Hello  ",
            recipientType="ALL_DONORS",
        )

        assert dto.channel_type == ChannelType.EMAIL
        assert dto.message == "Hello"
        assert dto.donor_ids is None

    def test_missing_required_fields(self) -> None:
        with pytest.raises(ValidationError, match="missing required fields"):
            SendCommunicationRequest(appealId=1, channel="SMS", recipientType="ALL_DONORS")

    def test_blank_message_counts_as_missing(self) -> None:
        with pytest.raises(ValidationError, match="missing required fields"):
            SendCommunicationRequest(appealId=1, channel="SMS", message="   ", recipientType="ALL_DONORS")

    def test_invalid_recipient_type(self) -> None:
        with pytest.raises(ValidationError, match="Invalid recipient type"):
            SendCommunicationRequest(appealId=1, channel="SMS", message="Hi", recipientType="SOME")

    def test_selected_donors_need_ids(self) -> None:
        with pytest.raises(ValidationError, match="at least one donor"):
            SendCommunicationRequest(
                appealId=1, channel="SMS", message="Hi", recipientType="SELECTED_DONORS", donorIds=[]
            )

    def test_email_needs_subject(self) -> None:
        with pytest.raises(ValidationError, match="Email subject is required"):
            SendCommunicationRequest(appealId=1, channel="EMAIL", message="Hi", recipientType="ALL_DONORS")

    def test_unsupported_channel(self) -> None:
        with pytest.raises(ValidationError, match="Unsupported channel"):
            SendCommunicationRequest(appealId=1, channel="FAX", message="Hi", recipientType="ALL_DONORS")

    def test_message_length_is_capped(self) -> None:
        with pytest.raises(ValidationError):
            SendCommunicationRequest(
                appealId=1, channel="SMS", message="x" * 10_001, recipientType="ALL_DONORS"
            )


class TestResponseDTOs:
    def test_dispatch_result_uses_camel_case(self) -> None:
        result = DispatchResult.from_outcomes(
            [
                DispatchOutcome(recipient_id=1, delivered=True),
                DispatchOutcome(recipient_id=2, delivered=False, error_detail="bounced", error_kind="delivery"),
            ],
            unresolved_ids=[9],
        ).with_history(True)

        data = DispatchResultDTO.from_result(result).model_dump(by_alias=True)

        assert data["status"] == "PARTIAL"
        assert data["unresolvedDonorIds"] == [9]
        assert data["historyRecorded"] is True
        assert data["outcomes"][1] == {
            "donorId": 2,
            "delivered": False,
            "error": "bounced",
            "errorKind": "delivery",
        }

    def test_history_record(self) -> None:
        record = HistoryRecord(
            id=4,
            resource_id=10,
            trigger_type=TriggerType.REJECTION,
            channel=ChannelType.EMAIL,
            recipient_count=2,
            delivered_count=2,
            status=DispatchStatus.SENT,
            content="Body",
            initiated_by=3,
        )

        data = HistoryRecordDTO.from_record(record).model_dump(mode="json", by_alias=True)

        assert data["appealId"] == 10
        assert data["triggerType"] == "REJECTION"
        assert data["sentByUserId"] == 3
        assert data["errorMessage"] is None

"""Tests for domain value types, request validation and status derivation."""

from decimal import Decimal

import pytest

from appeal_comms.domain.errors import ValidationError
from appeal_comms.domain.models import (
    AllForResource,
    ChannelType,
    DispatchOutcome,
    DispatchRequest,
    DispatchResult,
    DispatchStatus,
    ExplicitIds,
    Recipient,
    derive_status,
    format_amount,
)


class TestChannelType:
    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("EMAIL", ChannelType.EMAIL),
            ("email", ChannelType.EMAIL),
            (" sms ", ChannelType.SMS),
            ("chat", ChannelType.CHAT),
            ("WhatsApp", ChannelType.CHAT),
            (ChannelType.SMS, ChannelType.SMS),
        ],
    )
    def test_parse_known_values(self, raw, expected):
        assert ChannelType.parse(raw) == expected

    def test_parse_unknown_value_fails_fast(self):
        with pytest.raises(ValidationError, match="Unsupported channel 'FAX'"):
            ChannelType.parse("FAX")

    @pytest.mark.parametrize("raw", [None, "", "   "])
    def test_parse_missing_value(self, raw):
        with pytest.raises(ValidationError, match="required"):
            ChannelType.parse(raw)

    def test_validation_error_is_value_error(self):
        with pytest.raises(ValueError):
            ChannelType.parse("pigeon")


class TestRecipient:
    def test_contact_for_email_channel(self):
        r = Recipient(id=1, display_name="A", email=" a@example.org ", phone="+1")
        assert r.contact_for(ChannelType.EMAIL) == "a@example.org"

    def test_contact_for_phone_channels(self):
        r = Recipient(id=1, display_name="A", phone="+15551234")
        assert r.contact_for(ChannelType.SMS) == "+15551234"
        assert r.contact_for(ChannelType.CHAT) == "+15551234"
        assert r.contact_for(ChannelType.EMAIL) is None

    def test_blank_contact_is_missing(self):
        r = Recipient(id=1, display_name="A", email="  ")
        assert r.contact_for(ChannelType.EMAIL) is None


class TestDispatchRequestValidation:
    def _request(self, **overrides) -> DispatchRequest:
        fields = dict(
            resource_id=1,
            channel=ChannelType.EMAIL,
            subject="Update",
            body="Hello donors",
            selector=AllForResource(1),
        )
        fields.update(overrides)
        return DispatchRequest(**fields)

    def test_valid_email_request(self):
        self._request().validate()

    @pytest.mark.parametrize("subject", [None, "", "   "])
    def test_email_requires_subject(self, subject):
        with pytest.raises(ValidationError, match="subject"):
            self._request(subject=subject).validate()

    def test_sms_does_not_require_subject(self):
        self._request(channel=ChannelType.SMS, subject=None).validate()

    @pytest.mark.parametrize("body", ["", "  \n "])
    def test_body_required(self, body):
        with pytest.raises(ValidationError, match="body"):
            self._request(body=body).validate()

    def test_explicit_ids_must_not_be_empty(self):
        with pytest.raises(ValidationError, match="at least one donor"):
            self._request(selector=ExplicitIds(frozenset())).validate()

    def test_unparsed_channel_rejected(self):
        with pytest.raises(ValidationError, match="channel"):
            self._request(channel="EMAIL").validate()

    def test_selector_must_target_the_request_appeal(self):
        """History is written under the request appeal, so the selector must agree with it."""
        with pytest.raises(ValidationError, match="targets appeal 30"):
            self._request(resource_id=10, selector=AllForResource(30)).validate()

    def test_explicit_ids_are_not_tied_to_an_appeal_id(self):
        self._request(resource_id=10, selector=ExplicitIds(frozenset({30}))).validate()


class TestDispatchStatus:
    @pytest.mark.parametrize(
        "delivered,failed,expected",
        [
            (3, 0, DispatchStatus.SENT),
            (2, 1, DispatchStatus.PARTIAL),
            (0, 3, DispatchStatus.FAILED),
        ],
    )
    def test_derive_status(self, delivered, failed, expected):
        assert derive_status(delivered, failed) == expected

    def test_result_counts_add_up(self):
        outcomes = [
            DispatchOutcome(recipient_id=1, delivered=True),
            DispatchOutcome(recipient_id=2, delivered=False, error_detail="x", error_kind="delivery"),
            DispatchOutcome(recipient_id=3, delivered=True),
        ]
        result = DispatchResult.from_outcomes(outcomes)

        assert result.requested == 3
        assert result.delivered + result.failed == result.requested
        assert result.status == DispatchStatus.PARTIAL
        assert [o.recipient_id for o in result.failures()] == [2]

    def test_empty_result_is_noop(self):
        result = DispatchResult.empty([999])

        assert result.is_noop
        assert result.status is None
        assert result.unresolved_ids == (999,)

    def test_only_delivery_errors_are_retryable(self):
        assert DispatchOutcome(1, False, "boom", "delivery").retryable
        assert not DispatchOutcome(1, False, "no email", "unreachable").retryable


class TestFormatAmount:
    def test_thousands_separator(self):
        assert format_amount(Decimal("1250000.50")) == "1,250,000.50"

    def test_unknown_amount(self):
        assert format_amount(None) == "N/A"

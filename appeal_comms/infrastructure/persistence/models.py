from datetime import UTC, datetime
from decimal import Decimal

from sqlalchemy import BigInteger, DateTime, ForeignKey, Index, Integer, Numeric, String, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from ...domain.models import (
    ChannelType,
    DispatchStatus,
    HistoryRecord,
    Recipient,
    ResourceRecord,
    TriggerType,
)


def _naive_utc(dt: datetime) -> datetime:
    """Strip timezone info for storage in TIMESTAMP WITHOUT TIME ZONE columns."""
    return dt.astimezone(UTC).replace(tzinfo=None) if dt.tzinfo else dt


def _aware_utc(dt: datetime) -> datetime:
    """Attach UTC timezone to naive datetimes read from the database."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)
    return dt


class Base(DeclarativeBase):
    pass


class DonorModel(Base):
    """Donor row, owned by the donor management service."""

    __tablename__ = "donors"

    id: Mapped[int] = mapped_column(BigInteger, primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str | None] = mapped_column(String(255), index=True)
    phone_number: Mapped[str | None] = mapped_column(String(32))

    def to_entity(self) -> Recipient:
        return Recipient(
            id=self.id,
            display_name=self.name,
            email=self.email,
            phone=self.phone_number,
        )


class AppealModel(Base):
    """Appeal row, owned by the appeal management service."""

    __tablename__ = "appeals"

    id: Mapped[int] = mapped_column(BigInteger, primary_key=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text)
    estimated_amount: Mapped[Decimal | None] = mapped_column(Numeric(14, 2))
    approved_amount: Mapped[Decimal | None] = mapped_column(Numeric(14, 2))

    def to_entity(self) -> ResourceRecord:
        amount = self.approved_amount if self.approved_amount is not None else self.estimated_amount
        return ResourceRecord(
            id=self.id,
            title=self.title,
            description=self.description,
            amount=amount,
        )


class DonorAppealModel(Base):
    """Link between a donor and an appeal they gave to."""

    __tablename__ = "donor_appeals"

    id: Mapped[int] = mapped_column(BigInteger, primary_key=True, autoincrement=True)
    donor_id: Mapped[int] = mapped_column(
        BigInteger, ForeignKey("donors.id"), nullable=False, index=True
    )
    appeal_id: Mapped[int] = mapped_column(
        BigInteger, ForeignKey("appeals.id"), nullable=False, index=True
    )


class CommunicationHistoryModel(Base):
    """One row per dispatch batch."""

    __tablename__ = "communication_history"
    __table_args__ = (Index("ix_communication_history_appeal_sent", "appeal_id", "sent_date"),)

    id: Mapped[int] = mapped_column(BigInteger, primary_key=True, autoincrement=True)
    appeal_id: Mapped[int] = mapped_column(BigInteger, nullable=False)
    trigger_type: Mapped[str] = mapped_column(String(20), nullable=False)
    channel: Mapped[str] = mapped_column(String(20), nullable=False)
    recipient_count: Mapped[int] = mapped_column(Integer, nullable=False)
    delivered_count: Mapped[int] = mapped_column(Integer, nullable=False)
    status: Mapped[str] = mapped_column(String(20), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    sent_by_user_id: Mapped[int | None] = mapped_column(BigInteger)
    sent_date: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    error_message: Mapped[str | None] = mapped_column(Text)

    @classmethod
    def from_entity(cls, record: HistoryRecord) -> "CommunicationHistoryModel":
        """Convert domain record to ORM model."""
        return cls(
            id=record.id,
            appeal_id=record.resource_id,
            trigger_type=record.trigger_type.value,
            channel=record.channel.value,
            recipient_count=record.recipient_count,
            delivered_count=record.delivered_count,
            status=record.status.value,
            content=record.content,
            sent_by_user_id=record.initiated_by,
            sent_date=_naive_utc(record.timestamp),
            error_message=record.error_summary,
        )

    def to_entity(self) -> HistoryRecord:
        """Convert ORM model to domain record."""
        return HistoryRecord(
            id=self.id,
            resource_id=self.appeal_id,
            trigger_type=TriggerType(self.trigger_type),
            channel=ChannelType(self.channel),
            recipient_count=self.recipient_count,
            delivered_count=self.delivered_count,
            status=DispatchStatus(self.status),
            content=self.content,
            initiated_by=self.sent_by_user_id,
            timestamp=_aware_utc(self.sent_date),
            error_summary=self.error_message,
        )

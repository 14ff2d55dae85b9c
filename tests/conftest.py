import asyncio
from decimal import Decimal

import pytest

from appeal_comms.application.services import (
    AuditRecorder,
    CommunicationTriggers,
    DispatchService,
    RecipientResolver,
)
from appeal_comms.domain.errors import DeliveryError
from appeal_comms.domain.models import ChannelType, OutboundMessage, Recipient, ResourceRecord
from appeal_comms.domain.ports import ChannelGateway, DeliveryReceipt, GatewayRegistry
from appeal_comms.infrastructure.adapters import (
    InMemoryAuditStore,
    InMemoryDirectory,
    InMemoryResourceRegistry,
)

APPEAL_ID = 10
EMPTY_APPEAL_ID = 20


class FakeGateway(ChannelGateway):
    """Gateway double that records calls and fails or stalls on demand."""

    def __init__(
        self,
        channel: ChannelType = ChannelType.EMAIL,
        fail_for: set[int] | None = None,
        delays: dict[int, float] | None = None,
        default_delay: float = 0.0,
    ) -> None:
        self._channel = channel
        self._fail_for = fail_for or set()
        self._delays = delays or {}
        self._default_delay = default_delay
        self.calls: list[int] = []
        self.messages: list[OutboundMessage] = []
        self.in_flight = 0
        self.max_in_flight = 0

    @property
    def channel_type(self) -> ChannelType:
        return self._channel

    async def send(self, recipient: Recipient, message: OutboundMessage) -> DeliveryReceipt:
        self.calls.append(recipient.id)
        self.messages.append(message)
        self.require_contact(recipient)
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            delay = self._delays.get(recipient.id, self._default_delay)
            if delay:
                await asyncio.sleep(delay)
            if recipient.id in self._fail_for:
                raise DeliveryError(recipient.id, "550 mailbox unavailable")
        finally:
            self.in_flight -= 1
        return DeliveryReceipt(channel=self._channel, external_id=f"msg-{recipient.id}")


@pytest.fixture
def appeal() -> ResourceRecord:
    return ResourceRecord(
        id=APPEAL_ID,
        title="School Library Fund",
        description="Books and shelving for the village school",
        amount=Decimal("250000"),
    )


@pytest.fixture
def donors() -> list[Recipient]:
    return [
        Recipient(id=1, display_name="Asha Patel", email="asha@example.org", phone="+911111111111"),
        Recipient(id=2, display_name="Ben Okafor", email="ben@example.org", phone="+912222222222"),
        Recipient(id=3, display_name="Chen Wei", email=None, phone="+913333333333"),
    ]


@pytest.fixture
def directory(donors) -> InMemoryDirectory:
    return InMemoryDirectory(donors, links={APPEAL_ID: [d.id for d in donors]})


@pytest.fixture
def registry(appeal) -> InMemoryResourceRegistry:
    return InMemoryResourceRegistry(
        [appeal, ResourceRecord(id=EMPTY_APPEAL_ID, title="New Well")]
    )


@pytest.fixture
def audit_store() -> InMemoryAuditStore:
    return InMemoryAuditStore()


@pytest.fixture
def email_gateway() -> FakeGateway:
    return FakeGateway(ChannelType.EMAIL)


@pytest.fixture
def gateways(email_gateway) -> GatewayRegistry:
    return GatewayRegistry(
        [email_gateway, FakeGateway(ChannelType.SMS), FakeGateway(ChannelType.CHAT)]
    )


@pytest.fixture
def dispatcher(directory, registry, audit_store, gateways) -> DispatchService:
    return DispatchService(
        resolver=RecipientResolver(directory, registry),
        gateways=gateways,
        recorder=AuditRecorder(audit_store),
        registry=registry,
    )


@pytest.fixture
def triggers(dispatcher) -> CommunicationTriggers:
    return CommunicationTriggers(dispatcher)


@pytest.fixture
def gateway_factory():
    return FakeGateway


@pytest.fixture
def make_dispatcher(directory, registry, audit_store):
    """Build a DispatchService around a single gateway."""

    def _make(gateway: ChannelGateway, store=None, donor_directory=None, **kwargs) -> DispatchService:
        return DispatchService(
            resolver=RecipientResolver(donor_directory or directory, registry),
            gateways=GatewayRegistry([gateway]),
            recorder=AuditRecorder(store or audit_store),
            registry=registry,
            **kwargs,
        )

    return _make

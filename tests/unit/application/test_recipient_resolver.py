import pytest

from appeal_comms.application.services import RecipientResolver
from appeal_comms.domain.errors import NoRecipients, ResourceNotFound
from appeal_comms.domain.models import AllForResource, ExplicitIds, Recipient
from appeal_comms.infrastructure.adapters import InMemoryDirectory

APPEAL_ID = 10


class TestRecipientResolver:
    @pytest.fixture
    def resolver(self, directory, registry) -> RecipientResolver:
        return RecipientResolver(directory, registry)

    @pytest.mark.asyncio
    async def test_all_for_resource(self, resolver) -> None:
        resolution = await resolver.resolve(AllForResource(APPEAL_ID), APPEAL_ID)

        assert [r.id for r in resolution.recipients] == [1, 2, 3]
        assert resolution.unresolved_ids == ()
        assert len(resolution) == 3

    @pytest.mark.asyncio
    async def test_explicit_ids_sorted_and_unresolved_reported(self, resolver) -> None:
        resolution = await resolver.resolve(ExplicitIds(frozenset({3, 999, 1})), APPEAL_ID)

        assert [r.id for r in resolution.recipients] == [1, 3]
        assert resolution.unresolved_ids == (999,)

    @pytest.mark.asyncio
    async def test_missing_appeal_raises_not_found(self, resolver) -> None:
        with pytest.raises(ResourceNotFound) as exc:
            await resolver.resolve(AllForResource(404), 404)

        assert exc.value.resource_id == 404
        assert str(exc.value) == "Appeal 404 not found"

    @pytest.mark.asyncio
    async def test_empty_result_raises_no_recipients(self, resolver) -> None:
        with pytest.raises(NoRecipients) as exc:
            await resolver.resolve(ExplicitIds(frozenset({500, 501})), APPEAL_ID)

        assert exc.value.unresolved_ids == [500, 501]

    @pytest.mark.asyncio
    async def test_duplicate_links_are_collapsed(self, registry) -> None:
        """A donor linked to the appeal twice is contacted once."""
        donor = Recipient(id=5, display_name="Dana", email="dana@example.org")
        directory = InMemoryDirectory([donor], links={APPEAL_ID: [5, 5]})
        resolver = RecipientResolver(directory, registry)

        resolution = await resolver.resolve(AllForResource(APPEAL_ID), APPEAL_ID)

        assert [r.id for r in resolution.recipients] == [5]

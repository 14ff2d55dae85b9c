from dataclasses import dataclass, field

import structlog

from ...domain.errors import NoRecipients, ResourceNotFound, ValidationError
from ...domain.models import AllForResource, ExplicitIds, Recipient, RecipientSelector
from ...domain.ports import Directory, ResourceRegistry

logger = structlog.get_logger()


@dataclass(frozen=True)
class RecipientResolution:
    """Resolved recipients, in send order, plus ids that did not resolve."""

    recipients: tuple[Recipient, ...]
    unresolved_ids: tuple[int, ...] = field(default=())

    def __len__(self) -> int:
        return len(self.recipients)


class RecipientResolver:
    """Turns a recipient selector into a concrete, deduplicated recipient list."""

    def __init__(self, directory: Directory, registry: ResourceRegistry) -> None:
        self._directory = directory
        self._registry = registry

    async def resolve(self, selector: RecipientSelector, resource_id: int) -> RecipientResolution:
        """
        Resolve recipients for a dispatch.

        Raises:
            ResourceNotFound: AllForResource names an appeal that does not exist
            NoRecipients: Nothing resolved
        """
        match selector:
            case AllForResource(resource_id=selected):
                if await self._registry.get(selected) is None:
                    raise ResourceNotFound(selected)
                found = await self._directory.find_all_for_resource(selected)
                unresolved: list[int] = []
            case ExplicitIds(ids=ids):
                wanted = sorted(ids)
                found = await self._directory.find_by_ids(wanted)
                by_id = {r.id: r for r in found}
                found = [by_id[i] for i in wanted if i in by_id]
                unresolved = [i for i in wanted if i not in by_id]
                if unresolved:
                    logger.warning(
                        "Some donor ids did not resolve",
                        appeal_id=resource_id,
                        requested=len(wanted),
                        resolved=len(found),
                        unresolved_ids=unresolved,
                    )
            case _:
                raise ValidationError(f"Unrecognized recipient selector: {selector!r}")

        recipients = _dedupe(found)
        if not recipients:
            raise NoRecipients(resource_id, unresolved)

        logger.info("Recipients resolved", appeal_id=resource_id, count=len(recipients))
        return RecipientResolution(recipients=tuple(recipients), unresolved_ids=tuple(unresolved))


def _dedupe(recipients: list[Recipient]) -> list[Recipient]:
    seen: set[int] = set()
    unique = []
    for recipient in recipients:
        if recipient.id in seen:
            continue
        seen.add(recipient.id)
        unique.append(recipient)
    return unique

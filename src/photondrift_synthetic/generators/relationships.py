"""Relationship linking for drift event batches.

Freshly generated events carry placeholder parent, child, and correlated
ids. link_batch() rewires them to real events of the same repository batch:

- Parents are sampled from strictly earlier events
- Children are sampled from strictly later events
- Correlated events are sampled from any other event

Because parents always precede and children always follow, the parent/child
graph of a linked batch is acyclic. Similar-event, pattern, and dependency
node ids are left as synthetic references.
"""

from __future__ import annotations

from collections.abc import Sequence

from photondrift_synthetic.distributions.random_source import DeterministicRandomSource
from photondrift_synthetic.observability import get_logger
from photondrift_synthetic.schemas.drift_event import DriftEvent


def link_batch(
    events: Sequence[DriftEvent],
    rng: DeterministicRandomSource,
) -> list[DriftEvent]:
    """Rewire relationship ids to events of the same batch.

    Args:
        events: One repository's events, sorted chronologically
        rng: Random source of the run; sampling consumes it in event order

    Returns:
        New events with linked relationships. Each list keeps
        min(generated count, available candidates) entries.

    Example:
        >>> batch = generator.generate_batch(50, repository_id="repo_1")
        >>> linked = link_batch(batch, rng)
        >>> ids = {event.id for event in linked}
        >>> all(p in ids for event in linked for p in event.relationships.parent_events)
        True
    """
    ids = [event.id for event in events]
    linked: list[DriftEvent] = []

    for position, event in enumerate(events):
        relationships = event.relationships

        earlier = ids[:position]
        later = ids[position + 1 :]
        others = earlier + later

        parents = rng.sample(earlier, min(len(relationships.parent_events), len(earlier)))
        children = rng.sample(later, min(len(relationships.child_events), len(later)))

        kept = relationships.correlated_events[: len(others)]
        targets = rng.sample(others, len(kept))
        correlated = [
            correlation.model_copy(update={"event_id": target})
            for correlation, target in zip(kept, targets, strict=True)
        ]

        linked.append(
            event.model_copy(
                update={
                    "relationships": relationships.model_copy(
                        update={
                            "parent_events": parents,
                            "child_events": children,
                            "correlated_events": correlated,
                        }
                    )
                }
            )
        )

    get_logger().debug("batch_linked", count=len(linked))
    return linked

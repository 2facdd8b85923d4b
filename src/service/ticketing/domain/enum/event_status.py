"""
Event lifecycle status

Organisers publish a draft to open sales; scanning is only meaningful while
an event is published.
"""

from enum import StrEnum


class EventStatus(StrEnum):
    DRAFT = 'draft'
    PUBLISHED = 'published'
    CANCELLED = 'cancelled'
    COMPLETED = 'completed'

    def can_transition_to(self, target: 'EventStatus') -> bool:
        return target in EVENT_STATUS_TRANSITIONS[self]


EVENT_STATUS_TRANSITIONS: dict[EventStatus, frozenset[EventStatus]] = {
    EventStatus.DRAFT: frozenset({EventStatus.PUBLISHED, EventStatus.CANCELLED}),
    EventStatus.PUBLISHED: frozenset({EventStatus.COMPLETED, EventStatus.CANCELLED}),
    EventStatus.CANCELLED: frozenset(),
    EventStatus.COMPLETED: frozenset(),
}

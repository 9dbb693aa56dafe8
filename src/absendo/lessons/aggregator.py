from typing import Dict, Iterable, List, Tuple

from absendo.shared.schemas import CalendarEvent, ProcessedEvent


def remove_duplicates_with_count(events: Iterable[CalendarEvent]) -> List[ProcessedEvent]:
    """
    Collapse lessons with the same subject, teacher and class into one entry.

    The first occurrence of each key supplies the fields and output follows
    first-seen order. A plain CalendarEvent counts as one occurrence, a
    ProcessedEvent as ``count`` occurrences, so aggregating an already
    aggregated list returns it unchanged.
    """
    firsts: Dict[Tuple[str, str, str], CalendarEvent] = {}
    counts: Dict[Tuple[str, str, str], int] = {}

    for event in events:
        key = event.key
        weight = event.count if isinstance(event, ProcessedEvent) else 1
        if key in firsts:
            counts[key] += weight
        else:
            firsts[key] = event
            counts[key] = weight

    return [
        ProcessedEvent(
            datum=event.datum,
            fach=event.fach,
            lehrer=event.lehrer,
            klasse=event.klasse,
            count=counts[key],
        )
        for key, event in firsts.items()
    ]

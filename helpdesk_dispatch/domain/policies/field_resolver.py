"""Maps a condition field name to the ticket value it reads."""

from __future__ import annotations

from helpdesk_dispatch.domain.entities.ticket import TicketSnapshot
from helpdesk_dispatch.domain.value_objects.enums import ConditionField

_DIRECT_FIELDS: dict[str, str] = {
    ConditionField.PRIORITY.value: "priority",
    ConditionField.DEPARTMENT.value: "department",
    ConditionField.USER_TYPE.value: "user_type",
    ConditionField.SUBJECT.value: "subject",
    ConditionField.SOURCE.value: "source",
    ConditionField.TICKET_TYPE.value: "ticket_type",
}


def _present(value: str | None) -> str | None:
    if value is None:
        return None
    return value if str(value).strip() else None


def resolve_field(field_name: str | None, ticket: TicketSnapshot | None) -> str | None:
    """Return the ticket value a condition on *field_name* compares against.

    ``category`` falls back to ``issue_type``: the incident form stores the
    requester's choice there, the service request form stores it in
    ``category``. Unknown fields and blank values resolve to None.
    """
    if ticket is None or not field_name:
        return None

    key = field_name.strip().lower()
    if key == ConditionField.CATEGORY.value:
        return _present(ticket.category) or _present(ticket.issue_type)

    attr = _DIRECT_FIELDS.get(key)
    if attr is None:
        return None
    return _present(getattr(ticket, attr, None))

"""Intake data the dispatch engine routes on."""

from dataclasses import dataclass


@dataclass(frozen=True)
class TicketSnapshot:
    """Read-only view of a freshly created ticket.

    Built once by the intake side and never mutated while routing. Every
    attribute is optional because requesters fill in different forms
    (incident vs. service request).
    """

    category: str | None = None
    priority: str | None = None
    department: str | None = None
    user_type: str | None = None
    subject: str | None = None
    source: str | None = None
    issue_type: str | None = None
    ticket_type: str | None = None

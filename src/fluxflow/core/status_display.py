"""Display formatting for status-bearing entities.

Orders, tickets, invoices and subscriptions each have their own status
vocabulary, independent of tasks. This module turns a raw status into a
label and a badge variant for list views. Unknown statuses still render,
with a neutral badge.
"""

from enum import Enum


class StatusEntity(str, Enum):
    """Entities whose status is displayed as a badge."""

    ORDER = "order"
    TICKET = "ticket"
    INVOICE = "invoice"
    SUBSCRIPTION = "subscription"


class BadgeVariant(str, Enum):
    """Badge styles understood by the frontend."""

    DEFAULT = "default"
    OUTLINE = "outline"
    SECONDARY = "secondary"
    DESTRUCTIVE = "destructive"


_BADGES: dict[StatusEntity, dict[str, BadgeVariant]] = {
    StatusEntity.ORDER: {
        "pending": BadgeVariant.OUTLINE,
        "in_progress": BadgeVariant.DEFAULT,
        "completed": BadgeVariant.SECONDARY,
        "cancelled": BadgeVariant.DESTRUCTIVE,
    },
    StatusEntity.TICKET: {
        "open": BadgeVariant.DEFAULT,
        "in_progress": BadgeVariant.OUTLINE,
        "resolved": BadgeVariant.SECONDARY,
        "closed": BadgeVariant.DESTRUCTIVE,
    },
    StatusEntity.INVOICE: {
        "paid": BadgeVariant.DEFAULT,
        "pending": BadgeVariant.OUTLINE,
        "partial": BadgeVariant.SECONDARY,
        "cancelled": BadgeVariant.DESTRUCTIVE,
    },
    StatusEntity.SUBSCRIPTION: {
        "active": BadgeVariant.OUTLINE,
        "canceled": BadgeVariant.DESTRUCTIVE,
        "past_due": BadgeVariant.SECONDARY,
        "unpaid": BadgeVariant.SECONDARY,
    },
}

# Subscription labels are title-cased word by word ("Past Due"); the
# other entities only capitalize the first letter ("In progress").
_SUBSCRIPTION_LABELS: dict[str, str] = {
    "active": "Active",
    "canceled": "Canceled",
    "past_due": "Past Due",
    "unpaid": "Unpaid",
}

# Orders in these states can no longer be cancelled.
_ORDER_CLOSED_STATUSES = frozenset({"completed", "cancelled"})


def badge_variant(entity: StatusEntity, status: str) -> BadgeVariant:
    """Badge style for a status.

    Unrecognized statuses get ``outline``, except subscriptions which fall
    back to the plain ``default`` badge.
    """
    fallback = (
        BadgeVariant.DEFAULT if entity is StatusEntity.SUBSCRIPTION else BadgeVariant.OUTLINE
    )
    return _BADGES[entity].get(status, fallback)


def status_label(entity: StatusEntity, status: str) -> str:
    """Human-readable label for a status.

    Args:
        entity: The kind of record the status belongs to.
        status: Raw status value.

    Returns:
        Display label. Unknown subscription statuses are shown verbatim.
    """
    if entity is StatusEntity.SUBSCRIPTION:
        return _SUBSCRIPTION_LABELS.get(status, status)
    if not status:
        return status
    label = status[0].upper() + status[1:]
    if entity is StatusEntity.INVOICE:
        return label
    return label.replace("_", " ")


def order_is_cancellable(status: str) -> bool:
    """Whether an order in ``status`` can still be cancelled."""
    return status not in _ORDER_CLOSED_STATUSES

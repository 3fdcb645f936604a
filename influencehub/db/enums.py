from enum import Enum


class CampaignStatusEnum(str, Enum):
    draft = "draft"
    pending = "pending"
    active = "active"
    completed = "completed"
    cancelled = "cancelled"


class CollaborationStatusEnum(str, Enum):
    pending = "pending"
    accepted = "accepted"
    active = "active"
    completed = "completed"
    cancelled = "cancelled"
    declined = "declined"


# Legal moves between collaboration states; states without an entry are terminal.
COLLABORATION_TRANSITIONS: dict[CollaborationStatusEnum, frozenset[CollaborationStatusEnum]] = {
    CollaborationStatusEnum.pending: frozenset(
        {
            CollaborationStatusEnum.accepted,
            CollaborationStatusEnum.active,
            CollaborationStatusEnum.cancelled,
            CollaborationStatusEnum.declined,
        }
    ),
    CollaborationStatusEnum.accepted: frozenset(
        {
            CollaborationStatusEnum.active,
            CollaborationStatusEnum.completed,
            CollaborationStatusEnum.cancelled,
        }
    ),
    CollaborationStatusEnum.active: frozenset(
        {CollaborationStatusEnum.completed, CollaborationStatusEnum.cancelled}
    ),
}

DEFAULT_USER_ROLE = "Brand Manager"

ALL_CATEGORIES = "All Categories"

REVENUE_METRIC = "revenue"

import enum


class BillStatus(str, enum.Enum):
    PENDING = "pending"
    ACCEPTED = "accepted"
    REFUSED = "refused"

class SubmissionState(str, enum.Enum):
    """
    Progress of a new bill through the two-phase store persistence:
    the receipt upload creates the entry, the form submission completes it.
    """
    DRAFT = "draft"
    UPLOADED = "uploaded"
    PERSISTED = "persisted"

from enum import Enum


class ContractStatus(str, Enum):
    ACTIVE = "active"
    EXPIRED = "expired"
    TERMINATED = "terminated"


class PropertyStatus(str, Enum):
    AVAILABLE = "available"
    OCCUPIED = "occupied"


class TenantStatus(str, Enum):
    ACTIVE = "active"
    ENDED = "ended"
    PENDING_PAYMENT = "pending_payment"


class PaymentStatus(str, Enum):
    PAID = "paid"
    PENDING = "pending"
    OVERDUE = "overdue"
    PARTIAL = "partial"


class PaymentMethod(str, Enum):
    CASH = "cash"
    BANK_TRANSFER = "bank_transfer"
    CHECK = "check"
    CARD = "card"


class ExpenseType(str, Enum):
    MATERIALS = "materials"
    LABOR = "labor"
    EQUIPMENT = "equipment"


class PaymentLabel(str, Enum):
    FULL = "Full Payment"
    PARTIAL = "Partial Payment"
    NOT_PAID = "Not Paid"


OUTSTANDING_PAYMENT_STATUSES = {PaymentStatus.PENDING, PaymentStatus.OVERDUE}

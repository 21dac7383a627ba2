from enum import Enum


class UserType(str, Enum):
    ADMIN = "ADMIN"
    AGENT = "AGENT"
    USER = "USER"


class SessionState(str, Enum):
    RESOLVING = "RESOLVING"
    ANONYMOUS = "ANONYMOUS"
    AUTHENTICATED = "AUTHENTICATED"


class PropertyType(str, Enum):
    RESIDENTIAL = "RESIDENTIAL"
    COMMERCIAL = "COMMERCIAL"
    AGRICULTURE = "AGRICULTURE"
    NEW_DEVELOPMENT = "NEW_DEVELOPMENT"


class ListingType(str, Enum):
    SALE = "SALE"
    RENT = "RENT"


class AgentStatus(str, Enum):
    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"
    SUSPENDED = "SUSPENDED"


class InquiryStatus(str, Enum):
    NEW = "NEW"
    CONTACTED = "CONTACTED"
    IN_PROGRESS = "IN_PROGRESS"
    CLOSED = "CLOSED"


class InquiryType(str, Enum):
    VIEWING_REQUEST = "VIEWING_REQUEST"
    PRICE_NEGOTIATION = "PRICE_NEGOTIATION"
    MORE_INFO = "MORE_INFO"
    CALL_BACK = "CALL_BACK"


class SortField(str, Enum):
    PRICE = "price"
    UPDATED_AT = "updatedAt"
    PROPERTY_TITLE = "propertyTitle"


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"


class NotificationVariant(str, Enum):
    DEFAULT = "default"
    DESTRUCTIVE = "destructive"


class BadgeVariant(str, Enum):
    DEFAULT = "default"
    SECONDARY = "secondary"
    DESTRUCTIVE = "destructive"
    OUTLINE = "outline"

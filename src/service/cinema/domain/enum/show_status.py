from enum import StrEnum


class ShowStatus(StrEnum):
    ACTIVE = 'active'
    CANCELLED = 'cancelled'
    HOUSEFULL = 'housefull'

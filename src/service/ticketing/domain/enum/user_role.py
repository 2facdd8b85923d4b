from enum import StrEnum


class UserRole(StrEnum):
    ADMIN = 'admin'
    ORGANISER = 'organiser'
    GATEKEEPER = 'gatekeeper'
    USER = 'user'

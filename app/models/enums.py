#app/models/enums.py
from __future__ import annotations
from enum import Enum


class TenderStatus(str, Enum):
    CREATED = "CREATED"
    PUBLISHED = "PUBLISHED"
    CLOSED = "CLOSED"


class BidStatus(str, Enum):
    CREATED = "CREATED"
    PUBLISHED = "PUBLISHED"
    CANCELED = "CANCELED"


class BidAuthorType(str, Enum):
    USER = "User"
    ORGANIZATION = "Organization"


class OrganizationType(str, Enum):
    IE = "IE"
    LLC = "LLC"
    JSC = "JSC"

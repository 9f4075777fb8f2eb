"""Core type definitions shared across all licensereport modules."""

from __future__ import annotations

from enum import StrEnum


class ReceiveKind(StrEnum):
    """Whether an application is for a new license or a renewal."""

    NEW = "new"
    RENEWAL = "renewal"
    UNSET = "unset"


class ServiceFamily(StrEnum):
    """Service-line grouping used to pick a station rule subset."""

    MICROWAVE = "microwave"
    VSAT = "vsat"
    WDN = "wdn"
    GENERIC = "generic"


class NatureOfService(StrEnum):
    """Applicant classification as written on the application."""

    PUBLIC_CORRESPONDENCE = "CP (Public Correspondence)"
    PRIVATE = "CV (Private)"
    GOVERNMENT = "CO (Government)"


class StationClass(StrEnum):
    """Physical deployment type of a radio station."""

    PORTABLE = "P"
    LAND_MOBILE = "ML"
    FIXED = "FX"
    LAND_BASE = "FB"
    FIXED_LAND_BASE = "FX-FB"
    REPEATER = "RT"


class ApplicationTypeCode(StrEnum):
    """Short code derived from the parenthesized part of an application label."""

    NEW = "NEW"
    RENEWAL = "REN"
    MODIFICATION = "MOD"


UNKNOWN_STATUS = "(unknown)"

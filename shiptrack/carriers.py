from __future__ import annotations

"""Carrier detection and per-carrier display/link configuration."""

import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import List, Mapping, Tuple

from .records import CarrierId
from .utils import contains_any, normalize_text

logger = logging.getLogger("shiptrack.carriers")


@dataclass(frozen=True)
class CarrierProfile:
    """Display name, tracking link template, and brand color for a carrier."""
    carrier: CarrierId
    display_name: str
    tracking_url: str
    color: str


@dataclass(frozen=True)
class CarrierApiInfo:
    """Integration notes for a carrier's public tracking API."""
    api_type: str
    documentation: str
    notes: str
    requires_contract: bool


CARRIER_PROFILES: Mapping[CarrierId, CarrierProfile] = MappingProxyType(
    {
        CarrierId.ESTAFETA: CarrierProfile(
            CarrierId.ESTAFETA, "Estafeta", "https://www.estafeta.com/Herramientas/Rastreo?guia=", "#E31837"
        ),
        CarrierId.FEDEX: CarrierProfile(
            CarrierId.FEDEX, "FedEx", "https://www.fedex.com/fedextrack/?trknbr=", "#4D148C"
        ),
        CarrierId.DHL: CarrierProfile(
            CarrierId.DHL, "DHL", "https://www.dhl.com/mx-es/home/rastreo.html?tracking-id=", "#FFCC00"
        ),
        CarrierId.UPS: CarrierProfile(CarrierId.UPS, "UPS", "https://www.ups.com/track?tracknum=", "#351C15"),
        CarrierId.REDPACK: CarrierProfile(
            CarrierId.REDPACK, "Redpack", "https://www.redpack.com.mx/es/rastreo/?guias=", "#E30613"
        ),
        CarrierId.PAQUETEXPRESS: CarrierProfile(
            CarrierId.PAQUETEXPRESS, "Paquetexpress", "https://www.paquetexpress.com.mx/rastreo/", "#003087"
        ),
        CarrierId.UNKNOWN: CarrierProfile(CarrierId.UNKNOWN, "Paquetería", "", "#6B7280"),
    }
)

CARRIER_API_INFO: Mapping[CarrierId, CarrierApiInfo] = MappingProxyType(
    {
        CarrierId.ESTAFETA: CarrierApiInfo(
            "SOAP",
            "https://www.estafeta.com/herramientas/webservices",
            "Requires business contract. Uses SOAP API with authentication.",
            True,
        ),
        CarrierId.FEDEX: CarrierApiInfo(
            "REST",
            "https://developer.fedex.com/",
            "Free developer account available. OAuth 2.0 authentication.",
            False,
        ),
        CarrierId.DHL: CarrierApiInfo(
            "REST",
            "https://developer.dhl.com/",
            "Free developer portal. Unified Tracking API available.",
            False,
        ),
        CarrierId.UPS: CarrierApiInfo(
            "REST",
            "https://developer.ups.com/",
            "Free developer access. Tracking API requires OAuth. Rate limits apply.",
            False,
        ),
        CarrierId.REDPACK: CarrierApiInfo(
            "REST/SOAP",
            "Contact Redpack directly",
            "API access requires business relationship with Redpack.",
            True,
        ),
        CarrierId.PAQUETEXPRESS: CarrierApiInfo(
            "REST",
            "Contact Paquetexpress directly",
            "API requires commercial account.",
            True,
        ),
    }
)

# Checked in order; the first carrier whose name appears wins.
CARRIER_NAME_RULES: List[Tuple[CarrierId, Tuple[str, ...]]] = [
    (CarrierId.ESTAFETA, ("ESTAFETA",)),
    (CarrierId.FEDEX, ("FEDEX", "FED EX")),
    (CarrierId.DHL, ("DHL",)),
    (CarrierId.UPS, ("UPS",)),
    (CarrierId.REDPACK, ("REDPACK",)),
    (CarrierId.PAQUETEXPRESS, ("PAQUETEXPRESS", "PAQUETE EXPRESS")),
]


def detect_carrier(text: str) -> CarrierId:
    """Purpose: Map free text (a carrier column or assistant reply) to a CarrierId.
    Inputs/Outputs: Input is any string; output is the first matching CarrierId or UNKNOWN.
    Side Effects / State: None; pure function.
    Dependencies: normalize_text and CARRIER_NAME_RULES ordering.
    Failure Modes: Never raises; empty or unrecognized text yields UNKNOWN.
    If Removed: Carrier links and branding cannot be resolved for any order.
    Testing Notes: "Enviado por FEDEX" -> FEDEX; co-occurring names resolve by rule order.
    """
    # Compare upper-cased, accent-free text against ordered carrier names.
    if not text:
        return CarrierId.UNKNOWN
    folded = normalize_text(text).upper()
    for carrier, names in CARRIER_NAME_RULES:
        if contains_any(folded, names):
            logger.debug("carrier=%s matched", carrier.value)
            return carrier
    return CarrierId.UNKNOWN


def get_carrier_profile(carrier: CarrierId) -> CarrierProfile:
    return CARRIER_PROFILES[carrier]


def get_tracking_url(carrier: CarrierId, tracking_number: str) -> str:
    """Build the carrier tracking link, or "" when the carrier has no template."""
    profile = CARRIER_PROFILES[carrier]
    if carrier is CarrierId.UNKNOWN or not profile.tracking_url:
        return ""
    return f"{profile.tracking_url}{tracking_number}"

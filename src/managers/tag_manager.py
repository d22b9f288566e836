"""Classify GTM tags into the marketing attributes shown in reports."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from managers.variable_manager import contains_any_variable
from utils.helpers import safe_get
from utils.lookups import (
    AD_NETWORK_KEYWORDS,
    AD_NETWORK_SOURCES,
    ANONYMOUS_ID_TOKENS,
    DEFAULT_AD_NETWORK,
    DEFAULT_INTEGRATION,
    INTEGRATION_MODES,
    LOCATION_INTEGRATIONS,
    ORDER_AMOUNT_TOKENS,
    ORDER_ID_TOKENS,
    PRODUCT_TOKENS,
    TAG_TYPE_NAMES,
    UNKNOWN_TAG_TYPE,
    USER_ID_TOKENS,
)


@dataclass(frozen=True)
class TagClassification:
    """Derived, display-ready attributes of a single tag."""

    tag_type: str
    ad_network: str
    integration: str
    user_id: bool
    anonymous_id: bool
    location: bool
    order_id: bool
    order_amount: bool
    product_details: bool


def determine_ad_network(text: str | None) -> str:
    """Map a tag name or type to an ad network; the first matching keyword wins."""
    if not isinstance(text, str) or not text:
        return DEFAULT_AD_NETWORK
    lowered = text.lower()
    for keyword, network in AD_NETWORK_KEYWORDS:
        if keyword in lowered:
            return network
    return DEFAULT_AD_NETWORK


def determine_integration(ad_network: str) -> str:
    return INTEGRATION_MODES.get(ad_network.lower(), DEFAULT_INTEGRATION)


def display_tag_type(tag_type: str | None) -> str:
    if not tag_type:
        return UNKNOWN_TAG_TYPE
    return TAG_TYPE_NAMES.get(tag_type, tag_type)


def ad_network_for_tag(tag: dict[str, Any], source: str = "name_or_type") -> str:
    """Resolve the ad network from the tag name, its type code, or name then type."""
    if source not in AD_NETWORK_SOURCES:
        raise ValueError(f"ad network source must be one of: {', '.join(AD_NETWORK_SOURCES)}")

    if source == "type":
        return determine_ad_network(safe_get(tag, "type"))

    network = determine_ad_network(safe_get(tag, "name"))
    if network == DEFAULT_AD_NETWORK and source == "name_or_type":
        network = determine_ad_network(safe_get(tag, "type"))
    return network


def classify_tag(tag: dict[str, Any], ad_network_source: str = "name_or_type") -> TagClassification:
    """Derive the report attributes of `tag` without modifying it."""
    ad_network = ad_network_for_tag(tag, ad_network_source)
    integration = determine_integration(ad_network)

    return TagClassification(
        tag_type=display_tag_type(safe_get(tag, "type")),
        ad_network=ad_network,
        integration=integration,
        user_id=contains_any_variable(tag, USER_ID_TOKENS),
        anonymous_id=contains_any_variable(tag, ANONYMOUS_ID_TOKENS),
        location=integration in LOCATION_INTEGRATIONS,
        order_id=contains_any_variable(tag, ORDER_ID_TOKENS),
        order_amount=contains_any_variable(tag, ORDER_AMOUNT_TOKENS),
        product_details=contains_any_variable(tag, PRODUCT_TOKENS),
    )

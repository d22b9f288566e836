"""Static lookup tables used to classify GTM tags."""

from __future__ import annotations

TAG_TYPE_NAMES: dict[str, str] = {
    "html": "Custom HTML",
    "google_ads_remarketing": "Google Ads Remarketing",
    "google_ads_conversion_tracking": "Google Ads Conversion Tracking",
    "gaawe": "Google Analytics 4",
    "gaawc": "Google Analytics 4 Configuration",
    "ua": "Google Analytics UA",
    "conversion_linker": "Conversion Linker",
    "gclidw": "Conversion Linker",
    "pinterest_tag": "Pinterest Tag",
    "pntr": "Pinterest Tag",
    "google_tag": "Google Tag",
    "googtag": "Google Tag",
    "custom_image": "Custom Image",
    "img": "Custom Image",
    "awct": "Google Ads",
    "sp": "Google Ads Remarketing",
    "flc": "Floodlight Counter",
    "fls": "Floodlight Sales",
    "bzi": "LinkedIn Insight",
    "hjtc": "Hotjar",
}

# Checked in order; the first keyword found in the lowercased text wins.
AD_NETWORK_KEYWORDS: tuple[tuple[str, str], ...] = (
    ("meta", "Meta"),
    ("facebook", "Meta"),
    ("google ads", "Google"),
    ("adwords", "Google"),
    ("tiktok", "TikTok"),
    ("pinterest", "Pinterest"),
)
AD_NETWORK_SOURCES = ("name", "type", "name_or_type")
DEFAULT_AD_NETWORK = "N/A"

INTEGRATION_MODES: dict[str, str] = {
    "meta": "dual",
    "facebook": "dual",
    "pinterest": "dual",
}
DEFAULT_INTEGRATION = "Pixel"

# "CAPI" is never produced by INTEGRATION_MODES but still counts here.
LOCATION_INTEGRATIONS = frozenset({"dual", "CAPI"})

USER_ID_TOKENS = ("{{DL - userId}}",)
ANONYMOUS_ID_TOKENS = ("{{DL - anonymousId}}",)
ORDER_ID_TOKENS = ("{{DL - order_id}}", "{{DL - orderID}}")
ORDER_AMOUNT_TOKENS = ("{{DL - total}}",)
PRODUCT_TOKENS = ("{{DL - product}}", "{{DL - product_id}}", "{{DL - productCategory}}")

BUILT_IN_TRIGGER_NAMES: dict[str, str] = {
    "2147479553": "All Pages",
    "2147479572": "Consent Initialization - All Pages",
    "2147479573": "Initialization - All Pages",
}

UNKNOWN_TAG_TYPE = "Unknown"
LAST_EDITED_PLACEHOLDER = "a year ago"

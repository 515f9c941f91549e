"""Coarse classification of URLhaus threat labels."""

# Checked in order; the first family whose keyword appears in the label wins
THREAT_FAMILIES: tuple[str, ...] = (
    "malware",
    "phishing",
    "exploit",
    "ransomware",
    "trojan",
    "botnet",
    "spam",
)

UNKNOWN_FAMILY = "unknown"
OTHER_FAMILY = "other"


def classify_threat(threat: str | None) -> str:
    """
    Map a free-text threat label (e.g. 'malware_download') to a threat family.

    Returns 'unknown' for a missing label and 'other' when no family matches.
    """
    if not threat or not threat.strip():
        return UNKNOWN_FAMILY
    label = threat.lower()
    for family in THREAT_FAMILIES:
        if family in label:
            return family
    return OTHER_FAMILY

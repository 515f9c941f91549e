"""Tests for threat label classification."""
import pytest

from services.threats import classify_threat


@pytest.mark.parametrize(
    ("threat", "family"),
    [
        ("malware_download", "malware"),
        ("Phishing", "phishing"),
        ("exploit_kit", "exploit"),
        ("ransomware", "ransomware"),
        ("banking trojan", "trojan"),
        ("botnet_cc", "botnet"),
        ("SPAM", "spam"),
    ],
)
def test__classify_threat__known_families(threat: str, family: str) -> None:
    assert classify_threat(threat) == family


def test__classify_threat__first_match_wins() -> None:
    """Families are checked in a fixed order."""
    assert classify_threat("ransomware_malware_download") == "malware"


@pytest.mark.parametrize("threat", [None, "", "   "])
def test__classify_threat__missing_label(threat: str | None) -> None:
    assert classify_threat(threat) == "unknown"


def test__classify_threat__unmatched_label() -> None:
    assert classify_threat("cryptominer") == "other"

from __future__ import annotations

import re
from urllib.parse import urlparse


def is_valid_url(url: str) -> bool:
    """Basic URL validation."""
    try:
        result = urlparse(url)
        return all([result.scheme in ("http", "https"), result.netloc])
    except Exception:
        return False


def clean_content(text: str, max_length: int = 2000) -> str:
    """Collapse whitespace and trim to at most max_length characters."""
    text = re.sub(r"\s+", " ", text).strip()
    if max_length > 0 and len(text) > max_length:
        text = text[:max_length].rstrip()
    return text


def extract_domain(url: str) -> str:
    """Extract the lowercase host without a leading www."""
    try:
        host = (urlparse(url).hostname or "").lower()
    except Exception:
        return ""
    if host.startswith("www."):
        host = host[4:]
    return host


def _has_label(host: str, label: str) -> bool:
    # matches example.edu and example.edu.au, not edu-news.com
    parts = host.split(".")
    return label in parts[1:]


def is_academic_domain(url: str) -> bool:
    return _has_label(extract_domain(url), "edu")


def is_government_domain(url: str) -> bool:
    return _has_label(extract_domain(url), "gov")


def matches_domain(url: str, domains: list[str]) -> bool:
    """True when the URL host is one of domains or a subdomain of one."""
    host = extract_domain(url)
    if not host:
        return False
    return any(host == d or host.endswith("." + d) for d in domains)

"""Business type classification by keyword."""

from typing import Optional, Sequence

from ..config import BusinessTypeProfile, DEFAULT_BUSINESS_TYPES
from ..models import BusinessType


class BusinessClassifier:
    """
    Classify a business from its name and an optional description.

    Profiles are checked in the order given; the first profile with a
    keyword found (case-insensitively) in the text wins.
    """

    def __init__(self, profiles: Sequence[BusinessTypeProfile] = DEFAULT_BUSINESS_TYPES):
        self.profiles = tuple(profiles)
        self._by_type = {p.business_type: p for p in self.profiles}

    def classify(self, name: str, description: Optional[str] = None) -> BusinessType:
        text = f"{name or ''} {description or ''}".lower()

        for profile in self.profiles:
            for keyword in profile.keywords:
                if keyword.lower() in text:
                    return profile.business_type

        return BusinessType.OTHER

    def profile_for(self, business_type: BusinessType) -> Optional[BusinessTypeProfile]:
        """Profile for a type, or None for OTHER / unknown types."""
        return self._by_type.get(business_type)

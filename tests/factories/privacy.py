"""Test factories for privacy domain models."""

from datetime import UTC, datetime, timedelta
from typing import Any

from fieldguard.workflow.enums import RequestStatus
from fieldguard.workflow.models import InformationRequest


class FakeClock:
    """Controllable clock; call it like utc_now()."""

    def __init__(self, start: datetime | None = None) -> None:
        self.now = start or datetime(2026, 1, 15, 12, 0, tzinfo=UTC)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> datetime:
        self.now = self.now + timedelta(**kwargs)
        return self.now


class RequestFactory:
    """Factory for creating InformationRequest instances for testing."""

    @staticmethod
    def create(
        *,
        requester_id: str = "viewer-1",
        target_user_id: str = "owner-1",
        requested_fields: list[str] | None = None,
        reason: str = "Need to coordinate a booking",
        status: RequestStatus = RequestStatus.PENDING,
        requested_at: datetime | None = None,
        expires_at: datetime | None = None,
        **kwargs: Any,
    ) -> InformationRequest:
        return InformationRequest(
            requester_id=requester_id,
            target_user_id=target_user_id,
            requested_fields=requested_fields or ["phone"],
            reason=reason,
            status=status,
            requested_at=requested_at or datetime(2026, 1, 15, 12, 0, tzinfo=UTC),
            expires_at=expires_at,
            **kwargs,
        )


def parent_profile() -> dict[str, Any]:
    """A parent profile covering every classification level."""
    return {
        "name": "Maria Santos",
        "email": "maria@example.com",
        "location": "Quezon City",
        "profileImage": "https://cdn.example.com/maria.jpg",
        "phone": "+63 917 555 0101",
        "address": "12 Mabini St, Quezon City",
        "emergencyContact": "Jose Santos, +63 917 555 0199",
        "childMedicalInfo": "Asthma, uses inhaler",
        "childAllergies": "Peanuts",
        "childBehaviorNotes": "Shy with strangers",
        "financialInfo": "Visa ending 4242",
    }


def caregiver_profile() -> dict[str, Any]:
    """A caregiver profile covering every classification level."""
    return {
        "name": "Ana Reyes",
        "email": "ana@example.com",
        "bio": "Ten years of infant care",
        "experience": 10,
        "skills": ["CPR", "First Aid"],
        "certifications": ["TESDA NC II"],
        "hourlyRate": 250,
        "phone": "+63 918 555 0202",
        "address": "4 Rizal Ave, Makati",
        "profileImage": "https://cdn.example.com/ana.jpg",
        "portfolio": {"images": [], "videos": []},
        "availability": {"mon": ["09:00-17:00"]},
        "languages": ["Filipino", "English"],
        "emergencyContacts": [{"name": "Ben Reyes", "phone": "+63 918 555 0299"}],
        "documents": ["nbi-clearance.pdf"],
        "backgroundCheck": {"status": "cleared"},
        "ageCareRanges": ["0-2", "3-5"],
    }

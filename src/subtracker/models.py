from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Literal, Optional


Frequency = Literal["monthly", "yearly"]
Status = Literal["trial", "active"]


@dataclass(frozen=True)
class EmailMessage:
    id: str
    subject: str
    body: str
    # "from" is a keyword, wire payloads are mapped in from_dict().
    from_email: str
    date: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "EmailMessage":
        return cls(
            id=str(data.get("id") or ""),
            subject=str(data.get("subject") or ""),
            body=str(data.get("body") or ""),
            from_email=str(data.get("from") or data.get("from_email") or ""),
            date=str(data.get("date") or ""),
        )

    def to_dict(self) -> Dict[str, str]:
        return {
            "id": self.id,
            "subject": self.subject,
            "body": self.body,
            "from": self.from_email,
            "date": self.date,
        }


@dataclass(frozen=True)
class ParsedTrialEmail:
    service_name: str
    frequency: Frequency
    category: str
    status: Status
    confidence: float
    amount: Optional[float] = None
    currency: Optional[str] = None
    trial_end_date: Optional[str] = None
    next_charge_date: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """camelCase wire shape; absent optional fields are omitted."""
        data: Dict[str, Any] = {"serviceName": self.service_name}
        if self.amount is not None:
            data["amount"] = self.amount
        if self.currency is not None:
            data["currency"] = self.currency
        if self.trial_end_date is not None:
            data["trialEndDate"] = self.trial_end_date
        if self.next_charge_date is not None:
            data["nextChargeDate"] = self.next_charge_date
        data.update(
            frequency=self.frequency,
            category=self.category,
            status=self.status,
            confidence=self.confidence,
        )
        return data


@dataclass(frozen=True)
class ConfidenceFactors:
    has_trial_keywords: bool
    has_billing_keywords: bool
    has_service_name: bool
    has_trial_end_date: bool
    has_pricing: bool


@dataclass(frozen=True)
class ScoreBreakdown:
    factors: ConfidenceFactors
    raw_score: float
    confidence: float
    accepted: bool


@dataclass(frozen=True)
class EmailDiagnostics:
    email_id: str
    has_trial_keywords: bool
    has_billing_keywords: bool
    service_name: Optional[str]
    trial_end_date: Optional[str]
    amount: Optional[float]
    currency: Optional[str]
    score: Optional[ScoreBreakdown]
    result: Optional[ParsedTrialEmail]
    rejected_reason: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        score = None
        if self.score is not None:
            score = {
                "raw_score": self.score.raw_score,
                "confidence": self.score.confidence,
                "accepted": self.score.accepted,
            }
        return {
            "email_id": self.email_id,
            "has_trial_keywords": self.has_trial_keywords,
            "has_billing_keywords": self.has_billing_keywords,
            "service_name": self.service_name,
            "trial_end_date": self.trial_end_date,
            "amount": self.amount,
            "currency": self.currency,
            "score": score,
            "result": self.result.to_dict() if self.result else None,
            "rejected_reason": self.rejected_reason,
        }

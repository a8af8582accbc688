from typing import Optional
from pydantic import BaseModel


class CallStatus(BaseModel):
    """Snapshot of a Vapi call as returned by GET /call/{id}."""

    id: str
    status: Optional[str] = None  # queued, ringing, in-progress, forwarding, ended
    duration: Optional[float] = None
    transcript: Optional[str] = None
    recording_url: Optional[str] = None
    summary: Optional[str] = None
    ended_reason: Optional[str] = None
    started_at: Optional[str] = None
    ended_at: Optional[str] = None

    @classmethod
    def from_api(cls, call_data: dict) -> "CallStatus":
        analysis = call_data.get("analysis") or {}
        return cls(
            id=call_data.get("id", ""),
            status=call_data.get("status"),
            duration=call_data.get("duration"),
            transcript=call_data.get("transcript"),
            recording_url=call_data.get("recordingUrl"),
            summary=call_data.get("summary") or analysis.get("summary"),
            ended_reason=call_data.get("endedReason"),
            started_at=call_data.get("startedAt"),
            ended_at=call_data.get("endedAt"),
        )

    @property
    def has_ended(self) -> bool:
        return self.status == "ended"


class InitiateCallResult(BaseModel):
    """Outcome of placing an outbound call. Failures carry ``error``."""

    success: bool
    call_id: Optional[str] = None
    status: Optional[str] = None
    error: Optional[str] = None

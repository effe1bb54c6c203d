"""Access log (audit) models."""

from datetime import UTC, datetime

from pydantic import BaseModel, Field

# Address prefix for IPv4 clients on a dual-stack socket ("::ffff:10.0.0.1")
IPV4_MAPPED_PREFIX = "::ffff:"


def strip_ip_prefix(address: str | None) -> str:
    """Drop the IPv4-mapped prefix from a client address when it has one."""
    if not address:
        return ""
    if address.startswith(IPV4_MAPPED_PREFIX):
        return address[len(IPV4_MAPPED_PREFIX):]
    return address


class AuditLogEntry(BaseModel):
    """One upload request's metadata and outcome."""

    ip: str = Field("", description="Client address without the IPv4-mapped prefix")
    init_time: datetime = Field(
        default_factory=lambda: datetime.now(UTC),
        description="When the upload was received",
    )
    size: int = Field(0, ge=0, description="Uploaded bytes")
    comp_time: datetime | None = Field(None, description="When processing finished")
    desc: str | None = Field(None, description="Response text or error description")

    @classmethod
    def start(cls, client_address: str | None, size: int) -> "AuditLogEntry":
        """Create an entry at the start of a request."""
        return cls(ip=strip_ip_prefix(client_address), size=size)

    def complete(self, desc: str) -> None:
        """Record the outcome and completion time."""
        self.desc = desc
        self.comp_time = datetime.now(UTC)

    def to_document(self) -> dict:
        """Convert to a MongoDB document."""
        return self.model_dump()

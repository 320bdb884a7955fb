from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class MailBreezeModel(BaseModel):
    """Base for API payloads: camelCase on the wire, snake_case in Python"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    def to_payload(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")


def _id_field(default: str = ""):
    # Documents from the API identify themselves as either "id" or "_id"
    return Field(default=default, validation_alias=AliasChoices("id", "_id"))


class Pagination(MailBreezeModel):
    page: int = 1
    limit: int = 0
    total: int = 0
    total_pages: int = 0
    has_next: bool = False
    has_prev: bool = False


# -------- Emails --------
class EmailStatus(str, Enum):
    PENDING = "pending"
    QUEUED = "queued"
    SENT = "sent"
    DELIVERED = "delivered"
    BOUNCED = "bounced"
    COMPLAINED = "complained"
    FAILED = "failed"


class SendEmailParams(MailBreezeModel):
    from_: str = Field(alias="from")
    to: List[str]
    subject: Optional[str] = None
    html: Optional[str] = None
    text: Optional[str] = None
    template_id: Optional[str] = None
    variables: Optional[Dict[str, Any]] = None
    attachment_ids: Optional[List[str]] = None
    reply_to: Optional[str] = None
    cc: Optional[List[str]] = None
    bcc: Optional[List[str]] = None
    headers: Optional[Dict[str, str]] = None
    tags: Optional[List[str]] = None


class SendEmailResult(MailBreezeModel):
    message_id: str


class Email(MailBreezeModel):
    id: str = _id_field()
    message_id: Optional[str] = None
    from_: str = Field(default="", alias="from")
    to: List[str] = Field(default_factory=list)
    cc: List[str] = Field(default_factory=list)
    bcc: List[str] = Field(default_factory=list)
    subject: Optional[str] = None
    status: EmailStatus = EmailStatus.PENDING
    email_type: Optional[str] = None
    created_at: str = ""
    sent_at: Optional[str] = None
    delivered_at: Optional[str] = None


class ListEmailsParams(MailBreezeModel):
    status: Optional[EmailStatus] = None
    page: Optional[int] = None
    limit: Optional[int] = None


class EmailList(MailBreezeModel):
    emails: List[Email] = Field(default_factory=list)
    pagination: Optional[Pagination] = None

    @property
    def items(self) -> List[Email]:
        return self.emails


class EmailStats(MailBreezeModel):
    total: int
    sent: int
    failed: int
    transactional: int = 0
    marketing: int = 0
    success_rate: float


class EmailStatsResponse(MailBreezeModel):
    stats: EmailStats


class CancelEmailResult(MailBreezeModel):
    id: str = _id_field()
    cancelled: bool


# -------- Contacts --------
class ContactStatus(str, Enum):
    ACTIVE = "active"
    UNSUBSCRIBED = "unsubscribed"
    BOUNCED = "bounced"
    COMPLAINED = "complained"
    SUPPRESSED = "suppressed"


class ConsentType(str, Enum):
    """Legal basis for holding a contact (NDPR)"""
    EXPLICIT = "explicit"
    IMPLICIT = "implicit"
    LEGITIMATE_INTEREST = "legitimate_interest"


class SuppressReason(str, Enum):
    MANUAL = "manual"
    UNSUBSCRIBED = "unsubscribed"
    BOUNCED = "bounced"
    COMPLAINED = "complained"
    SPAM_TRAP = "spam_trap"


class Contact(MailBreezeModel):
    id: str = _id_field()
    email: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    phone_number: Optional[str] = None
    status: ContactStatus = ContactStatus.ACTIVE
    custom_fields: Optional[Dict[str, Any]] = None
    source: Optional[str] = None
    created_at: str = ""
    updated_at: Optional[str] = None
    subscribed_at: Optional[str] = None
    unsubscribed_at: Optional[str] = None
    consent_type: Optional[ConsentType] = None
    consent_source: Optional[str] = None
    consent_timestamp: Optional[str] = None
    consent_ip_address: Optional[str] = None


class CreateContactParams(MailBreezeModel):
    email: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    phone_number: Optional[str] = None
    custom_fields: Optional[Dict[str, Any]] = None
    source: Optional[str] = None
    consent_type: Optional[ConsentType] = None
    consent_source: Optional[str] = None
    consent_timestamp: Optional[str] = None
    consent_ip_address: Optional[str] = None


class UpdateContactParams(MailBreezeModel):
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    phone_number: Optional[str] = None
    custom_fields: Optional[Dict[str, Any]] = None
    consent_type: Optional[ConsentType] = None
    consent_source: Optional[str] = None
    consent_timestamp: Optional[str] = None
    consent_ip_address: Optional[str] = None


class ListContactsParams(MailBreezeModel):
    status: Optional[ContactStatus] = None
    page: Optional[int] = None
    limit: Optional[int] = None


class ContactList(MailBreezeModel):
    """One page of contacts"""
    contacts: List[Contact] = Field(default_factory=list)
    pagination: Optional[Pagination] = None

    @property
    def items(self) -> List[Contact]:
        return self.contacts


class SuppressParams(MailBreezeModel):
    reason: SuppressReason


class SubscriptionResult(MailBreezeModel):
    id: str = _id_field()
    status: ContactStatus


# -------- Lists --------
class MailingList(MailBreezeModel):
    id: str = _id_field()
    name: str
    description: Optional[str] = None
    total_contacts: int = 0
    active_contacts: int = 0
    suppressed_contacts: int = 0
    tags: List[str] = Field(default_factory=list)
    created_at: str = ""
    updated_at: Optional[str] = None


class CreateListParams(MailBreezeModel):
    name: str
    description: Optional[str] = None


class UpdateListParams(MailBreezeModel):
    name: Optional[str] = None
    description: Optional[str] = None


class ListListsParams(MailBreezeModel):
    page: Optional[int] = None
    limit: Optional[int] = None


class ListsResponse(MailBreezeModel):
    lists: List[MailingList] = Field(default_factory=list)
    pagination: Optional[Pagination] = None

    @property
    def items(self) -> List[MailingList]:
        return self.lists


class ListStats(MailBreezeModel):
    total_contacts: int
    active_contacts: int
    suppressed_contacts: int = 0


# -------- Verification --------
class VerificationStatus(str, Enum):
    CLEAN = "clean"
    DIRTY = "dirty"
    VALID = "valid"
    INVALID = "invalid"
    RISKY = "risky"
    UNKNOWN = "unknown"


class VerificationResult(MailBreezeModel):
    email: str
    status: VerificationStatus
    remarks: Optional[str] = None
    is_valid: bool = False
    is_disposable: bool = False
    is_role_based: bool = False
    is_free_provider: bool = False
    mx_found: bool = False
    smtp_check: Optional[bool] = None
    suggestion: Optional[str] = None


class BatchResults(MailBreezeModel):
    clean: List[str] = Field(default_factory=list)
    dirty: List[str] = Field(default_factory=list)
    unknown: List[str] = Field(default_factory=list)


class BatchAnalytics(MailBreezeModel):
    clean_count: int = 0
    dirty_count: int = 0
    unknown_count: int = 0
    clean_percentage: float = 0.0


class BatchVerificationResult(MailBreezeModel):
    # Async batches hand back an id to poll with Verification.get
    verification_id: str = Field(default="", validation_alias=AliasChoices("verificationId", "verification_id", "id"))
    status: str
    total: int = 0
    total_emails: int = 0
    processed: int = 0
    credits_deducted: int = 0
    results: Optional[BatchResults] = None
    analytics: Optional[BatchAnalytics] = None
    created_at: str = ""
    completed_at: Optional[str] = None


class VerificationStats(MailBreezeModel):
    total_verified: int
    total_valid: int
    total_invalid: int
    total_unknown: int
    total_verifications: int
    valid_percentage: float


class VerificationListItem(MailBreezeModel):
    id: str = _id_field()
    verification_type: str = Field(alias="type")
    status: str
    total_emails: int = 0
    progress: int = 0
    analytics: Optional[BatchAnalytics] = None
    created_at: str = ""
    completed_at: Optional[str] = None


class VerificationListResponse(MailBreezeModel):
    items: List[VerificationListItem] = Field(default_factory=list)


# -------- Attachments --------
class CreateUploadParams(MailBreezeModel):
    filename: str
    content_type: str
    size: int = Field(ge=0)


class UploadUrl(MailBreezeModel):
    attachment_id: str
    upload_url: str
    expires_at: str


class Attachment(MailBreezeModel):
    id: str = _id_field()
    filename: str
    content_type: str
    size: int
    status: str
    created_at: str = ""

"""MailBreeze SDK: email marketing and transactional email from asyncio code"""
from .version import __version__
from .config import ClientConfig, ClientConfigBuilder
from .exceptions import ErrorKind, MailBreezeError
from .executor import RequestDescriptor, RequestExecutor
from .client import MailBreeze, MailBreezeBuilder
from .logging_config import configure_structlog
from .models import (
    Attachment, BatchVerificationResult, ConsentType, Contact, ContactList, ContactStatus, CreateContactParams,
    CreateListParams, CreateUploadParams, Email, EmailList, EmailStats, EmailStatus, ListContactsParams,
    ListEmailsParams, ListListsParams, ListsResponse, ListStats, MailingList, Pagination, SendEmailParams,
    SendEmailResult, SubscriptionResult, SuppressReason, UpdateContactParams, UpdateListParams, UploadUrl,
    VerificationListItem, VerificationResult, VerificationStats, VerificationStatus,
)
from . import models

__all__ = [
    "__version__",
    "ClientConfig",
    "ClientConfigBuilder",
    "ErrorKind",
    "MailBreezeError",
    "RequestDescriptor",
    "RequestExecutor",
    "MailBreeze",
    "MailBreezeBuilder",
    "configure_structlog",
    "models",
    "Attachment",
    "BatchVerificationResult",
    "ConsentType",
    "Contact",
    "ContactList",
    "ContactStatus",
    "CreateContactParams",
    "CreateListParams",
    "CreateUploadParams",
    "Email",
    "EmailList",
    "EmailStats",
    "EmailStatus",
    "ListContactsParams",
    "ListEmailsParams",
    "ListListsParams",
    "ListsResponse",
    "ListStats",
    "MailingList",
    "Pagination",
    "SendEmailParams",
    "SendEmailResult",
    "SubscriptionResult",
    "SuppressReason",
    "UpdateContactParams",
    "UpdateListParams",
    "UploadUrl",
    "VerificationListItem",
    "VerificationResult",
    "VerificationStats",
    "VerificationStatus",
]

from .attachments import Attachments
from .contacts import Contacts
from .emails import Emails
from .lists import Lists
from .verification import Verification

__all__ = ["Attachments", "Contacts", "Emails", "Lists", "Verification"]

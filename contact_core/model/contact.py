"""
Contact model module for records kept in the contact store.

This module defines the structure of a contact and the generator used
to assign contact identifiers.
"""

from typing import Optional, Dict, Any
import secrets
import string

# URL-safe alphabet, 64 symbols
ID_ALPHABET = string.ascii_letters + string.digits + "_-"
DEFAULT_ID_SIZE = 21


def generate_contact_id(size: int = DEFAULT_ID_SIZE) -> str:
    """
    Generate a random URL-safe identifier for a new contact.

    Args:
        size: Number of characters in the identifier

    Returns:
        A random string of ``size`` characters drawn from ID_ALPHABET
    """
    return "".join(secrets.choice(ID_ALPHABET) for _ in range(size))


class Contact:
    """
    Represents a single contact record.

    A Contact holds a name, an email address and a phone number. None of the
    fields are validated; any string is accepted.
    """

    def __init__(
        self,
        name: str,
        email: str,
        phone: str,
        contact_id: Optional[str] = None,
    ):
        """
        Initialize a Contact with the provided attributes.

        Args:
            name: Display name of the contact
            email: Email address, stored as given
            phone: Phone number, stored as given
            contact_id: Unique identifier (None if not yet saved)
        """
        self.contact_id = contact_id
        self.name = name
        self.email = email
        self.phone = phone

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert the Contact to the record shape written to the store.

        Returns:
            Dictionary with id, name, email and phone keys
        """
        return {
            "id": self.contact_id,
            "name": self.name,
            "email": self.email,
            "phone": self.phone,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Contact":
        """
        Create a Contact from a stored record.

        Args:
            data: Dictionary as read from the store

        Returns:
            A new Contact instance
        """
        return cls(
            name=data.get("name", ""),
            email=data.get("email", ""),
            phone=data.get("phone", ""),
            contact_id=data.get("id"),
        )

    def __eq__(self, other):
        if not isinstance(other, Contact):
            return False

        return (
            self.contact_id == other.contact_id
            and self.name == other.name
            and self.email == other.email
            and self.phone == other.phone
        )

    def __repr__(self):
        contact_id_str = f"'{self.contact_id}'" if self.contact_id else "None"
        return (
            f"Contact(contact_id={contact_id_str}, "
            f"name='{self.name}', "
            f"email='{self.email}', "
            f"phone='{self.phone}')"
        )

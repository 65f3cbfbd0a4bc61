"""
Form validation run before anything touches the database.

Every validator returns a single human readable message for the first rule
that fails, or an empty string when the input is valid.
"""

import re
from typing import List

ALLOWED_CATEGORIES = ["Technology", "Science", "Art", "Gaming", "Other"]

EMAIL_REGEX = re.compile(r"^[a-zA-Z0-9._%+\-]+@[a-zA-Z0-9.\-]+\.[a-zA-Z]{2,}$")

MAX_NAME_LENGTH = 20
MIN_PASSWORD_LENGTH = 8
MAX_PASSWORD_LENGTH = 64
MAX_TITLE_LENGTH = 150
MAX_CONTENT_LENGTH = 50000
MAX_COMMENT_LENGTH = 1000

# Multi-line bodies are allowed in posts and comments
_TEXT_WHITESPACE = {"\n", "\r", "\t"}


def is_printable(data: str) -> bool:
    return data.isprintable()


def is_printable_text(data: str) -> bool:
    return all(ch.isprintable() or ch in _TEXT_WHITESPACE for ch in data)


def validate_credentials(name: str, email: str, password: str) -> str:
    """Check registration input"""
    if not name.strip() or not email.strip() or not password.strip():
        return "You must fill all the fields"

    if not is_printable(name) or not is_printable(email) or not is_printable(password):
        return "Only printable characters are allowed as an input"

    if not EMAIL_REGEX.match(email):
        return "Invalid email format"

    if len(name) > MAX_NAME_LENGTH:
        return f"Username must be at most {MAX_NAME_LENGTH} characters"

    if len(password) < MIN_PASSWORD_LENGTH:
        return f"Password must be at least {MIN_PASSWORD_LENGTH} characters long"
    if len(password) > MAX_PASSWORD_LENGTH:
        return f"Password must be at most {MAX_PASSWORD_LENGTH} characters"

    have_number = any(ch.isdigit() for ch in password)
    have_upper = any(ch.isupper() for ch in password)
    have_lower = any(ch.islower() for ch in password)
    if not (have_number and have_upper and have_lower):
        return "Invalid password (must contain a number, an upper case and a lower case character)"

    return ""


def are_valid_categories(categories: List[str]) -> bool:
    return all(category in ALLOWED_CATEGORIES for category in categories)


def validate_post(title: str, content: str, categories: List[str]) -> str:
    title = title.strip()
    content = content.strip()

    if not title:
        return "Title is empty"
    if not content:
        return "Content is empty"
    if len(title) > MAX_TITLE_LENGTH:
        return f"Maximum number of characters for a title is {MAX_TITLE_LENGTH}"
    if len(content) > MAX_CONTENT_LENGTH:
        return f"Maximum number of characters for a post is {MAX_CONTENT_LENGTH}"
    if not categories:
        return "Choose at least one category"
    if not is_printable(title) or not is_printable_text(content):
        return "Only printable characters are allowed"
    if not are_valid_categories(categories):
        return "This category doesn't exist"

    return ""


def validate_comment(content: str) -> str:
    if not content.strip():
        return "Comment must not be empty"
    if len(content) > MAX_COMMENT_LENGTH:
        return f"Maximum number of characters for a comment is {MAX_COMMENT_LENGTH}"
    if not is_printable_text(content):
        return "Only printable characters are allowed"

    return ""
